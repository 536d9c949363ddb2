"""
Login, logout e atualização do utilizador autenticado
"""
import logging
from typing import Optional
from pydantic import ValidationError
from schemas.auth_schemas import AuthData, LoginRequest, UserResponse
from services.api_service import ApiService, unwrap_data
from services.exceptions import ApiError, EnvelopeError, UnauthorizedError
from services.notification_service import Notifier
from services.session_service import SessionState

logger = logging.getLogger(__name__)


class AuthService:
    """Autenticação por token bearer guardado na SessionState"""

    def __init__(self, api: ApiService, session: SessionState, notifier: Notifier):
        self.api = api
        self.session = session
        self.notifier = notifier
        self.last_error: Optional[str] = None

    @property
    def current_user(self) -> Optional[UserResponse]:
        if self.session.user is None:
            return None
        return UserResponse.model_validate(self.session.user)

    async def login(self, username: str, password: str) -> bool:
        self.last_error = None
        credentials = LoginRequest(username=username, password=password)
        try:
            payload = await self.api.post("/auth/login", json=credentials.model_dump(), skip_auth=True)
            data = AuthData.model_validate(unwrap_data(payload))
        except ApiError as e:
            self.last_error = e.message or "Login failed. Please check your credentials."
            self.notifier.error(self.last_error)
            return False
        except ValidationError as e:
            logger.error("Resposta de login inesperada: %s", e)
            self.last_error = "Login failed"
            self.notifier.error(self.last_error)
            return False

        self.session.store(data.user.model_dump(), data.token)
        logger.info("Utilizador %s autenticado", data.user.username)
        return True

    async def logout(self) -> None:
        """Avisa o servidor e limpa a sessão local mesmo se a chamada falhar"""
        if self.session.token:
            try:
                await self.api.post("/auth/logout")
            except ApiError as e:
                logger.warning("Logout no servidor falhou: %s", e)
        self.session.invalidate()

    async def refresh_user(self) -> bool:
        """
        Revalida o token persistido.
        Só um 401 ou uma resposta ilegível descartam a sessão; falhas
        transitórias (rede, timeout, 5xx) mantêm-na
        """
        if not self.session.token:
            return False
        self.last_error = None
        try:
            payload = await self.api.get("/auth/me")
            data = unwrap_data(payload)
            user = UserResponse.model_validate(data.get("user", data) if isinstance(data, dict) else data)
        except (UnauthorizedError, EnvelopeError, ValidationError) as e:
            logger.info("Token persistido rejeitado: %s", e)
            self.session.invalidate()
            return False
        except ApiError as e:
            logger.warning("Não foi possível revalidar a sessão: %s", e)
            self.last_error = e.message
            self.notifier.error(f"Could not refresh session: {e.message}")
            return False

        self.session.update_user(user.model_dump())
        return True
