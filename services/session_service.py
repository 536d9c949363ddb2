"""
Sessão do utilizador (token + utilizador) partilhada pelo processo
e injetada no cliente HTTP
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SESSION_FILE = os.getenv(
    "WMS_SESSION_FILE",
    str(Path.home() / ".avaraa_wms" / "session.json"),
)


class SessionState:
    """
    Token e utilizador atuais.
    - init(): lê o token persistido no arranque
    - store(): guarda após login
    - invalidate(): limpa tudo e avisa os listeners (ex.: 401)
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or DEFAULT_SESSION_FILE)
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None
        self._listeners: List[Callable[[], None]] = []

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.user is not None

    @property
    def role_slug(self) -> Optional[str]:
        if not self.user:
            return None
        role = self.user.get("role") or {}
        return role.get("slug")

    def init(self) -> bool:
        """Carrega a sessão persistida; devolve True se havia token"""
        if not self.path.exists():
            return False
        try:
            stored = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Sessão persistida ilegível em %s: %s", self.path, e)
            return False

        self.token = stored.get("token") or None
        self.user = stored.get("user") or None
        return self.token is not None

    def store(self, user: Dict[str, Any], token: str) -> None:
        self.user = user
        self.token = token
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token, "user": user}), encoding="utf-8")

    def update_user(self, user: Dict[str, Any]) -> None:
        if self.token is None:
            return
        self.store(user, self.token)

    def on_invalidate(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def invalidate(self) -> None:
        had_session = self.token is not None
        self.token = None
        self.user = None
        if self.path.exists():
            self.path.unlink()
        if not had_session:
            return
        logger.info("Sessão invalidada; é preciso autenticar de novo")
        for callback in self._listeners:
            callback()

    def has_role(self, role_slug: Union[str, List[str]]) -> bool:
        slug = self.role_slug
        if slug is None:
            return False
        slugs = [role_slug] if isinstance(role_slug, str) else list(role_slug)
        return slug in slugs
