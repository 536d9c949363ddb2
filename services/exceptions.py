"""
Erros do cliente da API, por categoria:
rede/timeout, rejeição (4xx com mensagem), 401, 404, 5xx e envelope inválido
"""
from typing import Any, Dict, Optional


class ApiError(Exception):
    """Erro base de uma chamada à API"""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details or {}


class NetworkError(ApiError):
    """Falha de transporte; o utilizador pode tentar de novo com refresh"""


class RequestTimeoutError(NetworkError):
    pass


class RequestRejectedError(ApiError):
    """4xx com mensagem legível, mostrada tal como veio"""


class UnauthorizedError(ApiError):
    """401: a sessão é invalidada em todo o processo"""


class NotFoundError(ApiError):
    pass


class ServerError(ApiError):
    pass


class EnvelopeError(ApiError):
    """Resposta sem nenhum dos formatos de envelope conhecidos"""


def describe_error(error: ApiError, fallback: str) -> str:
    """Mensagem para o utilizador: a do servidor quando for uma rejeição (4xx)"""
    if isinstance(error, (RequestRejectedError, NotFoundError)) and error.message:
        return error.message
    return fallback
