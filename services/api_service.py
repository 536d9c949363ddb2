"""
Cliente HTTP da API do WMS (httpx assíncrono)
com token bearer, timeout fixo e normalização de envelopes
"""
import logging
import os
from typing import Any, Callable, Dict, List, Optional, TypeVar
import httpx
from dotenv import load_dotenv
from pydantic import ValidationError
from schemas.pagination_schemas import PageEnvelope, PageRequest, PageResult
from services.exceptions import (
    ApiError,
    EnvelopeError,
    NetworkError,
    NotFoundError,
    RequestRejectedError,
    RequestTimeoutError,
    ServerError,
    UnauthorizedError,
)
from services.pagination_service import PaginationService
from services.session_service import SessionState

load_dotenv()

logger = logging.getLogger(__name__)

T = TypeVar("T")

API_BASE_URL = os.getenv("WMS_API_BASE_URL", "http://localhost:8000/api")
API_TIMEOUT = float(os.getenv("WMS_API_TIMEOUT", "30"))

_PAGE_KEYS = {"data", "current_page", "last_page", "per_page", "total"}


def _is_page(payload: Any) -> bool:
    return isinstance(payload, dict) and _PAGE_KEYS.issubset(payload.keys())


def unwrap_page(payload: Any) -> PageEnvelope:
    """
    Aceita exatamente dois formatos:
    - envelope de paginação direto {data: [...], current_page, ...}
    - {success, message, data: {envelope de paginação}}
    Qualquer outro formato levanta EnvelopeError.
    """
    if _is_page(payload) and isinstance(payload["data"], list):
        candidate = payload
    elif isinstance(payload, dict) and _is_page(payload.get("data")):
        candidate = payload["data"]
    else:
        raise EnvelopeError("Resposta sem envelope de paginação reconhecido", details={"payload": payload})

    try:
        return PageEnvelope.model_validate(candidate)
    except ValidationError as e:
        raise EnvelopeError(f"Envelope de paginação inválido: {e}", details={"payload": payload})


def unwrap_list(payload: Any) -> List[Any]:
    """Coleções não paginadas: lista direta ou {data: [...]}"""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    raise EnvelopeError("Resposta sem lista reconhecida", details={"payload": payload})


def unwrap_data(payload: Any) -> Any:
    """Recurso único: {success, message, data: {...}} ou o próprio objeto"""
    if isinstance(payload, dict) and "data" in payload and "success" in payload:
        return payload["data"]
    if isinstance(payload, dict):
        return payload
    raise EnvelopeError("Resposta sem objeto reconhecido", details={"payload": payload})


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.reason_phrase or f"HTTP {response.status_code}"


class ApiService:
    """Acesso à API REST; cada falha vira uma subclasse de ApiError"""

    def __init__(
        self,
        session: SessionState,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else API_TIMEOUT
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _headers(self, skip_auth: bool) -> Dict[str, str]:
        if skip_auth or not self.session.token:
            return {}
        return {"Authorization": f"Bearer {self.session.token}"}

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        skip_auth: bool = False,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                headers=self._headers(skip_auth),
            )
        except httpx.TimeoutException as e:
            logger.warning("Timeout em %s %s: %s", method, path, e)
            raise RequestTimeoutError(f"Request timed out after {self.timeout:g}s", code="timeout")
        except httpx.TransportError as e:
            logger.warning("Falha de rede em %s %s: %s", method, path, e)
            raise NetworkError(str(e) or "Network error", code="network")

        if response.is_error:
            self._raise_for_response(method, path, response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise EnvelopeError(f"Resposta não-JSON em {method} {path}", status=response.status_code)

    def _raise_for_response(self, method: str, path: str, response: httpx.Response) -> None:
        status = response.status_code
        message = _error_message(response)
        try:
            details = response.json()
        except ValueError:
            details = None
        if not isinstance(details, dict):
            details = None

        logger.info("%s %s falhou com %s: %s", method, path, status, message)

        if status == 401:
            # Token expirado ou inválido: sessão limpa em todo o processo
            self.session.invalidate()
            raise UnauthorizedError(message, status=status, details=details)
        if status == 404:
            raise NotFoundError(message, status=status, details=details)
        if 400 <= status < 500:
            raise RequestRejectedError(message, status=status, details=details)
        if status >= 500:
            raise ServerError(message, status=status, details=details)
        raise ApiError(message, status=status, details=details)

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None, skip_auth: bool = False) -> Any:
        return await self.request("GET", path, params=params, skip_auth=skip_auth)

    async def post(self, path: str, json: Any = None, skip_auth: bool = False) -> Any:
        return await self.request("POST", path, json=json, skip_auth=skip_auth)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def list_page(
        self,
        path: str,
        page_request: PageRequest,
        parse_item: Callable[[Any], T],
        **params: Any,
    ) -> PageResult:
        """GET paginado: itens e metadados vêm sempre da mesma resposta"""
        query = page_request.to_query_params()
        query.update({k: v for k, v in params.items() if v is not None})

        payload = await self.get(path, params=query)
        envelope = unwrap_page(payload)
        try:
            # from/to do servidor são ignorados: o intervalo sai sempre de total e página
            meta = PaginationService.compute(envelope.total, envelope.per_page, envelope.current_page)
            return PageResult(items=[parse_item(raw) for raw in envelope.data], **meta.model_dump())
        except ValueError as e:
            raise EnvelopeError(f"Página inválida em {path}: {e}")

    async def list_all(self, path: str, parse_item: Callable[[Any], T], **params: Any) -> List[T]:
        query = {k: v for k, v in params.items() if v is not None}
        payload = await self.get(path, params=query or None)
        try:
            return [parse_item(raw) for raw in unwrap_list(payload)]
        except ValidationError as e:
            raise EnvelopeError(f"Item inválido em {path}: {e}")
