"""
API de desenvolvimento do WMS (FastAPI) no formato consumido pelo cliente:
envelope {success, message, data} e páginas estilo Laravel
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import os
from dotenv import load_dotenv
from models.database import init_db
from routers import (
    auth_router,
    items_router,
    warehouses_router,
    inbound_router,
    dispatch_router,
    reports_router,
)
from schemas.envelope_schemas import ApiEnvelope, ErrorEnvelope

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api"

app = FastAPI(title="Avaraa WMS", description="API local para o console de gestão de armazém")

app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(items_router, prefix=API_PREFIX)
app.include_router(warehouses_router, prefix=API_PREFIX)
app.include_router(inbound_router, prefix=API_PREFIX)
app.include_router(dispatch_router, prefix=API_PREFIX)
app.include_router(reports_router, prefix=API_PREFIX)


@app.on_event("startup")
async def startup_event():
    """Inicializar banco de dados na startup"""
    init_db()


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed."
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, message)
    body = ErrorEnvelope(message=message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """422 com a primeira mensagem e os erros por campo"""
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body")
        errors.setdefault(field or "request", []).append(error["msg"])

    first = next(iter(errors.values()))[0] if errors else "The given data was invalid."
    body = ErrorEnvelope(message=first, errors=errors)
    return JSONResponse(status_code=422, content=body.model_dump())


@app.get(f"{API_PREFIX}/health")
async def health():
    return ApiEnvelope(message="ok").model_dump()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
