"""
Dependências partilhadas pelas rotas: utilizador autenticado,
paginação no formato da API e envelope de sucesso
"""
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Query, Session
from typing import Any, Callable, Optional
import hashlib
import hmac
import os
import secrets
from dotenv import load_dotenv
from models.database import get_db
from models.user import User
from schemas.envelope_schemas import ApiEnvelope
from services.pagination_service import PaginationService

load_dotenv()

PASSWORD_HASH_ITERATIONS = int(os.getenv("PASSWORD_HASH_ITERATIONS", "120000"))


def hash_password(password: str, salt: Optional[str] = None, iterations: Optional[int] = None) -> str:
    """PBKDF2-SHA256 com sal por utilizador: pbkdf2_sha256$<iterações>$<sal>$<hash>"""
    salt = salt or secrets.token_hex(16)
    iterations = iterations or PASSWORD_HASH_ITERATIONS
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations)
    return f"pbkdf2_sha256${iterations}${salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        algorithm, iterations, salt, _ = stored.split("$", 3)
    except ValueError:
        return False
    if algorithm != "pbkdf2_sha256" or not iterations.isdigit():
        return False
    return hmac.compare_digest(hash_password(password, salt, int(iterations)), stored)


def get_current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> User:
    """Token bearer obrigatório; 401 se ausente ou inválido"""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Unauthenticated.")

    token = authorization.split(" ", 1)[1].strip()
    user = db.query(User).filter(User.api_token == token).first()
    if not user:
        raise HTTPException(status_code=401, detail="Unauthenticated.")
    return user


def ok(data: Any = None, message: str = "") -> dict:
    return ApiEnvelope(success=True, message=message, data=data).model_dump()


def paginate(
    query: Query,
    page: int,
    per_page: int,
    serialize: Callable[[Any], dict]
) -> dict:
    """
    Página no formato {data, current_page, last_page, per_page, total, from, to},
    embrulhada no envelope {success, message, data}
    """
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * per_page).limit(per_page).all()
    meta = PaginationService.compute(total, per_page, page)

    return ok({
        "data": [serialize(row) for row in rows],
        "current_page": meta.current_page,
        "last_page": meta.last_page,
        "per_page": meta.per_page,
        "total": meta.total,
        "from": meta.range_start,
        "to": meta.range_end,
    })
