"""
Rotas de autenticação (token bearer)
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import secrets
from models.database import get_db
from models.user import User
from routers.deps import get_current_user, ok, verify_password
from schemas.auth_schemas import AuthData, LoginRequest, UserResponse

router = APIRouter(prefix="/auth", tags=["auth"])

TOKEN_TTL_SECONDS = 60 * 60 * 12


@router.post("/login")
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    Login por username/password; devolve utilizador e token novo
    """
    user = db.query(User).filter(User.username == request.username).first()
    if not user or not verify_password(request.password, user.password_hash):
        raise HTTPException(status_code=422, detail="Invalid username or password.")

    user.api_token = secrets.token_hex(32)
    db.commit()
    db.refresh(user)

    data = AuthData(
        user=UserResponse.model_validate(user),
        token=user.api_token,
        expires_in=TOKEN_TTL_SECONDS,
    )
    return ok(data.model_dump(), "Login successful")


@router.get("/me")
def me(user: User = Depends(get_current_user)):
    return ok({"user": UserResponse.model_validate(user).model_dump()})


@router.post("/logout")
def logout(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    user.api_token = None
    db.commit()
    return ok(message="Logged out")
