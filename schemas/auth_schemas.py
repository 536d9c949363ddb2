from pydantic import BaseModel
from typing import Optional


class RoleResponse(BaseModel):
    id: int
    name: str
    slug: str

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    """Utilizador autenticado e o seu papel"""
    id: int
    name: str
    username: str
    email: Optional[str] = None
    role_id: Optional[int] = None
    role: Optional[RoleResponse] = None

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    username: str
    password: str


class AuthData(BaseModel):
    """Payload devolvido pelo login"""
    user: UserResponse
    token: str
    token_type: str = "Bearer"
    expires_in: int = 0
