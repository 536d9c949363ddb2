from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class ApiEnvelope(BaseModel):
    """Envelope padrão {success, message, data} das respostas da API"""
    success: bool = True
    message: str = ""
    data: Optional[Any] = None


class ErrorEnvelope(BaseModel):
    """Corpo de erro devolvido pela API"""
    success: bool = False
    message: str
    errors: Optional[Dict[str, List[str]]] = None
