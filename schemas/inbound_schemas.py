from pydantic import BaseModel, Field
from typing import List, Optional
import enum


class InboundStatus(str, enum.Enum):
    PENDING = "pending"
    VERIFYING = "verifying"
    COMPLETED = "completed"


class InboundItemStatus(str, enum.Enum):
    PENDING = "pending"
    STORED = "stored"


class InboundItemSummary(BaseModel):
    id: int
    item_sku: str
    item_name: str


class InboundItemResponse(BaseModel):
    """Linha de uma aplicação de entrada"""
    id: int
    inbound_id: int
    item_id: int
    quantity: int
    received_quantity: Optional[int] = None
    rack_id: Optional[int] = None
    bin_id: Optional[int] = None
    expiry_date: Optional[str] = None
    manufacturing_year: Optional[int] = None
    status: InboundItemStatus = InboundItemStatus.PENDING
    item: Optional[InboundItemSummary] = None


class InboundApplicationResponse(BaseModel):
    """Aplicação de entrada (recebimento) e suas linhas"""
    id: int
    inbound_number: str
    warehouse_id: int
    expected_arrival_date: Optional[str] = None
    status: InboundStatus = InboundStatus.PENDING
    notes: Optional[str] = None
    items: List[InboundItemResponse] = Field(default_factory=list)


class InboundItemCreate(BaseModel):
    item_id: int
    quantity: int = Field(..., ge=1)
    rack_id: Optional[int] = None
    expiry_date: Optional[str] = None
    manufacturing_year: Optional[int] = None


class InboundApplicationCreate(BaseModel):
    """Request para criar aplicação de entrada"""
    warehouse_id: int
    expected_date: str
    notes: Optional[str] = None
    items: List[InboundItemCreate] = Field(..., min_length=1)


class PutawayRequest(BaseModel):
    """Request para confirmar o putaway de uma linha num bin"""
    rack_id: int
    bin_id: int
    received_quantity: int = Field(..., ge=1)
