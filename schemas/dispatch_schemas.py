from pydantic import BaseModel, Field
from typing import List, Optional
import enum


class DispatchStatus(str, enum.Enum):
    PENDING = "pending"
    PICKING = "picking"
    PICKED = "picked"
    PACKING = "packing"
    PACKED = "packed"
    DISPATCHED = "dispatched"


class DispatchItemSummary(BaseModel):
    id: int
    item_sku: str
    item_name: str


class DispatchItemResponse(BaseModel):
    id: int
    item_id: int
    warehouse_id: int
    bin_id: Optional[int] = None
    batch_id: Optional[str] = None
    quantity: int
    item: Optional[DispatchItemSummary] = None


class DispatchInfo(BaseModel):
    """Dados de expedição preenchidos ao despachar"""
    driver_name: str
    vehicle_no: str
    dispatch_date: str


class DispatchRequestResponse(BaseModel):
    """Pedido de expedição (pick, pack e dispatch)"""
    id: int
    order_number: str
    status: DispatchStatus
    due_date: Optional[str] = None
    priority: Optional[str] = None
    notes: Optional[str] = None
    items: List[DispatchItemResponse] = Field(default_factory=list)
    dispatch: Optional[DispatchInfo] = None


class DispatchItemCreate(BaseModel):
    item_id: int
    quantity: int = Field(..., ge=1)
    warehouse_id: int
    batch_id: Optional[str] = None
    bin_id: Optional[int] = None


class DispatchRequestCreate(BaseModel):
    """Request para criar pedido de expedição"""
    due_date: str
    priority: Optional[str] = "normal"
    notes: Optional[str] = None
    items: List[DispatchItemCreate] = Field(..., min_length=1)


class BulkStartPickingRequest(BaseModel):
    dispatch_ids: List[int] = Field(..., min_length=1)


class DispatchConfirmRequest(BaseModel):
    """Request para despachar um pedido embalado"""
    driver_name: str = Field(..., min_length=1)
    vehicle_no: str = Field(..., min_length=1)
