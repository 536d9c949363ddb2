from pydantic import BaseModel, Field
from typing import List, Optional


class CategoryResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class StockLocationRef(BaseModel):
    id: int
    code: str


class ItemStockResponse(BaseModel):
    """Linha de stock de um item num bin"""
    id: int
    item_id: int
    warehouse_id: int
    bin_id: Optional[int] = None
    batch_id: Optional[str] = None
    expiry_date: Optional[str] = None
    manufacturing_year: Optional[int] = None
    quantity: int
    rack: Optional[StockLocationRef] = None
    bin: Optional[StockLocationRef] = None


class ItemResponse(BaseModel):
    """Item do cadastro (item master)"""
    id: int
    item_sku: str
    item_name: str
    category_id: Optional[int] = None
    weight: Optional[str] = None
    storage_type: Optional[int] = None
    qty_per_pallet: Optional[int] = None
    qty_per_carton: Optional[int] = None
    category: Optional[CategoryResponse] = None
    stocks: List[ItemStockResponse] = Field(default_factory=list)


class ItemPayload(BaseModel):
    """Request para criar ou atualizar um item"""
    item_sku: str = Field(..., min_length=1)
    item_name: str = Field(..., min_length=1)
    category_id: Optional[int] = None
    weight: Optional[str] = None
    storage_type: Optional[int] = None
    qty_per_pallet: Optional[int] = None
    qty_per_carton: Optional[int] = None
