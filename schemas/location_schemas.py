from pydantic import BaseModel
from typing import List, Optional


class WarehouseResponse(BaseModel):
    """Armazém"""
    id: int
    name: str
    location: Optional[str] = None

    class Config:
        from_attributes = True


class RackResponse(BaseModel):
    """Rack de um armazém (código ordenável, ex.: "A", "B1")"""
    id: int
    code: str
    label: Optional[str] = None
    warehouse_id: Optional[int] = None

    class Config:
        from_attributes = True


class BinItem(BaseModel):
    """Linha de stock guardada num bin"""
    id: int
    item_sku: str
    item_name: str
    quantity: Optional[int] = None
    batch_id: Optional[str] = None
    expiry_date: Optional[str] = None


class BinResponse(BaseModel):
    """Bin de um rack; cada bin guarda no máximo uma linha de stock"""
    id: int
    rack_id: int
    code: str
    label: Optional[str] = None
    is_occupied: bool = False
    current_item: Optional[BinItem] = None


class StorageLocation(BaseModel):
    """Par (rack, bin) avaliado na sugestão de putaway"""
    rack_id: int
    rack_code: str
    bin_id: int
    bin_code: str
    occupied: bool
    capacity_used: int = 0
    capacity_total: int = 1

    @classmethod
    def from_rack_bin(cls, rack: RackResponse, bin: BinResponse) -> "StorageLocation":
        return cls(
            rack_id=rack.id,
            rack_code=rack.code,
            bin_id=bin.id,
            bin_code=bin.code,
            occupied=bin.is_occupied,
            capacity_used=1 if bin.is_occupied else 0,
            capacity_total=1,
        )


class PlacementResult(BaseModel):
    """Sugestão de localização livre (ainda não confirmada)"""
    rack_id: int
    bin_id: int
    rack_code: Optional[str] = None
    bin_code: Optional[str] = None


class RackLayout(BaseModel):
    """Rack com ocupação dos seus bins (mapa do armazém)"""
    id: int
    code: str
    label: Optional[str] = None
    total_bins: int
    occupied_bins: int
    available_bins: int
    bins: List[BinResponse]


class WarehouseLayout(BaseModel):
    """Mapa do armazém: racks, bins e totais de ocupação"""
    id: int
    name: str
    location: Optional[str] = None
    total_racks: int
    total_bins: int
    total_occupied: int
    total_available: int
    racks: List[RackLayout]
