"""
Rotas de armazéns, racks e bins
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from models.database import get_db
from models.bin import Bin
from models.rack import Rack
from models.user import User
from models.warehouse import Warehouse
from routers.deps import get_current_user, ok
from schemas.location_schemas import RackResponse, WarehouseResponse
from services.codecs import natural_key

router = APIRouter(tags=["warehouses"])


def serialize_bin(bin: Bin) -> dict:
    current_item = None
    if bin.occupied and bin.item:
        current_item = {
            "id": bin.item.id,
            "item_sku": bin.item.item_sku,
            "item_name": bin.item.item_name,
            "quantity": bin.quantity,
            "batch_id": bin.batch_id,
            "expiry_date": bin.expiry_date,
        }
    return {
        "id": bin.id,
        "rack_id": bin.rack_id,
        "code": bin.code,
        "label": bin.label,
        "is_occupied": bin.occupied,
        "current_item": current_item,
    }


@router.get("/warehouses")
def list_warehouses(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    warehouses = db.query(Warehouse).order_by(Warehouse.name).all()
    return ok([WarehouseResponse.model_validate(w).model_dump() for w in warehouses])


@router.get("/warehouses/{warehouse_id}/layout")
def warehouse_layout(
    warehouse_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Mapa do armazém: racks e bins com ocupação
    """
    warehouse = db.query(Warehouse).filter(Warehouse.id == warehouse_id).first()
    if not warehouse:
        raise HTTPException(status_code=404, detail=f"Warehouse {warehouse_id} not found")

    racks = []
    for rack in sorted(warehouse.racks, key=lambda r: natural_key(r.code)):
        bins = sorted(rack.bins, key=lambda b: natural_key(b.code))
        occupied = sum(1 for b in bins if b.occupied)
        racks.append({
            "id": rack.id,
            "code": rack.code,
            "label": rack.label,
            "total_bins": len(bins),
            "occupied_bins": occupied,
            "available_bins": len(bins) - occupied,
            "bins": [serialize_bin(b) for b in bins],
        })

    total_bins = sum(r["total_bins"] for r in racks)
    total_occupied = sum(r["occupied_bins"] for r in racks)
    return ok({
        "id": warehouse.id,
        "name": warehouse.name,
        "location": warehouse.location,
        "total_racks": len(racks),
        "total_bins": total_bins,
        "total_occupied": total_occupied,
        "total_available": total_bins - total_occupied,
        "racks": racks,
    })


@router.get("/racks")
def list_racks(
    warehouse_id: Optional[int] = Query(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Racks (de um armazém, se indicado); a ordem não é garantida
    """
    query = db.query(Rack)
    if warehouse_id is not None:
        query = query.filter(Rack.warehouse_id == warehouse_id)
    racks = query.order_by(Rack.id).all()
    return ok([RackResponse.model_validate(r).model_dump() for r in racks])


@router.get("/racks/{rack_id}/bins")
def list_rack_bins(
    rack_id: int,
    warehouse_id: Optional[int] = Query(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    rack = db.query(Rack).filter(Rack.id == rack_id).first()
    if not rack or (warehouse_id is not None and rack.warehouse_id != warehouse_id):
        raise HTTPException(status_code=404, detail=f"Rack {rack_id} not found")

    bins = db.query(Bin).filter(Bin.rack_id == rack_id).order_by(Bin.id).all()
    return ok([serialize_bin(b) for b in bins])
