"""
Rotas de pedidos de expedição: pick, pack e dispatch.
Cada transição de estado tem a sua rota.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import or_
from datetime import date
from typing import Optional
import logging
from models.database import get_db
from models.bin import Bin
from models.dispatch import DispatchItem, DispatchRequest
from models.item import Item
from models.movement import MovementType, StockMovement
from models.user import User
from routers.deps import get_current_user, ok, paginate
from schemas.dispatch_schemas import (
    BulkStartPickingRequest,
    DispatchConfirmRequest,
    DispatchRequestCreate,
    DispatchStatus,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dispatch-requests", tags=["dispatch"])

# rota -> (estado exigido, novo estado)
TRANSITIONS = {
    "start-picking": (DispatchStatus.PENDING, DispatchStatus.PICKING),
    "complete-picking": (DispatchStatus.PICKING, DispatchStatus.PICKED),
    "start-packing": (DispatchStatus.PICKED, DispatchStatus.PACKING),
    "complete-packing": (DispatchStatus.PACKING, DispatchStatus.PACKED),
}


def serialize_request(order: DispatchRequest) -> dict:
    dispatch = None
    if order.status == DispatchStatus.DISPATCHED:
        dispatch = {
            "driver_name": order.driver_name,
            "vehicle_no": order.vehicle_no,
            "dispatch_date": order.dispatch_date,
        }
    return {
        "id": order.id,
        "order_number": order.order_number,
        "status": order.status.value,
        "due_date": order.due_date,
        "priority": order.priority,
        "notes": order.notes,
        "items": [
            {
                "id": line.id,
                "item_id": line.item_id,
                "warehouse_id": line.warehouse_id,
                "bin_id": line.bin_id,
                "batch_id": line.batch_id,
                "quantity": line.quantity,
                "item": {
                    "id": line.item.id,
                    "item_sku": line.item.item_sku,
                    "item_name": line.item.item_name,
                } if line.item else None,
            }
            for line in order.items
        ],
        "dispatch": dispatch,
    }


@router.get("")
def list_requests(
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    search: str = Query(""),
    status: Optional[DispatchStatus] = Query(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    query = db.query(DispatchRequest)
    if search:
        query = query.filter(or_(
            DispatchRequest.order_number.ilike(f"%{search}%"),
            DispatchRequest.notes.ilike(f"%{search}%")
        ))
    if status is not None:
        query = query.filter(DispatchRequest.status == status)
    query = query.order_by(DispatchRequest.id.desc())
    return paginate(query, page, per_page, serialize_request)


@router.post("", status_code=201)
def create_request(
    request: DispatchRequestCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    order = DispatchRequest(
        order_number="PENDING",
        status=DispatchStatus.PENDING,
        due_date=request.due_date,
        priority=request.priority,
        notes=request.notes
    )
    db.add(order)

    for line in request.items:
        if not db.query(Item).filter(Item.id == line.item_id).first():
            db.rollback()
            raise HTTPException(status_code=422, detail=f"Item {line.item_id} does not exist.")
        order.items.append(DispatchItem(
            item_id=line.item_id,
            warehouse_id=line.warehouse_id,
            bin_id=line.bin_id,
            batch_id=line.batch_id,
            quantity=line.quantity
        ))

    db.flush()
    order.order_number = f"DO-{order.id:04d}"
    db.commit()
    db.refresh(order)
    return ok(serialize_request(order), "Dispatch request submitted")


@router.post("/bulk-start-picking")
def bulk_start_picking(
    request: BulkStartPickingRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Inicia picking em vários pedidos pendentes; tudo ou nada
    """
    orders = db.query(DispatchRequest).filter(
        DispatchRequest.id.in_(request.dispatch_ids)
    ).all()
    found = {o.id for o in orders}
    missing = [i for i in request.dispatch_ids if i not in found]
    if missing:
        raise HTTPException(status_code=404, detail=f"Dispatch requests not found: {missing}")

    not_pending = [o.order_number for o in orders if o.status != DispatchStatus.PENDING]
    if not_pending:
        raise HTTPException(
            status_code=422,
            detail=f"Only pending orders can start picking: {', '.join(not_pending)}"
        )

    for order in orders:
        order.status = DispatchStatus.PICKING
    db.commit()
    return ok({"updated": len(orders)}, f"Picking started for {len(orders)} order(s)")


def _get_request(db: Session, request_id: int) -> DispatchRequest:
    order = db.query(DispatchRequest).filter(DispatchRequest.id == request_id).first()
    if not order:
        raise HTTPException(status_code=404, detail=f"Dispatch request {request_id} not found")
    return order


def _transition(db: Session, request_id: int, action: str) -> dict:
    required, target = TRANSITIONS[action]
    order = _get_request(db, request_id)
    if order.status != required:
        raise HTTPException(
            status_code=422,
            detail=f"Cannot {action.replace('-', ' ')}: order is {order.status.value}."
        )

    order.status = target
    db.commit()
    db.refresh(order)
    logger.info("%s: %s -> %s", order.order_number, required.value, target.value)
    return ok(serialize_request(order), f"Order moved to {target.value}")


@router.put("/{request_id}/start-picking")
def start_picking(request_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _transition(db, request_id, "start-picking")


@router.put("/{request_id}/complete-picking")
def complete_picking(request_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _transition(db, request_id, "complete-picking")


@router.put("/{request_id}/start-packing")
def start_packing(request_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _transition(db, request_id, "start-packing")


@router.put("/{request_id}/complete-packing")
def complete_packing(request_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _transition(db, request_id, "complete-packing")


@router.post("/{request_id}/dispatch")
def dispatch_request(
    request_id: int,
    request: DispatchConfirmRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Despacha um pedido embalado: regista motorista/viatura,
    baixa o stock dos bins indicados e grava movimentos de saída
    """
    order = _get_request(db, request_id)
    if order.status != DispatchStatus.PACKED:
        raise HTTPException(
            status_code=422,
            detail=f"Only packed orders can be dispatched: order is {order.status.value}."
        )

    today = date.today().isoformat()
    try:
        for line in order.items:
            if line.bin_id is not None:
                bin = db.query(Bin).filter(Bin.id == line.bin_id).first()
                if bin and bin.item_id == line.item_id and bin.occupied:
                    remaining = (bin.quantity or 0) - line.quantity
                    if remaining > 0:
                        bin.quantity = remaining
                    else:
                        # Bin esvaziado volta a ficar livre
                        bin.occupied = False
                        bin.item_id = None
                        bin.quantity = None
                        bin.batch_id = None
                        bin.expiry_date = None

            db.add(StockMovement(
                item_id=line.item_id,
                bin_id=line.bin_id,
                type=MovementType.OUTBOUND,
                quantity=line.quantity,
                order_no=order.order_number,
                order_date=today,
                batch_id=line.batch_id
            ))

        order.status = DispatchStatus.DISPATCHED
        order.driver_name = request.driver_name
        order.vehicle_no = request.vehicle_no
        order.dispatch_date = today
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(order)
    return ok(serialize_request(order), "Order dispatched successfully")
