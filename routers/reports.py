"""
Relatório de movimentos de stock e dashboard
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import Optional
from models.database import get_db
from models.bin import Bin
from models.dispatch import DispatchRequest
from models.inbound import InboundApplication
from models.item import Item
from models.movement import MovementType, StockMovement
from models.user import User
from routers.deps import get_current_user, ok, paginate
from schemas.dispatch_schemas import DispatchStatus
from schemas.inbound_schemas import InboundStatus
from schemas.report_schemas import DashboardData, KpiData, UrgentTask

router = APIRouter(tags=["reports"])

# Colunas ordenáveis do relatório -> coluna SQL
SORT_COLUMNS = {
    "r_order_date": StockMovement.order_date,
    "r_order_no": StockMovement.order_no,
    "r_sku": Item.item_sku,
    "r_description": Item.item_name,
    "r_qty": StockMovement.quantity,
    "r_weight": Item.weight,
    "entry_date": StockMovement.ts,
}

URGENT_TASKS_LIMIT = 5


def serialize_movement(row) -> dict:
    movement, item = row
    return {
        "id": movement.id,
        "r_type": movement.type.value,
        "r_order_date": movement.order_date,
        "r_order_no": movement.order_no,
        "r_sku": item.item_sku,
        "r_description": item.item_name,
        "r_batch": movement.batch_id,
        "r_qty": movement.quantity,
        "r_weight": item.weight,
        "entry_date": movement.ts.isoformat() if movement.ts else None,
    }


@router.get("/stock-movements")
def list_stock_movements(
    page: int = Query(1, ge=1),
    per_page: int = Query(25, ge=1, le=100),
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$"),
    type: Optional[MovementType] = Query(None),
    search: str = Query(""),
    sort_by: Optional[str] = Query(None),
    sort_dir: str = Query("asc", pattern="^(asc|desc)$"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Movimentos de um mês (YYYY-MM), filtráveis por tipo e ordenáveis
    pelas colunas do relatório
    """
    if sort_by is not None and sort_by not in SORT_COLUMNS:
        raise HTTPException(status_code=422, detail=f"Cannot sort by {sort_by}.")

    query = db.query(StockMovement, Item).join(Item, StockMovement.item_id == Item.id)
    if month:
        query = query.filter(StockMovement.order_date.like(f"{month}-%"))
    if type is not None:
        query = query.filter(StockMovement.type == type)
    if search:
        query = query.filter(
            Item.item_sku.ilike(f"%{search}%") | Item.item_name.ilike(f"%{search}%")
            | StockMovement.order_no.ilike(f"%{search}%")
        )

    if sort_by:
        column = SORT_COLUMNS[sort_by]
        query = query.order_by(column.desc() if sort_dir == "desc" else column.asc(), StockMovement.id)
    else:
        query = query.order_by(StockMovement.order_date.desc(), StockMovement.id.desc())

    return paginate(query, page, per_page, serialize_movement)


@router.get("/dashboard")
def dashboard(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """KPIs e próximas tarefas (entradas pendentes e pedidos por expedir)"""
    kpi = KpiData(
        total_items=db.query(func.count(Item.id)).scalar() or 0,
        total_bins=db.query(func.count(Bin.id)).scalar() or 0,
        occupied_bins=db.query(func.count(Bin.id)).filter(Bin.occupied == True).scalar() or 0,
        pending_inbound=db.query(func.count(InboundApplication.id)).filter(
            InboundApplication.status != InboundStatus.COMPLETED
        ).scalar() or 0,
        pending_dispatch=db.query(func.count(DispatchRequest.id)).filter(
            DispatchRequest.status != DispatchStatus.DISPATCHED
        ).scalar() or 0,
    )

    tasks = []
    inbound = db.query(InboundApplication).filter(
        InboundApplication.status != InboundStatus.COMPLETED
    ).order_by(InboundApplication.expected_arrival_date).limit(URGENT_TASKS_LIMIT).all()
    for application in inbound:
        tasks.append(UrgentTask(
            id=application.id,
            type="inbound",
            reference=application.inbound_number,
            due_date=application.expected_arrival_date,
        ))

    dispatch = db.query(DispatchRequest).filter(
        DispatchRequest.status != DispatchStatus.DISPATCHED
    ).order_by(DispatchRequest.due_date).limit(URGENT_TASKS_LIMIT).all()
    for order in dispatch:
        tasks.append(UrgentTask(
            id=order.id,
            type="dispatch",
            reference=order.order_number,
            due_date=order.due_date,
        ))

    tasks.sort(key=lambda t: t.due_date or "")
    data = DashboardData(kpi=kpi, urgent_tasks=tasks[:URGENT_TASKS_LIMIT])
    return ok(data.model_dump())
