"""
Rotas de aplicações de entrada: listagem, criação, verificação e putaway
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import or_
from datetime import date
from models.database import get_db
from models.bin import Bin
from models.inbound import InboundApplication, InboundItem
from models.item import Item
from models.movement import MovementType, StockMovement
from models.rack import Rack
from models.user import User
from models.warehouse import Warehouse
from routers.deps import get_current_user, ok, paginate
from schemas.inbound_schemas import (
    InboundApplicationCreate,
    InboundItemStatus,
    InboundStatus,
    PutawayRequest,
)

router = APIRouter(prefix="/inbound-applications", tags=["inbound"])


def serialize_application(application: InboundApplication) -> dict:
    return {
        "id": application.id,
        "inbound_number": application.inbound_number,
        "warehouse_id": application.warehouse_id,
        "expected_arrival_date": application.expected_arrival_date,
        "status": application.status.value,
        "notes": application.notes,
        "items": [
            {
                "id": line.id,
                "inbound_id": line.inbound_id,
                "item_id": line.item_id,
                "quantity": line.quantity,
                "received_quantity": line.received_quantity,
                "rack_id": line.rack_id,
                "bin_id": line.bin_id,
                "expiry_date": line.expiry_date,
                "manufacturing_year": line.manufacturing_year,
                "status": line.status.value,
                "item": {
                    "id": line.item.id,
                    "item_sku": line.item.item_sku,
                    "item_name": line.item.item_name,
                } if line.item else None,
            }
            for line in application.items
        ],
    }


@router.get("")
def list_applications(
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    search: str = Query(""),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Lista aplicações de entrada (mais recentes primeiro)
    """
    query = db.query(InboundApplication)
    if search:
        query = query.filter(or_(
            InboundApplication.inbound_number.ilike(f"%{search}%"),
            InboundApplication.notes.ilike(f"%{search}%")
        ))
    query = query.order_by(InboundApplication.id.desc())
    return paginate(query, page, per_page, serialize_application)


@router.post("", status_code=201)
def create_application(
    request: InboundApplicationCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if not db.query(Warehouse).filter(Warehouse.id == request.warehouse_id).first():
        raise HTTPException(status_code=422, detail="The selected warehouse is invalid.")

    application = InboundApplication(
        inbound_number="PENDING",
        warehouse_id=request.warehouse_id,
        expected_arrival_date=request.expected_date,
        status=InboundStatus.PENDING,
        notes=request.notes
    )
    db.add(application)

    for line in request.items:
        if not db.query(Item).filter(Item.id == line.item_id).first():
            db.rollback()
            raise HTTPException(status_code=422, detail=f"Item {line.item_id} does not exist.")
        application.items.append(InboundItem(
            item_id=line.item_id,
            quantity=line.quantity,
            rack_id=line.rack_id,
            expiry_date=line.expiry_date,
            manufacturing_year=line.manufacturing_year,
            status=InboundItemStatus.PENDING
        ))

    # Flush para obter o id que compõe o número
    db.flush()
    application.inbound_number = f"GRN-{application.id:04d}"
    db.commit()
    db.refresh(application)
    return ok(serialize_application(application), "Inbound application created")


def _get_application(db: Session, application_id: int) -> InboundApplication:
    application = db.query(InboundApplication).filter(
        InboundApplication.id == application_id
    ).first()
    if not application:
        raise HTTPException(status_code=404, detail=f"Inbound application {application_id} not found")
    return application


@router.put("/{application_id}/verify")
def start_verification(
    application_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    application = _get_application(db, application_id)
    if application.status != InboundStatus.PENDING:
        raise HTTPException(
            status_code=422,
            detail=f"Inbound application is already {application.status.value}."
        )

    application.status = InboundStatus.VERIFYING
    db.commit()
    db.refresh(application)
    return ok(serialize_application(application), "Verification started")


@router.put("/{application_id}/items/{line_id}/putaway")
def putaway_item(
    application_id: int,
    line_id: int,
    request: PutawayRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Guarda uma linha num bin. O bin é revalidado aqui: a sugestão do
    cliente pode estar desatualizada.
    """
    application = _get_application(db, application_id)
    if application.status != InboundStatus.VERIFYING:
        raise HTTPException(status_code=422, detail="Start verification before putaway.")

    line = db.query(InboundItem).filter(
        InboundItem.id == line_id,
        InboundItem.inbound_id == application_id
    ).first()
    if not line:
        raise HTTPException(status_code=404, detail=f"Inbound item {line_id} not found")
    if line.status == InboundItemStatus.STORED:
        raise HTTPException(status_code=422, detail="Item has already been stored.")

    rack = db.query(Rack).filter(
        Rack.id == request.rack_id,
        Rack.warehouse_id == application.warehouse_id
    ).first()
    if not rack:
        raise HTTPException(status_code=422, detail="The selected rack does not belong to this warehouse.")

    bin = db.query(Bin).filter(Bin.id == request.bin_id, Bin.rack_id == rack.id).first()
    if not bin:
        raise HTTPException(status_code=422, detail="The selected bin does not belong to this rack.")
    if bin.occupied:
        raise HTTPException(status_code=409, detail=f"Bin {bin.code} is already occupied.")

    try:
        bin.occupied = True
        bin.item_id = line.item_id
        bin.quantity = request.received_quantity
        bin.batch_id = application.inbound_number
        bin.expiry_date = line.expiry_date

        line.status = InboundItemStatus.STORED
        line.received_quantity = request.received_quantity
        line.rack_id = rack.id
        line.bin_id = bin.id

        db.add(StockMovement(
            item_id=line.item_id,
            bin_id=bin.id,
            type=MovementType.INBOUND,
            quantity=request.received_quantity,
            order_no=application.inbound_number,
            order_date=date.today().isoformat(),
            batch_id=application.inbound_number
        ))

        db.flush()
        if all(i.status == InboundItemStatus.STORED for i in application.items):
            application.status = InboundStatus.COMPLETED

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(application)
    return ok(serialize_application(application), "Item stored successfully")
