"""
Rotas do cadastro de itens e categorias
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import or_
from models.database import get_db
from models.bin import Bin
from models.item import Category, Item
from models.user import User
from routers.deps import get_current_user, ok, paginate
from schemas.item_schemas import CategoryResponse, ItemPayload

router = APIRouter(tags=["items"])


def serialize_item(item: Item) -> dict:
    stocks = []
    for bin in item.bins:
        stocks.append({
            "id": bin.id,
            "item_id": item.id,
            "warehouse_id": bin.rack.warehouse_id,
            "bin_id": bin.id,
            "batch_id": bin.batch_id,
            "expiry_date": bin.expiry_date,
            "manufacturing_year": None,
            "quantity": bin.quantity or 0,
            "rack": {"id": bin.rack.id, "code": bin.rack.code},
            "bin": {"id": bin.id, "code": bin.code},
        })

    return {
        "id": item.id,
        "item_sku": item.item_sku,
        "item_name": item.item_name,
        "category_id": item.category_id,
        "weight": item.weight,
        "storage_type": item.storage_type,
        "qty_per_pallet": item.qty_per_pallet,
        "qty_per_carton": item.qty_per_carton,
        "category": CategoryResponse.model_validate(item.category).model_dump() if item.category else None,
        "stocks": stocks,
    }


@router.get("/items")
def list_items(
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    search: str = Query(""),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Lista itens paginados; pesquisa por SKU ou nome
    """
    query = db.query(Item)
    if search:
        query = query.filter(or_(
            Item.item_sku.ilike(f"%{search}%"),
            Item.item_name.ilike(f"%{search}%")
        ))
    query = query.order_by(Item.item_sku)
    return paginate(query, page, per_page, serialize_item)


def _apply_payload(item: Item, payload: ItemPayload, db: Session) -> None:
    duplicate = db.query(Item).filter(
        Item.item_sku == payload.item_sku,
        Item.id != (item.id or 0)
    ).first()
    if duplicate:
        raise HTTPException(status_code=422, detail=f"The item sku {payload.item_sku} has already been taken.")

    if payload.category_id is not None:
        if not db.query(Category).filter(Category.id == payload.category_id).first():
            raise HTTPException(status_code=422, detail="The selected category is invalid.")

    for field, value in payload.model_dump().items():
        setattr(item, field, value)


@router.post("/items", status_code=201)
def create_item(
    payload: ItemPayload,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    item = Item()
    _apply_payload(item, payload, db)
    db.add(item)
    db.commit()
    db.refresh(item)
    return ok(serialize_item(item), "Item created successfully")


@router.post("/items/{item_id}")
def update_item(
    item_id: int,
    payload: ItemPayload,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

    _apply_payload(item, payload, db)
    db.commit()
    db.refresh(item)
    return ok(serialize_item(item), "Item updated successfully")


@router.delete("/items/{item_id}")
def delete_item(
    item_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

    if db.query(Bin).filter(Bin.item_id == item_id).first():
        raise HTTPException(status_code=422, detail="Item still has stock in a bin and cannot be deleted.")

    db.delete(item)
    db.commit()
    return ok(message="Item deleted")


@router.get("/categories")
def list_categories(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    categories = db.query(Category).order_by(Category.name).all()
    return ok([CategoryResponse.model_validate(c).model_dump() for c in categories])
