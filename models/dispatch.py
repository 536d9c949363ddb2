from sqlalchemy import Column, Integer, String, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from schemas.dispatch_schemas import DispatchStatus
from .database import Base


class DispatchRequest(Base):
    """Pedidos de expedição: pending -> picking -> picked -> packing -> packed -> dispatched"""
    __tablename__ = "dispatch_requests"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String, unique=True, nullable=False, index=True)  # "DO-0001"
    status = Column(SQLEnum(DispatchStatus), default=DispatchStatus.PENDING, nullable=False, index=True)
    due_date = Column(String, nullable=True)
    priority = Column(String, default="normal", nullable=True)
    notes = Column(String, nullable=True)

    # Preenchidos ao despachar
    driver_name = Column(String, nullable=True)
    vehicle_no = Column(String, nullable=True)
    dispatch_date = Column(String, nullable=True)

    items = relationship("DispatchItem", back_populates="request", cascade="all, delete-orphan")


class DispatchItem(Base):
    __tablename__ = "dispatch_items"

    id = Column(Integer, primary_key=True, index=True)
    dispatch_id = Column(Integer, ForeignKey("dispatch_requests.id"), nullable=False)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False)
    bin_id = Column(Integer, ForeignKey("bins.id"), nullable=True)
    batch_id = Column(String, nullable=True)
    quantity = Column(Integer, nullable=False)

    request = relationship("DispatchRequest", back_populates="items")
    item = relationship("Item")
