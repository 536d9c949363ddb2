from sqlalchemy import Column, Integer, String, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from schemas.inbound_schemas import InboundItemStatus, InboundStatus
from .database import Base


class InboundApplication(Base):
    """Aplicações de entrada (recebimento)"""
    __tablename__ = "inbound_applications"

    id = Column(Integer, primary_key=True, index=True)
    inbound_number = Column(String, unique=True, nullable=False, index=True)  # "GRN-0001"
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False)
    expected_arrival_date = Column(String, nullable=True)
    status = Column(SQLEnum(InboundStatus), default=InboundStatus.PENDING, nullable=False)
    notes = Column(String, nullable=True)

    warehouse = relationship("Warehouse")
    items = relationship("InboundItem", back_populates="application", cascade="all, delete-orphan")


class InboundItem(Base):
    """Linhas de uma aplicação de entrada"""
    __tablename__ = "inbound_items"

    id = Column(Integer, primary_key=True, index=True)
    inbound_id = Column(Integer, ForeignKey("inbound_applications.id"), nullable=False)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    received_quantity = Column(Integer, nullable=True)
    rack_id = Column(Integer, ForeignKey("racks.id"), nullable=True)
    bin_id = Column(Integer, ForeignKey("bins.id"), nullable=True)
    expiry_date = Column(String, nullable=True)
    manufacturing_year = Column(Integer, nullable=True)
    status = Column(SQLEnum(InboundItemStatus), default=InboundItemStatus.PENDING, nullable=False)

    application = relationship("InboundApplication", back_populates="items")
    item = relationship("Item")
