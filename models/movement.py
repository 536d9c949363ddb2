from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from .database import Base
import enum


class MovementType(str, enum.Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class StockMovement(Base):
    """Auditoria de entradas e saídas de stock (base do relatório mensal)"""
    __tablename__ = "stock_movements"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False)
    bin_id = Column(Integer, ForeignKey("bins.id"), nullable=True)
    type = Column(SQLEnum(MovementType), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    order_no = Column(String, nullable=True)  # número da entrada ou do pedido
    order_date = Column(String, nullable=True, index=True)  # "YYYY-MM-DD"
    batch_id = Column(String, nullable=True)
    ts = Column(DateTime, server_default=func.now(), nullable=False)

    item = relationship("Item")
