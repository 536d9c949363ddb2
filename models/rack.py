from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .database import Base


class Rack(Base):
    """Racks de um armazém, identificados por código ("A", "B", "B1"...)"""
    __tablename__ = "racks"

    id = Column(Integer, primary_key=True, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False)
    code = Column(String, nullable=False)
    label = Column(String, nullable=True)

    warehouse = relationship("Warehouse", back_populates="racks")
    bins = relationship("Bin", back_populates="rack", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("warehouse_id", "code", name="uq_warehouse_rack"),
    )
