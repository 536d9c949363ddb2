from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from .database import Base


class Warehouse(Base):
    """Armazéns"""
    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    location = Column(String, nullable=True)

    racks = relationship("Rack", back_populates="warehouse", cascade="all, delete-orphan")
