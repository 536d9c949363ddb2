from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .database import Base


class Bin(Base):
    """Bins de um rack; cada bin guarda no máximo uma linha de stock"""
    __tablename__ = "bins"

    id = Column(Integer, primary_key=True, index=True)
    rack_id = Column(Integer, ForeignKey("racks.id"), nullable=False)
    code = Column(String, nullable=False)  # "A1", "A2", ..., "A10"
    label = Column(String, nullable=True)
    occupied = Column(Boolean, default=False, nullable=False, index=True)

    # Linha de stock guardada (nula quando livre)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=True)
    quantity = Column(Integer, nullable=True)
    batch_id = Column(String, nullable=True)
    expiry_date = Column(String, nullable=True)

    rack = relationship("Rack", back_populates="bins")
    item = relationship("Item", back_populates="bins")

    __table_args__ = (
        UniqueConstraint("rack_id", "code", name="uq_rack_bin"),
    )
