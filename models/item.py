from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)

    items = relationship("Item", back_populates="category")


class Item(Base):
    """Itens do cadastro (item master)"""
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    item_sku = Column(String, unique=True, nullable=False, index=True)
    item_name = Column(String, nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    weight = Column(String, nullable=True)  # "2.5kg"
    storage_type = Column(Integer, nullable=True)  # 1 palete, 2 caixa, 3 dimensões
    qty_per_pallet = Column(Integer, nullable=True)
    qty_per_carton = Column(Integer, nullable=True)

    category = relationship("Category", back_populates="items")
    bins = relationship("Bin", back_populates="item")
