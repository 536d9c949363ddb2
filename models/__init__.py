from .database import Base, get_db, engine
from .warehouse import Warehouse
from .rack import Rack
from .bin import Bin
from .item import Category, Item
from .movement import StockMovement, MovementType
from .inbound import InboundApplication, InboundItem
from .dispatch import DispatchRequest, DispatchItem
from .user import Role, User

__all__ = [
    "Base", "get_db", "engine",
    "Warehouse", "Rack", "Bin", "Category", "Item",
    "StockMovement", "MovementType",
    "InboundApplication", "InboundItem",
    "DispatchRequest", "DispatchItem",
    "Role", "User",
]
