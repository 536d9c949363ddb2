from .auth import router as auth_router
from .items import router as items_router
from .warehouses import router as warehouses_router
from .inbound import router as inbound_router
from .dispatch import router as dispatch_router
from .reports import router as reports_router

__all__ = [
    "auth_router", "items_router", "warehouses_router",
    "inbound_router", "dispatch_router", "reports_router",
]
