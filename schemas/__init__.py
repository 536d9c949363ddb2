from .pagination_schemas import PageRequest, PageResult, PageEnvelope, PaginationMeta, SortSpec, SortDirection
from .envelope_schemas import ApiEnvelope, ErrorEnvelope
from .auth_schemas import LoginRequest, AuthData, UserResponse, RoleResponse
from .location_schemas import (
    WarehouseResponse,
    RackResponse,
    BinResponse,
    StorageLocation,
    PlacementResult,
    WarehouseLayout,
)
from .item_schemas import ItemResponse, ItemPayload, CategoryResponse
from .inbound_schemas import (
    InboundApplicationResponse,
    InboundApplicationCreate,
    InboundItemResponse,
    PutawayRequest,
)
from .dispatch_schemas import (
    DispatchRequestResponse,
    DispatchRequestCreate,
    DispatchConfirmRequest,
    BulkStartPickingRequest,
    DispatchStatus,
)
from .report_schemas import StockMovementRow, DashboardData

__all__ = [
    "PageRequest",
    "PageResult",
    "PageEnvelope",
    "PaginationMeta",
    "SortSpec",
    "SortDirection",
    "ApiEnvelope",
    "ErrorEnvelope",
    "LoginRequest",
    "AuthData",
    "UserResponse",
    "RoleResponse",
    "WarehouseResponse",
    "RackResponse",
    "BinResponse",
    "StorageLocation",
    "PlacementResult",
    "WarehouseLayout",
    "ItemResponse",
    "ItemPayload",
    "CategoryResponse",
    "InboundApplicationResponse",
    "InboundApplicationCreate",
    "InboundItemResponse",
    "PutawayRequest",
    "DispatchRequestResponse",
    "DispatchRequestCreate",
    "DispatchConfirmRequest",
    "BulkStartPickingRequest",
    "DispatchStatus",
    "StockMovementRow",
    "DashboardData",
]
