"""
Mapa do armazém e dashboard
"""
from typing import List, Optional
from pydantic import ValidationError
from schemas.location_schemas import WarehouseLayout, WarehouseResponse
from schemas.report_schemas import DashboardData
from services.api_service import ApiService, unwrap_data
from services.exceptions import ApiError, describe_error
from services.notification_service import Notifier


class WarehouseService:
    """Lista de armazéns e ocupação de racks/bins"""

    def __init__(self, api: ApiService, notifier: Notifier):
        self.api = api
        self.notifier = notifier
        self.warehouses: List[WarehouseResponse] = []
        self.layout: Optional[WarehouseLayout] = None

    async def load_warehouses(self) -> List[WarehouseResponse]:
        try:
            self.warehouses = await self.api.list_all("/warehouses", WarehouseResponse.model_validate)
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to load warehouses"))
        return self.warehouses

    async def load_layout(self, warehouse_id: int) -> Optional[WarehouseLayout]:
        """Em falha mantém o mapa anterior"""
        try:
            payload = await self.api.get(f"/warehouses/{warehouse_id}/layout")
            self.layout = WarehouseLayout.model_validate(unwrap_data(payload))
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to load warehouse layout"))
        except ValidationError:
            self.notifier.error("Failed to load warehouse layout")
        return self.layout


class DashboardService:

    def __init__(self, api: ApiService, notifier: Notifier):
        self.api = api
        self.notifier = notifier
        self.data: Optional[DashboardData] = None

    async def load(self) -> Optional[DashboardData]:
        try:
            payload = await self.api.get("/dashboard")
            self.data = DashboardData.model_validate(unwrap_data(payload))
        except (ApiError, ValidationError):
            self.notifier.error("Failed to load dashboard data")
        return self.data
