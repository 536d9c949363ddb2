"""
Tela de cadastro de itens (item master)
"""
from typing import Any, Dict, List, Optional
from schemas.item_schemas import CategoryResponse, ItemPayload, ItemResponse
from schemas.location_schemas import WarehouseResponse
from schemas.pagination_schemas import PageRequest
from services.api_service import ApiService
from services.exceptions import ApiError, describe_error
from services.list_sync_service import ListSyncController
from services.notification_service import Notifier


class InventoryService:

    def __init__(self, api: ApiService, notifier: Notifier, **controller_options: Any):
        self.api = api
        self.notifier = notifier
        self.items: ListSyncController[ItemResponse] = ListSyncController(
            self._fetch, notifier, label="items", **controller_options
        )
        self.is_saving = False

    async def _fetch(self, request: PageRequest, filters: Dict[str, Any]):
        return await self.api.list_page("/items", request, ItemResponse.model_validate, **filters)

    async def categories(self) -> List[CategoryResponse]:
        try:
            return await self.api.list_all("/categories", CategoryResponse.model_validate)
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to load categories"))
            return []

    async def warehouses(self) -> List[WarehouseResponse]:
        try:
            return await self.api.list_all("/warehouses", WarehouseResponse.model_validate)
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to load warehouses"))
            return []

    async def save_item(self, payload: ItemPayload, item_id: Optional[int] = None) -> bool:
        """Cria (sem id) ou atualiza um item"""
        self.is_saving = True
        try:
            if item_id:
                await self.api.post(f"/items/{item_id}", json=payload.model_dump())
            else:
                await self.api.post("/items", json=payload.model_dump())
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to save item"))
            return False
        finally:
            self.is_saving = False

        self.notifier.success("Item updated successfully" if item_id else "Item created successfully")
        await self.items.refresh()
        return True

    async def delete_item(self, item_id: int) -> bool:
        try:
            await self.api.delete(f"/items/{item_id}")
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to delete item"))
            return False

        self.notifier.success("Item deleted")
        await self.items.refresh()
        return True
