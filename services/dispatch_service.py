"""
Tela de expedição: fila de pedidos embalados e histórico de despachados
"""
from typing import Any, Dict, List
from schemas.dispatch_schemas import DispatchConfirmRequest, DispatchRequestResponse, DispatchStatus
from schemas.pagination_schemas import PageRequest
from services.api_service import ApiService
from services.exceptions import ApiError, describe_error
from services.list_sync_service import ListSyncController
from services.notification_service import Notifier

QUEUE_TAB = "QUEUE"
HISTORY_TAB = "HISTORY"


class DispatchService:

    def __init__(self, api: ApiService, notifier: Notifier, **controller_options: Any):
        self.api = api
        self.notifier = notifier
        self.orders: ListSyncController[DispatchRequestResponse] = ListSyncController(
            self._fetch, notifier, label="dispatch orders", **controller_options
        )
        self.active_tab = QUEUE_TAB
        self.is_saving = False

    async def _fetch(self, request: PageRequest, filters: Dict[str, Any]):
        return await self.api.list_page(
            "/dispatch-requests", request, DispatchRequestResponse.model_validate, **filters
        )

    @property
    def visible_orders(self) -> List[DispatchRequestResponse]:
        if self.active_tab == QUEUE_TAB:
            return [o for o in self.orders.items if o.status == DispatchStatus.PACKED]
        return [o for o in self.orders.items if o.status == DispatchStatus.DISPATCHED]

    async def set_tab(self, tab: str) -> None:
        if tab not in (QUEUE_TAB, HISTORY_TAB):
            raise ValueError(f"Aba desconhecida: {tab}")
        self.active_tab = tab
        self.orders.select(None)
        await self.orders.set_page(1)

    async def dispatch(self, order: DispatchRequestResponse, driver_name: str, vehicle_no: str) -> bool:
        """Despacha um pedido embalado com motorista e viatura"""
        if not driver_name.strip() or not vehicle_no.strip():
            self.notifier.error("Please enter driver and vehicle details")
            return False

        body = DispatchConfirmRequest(driver_name=driver_name.strip(), vehicle_no=vehicle_no.strip())
        self.is_saving = True
        try:
            await self.api.post(f"/dispatch-requests/{order.id}/dispatch", json=body.model_dump())
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to dispatch order"))
            return False
        finally:
            self.is_saving = False

        self.notifier.success(f"Order {order.order_number} dispatched successfully")
        self.orders.select(None)
        await self.orders.refresh()
        return True
