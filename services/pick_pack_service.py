"""
Tela de pick and pack: pedidos de expedição por aba,
transições de estado por rota dedicada e início de picking em lote
"""
import logging
from typing import Any, Dict, List, Optional, Set
from schemas.dispatch_schemas import (
    BulkStartPickingRequest,
    DispatchRequestCreate,
    DispatchRequestResponse,
    DispatchStatus,
)
from schemas.pagination_schemas import PageRequest
from services.api_service import ApiService, unwrap_data
from services.exceptions import ApiError, describe_error
from services.list_sync_service import ListSyncController
from services.notification_service import Notifier

logger = logging.getLogger(__name__)

PICKING_TAB = "PICKING"
PACKING_TAB = "PACKING"

TAB_STATUSES = {
    PICKING_TAB: (DispatchStatus.PENDING, DispatchStatus.PICKING),
    PACKING_TAB: (DispatchStatus.PICKED, DispatchStatus.PACKING, DispatchStatus.PACKED),
}

# Não existe rota genérica "mudar estado": cada transição tem a sua
STATUS_ROUTES = {
    DispatchStatus.PICKING: "start-picking",
    DispatchStatus.PICKED: "complete-picking",
    DispatchStatus.PACKING: "start-packing",
    DispatchStatus.PACKED: "complete-packing",
}


def status_route(order_id: int, new_status: DispatchStatus) -> str:
    """Rota dedicada para levar um pedido ao novo estado"""
    try:
        action = STATUS_ROUTES[DispatchStatus(new_status)]
    except (KeyError, ValueError):
        raise ValueError(f"Sem rota de transição para o estado '{new_status}'")
    return f"/dispatch-requests/{order_id}/{action}"


def status_label(status: str) -> str:
    return str(status).replace("_", " ").title()


class PickPackService:
    """Pick and pack sobre /dispatch-requests"""

    def __init__(self, api: ApiService, notifier: Notifier, **controller_options: Any):
        self.api = api
        self.notifier = notifier
        self.orders: ListSyncController[DispatchRequestResponse] = ListSyncController(
            self._fetch, notifier, label="dispatch orders", **controller_options
        )
        self.active_tab = PICKING_TAB
        self.selected_ids: Set[int] = set()
        self.is_saving = False

    async def _fetch(self, request: PageRequest, filters: Dict[str, Any]):
        return await self.api.list_page(
            "/dispatch-requests", request, DispatchRequestResponse.model_validate, **filters
        )

    # -- abas -----------------------------------------------------------------

    @property
    def visible_orders(self) -> List[DispatchRequestResponse]:
        """Partição da página atual pelos estados da aba ativa"""
        statuses = TAB_STATUSES[self.active_tab]
        return [o for o in self.orders.items if o.status in statuses]

    async def set_tab(self, tab: str) -> None:
        if tab not in TAB_STATUSES:
            raise ValueError(f"Aba desconhecida: {tab}")
        self.active_tab = tab
        self.orders.select(None)
        await self.orders.set_page(1)

    # -- transições -----------------------------------------------------------

    async def change_status(self, order: DispatchRequestResponse, new_status: DispatchStatus) -> bool:
        path = status_route(order.id, new_status)

        self.is_saving = True
        try:
            await self.api.put(path)
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to update status"))
            return False
        finally:
            self.is_saving = False

        self.notifier.success(f"Order {order.order_number} moved to {status_label(DispatchStatus(new_status).value)}")
        selected = self.orders.selected
        if selected is not None and selected.id == order.id:
            self.orders.select(selected.model_copy(update={"status": DispatchStatus(new_status)}))
        await self.orders.refresh()
        return True

    # -- seleção em lote (só pedidos pendentes) -------------------------------

    @property
    def pending_orders(self) -> List[DispatchRequestResponse]:
        return [o for o in self.orders.items if o.status == DispatchStatus.PENDING]

    @property
    def all_pending_selected(self) -> bool:
        pending = self.pending_orders
        return bool(pending) and all(o.id in self.selected_ids for o in pending)

    def toggle_select(self, order_id: int) -> None:
        if order_id in self.selected_ids:
            self.selected_ids.discard(order_id)
        else:
            self.selected_ids.add(order_id)

    def toggle_select_all(self) -> None:
        if self.all_pending_selected:
            self.selected_ids = set()
        else:
            self.selected_ids = {o.id for o in self.pending_orders}

    async def bulk_start_picking(self) -> bool:
        selected = [o for o in self.orders.items if o.id in self.selected_ids]
        if not selected:
            return False

        body = BulkStartPickingRequest(dispatch_ids=[o.id for o in selected])
        self.is_saving = True
        try:
            await self.api.post("/dispatch-requests/bulk-start-picking", json=body.model_dump())
        except ApiError as e:
            self.notifier.error(describe_error(e, "Bulk start picking failed"))
            return False
        finally:
            self.is_saving = False

        self.notifier.success(f"Picking started for {len(selected)} order(s)")
        self.selected_ids = set()
        await self.orders.refresh()
        return True

    # -- novo pedido ----------------------------------------------------------

    async def create_request(self, payload: DispatchRequestCreate) -> Optional[str]:
        try:
            response = await self.api.post("/dispatch-requests", json=payload.model_dump())
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to submit dispatch request"))
            return None

        data = unwrap_data(response) or {}
        order_number = data.get("order_number") or "N/A"
        self.notifier.success(f"Dispatch Request #{order_number} submitted!")
        await self.orders.refresh()
        return order_number
