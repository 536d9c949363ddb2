"""
Tela de entrada e putaway: lista de aplicações de entrada,
início da verificação e confirmação do putaway por linha
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from schemas.inbound_schemas import (
    InboundApplicationCreate,
    InboundApplicationResponse,
    InboundItemResponse,
    InboundItemStatus,
    InboundStatus,
    PutawayRequest,
)
from schemas.location_schemas import BinResponse, PlacementResult, RackResponse
from schemas.pagination_schemas import PageRequest
from services.api_service import ApiService, unwrap_data
from services.exceptions import ApiError, describe_error
from services.list_sync_service import ListSyncController
from services.notification_service import Notifier
from services.placement_service import PlacementService

logger = logging.getLogger(__name__)

NO_FREE_BIN_MESSAGE = "No available bin - select manually"


@dataclass
class PutawayState:
    """Estado do diálogo de putaway de uma linha"""
    item: InboundItemResponse
    warehouse_id: int
    racks: List[RackResponse] = field(default_factory=list)
    bins: List[BinResponse] = field(default_factory=list)
    rack_id: Optional[int] = None
    bin_id: Optional[int] = None
    suggestion: Optional[PlacementResult] = None


class InboundService:
    """Aplicações de entrada e putaway"""

    def __init__(
        self,
        api: ApiService,
        notifier: Notifier,
        placement: Optional[PlacementService] = None,
        **controller_options: Any,
    ):
        self.api = api
        self.notifier = notifier
        self.placement = placement or PlacementService(api)
        self.orders: ListSyncController[InboundApplicationResponse] = ListSyncController(
            self._fetch, notifier, label="inbound orders", **controller_options
        )
        self.putaway: Optional[PutawayState] = None
        self.is_saving = False

    async def _fetch(self, request: PageRequest, filters: Dict[str, Any]):
        return await self.api.list_page(
            "/inbound-applications", request, InboundApplicationResponse.model_validate, **filters
        )

    # -- verificação ----------------------------------------------------------

    async def start_verification(self, order_id: int) -> bool:
        self.is_saving = True
        try:
            await self.api.put(f"/inbound-applications/{order_id}/verify")
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to start verification"))
            return False
        finally:
            self.is_saving = False

        self.notifier.success("Verification started. Proceed to putaway items.")
        selected = self.orders.selected
        if selected is not None and selected.id == order_id:
            self.orders.select(selected.model_copy(update={"status": InboundStatus.VERIFYING}))
        await self.orders.refresh()
        return True

    # -- putaway --------------------------------------------------------------

    async def open_putaway(self, item: InboundItemResponse) -> Optional[PlacementResult]:
        """
        Abre o putaway de uma linha: carrega os racks do armazém da ordem
        e pré-seleciona a sugestão do PlacementService (pode ser trocada).
        """
        order = self.orders.selected
        if order is None:
            return None

        state = PutawayState(item=item, warehouse_id=order.warehouse_id, rack_id=item.rack_id)
        self.putaway = state

        try:
            state.racks = await self.placement.list_racks(order.warehouse_id)
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to load racks"))
            return None

        suggestion = await self.placement.resolve(order.warehouse_id, racks=state.racks)
        state.suggestion = suggestion

        if suggestion is None:
            self.notifier.info(NO_FREE_BIN_MESSAGE)
            if item.rack_id:
                await self._load_bins(item.rack_id)
            return None

        await self.select_rack(suggestion.rack_id)
        state.bin_id = suggestion.bin_id
        return suggestion

    async def _load_bins(self, rack_id: int) -> None:
        state = self.putaway
        if state is None:
            return
        try:
            bins = await self.placement.list_bins(rack_id, state.warehouse_id)
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to load bins"))
            bins = []
        # O utilizador pode ter trocado de rack entretanto
        if state.rack_id == rack_id:
            state.bins = PlacementService.sort_bins(bins)

    async def select_rack(self, rack_id: int) -> None:
        state = self.putaway
        if state is None:
            return
        state.rack_id = rack_id
        state.bin_id = None
        state.bins = []
        await self._load_bins(rack_id)

    def select_bin(self, bin_id: int) -> bool:
        """Só aceita bins livres do rack selecionado"""
        state = self.putaway
        if state is None:
            return False
        bin = next((b for b in state.bins if b.id == bin_id), None)
        if bin is None or bin.is_occupied:
            return False
        state.bin_id = bin_id
        return True

    def cancel_putaway(self) -> None:
        self.putaway = None

    async def confirm_putaway(self) -> bool:
        state = self.putaway
        order = self.orders.selected
        if state is None or order is None or not state.rack_id or not state.bin_id:
            self.notifier.error("Please select a Rack and Bin")
            return False

        item = state.item
        body = PutawayRequest(
            rack_id=state.rack_id,
            bin_id=state.bin_id,
            received_quantity=item.quantity,
        )

        self.is_saving = True
        try:
            await self.api.put(
                f"/inbound-applications/{order.id}/items/{item.id}/putaway",
                json=body.model_dump(),
            )
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to putaway item"))
            return False
        finally:
            self.is_saving = False

        self.notifier.success("Item stored successfully")

        items = [
            i.model_copy(update={
                "status": InboundItemStatus.STORED,
                "rack_id": state.rack_id,
                "bin_id": state.bin_id,
            }) if i.id == item.id else i
            for i in order.items
        ]
        all_stored = all(i.status == InboundItemStatus.STORED for i in items)
        self.orders.select(order.model_copy(update={
            "items": items,
            "status": InboundStatus.COMPLETED if all_stored else order.status,
        }))
        self.putaway = None
        await self.orders.refresh()
        return True

    # -- nova aplicação -------------------------------------------------------

    async def create_application(self, payload: InboundApplicationCreate) -> Optional[str]:
        """Submete uma aplicação de entrada; devolve o número gerado"""
        try:
            response = await self.api.post("/inbound-applications", json=payload.model_dump())
        except ApiError as e:
            self.notifier.error(describe_error(e, "Failed to submit inbound application"))
            return None

        data = unwrap_data(response) or {}
        inbound_number = data.get("inbound_number") or "N/A"
        self.notifier.success(f"Inbound Application #{inbound_number} submitted!")
        await self.orders.refresh()
        return inbound_number
