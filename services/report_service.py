"""
Relatório mensal de movimentos de stock (entradas e saídas)
"""
from datetime import date
from typing import Any, Dict, List, Optional
from schemas.pagination_schemas import PageRequest
from schemas.report_schemas import StockMovementRow
from services.api_service import ApiService
from services.list_sync_service import ListSyncController
from services.notification_service import Notifier

REPORT_PER_PAGE = 25
MOVEMENT_TYPES = ("all", "inbound", "outbound")
SORTABLE_COLUMNS = {
    "r_order_date", "r_order_no", "r_sku", "r_description", "r_qty", "r_weight", "entry_date",
}


def current_month(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{today.year}-{today.month:02d}"


class ReportService:

    def __init__(self, api: ApiService, notifier: Notifier, month: Optional[str] = None, **controller_options: Any):
        self.api = api
        self.notifier = notifier
        controller_options.setdefault("per_page", REPORT_PER_PAGE)
        self.rows: ListSyncController[StockMovementRow] = ListSyncController(
            self._fetch, notifier, label="report", **controller_options
        )
        self.rows.state.filters.update({"month": month or current_month(), "type": None})

    async def _fetch(self, request: PageRequest, filters: Dict[str, Any]):
        return await self.api.list_page(
            "/stock-movements", request, StockMovementRow.model_validate, **filters
        )

    @property
    def month(self) -> str:
        return self.rows.state.filters["month"]

    @property
    def movement_type(self) -> str:
        return self.rows.state.filters.get("type") or "all"

    async def set_month(self, month: str) -> None:
        await self.rows.set_filters(month=month)

    async def set_type(self, movement_type: str) -> None:
        if movement_type not in MOVEMENT_TYPES:
            raise ValueError(f"Tipo de movimento desconhecido: {movement_type}")
        await self.rows.set_filters(type=None if movement_type == "all" else movement_type)

    async def toggle_sort(self, column: str) -> bool:
        if column not in SORTABLE_COLUMNS:
            return False
        await self.rows.set_sort(column)
        return True

    def filter_rows(self, term: str) -> List[StockMovementRow]:
        """Pesquisa local sobre as linhas da página atual"""
        term = term.strip().lower()
        if not term:
            return list(self.rows.items)
        return [
            row for row in self.rows.items
            if any(term in str(value).lower() for value in row.model_dump().values() if value is not None)
        ]
