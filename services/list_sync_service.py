"""
Controlador de sincronização de listas paginadas:
liga uma coleção remota paginada ao estado local de uma tela
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar
from schemas.pagination_schemas import PageRequest, PageResult, SortDirection, SortSpec
from services.debounce_service import DebouncedInput, SEARCH_DEBOUNCE_SECONDS
from services.exceptions import ApiError
from services.notification_service import Notifier
from services.pagination_service import PaginationService

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetch = Callable[[PageRequest, Dict[str, Any]], Awaitable[PageResult]]


def _default_key(entity: Any) -> Any:
    if isinstance(entity, dict):
        return entity.get("id")
    return getattr(entity, "id", None)


@dataclass
class ListSyncState(Generic[T]):
    request: PageRequest
    result: PageResult
    is_loading: bool = False
    selected: Optional[T] = None
    filters: Dict[str, Any] = field(default_factory=dict)


class ListSyncController(Generic[T]):
    """
    Dono do ciclo pedido/resposta de uma listagem paginada.
    - cada resync recebe um número de sequência; só a resposta do
      pedido mais recente é aplicada
    - itens e metadados são trocados juntos, a partir da mesma resposta
    - em falha o resultado anterior fica intacto e sai uma notificação
    """

    def __init__(
        self,
        fetch: Fetch,
        notifier: Notifier,
        per_page: int = PaginationService.DEFAULT_PER_PAGE,
        key: Callable[[Any], Any] = _default_key,
        debounce_interval: float = SEARCH_DEBOUNCE_SECONDS,
        clock: Optional[Callable[[], float]] = None,
        label: str = "items",
    ):
        self.fetch = fetch
        self.notifier = notifier
        self.key = key
        self.label = label
        self.search_input = DebouncedInput(interval=debounce_interval, clock=clock)
        self.state: ListSyncState[T] = ListSyncState(
            request=PageRequest(page=1, per_page=per_page),
            result=PaginationService.empty_result(per_page),
        )
        self._issued = 0
        self.last_error: Optional[ApiError] = None

    # -- leitura ------------------------------------------------------------

    @property
    def request(self) -> PageRequest:
        return self.state.request

    @property
    def result(self) -> PageResult:
        return self.state.result

    @property
    def items(self):
        return self.state.result.items

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def selected(self) -> Optional[T]:
        return self.state.selected

    @property
    def can_go_previous(self) -> bool:
        return PaginationService.can_go_previous(self.state.result.current_page)

    @property
    def can_go_next(self) -> bool:
        return PaginationService.can_go_next(
            self.state.result.current_page, self.state.result.last_page
        )

    @property
    def is_empty(self) -> bool:
        return not self.state.is_loading and self.state.result.total == 0

    # -- ações do utilizador --------------------------------------------------

    async def mount(self) -> None:
        await self.resync()

    async def set_page(self, page: int) -> None:
        # Sem validação: o controlo de UI já desativa páginas fora do intervalo
        self._update_request(page=page)
        await self.resync()

    async def next_page(self) -> None:
        if self.can_go_next:
            await self.set_page(self.state.result.current_page + 1)

    async def previous_page(self) -> None:
        if self.can_go_previous:
            await self.set_page(self.state.result.current_page - 1)

    async def set_page_size(self, per_page: int) -> None:
        if per_page < 1:
            raise ValueError(f"per_page deve ser >= 1 (recebido {per_page})")
        self._update_request(page=1, per_page=per_page)
        await self.resync()

    def set_search_text(self, text: str) -> None:
        """Só regista o texto; o commit acontece em poll_search()"""
        self.search_input.push(text)

    async def poll_search(self) -> bool:
        """Aplica a pesquisa pendente se o intervalo de silêncio já passou"""
        ready, text = self.search_input.poll()
        if not ready:
            return False
        self._update_request(page=1, search=text)
        await self.resync()
        return True

    async def settle_search(self) -> bool:
        """Espera em tempo real pelo fim do debounce e aplica a pesquisa"""
        while self.search_input.has_pending:
            remaining = self.search_input.remaining()
            if remaining > 0:
                await asyncio.sleep(remaining)
            if await self.poll_search():
                return True
        return False

    async def set_sort(self, column: str) -> None:
        """Ciclo por coluna: sem ordem -> asc -> desc -> sem ordem"""
        current = self.state.request.sort
        if current is None or current.column != column:
            sort = SortSpec(column=column, direction=SortDirection.ASC)
        elif current.direction == SortDirection.ASC:
            sort = SortSpec(column=column, direction=SortDirection.DESC)
        else:
            sort = None
        self._update_request(page=1, sort=sort)
        await self.resync()

    async def set_filters(self, **filters: Any) -> None:
        """Filtros extra da tela (mês, tipo...); voltam à página 1"""
        self.state.filters.update(filters)
        self._update_request(page=1)
        await self.resync()

    async def refresh(self) -> None:
        await self.resync()

    def select(self, entity: Optional[T]) -> None:
        self.state.selected = entity

    # -- sincronização --------------------------------------------------------

    def _update_request(self, **changes: Any) -> None:
        # model_copy não valida; um pedido inválido nunca chega ao estado
        data = {**self.state.request.model_dump(), **changes}
        self.state.request = PageRequest.model_validate(data)

    async def resync(self) -> bool:
        """
        Busca a página do pedido atual. Devolve True se a resposta foi aplicada;
        False em falha ou quando a resposta chegou depois de um pedido mais novo.
        """
        self._issued += 1
        seq = self._issued
        request = self.state.request
        filters = dict(self.state.filters)

        self.state.is_loading = True
        try:
            result = await self.fetch(request, filters)
        except ApiError as e:
            if seq != self._issued:
                logger.debug("Falha de pedido obsoleto #%s de %s ignorada: %s", seq, self.label, e)
                return False
            self.last_error = e
            self.notifier.error(f"Failed to load {self.label}: {e.message}")
            return False
        finally:
            if seq == self._issued:
                self.state.is_loading = False

        if seq != self._issued:
            logger.debug("Resposta obsoleta #%s de %s descartada (último #%s)", seq, self.label, self._issued)
            return False

        self.last_error = None
        self.state.result = result
        self._resync_selection()
        return True

    def _resync_selection(self) -> None:
        """Troca a seleção pela cópia fresca da página, ou limpa se sumiu"""
        selected = self.state.selected
        if selected is None:
            return
        selected_key = self.key(selected)
        for item in self.state.result.items:
            if self.key(item) == selected_key:
                self.state.selected = item
                return
        self.state.selected = None
