from pydantic import BaseModel, Field
from typing import Any, Dict, Generic, List, Optional, TypeVar
import enum

T = TypeVar("T")


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class SortSpec(BaseModel):
    """Coluna e direção de ordenação pedidas ao servidor"""
    column: str
    direction: SortDirection = SortDirection.ASC

    class Config:
        frozen = True


class PageRequest(BaseModel):
    """Parâmetros de uma página pedida a um endpoint de listagem"""
    page: int = Field(1, ge=1)
    per_page: int = Field(10, ge=1)
    search: str = ""
    sort: Optional[SortSpec] = None

    class Config:
        frozen = True

    def to_query_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "page": self.page,
            "per_page": self.per_page,
            "search": self.search,
        }
        if self.sort is not None:
            params["sort_by"] = self.sort.column
            params["sort_dir"] = self.sort.direction.value
        return params


class PaginationMeta(BaseModel):
    """Metadados page/per_page/total de uma página"""
    current_page: int
    last_page: int = Field(1, ge=1)
    per_page: int = Field(..., ge=1)
    total: int = Field(0, ge=0)
    range_start: Optional[int] = None
    range_end: Optional[int] = None


class PageResult(PaginationMeta, Generic[T]):
    """Itens de uma página junto com os metadados da mesma resposta"""
    items: List[T] = Field(default_factory=list)


class PageEnvelope(BaseModel):
    """Envelope de paginação no formato devolvido pela API"""
    data: List[Any]
    current_page: int
    last_page: int
    per_page: int
    total: int
    from_: Optional[int] = Field(None, alias="from")
    to: Optional[int] = None

    class Config:
        populate_by_name = True
