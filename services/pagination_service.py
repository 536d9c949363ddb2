"""
Serviço de paginação: contrato page/per_page/total partilhado
por todas as listagens (cliente e backend de desenvolvimento)
"""
import math
import os
from dotenv import load_dotenv
from schemas.pagination_schemas import PaginationMeta, PageResult

load_dotenv()


class PaginationService:
    """Cálculos puros sobre page/per_page/total"""

    PER_PAGE_OPTIONS = [5, 10, 25, 50, 100]
    DEFAULT_PER_PAGE = int(os.getenv("DEFAULT_PER_PAGE", "10"))

    @staticmethod
    def compute(total: int, per_page: int, current_page: int) -> PaginationMeta:
        """
        Calcula last_page e o intervalo exibido (range_start..range_end).
        - total=0 -> range nulo e last_page=1
        - last_page não depende de current_page (não há clamp aqui)
        """
        if per_page < 1:
            raise ValueError(f"per_page deve ser >= 1 (recebido {per_page})")
        if total < 0:
            raise ValueError(f"total não pode ser negativo (recebido {total})")

        last_page = max(1, math.ceil(total / per_page))

        if total == 0:
            range_start = None
            range_end = None
        else:
            range_start = (current_page - 1) * per_page + 1
            range_end = min(current_page * per_page, total)

        return PaginationMeta(
            current_page=current_page,
            last_page=last_page,
            per_page=per_page,
            total=total,
            range_start=range_start,
            range_end=range_end,
        )

    @staticmethod
    def can_go_previous(current_page: int) -> bool:
        return current_page > 1

    @staticmethod
    def can_go_next(current_page: int, last_page: int) -> bool:
        return current_page < last_page

    @staticmethod
    def empty_result(per_page: int) -> PageResult:
        """Resultado inicial de uma tela antes da primeira resposta"""
        meta = PaginationService.compute(0, per_page, 1)
        return PageResult(items=[], **meta.model_dump())
