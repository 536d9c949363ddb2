"""Testes do modelo de paginação."""

import pytest
from pydantic import ValidationError

from schemas.pagination_schemas import PageEnvelope, PageRequest, SortDirection, SortSpec
from services.pagination_service import PaginationService


class TestCompute:

    def test_middle_page_range(self):
        meta = PaginationService.compute(total=25, per_page=10, current_page=2)
        assert meta.last_page == 3
        assert (meta.range_start, meta.range_end) == (11, 20)

    def test_last_page_range_is_clamped_to_total(self):
        meta = PaginationService.compute(total=25, per_page=10, current_page=3)
        assert (meta.range_start, meta.range_end) == (21, 25)

    def test_exact_multiple(self):
        meta = PaginationService.compute(total=30, per_page=10, current_page=1)
        assert meta.last_page == 3

    def test_empty_collection(self):
        """Sem registos: last_page=1 e intervalo nulo."""
        meta = PaginationService.compute(total=0, per_page=10, current_page=1)
        assert meta.last_page == 1
        assert meta.range_start is None
        assert meta.range_end is None

    def test_single_partial_page(self):
        meta = PaginationService.compute(total=3, per_page=10, current_page=1)
        assert meta.last_page == 1
        assert (meta.range_start, meta.range_end) == (1, 3)

    def test_invalid_per_page(self):
        with pytest.raises(ValueError):
            PaginationService.compute(total=10, per_page=0, current_page=1)

    def test_negative_total(self):
        with pytest.raises(ValueError):
            PaginationService.compute(total=-1, per_page=10, current_page=1)

    def test_23_items_in_pages_of_10(self):
        meta = PaginationService.compute(total=23, per_page=10, current_page=3)
        assert meta.last_page == 3
        assert (meta.range_start, meta.range_end) == (21, 23)

    @pytest.mark.parametrize("per_page", [1, 3, 10, 25])
    @pytest.mark.parametrize("total", [1, 2, 9, 10, 11, 23, 100])
    def test_range_fits_in_one_page(self, total, per_page):
        last_page = PaginationService.compute(total, per_page, 1).last_page
        for page in range(1, last_page + 1):
            meta = PaginationService.compute(total, per_page, page)
            assert meta.last_page == last_page
            assert 1 <= meta.range_start <= meta.range_end <= total
            assert meta.range_end - meta.range_start + 1 <= per_page
        assert meta.range_end == total


class TestNavigationBounds:

    def test_first_page(self):
        assert PaginationService.can_go_previous(1) is False
        assert PaginationService.can_go_next(1, 3) is True

    def test_last_page(self):
        assert PaginationService.can_go_previous(3) is True
        assert PaginationService.can_go_next(3, 3) is False

    def test_single_page(self):
        assert PaginationService.can_go_next(1, 1) is False

    def test_empty_result(self):
        result = PaginationService.empty_result(25)
        assert result.items == []
        assert result.per_page == 25
        assert result.total == 0
        assert result.last_page == 1


class TestPageRequest:

    def test_query_params_without_sort(self):
        params = PageRequest(page=2, per_page=25, search="cone").to_query_params()
        assert params == {"page": 2, "per_page": 25, "search": "cone"}

    def test_query_params_with_sort(self):
        request = PageRequest(sort=SortSpec(column="r_sku", direction=SortDirection.DESC))
        params = request.to_query_params()
        assert params["sort_by"] == "r_sku"
        assert params["sort_dir"] == "desc"

    def test_page_must_be_positive(self):
        with pytest.raises(ValidationError):
            PageRequest(page=0)

    def test_request_is_immutable(self):
        request = PageRequest()
        with pytest.raises(ValidationError):
            request.page = 3
        assert request.model_copy(update={"page": 3}).page == 3


class TestPageEnvelope:

    def test_from_alias(self):
        envelope = PageEnvelope.model_validate({
            "data": [], "current_page": 1, "last_page": 1, "per_page": 10, "total": 0,
            "from": None, "to": None,
        })
        assert envelope.from_ is None

    def test_from_populated(self):
        envelope = PageEnvelope.model_validate({
            "data": [{"id": 1}], "current_page": 1, "last_page": 1, "per_page": 10, "total": 1,
            "from": 1, "to": 1,
        })
        assert envelope.from_ == 1
        assert envelope.to == 1
