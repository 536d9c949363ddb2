"""Testes da sugestão de putaway (primeiro bin livre em ordem natural)."""

import asyncio

import pytest

from schemas.location_schemas import RackResponse
from services.exceptions import NetworkError, ServerError
from services.placement_service import PlacementService


def rack(id, code):
    return {"id": id, "code": code, "warehouse_id": 1}


def bin(id, rack_id, code, occupied=False):
    return {"id": id, "rack_id": rack_id, "code": code, "is_occupied": occupied}


class FakeApi:
    """Responde a list_all com coleções fixas por caminho."""

    def __init__(self, collections, failures=None):
        self.collections = collections
        self.failures = failures or {}
        self.paths = []

    async def list_all(self, path, parse_item, **params):
        self.paths.append(path)
        if path in self.failures:
            raise self.failures[path]
        return [parse_item(raw) for raw in self.collections[path]]


def resolve(api, warehouse_id=1):
    return asyncio.run(PlacementService(api).resolve(warehouse_id))


class TestResolve:

    def test_first_free_bin_of_first_rack(self):
        api = FakeApi({
            "/racks": [rack(1, "A")],
            "/racks/1/bins": [bin(1, 1, "A1", occupied=True), bin(2, 1, "A2")],
        })
        result = resolve(api)
        assert (result.rack_id, result.bin_id) == (1, 2)
        assert (result.rack_code, result.bin_code) == ("A", "A2")

    def test_full_rack_moves_to_next(self):
        """Rack A cheio; em B vence B2 sobre B10 pela ordem natural."""
        api = FakeApi({
            "/racks": [rack(2, "B"), rack(1, "A")],
            "/racks/1/bins": [bin(1, 1, "A1", occupied=True), bin(2, 1, "A2", occupied=True)],
            "/racks/2/bins": [bin(5, 2, "B10"), bin(4, 2, "B2"), bin(3, 2, "B1", occupied=True)],
        })
        result = resolve(api)
        assert (result.rack_code, result.bin_code) == ("B", "B2")
        assert result.bin_id == 4

    def test_racks_scanned_in_natural_order(self):
        api = FakeApi({
            "/racks": [rack(3, "A10"), rack(2, "A2")],
            "/racks/2/bins": [bin(20, 2, "1")],
            "/racks/3/bins": [bin(30, 3, "1")],
        })
        result = resolve(api)
        assert result.rack_code == "A2"

    def test_stops_at_first_rack_with_free_bin(self):
        api = FakeApi({
            "/racks": [rack(1, "A"), rack(2, "B")],
            "/racks/1/bins": [bin(1, 1, "A1")],
            "/racks/2/bins": [bin(2, 2, "B1")],
        })
        resolve(api)
        assert "/racks/2/bins" not in api.paths

    def test_rack_with_failing_bins_is_skipped(self):
        api = FakeApi(
            {
                "/racks": [rack(1, "A"), rack(2, "B")],
                "/racks/2/bins": [bin(7, 2, "B1")],
            },
            failures={"/racks/1/bins": ServerError("boom", status=500)},
        )
        result = resolve(api)
        assert (result.rack_id, result.bin_id) == (2, 7)

    def test_no_free_bin(self):
        api = FakeApi({
            "/racks": [rack(1, "A")],
            "/racks/1/bins": [bin(1, 1, "A1", occupied=True)],
        })
        assert resolve(api) is None

    def test_no_racks(self):
        assert resolve(FakeApi({"/racks": []})) is None

    def test_rack_listing_failure_propagates(self):
        api = FakeApi({}, failures={"/racks": NetworkError("offline")})
        with pytest.raises(NetworkError):
            resolve(api)

    def test_preloaded_racks_are_not_fetched_again(self):
        api = FakeApi({"/racks/1/bins": [bin(1, 1, "A1")]})
        racks = [RackResponse.model_validate(rack(1, "A"))]
        result = asyncio.run(PlacementService(api).resolve(1, racks=racks))
        assert result.bin_id == 1
        assert "/racks" not in api.paths
