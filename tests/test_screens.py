"""Testes de ponta a ponta dos serviços de tela contra a API de desenvolvimento."""

import asyncio

import httpx
import pytest

from schemas.dispatch_schemas import DispatchStatus
from schemas.inbound_schemas import InboundStatus
from schemas.item_schemas import ItemPayload
from services.api_service import ApiService
from services.auth_service import AuthService
from services.dispatch_service import HISTORY_TAB, DispatchService
from services.exceptions import UnauthorizedError
from services.inbound_service import NO_FREE_BIN_MESSAGE, InboundService
from services.inventory_service import InventoryService
from services.notification_service import NotificationLevel, Notifier
from services.pick_pack_service import PACKING_TAB, PickPackService, status_route
from services.report_service import ReportService
from services.warehouse_service import DashboardService, WarehouseService
from tests.conftest import make_api


def run(session, scenario):
    """Corre scenario(api, notifier) com um ApiService ligado à app."""
    notifier = Notifier()

    async def main():
        api = make_api(session)
        try:
            return await scenario(api, notifier)
        finally:
            await api.close()

    return asyncio.run(main()), notifier


def refuse_connection(request):
    raise httpx.ConnectError("connection refused", request=request)


def service_unavailable(request):
    return httpx.Response(503, json={"message": "Service unavailable"})


class TestAuthService:

    def test_login_stores_session(self, client, session_state):
        async def scenario(api, notifier):
            return await AuthService(api, session_state, notifier).login("manager", "manager123")

        ok, _ = run(session_state, scenario)
        assert ok is True
        assert session_state.role_slug == "manager"
        assert session_state.path.exists()

    def test_login_failure_is_notified(self, client, session_state):
        async def scenario(api, notifier):
            service = AuthService(api, session_state, notifier)
            return await service.login("manager", "nope"), service.last_error

        (ok, error), notifier = run(session_state, scenario)
        assert ok is False
        assert error == "Invalid username or password."
        assert notifier.last.level == NotificationLevel.ERROR

    def test_stale_token_is_discarded(self, client, session_state):
        session_state.store({"id": 1, "username": "admin"}, "expired-token")
        logouts = []
        session_state.on_invalidate(lambda: logouts.append(True))

        async def scenario(api, notifier):
            return await AuthService(api, session_state, notifier).refresh_user()

        ok, _ = run(session_state, scenario)
        assert ok is False
        assert session_state.token is None
        assert logouts == [True]

    @pytest.mark.parametrize("handler", [refuse_connection, service_unavailable])
    def test_transient_failure_keeps_session(self, session_state, handler):
        session_state.store({"id": 1, "username": "admin"}, "tok-1")
        logouts = []
        session_state.on_invalidate(lambda: logouts.append(True))
        notifier = Notifier()

        async def scenario():
            api = ApiService(session_state, base_url="http://wms.test/api", transport=httpx.MockTransport(handler))
            try:
                service = AuthService(api, session_state, notifier)
                return await service.refresh_user(), service.last_error
            finally:
                await api.close()

        ok, error = asyncio.run(scenario())
        assert ok is False
        assert error is not None
        assert session_state.token == "tok-1"
        assert session_state.is_authenticated is True
        assert logouts == []
        assert notifier.last.level == NotificationLevel.ERROR

    def test_logout_revokes_token(self, client, admin_session):
        token = admin_session.token

        async def scenario(api, notifier):
            await AuthService(api, admin_session, notifier).logout()

        run(admin_session, scenario)
        assert admin_session.token is None
        assert client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"}).status_code == 401

    def test_unauthorized_call_logs_out(self, client, admin_session):
        client.post("/api/auth/logout", headers={"Authorization": f"Bearer {admin_session.token}"})

        async def scenario(api, notifier):
            with pytest.raises(UnauthorizedError):
                await api.get("/items")

        run(admin_session, scenario)
        assert admin_session.is_authenticated is False


class TestInboundScreen:

    def _select(self, service, number):
        order = next(o for o in service.orders.items if o.inbound_number == number)
        service.orders.select(order)
        return order

    def test_putaway_uses_first_free_bin(self, client, admin_session):
        async def scenario(api, notifier):
            service = InboundService(api, notifier)
            await service.orders.mount()
            order = self._select(service, "GRN-0002")
            suggestion = await service.open_putaway(order.items[0])
            confirmed = await service.confirm_putaway()
            return service, suggestion, confirmed

        (service, suggestion, confirmed), notifier = run(admin_session, scenario)
        assert (suggestion.rack_code, suggestion.bin_code) == ("A", "A3")
        assert confirmed is True
        assert service.orders.selected.status == InboundStatus.COMPLETED
        assert service.putaway is None
        assert notifier.last.message == "Item stored successfully"

    def test_suggestion_revalidated_by_server(self, client, admin_session):
        async def scenario(api, notifier):
            service = InboundService(api, notifier)
            await service.orders.mount()
            order = self._select(service, "GRN-0002")
            await service.open_putaway(order.items[0])

            # outro operador ocupa A3 entre a sugestão e a confirmação
            await api.put("/inbound-applications/1/verify")
            await api.put(
                "/inbound-applications/1/items/1/putaway",
                json={"rack_id": 1, "bin_id": 3, "received_quantity": 50},
            )
            return await service.confirm_putaway()

        confirmed, notifier = run(admin_session, scenario)
        assert confirmed is False
        assert notifier.last.message == "Bin A3 is already occupied."

    def test_select_bin_refuses_occupied(self, client, admin_session):
        async def scenario(api, notifier):
            service = InboundService(api, notifier)
            await service.orders.mount()
            order = self._select(service, "GRN-0002")
            await service.open_putaway(order.items[0])
            await service.select_rack(1)
            return service.select_bin(1), service.select_bin(4), service.putaway.bin_id

        (occupied, free, bin_id), _ = run(admin_session, scenario)
        assert occupied is False
        assert free is True
        assert bin_id == 4

    def test_no_free_bin(self, client, admin_session, session_factory):
        from models.bin import Bin

        db = session_factory()
        try:
            db.query(Bin).update({Bin.occupied: True})
            db.commit()
        finally:
            db.close()

        async def scenario(api, notifier):
            service = InboundService(api, notifier)
            await service.orders.mount()
            order = self._select(service, "GRN-0002")
            return await service.open_putaway(order.items[0])

        suggestion, notifier = run(admin_session, scenario)
        assert suggestion is None
        assert notifier.last.message == NO_FREE_BIN_MESSAGE

    def test_start_verification(self, client, admin_session):
        async def scenario(api, notifier):
            service = InboundService(api, notifier)
            await service.orders.mount()
            self._select(service, "GRN-0001")
            await service.start_verification(1)
            return service.orders.selected

        selected, _ = run(admin_session, scenario)
        assert selected.status == InboundStatus.VERIFYING


class TestPickPackScreen:

    def test_status_route(self):
        assert status_route(5, DispatchStatus.PICKED) == "/dispatch-requests/5/complete-picking"
        with pytest.raises(ValueError):
            status_route(5, DispatchStatus.DISPATCHED)

    def test_change_status_and_tabs(self, client, admin_session):
        async def scenario(api, notifier):
            service = PickPackService(api, notifier)
            await service.orders.mount()
            picking_tab = [o.order_number for o in service.visible_orders]
            order = next(o for o in service.orders.items if o.order_number == "DO-0002")
            changed = await service.change_status(order, DispatchStatus.PICKED)
            await service.set_tab(PACKING_TAB)
            packing_tab = [o.order_number for o in service.visible_orders]
            return picking_tab, changed, packing_tab

        (picking_tab, changed, packing_tab), _ = run(admin_session, scenario)
        assert picking_tab == ["DO-0002", "DO-0001"]
        assert changed is True
        assert packing_tab == ["DO-0003", "DO-0002"]

    def test_invalid_transition_is_notified(self, client, admin_session):
        async def scenario(api, notifier):
            service = PickPackService(api, notifier)
            await service.orders.mount()
            order = next(o for o in service.orders.items if o.order_number == "DO-0001")
            return await service.change_status(order, DispatchStatus.PACKED)

        changed, notifier = run(admin_session, scenario)
        assert changed is False
        assert notifier.last.message == "Cannot complete packing: order is pending."

    def test_bulk_start_picking(self, client, admin_session):
        async def scenario(api, notifier):
            service = PickPackService(api, notifier)
            await service.orders.mount()
            service.toggle_select_all()
            selected = set(service.selected_ids)
            done = await service.bulk_start_picking()
            statuses = {o.order_number: o.status for o in service.orders.items}
            return selected, done, statuses, service.selected_ids

        (selected, done, statuses, remaining), _ = run(admin_session, scenario)
        assert selected == {1}
        assert done is True
        assert statuses["DO-0001"] == DispatchStatus.PICKING
        assert remaining == set()


class TestDispatchScreen:

    def test_requires_driver_details(self, client, admin_session):
        async def scenario(api, notifier):
            service = DispatchService(api, notifier)
            await service.orders.mount()
            order = service.visible_orders[0]
            return await service.dispatch(order, "  ", "KSA-1")

        done, notifier = run(admin_session, scenario)
        assert done is False
        assert notifier.last.message == "Please enter driver and vehicle details"

    def test_dispatch_moves_to_history(self, client, admin_session):
        async def scenario(api, notifier):
            service = DispatchService(api, notifier)
            await service.orders.mount()
            order = service.visible_orders[0]
            done = await service.dispatch(order, "Omar", "KSA-1")
            queue = list(service.visible_orders)
            await service.set_tab(HISTORY_TAB)
            return done, queue, [o.order_number for o in service.visible_orders]

        (done, queue, history), _ = run(admin_session, scenario)
        assert done is True
        assert queue == []
        assert history == ["DO-0003"]


class TestReportScreen:

    def test_filters_and_sort(self, client, admin_session):
        async def scenario(api, notifier):
            service = ReportService(api, notifier)
            await service.rows.mount()
            total = service.rows.result.total
            await service.set_type("outbound")
            outbound = service.rows.result.total
            await service.set_type("all")
            sortable = await service.toggle_sort("r_qty")
            rejected = await service.toggle_sort("password")
            return total, outbound, sortable, rejected, [r.r_qty for r in service.rows.items], service

        (total, outbound, sortable, rejected, quantities, service), _ = run(admin_session, scenario)
        assert total == 2
        assert outbound == 0
        assert (sortable, rejected) == (True, False)
        assert quantities == [45, 200]
        assert [r.r_sku for r in service.filter_rows("cone")] == ["FLD-CONE-ORG"]
        assert service.movement_type == "all"


class TestOtherScreens:

    def test_inventory_save_and_lookups(self, client, admin_session):
        async def scenario(api, notifier):
            service = InventoryService(api, notifier)
            await service.items.mount()
            saved = await service.save_item(ItemPayload(item_sku="NET-01", item_name="Goal Net"))
            duplicate = await service.save_item(ItemPayload(item_sku="NET-01", item_name="Again"))
            return saved, duplicate, service.items.result.total, await service.categories(), await service.warehouses()

        (saved, duplicate, total, categories, warehouses), notifier = run(admin_session, scenario)
        assert saved is True
        assert duplicate is False
        assert notifier.last.message == "The item sku NET-01 has already been taken."
        assert total == 6
        assert len(categories) == 5
        assert [w.name for w in warehouses] == ["Main Warehouse", "Stadium Depot"]

    def test_warehouse_layout_and_dashboard(self, client, admin_session):
        async def scenario(api, notifier):
            warehouses = WarehouseService(api, notifier)
            layout = await warehouses.load_layout(1)
            kept = await warehouses.load_layout(99)
            dashboard = await DashboardService(api, notifier).load()
            return layout, kept, dashboard

        (layout, kept, dashboard), notifier = run(admin_session, scenario)
        assert layout.total_racks == 3
        assert kept is layout
        assert dashboard.kpi.total_items == 5


class TestNewRequests:

    def test_create_inbound_application(self, client, admin_session):
        from schemas.inbound_schemas import InboundApplicationCreate, InboundItemCreate

        payload = InboundApplicationCreate(
            warehouse_id=1,
            expected_date="2030-01-01",
            items=[InboundItemCreate(item_id=1, quantity=2)],
        )

        async def scenario(api, notifier):
            service = InboundService(api, notifier)
            return await service.create_application(payload), service.orders.result.total

        (number, total), notifier = run(admin_session, scenario)
        assert number == "GRN-0003"
        assert total == 3
        assert notifier.last.message == "Inbound Application #GRN-0003 submitted!"

    def test_create_dispatch_request(self, client, admin_session):
        from schemas.dispatch_schemas import DispatchItemCreate, DispatchRequestCreate

        payload = DispatchRequestCreate(
            due_date="2030-01-01",
            items=[DispatchItemCreate(item_id=2, quantity=1, warehouse_id=1)],
        )

        async def scenario(api, notifier):
            return await PickPackService(api, notifier).create_request(payload)

        number, _ = run(admin_session, scenario)
        assert number == "DO-0004"
