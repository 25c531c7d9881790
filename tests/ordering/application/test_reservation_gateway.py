"""Reservation gateway adapters and factory."""

import json

import httpx
import pytest
from ordering.order.exceptions import ExternalServiceError
from ordering.reservations import get_gateway, reset_gateway
from ordering.reservations.fake_adapter import FakeReservationGateway
from ordering.reservations.http_adapter import HttpReservationGateway
from ordering.reservations.port import ProductReservation
from ordering.shared.caller import CallerIdentity

CALLER = CallerIdentity(token="abc")


class TestFakeReservationGateway:
    def test_reserve_tracks_held_quantity(self):
        gateway = FakeReservationGateway()
        results = gateway.reserve("order-1", [ProductReservation("prod-001", 3)], CALLER)

        assert results[0].product_id == "prod-001"
        assert results[0].reservation_id.startswith("fake_res_")
        assert gateway.held_quantity("order-1") == 3

    def test_cancel_partial_reduces_hold(self):
        gateway = FakeReservationGateway()
        gateway.reserve("order-1", [ProductReservation("prod-001", 3)], CALLER)
        gateway.cancel_partial("order-1", "prod-001", 2, CALLER)
        assert gateway.held_quantity("order-1") == 1

    def test_cancel_all_drops_every_hold(self):
        gateway = FakeReservationGateway()
        gateway.reserve("order-1", [ProductReservation("prod-001", 3), ProductReservation("prod-002", 1)], CALLER)
        gateway.cancel_all("order-1", CALLER)
        assert gateway.held_quantity("order-1") == 0

    def test_fail_on_limits_failures_to_named_methods(self):
        gateway = FakeReservationGateway()
        gateway.configure(should_succeed=False, failure_reason="Out of stock", fail_on=["confirm_all"])

        gateway.reserve("order-1", [ProductReservation("prod-001", 1)], CALLER)
        with pytest.raises(ExternalServiceError, match="Out of stock"):
            gateway.confirm_all("order-1", CALLER)

    def test_failed_calls_are_still_recorded(self):
        gateway = FakeReservationGateway()
        gateway.configure(should_succeed=False)

        with pytest.raises(ExternalServiceError):
            gateway.cancel_all("order-1", CALLER)
        assert gateway.calls_for("cancel_all")[0]["token"] == "abc"


def _http_gateway(handler):
    client = httpx.Client(base_url="http://products.test", transport=httpx.MockTransport(handler))
    return HttpReservationGateway(base_url="http://products.test", client=client)


class TestHttpReservationGateway:
    def test_reserve_posts_order_payload(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(
                200,
                json=[{"productId": "prod-001", "quantity": 2, "reservationId": 17, "status": "RESERVED"}],
            )

        results = _http_gateway(handler).reserve("order-1", [ProductReservation("prod-001", 2)], CALLER)

        assert seen["path"] == "/reservations"
        assert seen["body"] == {"orderId": "order-1", "productReservations": [{"productId": "prod-001", "quantity": 2}]}
        assert seen["auth"] == "Bearer abc"
        assert results[0].reservation_id == "17"
        assert results[0].status == "RESERVED"

    def test_reserve_with_empty_body(self):
        results = _http_gateway(lambda request: httpx.Response(200)).reserve(
            "order-1", [ProductReservation("prod-001", 2)], CALLER
        )
        assert results == []

    @pytest.mark.parametrize(
        "call, expected_path",
        [
            (lambda g: g.confirm_all("order-1", CALLER), "/reservations/confirm/order-1"),
            (lambda g: g.cancel_all("order-1", CALLER), "/reservations/cancel/order-1"),
            (
                lambda g: g.cancel_partial("order-1", "prod-001", 3, CALLER),
                "/reservations/cancel/order-1/product/prod-001/quantity/3",
            ),
        ],
        ids=["confirm", "cancel", "cancel-partial"],
    )
    def test_lifecycle_paths(self, call, expected_path):
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path))
            return httpx.Response(200)

        call(_http_gateway(handler))
        assert seen == [("POST", expected_path)]

    def test_anonymous_caller_sends_no_auth_header(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200)

        _http_gateway(handler).confirm_all("order-1", CallerIdentity.anonymous())
        assert seen["auth"] is None

    def test_error_status_raises_external_service_error(self):
        gateway = _http_gateway(lambda request: httpx.Response(409, text="Insufficient stock"))

        with pytest.raises(ExternalServiceError) as exc:
            gateway.reserve("order-1", [ProductReservation("prod-001", 2)], CALLER)

        assert exc.value.service == "reservations"
        assert "409" in exc.value.message
        assert isinstance(exc.value.__cause__, httpx.HTTPStatusError)

    def test_transport_error_raises_external_service_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ExternalServiceError) as exc:
            _http_gateway(handler).cancel_all("order-1", CALLER)
        assert isinstance(exc.value.__cause__, httpx.ConnectError)


class TestGatewayFactory:
    @pytest.fixture(autouse=True)
    def _fresh_factory(self):
        reset_gateway()
        yield
        reset_gateway()

    def test_defaults_to_fake(self, monkeypatch):
        monkeypatch.delenv("RESERVATION_BACKEND", raising=False)
        assert isinstance(get_gateway(), FakeReservationGateway)

    def test_http_backend_from_environment(self, monkeypatch):
        monkeypatch.setenv("RESERVATION_BACKEND", "http")
        monkeypatch.setenv("PRODUCT_SERVICE_ADDRESS", "http://products.internal:8081/")

        gateway = get_gateway()

        assert isinstance(gateway, HttpReservationGateway)
        assert gateway.base_url == "http://products.internal:8081"
        gateway.close()

    def test_gateway_is_built_once(self):
        assert get_gateway() is get_gateway()
