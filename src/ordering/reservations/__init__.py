"""Reservation gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeReservationGateway for development and testing
- HttpReservationGateway when RESERVATION_BACKEND=http
"""

from ordering.reservations.fake_adapter import FakeReservationGateway
from ordering.reservations.http_adapter import HttpReservationGateway
from ordering.reservations.port import ReservationGateway
from ordering.settings import get_settings

_current_gateway: ReservationGateway | None = None


def _default_gateway() -> ReservationGateway:
    settings = get_settings()
    if settings.reservation_backend == "http":
        return HttpReservationGateway(
            base_url=settings.product_service_address,
            timeout=settings.gateway_timeout_seconds,
        )
    return FakeReservationGateway()


def get_gateway() -> ReservationGateway:
    """Return the current reservation gateway, building the configured default once."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _default_gateway()
    return _current_gateway


def set_gateway(gateway: ReservationGateway) -> None:
    """Override the active reservation gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
