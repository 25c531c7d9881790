"""HTTP reservation gateway adapter for the product service.

Talks JSON over HTTP to the product service's ``/reservations`` endpoints.
Every failure (transport error or non-2xx response) is logged and surfaced
as ``ExternalServiceError`` with the original exception chained.
"""

import httpx
import structlog

from ordering.order.exceptions import ExternalServiceError
from ordering.reservations.port import ProductReservation, ReservationGateway, ReservationResult
from ordering.shared.caller import CallerIdentity

logger = structlog.get_logger(__name__)

SERVICE_NAME = "reservations"


class HttpReservationGateway(ReservationGateway):
    """Reservation gateway backed by the product service's REST API."""

    def __init__(self, base_url: str, timeout: float = 10.0, client: httpx.Client | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def close(self) -> None:
        self.client.close()

    def _headers(self, caller: CallerIdentity) -> dict[str, str]:
        if caller.is_authenticated:
            logger.debug("Added bearer token to reservation request")
        else:
            logger.warning("No caller token available for reservation request")
        return caller.auth_headers()

    def _post(self, action: str, path: str, caller: CallerIdentity, payload=None) -> httpx.Response:
        logger.info("Calling reservation service", action=action, path=path)
        try:
            response = self.client.post(path, json=payload, headers=self._headers(caller))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Reservation service rejected request",
                action=action,
                path=path,
                status_code=exc.response.status_code,
            )
            raise ExternalServiceError(
                SERVICE_NAME, f"Failed to {action}: HTTP {exc.response.status_code} {exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Reservation service unreachable", action=action, path=path, error=str(exc))
            raise ExternalServiceError(SERVICE_NAME, f"Failed to {action}: {exc}") from exc
        return response

    def reserve(
        self,
        order_id: str,
        reservations: list[ProductReservation],
        caller: CallerIdentity,
    ) -> list[ReservationResult]:
        payload = {
            "orderId": str(order_id),
            "productReservations": [
                {"productId": str(r.product_id), "quantity": r.quantity} for r in reservations
            ],
        }
        response = self._post("reserve products", "/reservations", caller, payload)

        if not response.content:
            return []
        try:
            body = response.json()
        except ValueError as exc:
            raise ExternalServiceError(SERVICE_NAME, "Failed to reserve products: malformed response body") from exc

        return [
            ReservationResult(
                product_id=str(entry.get("productId")),
                quantity=entry.get("quantity", 0),
                reservation_id=str(entry["reservationId"]) if entry.get("reservationId") is not None else None,
                status=entry.get("status"),
            )
            for entry in body or []
        ]

    def confirm_all(self, order_id: str, caller: CallerIdentity) -> None:
        self._post("confirm reservations", f"/reservations/confirm/{order_id}", caller)

    def cancel_all(self, order_id: str, caller: CallerIdentity) -> None:
        self._post("cancel reservations", f"/reservations/cancel/{order_id}", caller)

    def cancel_partial(
        self,
        order_id: str,
        product_id: str,
        quantity: int,
        caller: CallerIdentity,
    ) -> None:
        self._post(
            "cancel product reservation",
            f"/reservations/cancel/{order_id}/product/{product_id}/quantity/{quantity}",
            caller,
        )
