"""Configurable in-process reservation gateway for development and testing.

Keeps a per-order ledger of held quantities so tests can check that the
inventory side matches the order's line items, and records every call in
the order it was made.
"""

from collections import defaultdict
from uuid import uuid4

from ordering.order.exceptions import ExternalServiceError
from ordering.reservations.port import ProductReservation, ReservationGateway, ReservationResult
from ordering.shared.caller import CallerIdentity

SERVICE_NAME = "reservations"


class FakeReservationGateway(ReservationGateway):
    """Configurable fake reservation gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Insufficient stock"
        self.fail_on: set[str] | None = None
        self.calls: list[dict] = []
        self.held: dict[str, dict[str, int]] = defaultdict(dict)
        self.confirmed: set[str] = set()

    def configure(self, should_succeed: bool, failure_reason: str = "Insufficient stock", fail_on=None) -> None:
        """Configure gateway behavior at runtime.

        ``fail_on`` limits failures to the named methods; by default every
        method fails when ``should_succeed`` is False.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.fail_on = set(fail_on) if fail_on else None

    def held_quantity(self, order_id) -> int:
        return sum(self.held.get(str(order_id), {}).values())

    def calls_for(self, method: str) -> list[dict]:
        return [call for call in self.calls if call["method"] == method]

    def _record(self, method: str, caller: CallerIdentity, **details) -> None:
        self.calls.append({"method": method, "token": caller.token, **details})
        if not self.should_succeed and (self.fail_on is None or method in self.fail_on):
            raise ExternalServiceError(SERVICE_NAME, f"{method} failed: {self.failure_reason}")

    def reserve(
        self,
        order_id: str,
        reservations: list[ProductReservation],
        caller: CallerIdentity,
    ) -> list[ReservationResult]:
        self._record(
            "reserve",
            caller,
            order_id=str(order_id),
            reservations=[(str(r.product_id), r.quantity) for r in reservations],
        )

        holds = self.held[str(order_id)]
        results = []
        for reservation in reservations:
            product_id = str(reservation.product_id)
            holds[product_id] = holds.get(product_id, 0) + reservation.quantity
            results.append(
                ReservationResult(
                    product_id=product_id,
                    quantity=reservation.quantity,
                    reservation_id=f"fake_res_{uuid4().hex[:12]}",
                    status="Reserved",
                )
            )
        return results

    def confirm_all(self, order_id: str, caller: CallerIdentity) -> None:
        self._record("confirm_all", caller, order_id=str(order_id))
        self.confirmed.add(str(order_id))

    def cancel_all(self, order_id: str, caller: CallerIdentity) -> None:
        self._record("cancel_all", caller, order_id=str(order_id))
        self.held.pop(str(order_id), None)

    def cancel_partial(
        self,
        order_id: str,
        product_id: str,
        quantity: int,
        caller: CallerIdentity,
    ) -> None:
        self._record(
            "cancel_partial",
            caller,
            order_id=str(order_id),
            product_id=str(product_id),
            quantity=quantity,
        )

        holds = self.held[str(order_id)]
        remaining = holds.get(str(product_id), 0) - quantity
        if remaining > 0:
            holds[str(product_id)] = remaining
        else:
            holds.pop(str(product_id), None)
