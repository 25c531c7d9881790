"""Reservation gateway port (abstract interface).

Defines the contract with the inventory service that holds stock against an
order. The order lifecycle depends only on this interface, so the HTTP
adapter and the in-process fake are interchangeable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ordering.shared.caller import CallerIdentity


@dataclass(frozen=True)
class ProductReservation:
    """A request to hold ``quantity`` units of one product."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class ReservationResult:
    """The inventory service's answer for one reserved product."""

    product_id: str
    quantity: int
    reservation_id: str | None = None
    status: str | None = None


class ReservationGateway(ABC):
    """Abstract reservation gateway interface.

    Every method raises ``ExternalServiceError`` when the inventory service
    rejects the call or cannot be reached.
    """

    @abstractmethod
    def reserve(
        self,
        order_id: str,
        reservations: list[ProductReservation],
        caller: CallerIdentity,
    ) -> list[ReservationResult]:
        """Place tentative holds for the given products."""
        ...

    @abstractmethod
    def confirm_all(self, order_id: str, caller: CallerIdentity) -> None:
        """Turn every hold of the order into a committed stock deduction."""
        ...

    @abstractmethod
    def cancel_all(self, order_id: str, caller: CallerIdentity) -> None:
        """Release every hold of the order."""
        ...

    @abstractmethod
    def cancel_partial(
        self,
        order_id: str,
        product_id: str,
        quantity: int,
        caller: CallerIdentity,
    ) -> None:
        """Release ``quantity`` units of one product's hold."""
        ...
