"""Payment processor port (abstract interface).

The order lifecycle charges a finalized order through this contract and
only needs the resulting transaction identifier back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace

from ordering.shared.caller import CallerIdentity


@dataclass(frozen=True)
class PaymentDetails:
    """What the caller supplies at checkout; the amount is filled in by pricing."""

    payment_method: str
    card_last4: str | None = None
    currency: str = "SEK"
    amount: float | None = None
    order_id: str | None = None

    def with_amount(self, amount: float, order_id: str | None = None) -> "PaymentDetails":
        return replace(self, amount=amount, order_id=order_id or self.order_id)


class PaymentProcessor(ABC):
    """Abstract payment processor interface."""

    @abstractmethod
    def process_payment(self, details: PaymentDetails, caller: CallerIdentity) -> str:
        """Charge ``details.amount`` and return the transaction identifier.

        Raises ``ExternalServiceError`` when the charge is declined or the
        processor cannot be reached.
        """
        ...
