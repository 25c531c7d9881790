"""Configurable fake payment processor for development and testing."""

from uuid import uuid4

from ordering.billing.port import PaymentDetails, PaymentProcessor
from ordering.order.exceptions import ExternalServiceError
from ordering.shared.caller import CallerIdentity

SERVICE_NAME = "payments"


class FakePaymentProcessor(PaymentProcessor):
    """Configurable fake payment processor."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure processor behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def process_payment(self, details: PaymentDetails, caller: CallerIdentity) -> str:
        call = {
            "method": "process_payment",
            "order_id": details.order_id,
            "amount": details.amount,
            "currency": details.currency,
            "payment_method": details.payment_method,
            "card_last4": details.card_last4,
            "token": caller.token,
        }
        self.calls.append(call)

        if details.amount is None:
            raise ExternalServiceError(SERVICE_NAME, "Payment amount is missing")
        if not self.should_succeed:
            raise ExternalServiceError(SERVICE_NAME, f"Payment failed: {self.failure_reason}")
        return f"fake_txn_{uuid4().hex[:12]}"
