"""Checkout coordinator — the remote-call sequence behind order finalization.

Flow:
    1. Confirm every reservation held for the order
    2. Price the order's line items
    3. Charge the computed amount through the payment processor

Steps run strictly in order and stop at the first failure. Nothing is
compensated: a payment failure after step 1 leaves the reservations
confirmed while the order stays ongoing, and the error reaches the caller.
"""

from dataclasses import dataclass

import structlog

from ordering.billing.port import PaymentDetails, PaymentProcessor
from ordering.checkout.pricing import PricingPolicy
from ordering.reservations.port import ReservationGateway
from ordering.shared.caller import CallerIdentity

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Settlement:
    transaction_id: str
    amount: float


class CheckoutCoordinator:
    """Runs confirm → price → pay for one order."""

    def __init__(
        self,
        reservations: ReservationGateway,
        payments: PaymentProcessor,
        pricing: PricingPolicy,
    ) -> None:
        self.reservations = reservations
        self.payments = payments
        self.pricing = pricing

    def settle(self, order, payment: PaymentDetails, caller: CallerIdentity) -> Settlement:
        order_id = str(order.id)

        self.reservations.confirm_all(order_id, caller)
        logger.info("Reservations confirmed", order_id=order_id)

        amount = self.pricing(order.items)
        logger.debug("Order total computed", order_id=order_id, amount=amount, currency=payment.currency)

        try:
            transaction_id = self.payments.process_payment(payment.with_amount(amount, order_id), caller)
        except Exception:
            logger.error(
                "Payment failed after reservations were confirmed",
                order_id=order_id,
                amount=amount,
            )
            raise

        return Settlement(transaction_id=transaction_id, amount=amount)
