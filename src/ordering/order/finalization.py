"""Order finalization — command and handler.

Confirms reservations, charges the order total and freezes the order. The
remote steps live in ``CheckoutCoordinator``; this handler only loads the
order, checks it may still change and records the outcome.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.billing import get_processor
from ordering.billing.port import PaymentDetails
from ordering.checkout.coordinator import CheckoutCoordinator
from ordering.checkout.pricing import get_pricing
from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.repository import OrderRepository
from ordering.reservations import get_gateway
from ordering.settings import get_settings
from ordering.shared.caller import CallerIdentity

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class FinalizeOrder:
    """Pay for an ongoing order and mark it completed."""

    order_id = Identifier(required=True)
    payment_method = String(required=True, max_length=50)
    card_last4 = String(max_length=4)
    currency = String(max_length=3)
    auth_token = String(max_length=4096)


@ordering.command_handler(part_of=Order)
class FinalizeOrderHandler:
    @handle(FinalizeOrder)
    def finalize_order(self, command):
        logger.info("Finalizing order", order_id=str(command.order_id))

        repo: OrderRepository = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)
        order.ensure_mutable()

        coordinator = CheckoutCoordinator(
            reservations=get_gateway(),
            payments=get_processor(),
            pricing=get_pricing(),
        )
        payment = PaymentDetails(
            payment_method=command.payment_method,
            card_last4=command.card_last4,
            currency=command.currency or get_settings().payment_currency,
        )
        settlement = coordinator.settle(order, payment, CallerIdentity.from_token(command.auth_token))

        order.complete(transaction_id=settlement.transaction_id, amount=settlement.amount)
        repo.add(order)

        logger.info(
            "Order finalized",
            order_id=str(order.id),
            transaction_id=settlement.transaction_id,
            amount=settlement.amount,
        )
        return settlement.transaction_id
