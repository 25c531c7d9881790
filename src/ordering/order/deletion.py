"""Order deletion — command and handler.

Reservations are cancelled before anything local is removed, so a failed
cancellation leaves the order and its items in place.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.repository import OrderRepository
from ordering.reservations import get_gateway
from ordering.shared.caller import CallerIdentity

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class DeleteOrder:
    """Cancel an ongoing order's reservations and delete it with its items."""

    order_id = Identifier(required=True)
    auth_token = String(max_length=4096)


@ordering.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        repo: OrderRepository = current_domain.repository_for(Order)
        order = repo.find_order(command.order_id)
        if order is None:
            logger.warning("No order to delete", order_id=str(command.order_id))
            return

        order.ensure_mutable()

        get_gateway().cancel_all(str(order.id), CallerIdentity.from_token(command.auth_token))

        order.clear_items()
        repo.add(order)
        repo.remove(order)
        logger.info("Order deleted", order_id=str(command.order_id))
