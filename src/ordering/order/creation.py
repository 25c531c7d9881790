"""Order creation — command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.repository import OrderRepository

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CreateOrder:
    """Open an empty, ongoing order for a user."""

    user_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        order = Order.create(user_id=command.user_id)
        repo: OrderRepository = current_domain.repository_for(Order)
        repo.add(order)
        logger.info("Order created", order_id=str(order.id), user_id=str(command.user_id))
        return str(order.id)
