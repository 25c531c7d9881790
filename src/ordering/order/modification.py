"""Order item modification — commands and handler.

Every change to a line item is mirrored in the inventory service. The
reservation call always happens before the order is written, so a failed
reservation leaves the stored order untouched.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.repository import OrderRepository
from ordering.reservations import get_gateway
from ordering.reservations.port import ProductReservation
from ordering.shared.caller import CallerIdentity

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class AddItem:
    """Reserve more units of a product and add them to the order."""

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    auth_token = String(max_length=4096)


@ordering.command(part_of="Order")
class UpdateItem:
    """Set a product's quantity; zero or less removes the line item."""

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    auth_token = String(max_length=4096)


def reserve_and_add(order, product_id, quantity, caller):
    """Reserve ``quantity`` units, then record them on the order."""
    get_gateway().reserve(
        str(order.id),
        [ProductReservation(product_id=str(product_id), quantity=quantity)],
        caller,
    )
    new_quantity = order.add_quantity(product_id, quantity)
    logger.info(
        "Item reserved",
        order_id=str(order.id),
        product_id=str(product_id),
        quantity_added=quantity,
        new_quantity=new_quantity,
    )


@ordering.command_handler(part_of=Order)
class ModifyOrderItemsHandler:
    @handle(AddItem)
    def add_item(self, command):
        repo: OrderRepository = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)
        order.ensure_mutable()
        logger.debug("Order items before add", order_id=str(order.id), item_count=len(order.items))

        reserve_and_add(order, command.product_id, command.quantity, CallerIdentity.from_token(command.auth_token))
        repo.add(order)

    @handle(UpdateItem)
    def update_item(self, command):
        repo: OrderRepository = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id)
        order.ensure_mutable()

        caller = CallerIdentity.from_token(command.auth_token)
        gateway = get_gateway()
        order_id = str(order.id)
        product_id = str(command.product_id)
        item = order.item_for(product_id)

        if command.quantity > 0:
            if item is None:
                reserve_and_add(order, product_id, command.quantity, caller)
                repo.add(order)
                return order

            diff = command.quantity - item.quantity
            if diff > 0:
                gateway.reserve(order_id, [ProductReservation(product_id=product_id, quantity=diff)], caller)
            elif diff < 0:
                gateway.cancel_partial(order_id, product_id, -diff, caller)

            order.change_quantity(product_id, command.quantity)
            logger.info(
                "Item quantity updated",
                order_id=order_id,
                product_id=product_id,
                difference=diff,
                new_quantity=command.quantity,
            )
        elif item is not None:
            # Zero and negative quantities both release the whole line item
            gateway.cancel_partial(order_id, product_id, item.quantity, caller)
            released = order.remove_product(product_id)
            logger.info("Item removed", order_id=order_id, product_id=product_id, released_quantity=released)
        else:
            logger.debug("Nothing to remove", order_id=order_id, product_id=product_id)
            return order

        repo.add(order)
        return order
