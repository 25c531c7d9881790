"""Domain events for the Order aggregate.

Each event records one state change of an order and its line items.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderCreated:
    """A new, empty order was opened for a user."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    created_at = DateTime(required=True)


@ordering.event(part_of="Order")
class ItemReserved:
    """Units of a product were reserved and added to the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Order")
class ItemQuantityChanged:
    """The quantity of an existing line item was set to a new value."""

    __version__ = 1

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Order")
class ItemRemoved:
    """A line item was removed and its reservation released."""

    __version__ = 1

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    released_quantity = Integer(required=True)


@ordering.event(part_of="Order")
class OrderCompleted:
    """The order was paid for and frozen."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    transaction_id = String(required=True, max_length=255)
    amount = Float(required=True)
    completed_at = DateTime(required=True)
