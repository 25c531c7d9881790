"""Order aggregate (CQRS) — an order and the line items reserved against it.

The aggregate keeps the local half of the reservation-consistency contract:
one line item per product, positive quantities only, and no changes once the
order has been finalized. Remote reservation calls are made by the command
handlers before these methods run.

State Machine:
    ONGOING → COMPLETED (terminal, via finalize)
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.order.events import (
    ItemQuantityChanged,
    ItemRemoved,
    ItemReserved,
    OrderCompleted,
    OrderCreated,
)
from ordering.order.exceptions import OrderCompletedError


class OrderStatus(Enum):
    ONGOING = "Ongoing"
    COMPLETED = "Completed"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A reserved quantity of one product within an order."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.ONGOING.value)
    order_date = DateTime()
    items = HasMany(OrderItem)

    @invariant.post
    def one_line_item_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["An order can hold only one line item per product"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            status=OrderStatus.ONGOING.value,
            order_date=now,
        )
        order.raise_(
            OrderCreated(
                order_id=str(order.id),
                user_id=str(user_id),
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_completed(self) -> bool:
        return OrderStatus(self.status) == OrderStatus.COMPLETED

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    def item_for(self, product_id):
        """Return the line item for ``product_id``, or None."""
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def ensure_mutable(self):
        if self.is_completed:
            raise OrderCompletedError.for_order(self.id)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_quantity(self, product_id, quantity):
        """Record ``quantity`` freshly reserved units of a product.

        Increments the existing line item for the product, or creates one.
        """
        self.ensure_mutable()
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity to add must be at least 1"]})

        existing = self.item_for(product_id)
        if existing:
            existing.quantity += quantity
            new_quantity = existing.quantity
        else:
            self.add_items(OrderItem(product_id=product_id, quantity=quantity))
            new_quantity = quantity

        self.raise_(
            ItemReserved(
                order_id=str(self.id),
                product_id=str(product_id),
                quantity_added=quantity,
                new_quantity=new_quantity,
            )
        )
        return new_quantity

    def change_quantity(self, product_id, quantity):
        """Set an existing line item's quantity to a new positive value."""
        self.ensure_mutable()
        if quantity < 1:
            raise ValidationError({"quantity": ["Use remove_product to drop a line item"]})

        item = self.item_for(product_id)
        if item is None:
            raise ValidationError({"product_id": [f"Product {product_id} is not part of this order"]})

        previous_quantity = item.quantity
        if previous_quantity == quantity:
            return

        item.quantity = quantity
        self.raise_(
            ItemQuantityChanged(
                order_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_product(self, product_id):
        """Remove the line item for a product. Returns the quantity released."""
        self.ensure_mutable()
        item = self.item_for(product_id)
        if item is None:
            raise ValidationError({"product_id": [f"Product {product_id} is not part of this order"]})

        released = item.quantity
        self.remove_items(item)
        self.raise_(
            ItemRemoved(
                order_id=str(self.id),
                product_id=str(product_id),
                released_quantity=released,
            )
        )
        return released

    def clear_items(self):
        """Drop every line item ahead of deleting the order."""
        self.ensure_mutable()
        for item in list(self.items):
            self.remove_items(item)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def complete(self, transaction_id, amount, completed_at=None):
        """Freeze the order after payment. The order date becomes the finalize time."""
        self.ensure_mutable()
        now = completed_at or datetime.now(UTC)

        self.status = OrderStatus.COMPLETED.value
        self.order_date = now

        self.raise_(
            OrderCompleted(
                order_id=str(self.id),
                user_id=str(self.user_id),
                transaction_id=transaction_id,
                amount=amount,
                completed_at=now,
            )
        )
