"""Repository for the Order aggregate — the order store."""

from datetime import UTC

from protean.exceptions import ObjectNotFoundError

from ordering.domain import ordering
from ordering.order.exceptions import OrderNotFoundError
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    """Order store with the lookups the lifecycle needs.

    Items are owned by the aggregate and persisted with it, so item queries
    go through ``order.items``.
    """

    def get_order(self, order_id) -> Order:
        """Load an order, raising ``OrderNotFoundError`` when absent."""
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            raise OrderNotFoundError.for_order(order_id) from None

    def find_order(self, order_id) -> Order | None:
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            return None

    def exists(self, order_id) -> bool:
        return self.find_order(order_id) is not None

    def find_all(self) -> list[Order]:
        return self._dao.query.all().items

    def find_by_user(self, user_id) -> list[Order]:
        return self._dao.query.filter(user_id=str(user_id)).all().items

    def find_by_user_after(self, user_id, after) -> list[Order]:
        """Orders of a user whose order date is strictly later than ``after``.

        Naive timestamps are taken to be UTC.
        """
        if after.tzinfo is None:
            after = after.replace(tzinfo=UTC)
        return [order for order in self.find_by_user(user_id) if order.order_date and order.order_date > after]

    def remove(self, order: Order) -> None:
        self._dao.delete(order)
