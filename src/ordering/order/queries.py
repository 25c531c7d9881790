"""Read side of the order lifecycle. Nothing here changes state."""

from protean.utils.globals import current_domain

from ordering.order.order import Order, OrderItem
from ordering.order.repository import OrderRepository


def _repo() -> OrderRepository:
    return current_domain.repository_for(Order)


def get_order_by_id(order_id) -> Order:
    """Raises ``OrderNotFoundError`` when the order does not exist."""
    return _repo().get_order(order_id)


def get_all_orders() -> list[Order]:
    return _repo().find_all()


def get_orders_by_user(user_id) -> list[Order]:
    return _repo().find_by_user(user_id)


def get_orders_after_date(user_id, after) -> list[Order]:
    return _repo().find_by_user_after(user_id, after)


def get_order_items(order_id) -> list[OrderItem]:
    order = _repo().find_order(order_id)
    if order is None:
        return []
    return list(order.items)
