from datetime import UTC, datetime, timedelta

import pytest
from ordering.order.creation import CreateOrder
from ordering.order.exceptions import OrderNotFoundError
from ordering.order.modification import AddItem
from ordering.order.order import Order
from ordering.order.queries import (
    get_all_orders,
    get_order_by_id,
    get_order_items,
    get_orders_after_date,
    get_orders_by_user,
)
from protean import current_domain


def _create_order(user_id="user-42"):
    return current_domain.process(CreateOrder(user_id=user_id), asynchronous=False)


class TestOrderLookups:
    def test_get_order_by_id(self):
        order_id = _create_order()
        assert str(get_order_by_id(order_id).id) == order_id

    def test_get_unknown_order_raises(self):
        with pytest.raises(OrderNotFoundError) as exc:
            get_order_by_id("no-such-order")
        assert "order_id" in exc.value.args[0]

    def test_get_all_orders(self):
        ids = {_create_order("user-1"), _create_order("user-2")}
        assert {str(o.id) for o in get_all_orders()} == ids

    def test_get_all_orders_when_empty(self):
        assert get_all_orders() == []

    def test_get_orders_by_user(self):
        mine = _create_order("user-1")
        _create_order("user-2")

        orders = get_orders_by_user("user-1")
        assert [str(o.id) for o in orders] == [mine]

    def test_unknown_user_has_no_orders(self):
        _create_order("user-1")
        assert get_orders_by_user("user-9") == []


class TestOrdersAfterDate:
    def test_includes_orders_dated_after(self):
        order_id = _create_order("user-1")
        after = datetime.now(UTC) - timedelta(hours=1)
        assert [str(o.id) for o in get_orders_after_date("user-1", after)] == [order_id]

    def test_excludes_orders_dated_before(self):
        _create_order("user-1")
        after = datetime.now(UTC) + timedelta(hours=1)
        assert get_orders_after_date("user-1", after) == []

    def test_naive_cutoff_is_treated_as_utc(self):
        order_id = _create_order("user-1")
        after = (datetime.now(UTC) - timedelta(hours=1)).replace(tzinfo=None)
        assert [str(o.id) for o in get_orders_after_date("user-1", after)] == [order_id]

    def test_other_users_are_excluded(self):
        _create_order("user-2")
        after = datetime.now(UTC) - timedelta(hours=1)
        assert get_orders_after_date("user-1", after) == []


class TestOrderItems:
    def test_items_of_an_order(self):
        order_id = _create_order()
        current_domain.process(AddItem(order_id=order_id, product_id="prod-001", quantity=2), asynchronous=False)
        current_domain.process(AddItem(order_id=order_id, product_id="prod-002", quantity=1), asynchronous=False)

        items = get_order_items(order_id)
        assert sorted((str(i.product_id), i.quantity) for i in items) == [("prod-001", 2), ("prod-002", 1)]

    def test_items_of_unknown_order_is_empty(self):
        assert get_order_items("no-such-order") == []


class TestOrderRepository:
    def test_exists(self):
        repo = current_domain.repository_for(Order)
        order_id = _create_order()
        assert repo.exists(order_id)
        assert not repo.exists("no-such-order")
