"""Shared BDD fixtures and step definitions for the order lifecycle."""

import pytest
from ordering.order.creation import CreateOrder
from ordering.order.exceptions import ExternalServiceError, OrderCompletedError
from ordering.order.modification import AddItem
from ordering.order.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Container for the exception raised by the last action, if any."""
    return {"exc": None}


def _load(order_id):
    return current_domain.repository_for(Order).get(order_id)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an ongoing order for user "{user_id}"'), target_fixture="order_id")
def _(user_id):
    return current_domain.process(CreateOrder(user_id=user_id), asynchronous=False)


@given(parsers.cfparse('the order holds {quantity:d} reserved units of product "{product_id}"'))
def _(order_id, quantity, product_id):
    current_domain.process(
        AddItem(order_id=order_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


@given("the inventory service rejects every call")
def _(reservations):
    reservations.configure(should_succeed=False)


@given("the payment processor declines payments")
def _(payments):
    payments.configure(should_succeed=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order_id, status):
    assert _load(order_id).status == status


@then(parsers.cfparse('the order holds {quantity:d} units of product "{product_id}"'))
def _(order_id, quantity, product_id):
    item = _load(order_id).item_for(product_id)
    assert item is not None, f"No line item for {product_id}"
    assert item.quantity == quantity


@then("the order has no items")
def _(order_id):
    assert len(_load(order_id).items) == 0


@then("the reserved quantity matches the order")
def _(order_id, reservations):
    assert reservations.held_quantity(order_id) == _load(order_id).total_quantity


@then("the order action fails with an upstream error")
def _(error):
    assert isinstance(error["exc"], ExternalServiceError), f"Unexpected outcome: {error['exc']!r}"


@then("the order action fails because the order is completed")
def _(error):
    assert isinstance(error["exc"], OrderCompletedError), f"Unexpected outcome: {error['exc']!r}"
