"""Error taxonomy for the order lifecycle.

Callers distinguish three failure kinds: the order is missing, the order is
frozen, or a downstream service failed. Messages follow protean's
``{field: [message]}`` shape so the HTTP layer can render them uniformly.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError


class OrderNotFoundError(ObjectNotFoundError):
    """No order exists with the requested identifier."""

    @classmethod
    def for_order(cls, order_id) -> "OrderNotFoundError":
        return cls({"order_id": [f"Order {order_id} does not exist"]})


class OrderCompletedError(InvalidOperationError):
    """A mutation was attempted on an order that has already been finalized."""

    @classmethod
    def for_order(cls, order_id) -> "OrderCompletedError":
        return cls({"status": [f"Order {order_id} is completed and can not be changed or cancelled"]})


class ExternalServiceError(Exception):
    """A reservation or payment call failed.

    The underlying transport or protocol error is chained as ``__cause__``.
    """

    def __init__(self, service: str, message: str) -> None:
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message
