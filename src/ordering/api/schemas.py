"""Pydantic request/response schemas for the Ordering API.

Request bodies are translated into lifecycle commands by the routes; responses
are built from the saved aggregate.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class CreateOrderRequest(BaseModel):
    user_id: str

    model_config = {"json_schema_extra": {"examples": [{"user_id": "42"}]}}


class AddItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)


class UpdateItemRequest(BaseModel):
    # Zero or negative removes the line item
    quantity: int


class FinalizeOrderRequest(BaseModel):
    payment_method: str
    card_last4: str | None = Field(default=None, max_length=4)
    currency: str | None = Field(default=None, max_length=3)

    model_config = {
        "json_schema_extra": {
            "examples": [{"payment_method": "credit_card", "card_last4": "4242", "currency": "SEK"}]
        }
    }


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class OrderIdResponse(BaseModel):
    order_id: str


class TransactionResponse(BaseModel):
    order_id: str
    transaction_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    quantity: int

    @classmethod
    def from_item(cls, item) -> "OrderItemResponse":
        return cls(id=str(item.id), product_id=str(item.product_id), quantity=item.quantity)


class OrderResponse(BaseModel):
    id: str
    user_id: str
    status: str
    order_date: datetime | None = None
    items: list[OrderItemResponse] = []

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            status=order.status,
            order_date=order.order_date,
            items=[OrderItemResponse.from_item(item) for item in order.items],
        )


class ErrorResponse(BaseModel):
    error: str
    detail: dict | str
