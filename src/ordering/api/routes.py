"""FastAPI routes for the Ordering domain."""

from datetime import datetime

from fastapi import APIRouter, Header
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddItemRequest,
    CreateOrderRequest,
    ErrorResponse,
    FinalizeOrderRequest,
    OrderIdResponse,
    OrderItemResponse,
    OrderResponse,
    StatusResponse,
    TransactionResponse,
    UpdateItemRequest,
)
from ordering.order import queries
from ordering.order.creation import CreateOrder
from ordering.order.deletion import DeleteOrder
from ordering.order.finalization import FinalizeOrder
from ordering.order.modification import AddItem, UpdateItem

order_router = APIRouter(
    prefix="/orders",
    tags=["orders"],
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def create_order(body: CreateOrderRequest) -> OrderIdResponse:
    result = current_domain.process(CreateOrder(user_id=body.user_id), asynchronous=False)
    return OrderIdResponse(order_id=result)


# Routes that reach remote services are plain `def` so FastAPI runs them in its
# threadpool instead of blocking the event loop.
@order_router.post("/{order_id}/items", response_model=StatusResponse)
def add_item(
    order_id: str,
    body: AddItemRequest,
    authorization: str | None = Header(default=None),
) -> StatusResponse:
    command = AddItem(
        order_id=order_id,
        product_id=body.product_id,
        quantity=body.quantity,
        auth_token=authorization,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/items/{product_id}", response_model=OrderResponse)
def update_item(
    order_id: str,
    product_id: str,
    body: UpdateItemRequest,
    authorization: str | None = Header(default=None),
) -> OrderResponse:
    command = UpdateItem(
        order_id=order_id,
        product_id=product_id,
        quantity=body.quantity,
        auth_token=authorization,
    )
    order = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(order)


@order_router.delete("/{order_id}", response_model=StatusResponse)
def delete_order(order_id: str, authorization: str | None = Header(default=None)) -> StatusResponse:
    current_domain.process(DeleteOrder(order_id=order_id, auth_token=authorization), asynchronous=False)
    return StatusResponse()


@order_router.post("/{order_id}/finalize", response_model=TransactionResponse)
def finalize_order(
    order_id: str,
    body: FinalizeOrderRequest,
    authorization: str | None = Header(default=None),
) -> TransactionResponse:
    command = FinalizeOrder(
        order_id=order_id,
        payment_method=body.payment_method,
        card_last4=body.card_last4,
        currency=body.currency,
        auth_token=authorization,
    )
    transaction_id = current_domain.process(command, asynchronous=False)
    return TransactionResponse(order_id=order_id, transaction_id=transaction_id)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
@order_router.get("", response_model=list[OrderResponse])
async def list_orders() -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in queries.get_all_orders()]


@order_router.get("/users/{user_id}", response_model=list[OrderResponse])
async def list_user_orders(user_id: str, after: datetime | None = None) -> list[OrderResponse]:
    if after is None:
        orders = queries.get_orders_by_user(user_id)
    else:
        orders = queries.get_orders_after_date(user_id, after)
    return [OrderResponse.from_order(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return OrderResponse.from_order(queries.get_order_by_id(order_id))


@order_router.get("/{order_id}/items", response_model=list[OrderItemResponse])
async def get_order_items(order_id: str) -> list[OrderItemResponse]:
    return [OrderItemResponse.from_item(item) for item in queries.get_order_items(order_id)]
