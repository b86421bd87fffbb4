"""FastAPI routes for the Ordering domain — cart, checkout, orders and admin order management."""

from fastapi import APIRouter, Depends, Header, HTTPException
from protean.utils.globals import current_domain

from ordering.api.dependencies import (
    current_customer,
    delivery_pricing,
    get_cart_store,
    require_customer,
)
from ordering.api.schemas import (
    AddCartItemRequest,
    CartItemResponse,
    CartResponse,
    CheckoutRequest,
    OrderIdResponse,
    OrderResponse,
    StatusHistoryResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
)
from ordering.cart.store import CartStore
from ordering.checkout.checkout import CheckoutDetails, Customer, DeliveryPricing, checkout
from ordering.order.queries import all_orders, get_order, orders_for_customer, status_history
from ordering.order.status import UpdateOrderStatus
from shared.auth import require_admin
from shared.config import get_settings
from shared.money import format_price


def _cart_response(store: CartStore) -> CartResponse:
    return CartResponse(
        items=[
            CartItemResponse(
                id=line.id,
                name=line.name,
                price=line.price,
                image=line.image,
                quantity=line.quantity,
                line_total=line.line_total,
            )
            for line in store.items
        ],
        item_count=store.get_cart_item_count(),
        total=store.get_cart_total(),
        display_total=format_price(store.subtotal_cents, get_settings().currency_symbol),
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
# Handlers touching the cart store are plain functions: cart storage does
# blocking file I/O, so FastAPI runs them in its threadpool.
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
def get_cart(store: CartStore = Depends(get_cart_store)) -> CartResponse:
    return _cart_response(store)


@cart_router.post("/items", response_model=CartResponse)
def add_cart_item(body: AddCartItemRequest, store: CartStore = Depends(get_cart_store)) -> CartResponse:
    store.add_to_cart(body.model_dump())
    return _cart_response(store)


@cart_router.put("/items/{product_id}", response_model=CartResponse)
def update_cart_item(
    product_id: int,
    body: UpdateCartQuantityRequest,
    store: CartStore = Depends(get_cart_store),
) -> CartResponse:
    store.update_quantity(product_id, body.quantity)
    return _cart_response(store)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
def remove_cart_item(product_id: int, store: CartStore = Depends(get_cart_store)) -> CartResponse:
    store.remove_from_cart(product_id)
    return _cart_response(store)


@cart_router.delete("", response_model=CartResponse)
def clear_cart(store: CartStore = Depends(get_cart_store)) -> CartResponse:
    store.clear_cart()
    return _cart_response(store)


# ---------------------------------------------------------------------------
# Checkout / Customer Orders Router
# ---------------------------------------------------------------------------
order_router = APIRouter(tags=["orders"])


@order_router.post("/checkout", status_code=201, response_model=OrderIdResponse)
def checkout_cart(
    body: CheckoutRequest,
    store: CartStore = Depends(get_cart_store),
    customer: Customer = Depends(current_customer),
    pricing: DeliveryPricing = Depends(delivery_pricing),
    idempotency_key: str | None = Header(default=None),
) -> OrderIdResponse:
    details = CheckoutDetails(**body.model_dump())
    order_id = checkout(store, details, customer, pricing=pricing, idempotency_key=idempotency_key)
    return OrderIdResponse(order_id=order_id)


@order_router.get("/orders", response_model=list[OrderResponse])
async def list_my_orders(customer: Customer = Depends(require_customer)) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in orders_for_customer(customer.id)]


def _owned_order(order_id: str, customer: Customer):
    order = get_order(order_id)
    if str(order.customer_id) != str(customer.id):
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@order_router.get("/orders/{order_id}", response_model=OrderResponse)
async def get_my_order(order_id: str, customer: Customer = Depends(require_customer)) -> OrderResponse:
    return OrderResponse.from_order(_owned_order(order_id, customer))


@order_router.get("/orders/{order_id}/history", response_model=list[StatusHistoryResponse])
async def get_order_history(
    order_id: str,
    customer: Customer = Depends(require_customer),
) -> list[StatusHistoryResponse]:
    order = _owned_order(order_id, customer)
    return [StatusHistoryResponse.from_entry(entry) for entry in order.sorted_history()]


# ---------------------------------------------------------------------------
# Admin Orders Router
# ---------------------------------------------------------------------------
admin_order_router = APIRouter(prefix="/admin/orders", tags=["admin"])


@admin_order_router.get("", response_model=list[OrderResponse])
async def admin_list_orders(
    status: str | None = None,
    search: str | None = None,
    admin_email: str = Depends(require_admin),
) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in all_orders(status=status, search=search)]


@admin_order_router.get("/{order_id}/history", response_model=list[StatusHistoryResponse])
async def admin_order_history(
    order_id: str,
    admin_email: str = Depends(require_admin),
) -> list[StatusHistoryResponse]:
    return [StatusHistoryResponse.from_entry(entry) for entry in status_history(order_id)]


@admin_order_router.put("/{order_id}/status", response_model=StatusResponse)
async def admin_update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    admin_email: str = Depends(require_admin),
) -> StatusResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        changed_by=admin_email,
        notes=body.notes,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
