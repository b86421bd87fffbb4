"""Pydantic request/response schemas for the Ordering API.

These are external contracts, kept separate from the internal Protean
commands. Amounts cross the wire as decimal strings (``"25.00"``).
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from ordering.order.order import STATUS_LABELS, Order, OrderStatus
from shared.money import from_cents


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddCartItemRequest(BaseModel):
    id: int
    name: str = Field(min_length=1)
    price: Decimal | str
    image: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "name": "Sourdough Loaf",
                    "price": "$10.00",
                    "image": "https://cdn.example.com/sourdough.jpg",
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    # Zero or less removes the line
    quantity: int


class CartItemResponse(BaseModel):
    id: int
    name: str
    price: Decimal
    image: str | None = None
    quantity: int
    line_total: Decimal


class CartResponse(BaseModel):
    items: list[CartItemResponse]
    item_count: int
    total: Decimal
    display_total: str  # "$25.00", with the configured currency symbol


# ---------------------------------------------------------------------------
# Checkout / Orders
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_method: str = "pickup"
    delivery_address: str | None = None
    special_instructions: str | None = None
    ready_by: date | None = None


class OrderIdResponse(BaseModel):
    order_id: str


class UpdateOrderStatusRequest(BaseModel):
    status: str
    notes: str | None = None


class StatusResponse(BaseModel):
    status: str = "ok"


class OrderItemResponse(BaseModel):
    product_id: int
    product_name: str
    product_image: str | None = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class StatusHistoryResponse(BaseModel):
    status: str
    label: str
    timestamp: datetime
    changed_by: str
    notes: str | None = None

    @classmethod
    def from_entry(cls, entry) -> "StatusHistoryResponse":
        return cls(
            status=entry.status,
            label=STATUS_LABELS[OrderStatus(entry.status)],
            timestamp=entry.timestamp,
            changed_by=entry.changed_by,
            notes=entry.notes,
        )


class OrderResponse(BaseModel):
    order_id: str
    status: str
    status_label: str
    customer_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_method: str
    delivery_address: str | None = None
    special_instructions: str | None = None
    ready_by: str | None = None
    subtotal: Decimal
    delivery_fee: Decimal
    total_amount: Decimal
    payment_status: str
    items: list[OrderItemResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls(
            order_id=str(order.id),
            status=order.status,
            status_label=order.status_label,
            customer_id=str(order.customer_id),
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            delivery_method=order.delivery_method,
            delivery_address=order.delivery_address,
            special_instructions=order.special_instructions,
            ready_by=order.ready_by,
            subtotal=from_cents(order.subtotal),
            delivery_fee=from_cents(order.delivery_fee),
            total_amount=from_cents(order.total_amount),
            payment_status=order.payment_status,
            items=[
                OrderItemResponse(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    product_image=item.product_image,
                    quantity=item.quantity,
                    unit_price=from_cents(item.unit_price),
                    total_price=from_cents(item.total_price),
                )
                for item in sorted(order.items, key=lambda i: i.line_number)
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
