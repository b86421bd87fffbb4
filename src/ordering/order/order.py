"""Order aggregate — a placed bakery order and its status timeline.

Statuses follow the bakery's production pipeline:

    placed → preparing → baking → decorating → quality_check → ready
    → out_for_delivery → completed

with ``cancelled`` reachable from any non-terminal state. ``completed`` and
``cancelled`` are terminal.

Status changes are permissive by default: staff may move an order to any
status, including back to an earlier one, because the back office is also
used to correct mistakes. ``ALLOWED_TRANSITIONS`` describes the forward-only
flow and is enforced only when ``change_status`` is called with
``strict=True``.

Every status change appends one ``StatusHistoryEntry``. Entries are never
edited or removed; ``sequence`` orders entries that share a timestamp.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PLACED = "placed"
    PREPARING = "preparing"
    BAKING = "baking"
    DECORATING = "decorating"
    QUALITY_CHECK = "quality_check"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DeliveryMethod(Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


STATUS_LABELS = {
    OrderStatus.PLACED: "Order Placed",
    OrderStatus.PREPARING: "Preparing",
    OrderStatus.BAKING: "Baking",
    OrderStatus.DECORATING: "Decorating",
    OrderStatus.QUALITY_CHECK: "Quality Check",
    OrderStatus.READY: "Ready for Collection/Delivery",
    OrderStatus.OUT_FOR_DELIVERY: "Out for Delivery",
    OrderStatus.COMPLETED: "Completed",
    OrderStatus.CANCELLED: "Cancelled",
}

TERMINAL_STATES = {OrderStatus.COMPLETED, OrderStatus.CANCELLED}

# Forward flow; later stages may be skipped (pickup orders never go out for delivery)
ALLOWED_TRANSITIONS = {
    OrderStatus.PLACED: {
        OrderStatus.PREPARING,
        OrderStatus.BAKING,
        OrderStatus.DECORATING,
        OrderStatus.QUALITY_CHECK,
        OrderStatus.READY,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.PREPARING: {
        OrderStatus.BAKING,
        OrderStatus.DECORATING,
        OrderStatus.QUALITY_CHECK,
        OrderStatus.READY,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.BAKING: {
        OrderStatus.DECORATING,
        OrderStatus.QUALITY_CHECK,
        OrderStatus.READY,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.DECORATING: {
        OrderStatus.QUALITY_CHECK,
        OrderStatus.READY,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.QUALITY_CHECK: {
        OrderStatus.READY,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.READY: {
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A snapshot of one cart line at the moment the order was placed.

    Name, image and price are copied so that later catalogue edits never
    change what the customer ordered or paid.
    """

    line_number = Integer(required=True, min_value=1)
    product_id = Integer(required=True)
    product_name = String(required=True, max_length=255)
    product_image = String(max_length=1000)
    quantity = Integer(required=True, min_value=1)
    unit_price = Integer(required=True, min_value=0)  # cents
    total_price = Integer(required=True, min_value=0)  # cents


@ordering.entity(part_of="Order")
class StatusHistoryEntry:
    sequence = Integer(required=True, min_value=1)
    status = String(required=True, choices=OrderStatus)
    timestamp = DateTime(required=True)
    changed_by = String(required=True, max_length=255)
    notes = Text()


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    customer_name = String(required=True, max_length=255)
    customer_email = String(required=True, max_length=255)
    customer_phone = String(required=True, max_length=50)
    status = String(choices=OrderStatus, default=OrderStatus.PLACED.value)
    delivery_method = String(required=True, choices=DeliveryMethod)
    delivery_address = Text()
    special_instructions = Text()
    ready_by = String(max_length=10)  # ISO date string
    subtotal = Integer(default=0, min_value=0)  # cents
    delivery_fee = Integer(default=0, min_value=0)  # cents
    total_amount = Integer(default=0, min_value=0)  # cents
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    idempotency_key = String(max_length=255)
    items = HasMany(OrderItem)
    history = HasMany(StatusHistoryEntry)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def delivery_orders_need_an_address(self):
        if self.delivery_method == DeliveryMethod.DELIVERY.value and not (self.delivery_address or "").strip():
            raise ValidationError({"delivery_address": ["Delivery address is required for delivery orders"]})

    @invariant.post
    def total_is_subtotal_plus_delivery(self):
        if self.total_amount != (self.subtotal or 0) + (self.delivery_fee or 0):
            raise ValidationError({"total_amount": ["Total must equal subtotal plus delivery fee"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        customer_name,
        customer_email,
        customer_phone,
        delivery_method,
        items_data,
        delivery_fee=0,
        delivery_address=None,
        special_instructions=None,
        ready_by=None,
        idempotency_key=None,
    ):
        """Record a new order from checkout data.

        Args:
            items_data: List of dicts with product_id, product_name,
                        product_image, quantity and unit_price (cents).
            delivery_fee: Fee in cents, already resolved for the delivery method.

        The order starts in ``placed`` with one history entry attributed to
        the customer's email.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})
        try:
            method = DeliveryMethod(delivery_method)
        except ValueError:
            raise ValidationError({"delivery_method": [f"Unknown delivery method: {delivery_method}"]}) from None

        now = datetime.now(UTC)

        items = [
            OrderItem(
                line_number=index,
                product_id=int(item["product_id"]),
                product_name=item["product_name"],
                product_image=item.get("product_image"),
                quantity=int(item["quantity"]),
                unit_price=int(item["unit_price"]),
                total_price=int(item["unit_price"]) * int(item["quantity"]),
            )
            for index, item in enumerate(items_data, start=1)
        ]
        subtotal = sum(item.total_price for item in items)

        order = cls(
            customer_id=str(customer_id),
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            delivery_method=method.value,
            delivery_address=delivery_address,
            special_instructions=special_instructions,
            ready_by=ready_by,
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total_amount=subtotal + delivery_fee,
            idempotency_key=idempotency_key,
            items=items,
            created_at=now,
            updated_at=now,
        )
        order._append_history(OrderStatus.PLACED, now, customer_email or "customer", "Order placed")

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                customer_email=customer_email,
                delivery_method=order.delivery_method,
                items=json.dumps([dict(item) for item in items_data]),
                subtotal=subtotal,
                delivery_fee=delivery_fee,
                total_amount=order.total_amount,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status model
    # -------------------------------------------------------------------
    @property
    def status_label(self) -> str:
        return STATUS_LABELS[OrderStatus(self.status)]

    @property
    def is_terminal(self) -> bool:
        return OrderStatus(self.status) in TERMINAL_STATES

    def sorted_history(self):
        return sorted(self.history, key=lambda entry: (entry.timestamp, entry.sequence))

    def _append_history(self, status, timestamp, changed_by, notes):
        next_sequence = max((entry.sequence for entry in self.history), default=0) + 1
        self.add_history(
            StatusHistoryEntry(
                sequence=next_sequence,
                status=status.value,
                timestamp=timestamp,
                changed_by=changed_by,
                notes=notes,
            )
        )

    def change_status(self, status, changed_by, notes=None, strict=False):
        """Move the order to ``status`` and append one history entry.

        Unknown statuses are always rejected. With ``strict=True`` the move
        must also be listed in ``ALLOWED_TRANSITIONS``.
        """
        try:
            target = OrderStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {status}"]}) from None

        if not changed_by or not str(changed_by).strip():
            raise ValidationError({"changed_by": ["Status changes must be attributed"]})

        current = OrderStatus(self.status)
        if strict and target not in ALLOWED_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        notes = notes or f"Status updated to {target.value}"

        self.status = target.value
        self.updated_at = now
        self._append_history(target, now, changed_by, notes)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_by=changed_by,
                notes=notes,
                changed_at=now,
            )
        )
