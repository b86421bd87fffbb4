"""Checkout — turns a session's cart into a placed order.

Everything is validated before the ``PlaceOrder`` command is sent. When
validation or placement fails the cart is left exactly as it was; the cart is
cleared only after the order has been recorded.
"""

import json
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.cart.store import CartStore
from ordering.order.order import DeliveryMethod
from ordering.order.placement import PlaceOrder
from ordering.order.queries import order_for_idempotency_key

logger = structlog.get_logger(__name__)

# Cakes are baked to order; the earliest collection date is two days out.
MIN_LEAD_DAYS = 2

DEFAULT_DELIVERY_FEE = 1000  # cents
DEFAULT_FREE_DELIVERY_THRESHOLD = 7500  # cents


@dataclass(frozen=True)
class Customer:
    """The shopper as seen through the auth gateway."""

    id: str | None
    email: str | None = None
    is_authenticated: bool = False


@dataclass
class CheckoutDetails:
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_method: str = DeliveryMethod.PICKUP.value
    delivery_address: str | None = None
    special_instructions: str | None = None
    ready_by: date | None = None


@dataclass(frozen=True)
class DeliveryPricing:
    delivery_fee: int = DEFAULT_DELIVERY_FEE
    free_delivery_threshold: int = DEFAULT_FREE_DELIVERY_THRESHOLD

    def fee_for(self, delivery_method: str, subtotal: int) -> int:
        """Delivery fee in cents for an order of ``subtotal`` cents."""
        if delivery_method != DeliveryMethod.DELIVERY.value:
            return 0
        if subtotal >= self.free_delivery_threshold:
            return 0
        return self.delivery_fee


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def validate_checkout(store: CartStore, details: CheckoutDetails, customer: Customer, today: date | None = None):
    """Raise ``ValidationError`` listing every problem with the checkout request."""
    if not customer.is_authenticated or _blank(customer.id):
        raise ValidationError({"customer": ["You must be signed in to place an order"]})

    errors: dict[str, list[str]] = {}

    for field in ("customer_name", "customer_email", "customer_phone"):
        if _blank(getattr(details, field)):
            errors[field] = ["This field is required"]

    methods = {method.value for method in DeliveryMethod}
    if details.delivery_method not in methods:
        errors["delivery_method"] = [f"Must be one of: {', '.join(sorted(methods))}"]
    elif details.delivery_method == DeliveryMethod.DELIVERY.value and _blank(details.delivery_address):
        errors["delivery_address"] = ["Delivery address is required for delivery orders"]

    if details.ready_by is not None:
        today = today or datetime.now(UTC).date()
        earliest = today + timedelta(days=MIN_LEAD_DAYS)
        if details.ready_by < earliest:
            errors["ready_by"] = [f"Orders need at least {MIN_LEAD_DAYS} days notice; earliest date is {earliest}"]

    if store.is_empty():
        errors["items"] = ["Your cart is empty"]

    if errors:
        raise ValidationError(errors)


def checkout(
    store: CartStore,
    details: CheckoutDetails,
    customer: Customer,
    pricing: DeliveryPricing | None = None,
    idempotency_key: str | None = None,
    today: date | None = None,
) -> str:
    """Place an order for the cart's contents and clear the cart.

    Returns the id of the placed order. A retry carrying an idempotency key
    this customer already used returns the earlier order's id and leaves the
    cart untouched, whatever it holds now.
    """
    if idempotency_key and customer.is_authenticated and not _blank(customer.id):
        existing = order_for_idempotency_key(customer.id, idempotency_key)
        if existing is not None:
            logger.info("checkout_replayed", order_id=str(existing.id), customer_id=str(customer.id))
            return str(existing.id)

    validate_checkout(store, details, customer, today=today)

    pricing = pricing or DeliveryPricing()
    subtotal = store.subtotal_cents
    delivery_fee = pricing.fee_for(details.delivery_method, subtotal)

    items = [
        {
            "product_id": item.product_id,
            "product_name": item.name,
            "product_image": item.image,
            "quantity": item.quantity,
            "unit_price": item.unit_price,
        }
        for item in store.cart.items
    ]

    order_id = current_domain.process(
        PlaceOrder(
            customer_id=str(customer.id),
            customer_name=details.customer_name.strip(),
            customer_email=details.customer_email.strip(),
            customer_phone=details.customer_phone.strip(),
            delivery_method=details.delivery_method,
            delivery_address=details.delivery_address
            if details.delivery_method == DeliveryMethod.DELIVERY.value
            else None,
            special_instructions=details.special_instructions,
            ready_by=details.ready_by.isoformat() if details.ready_by else None,
            items=json.dumps(items),
            delivery_fee=delivery_fee,
            idempotency_key=idempotency_key,
        ),
        asynchronous=False,
    )

    store.clear_cart()
    logger.info("checkout_completed", order_id=order_id, customer_id=str(customer.id))
    return order_id
