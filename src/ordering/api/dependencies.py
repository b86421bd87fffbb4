"""Request-scoped dependencies for the Ordering API.

Identity is asserted by the auth gateway in front of the app and arrives as
headers. The cart is keyed by the ``X-Session-Id`` header.
"""

from fastapi import Header, HTTPException

from ordering.cart.storage import FileCartStorage
from ordering.cart.store import CartStore
from ordering.checkout.checkout import Customer, DeliveryPricing
from shared.config import get_settings


def get_cart_store(x_session_id: str = Header()) -> CartStore:
    storage = FileCartStorage.for_session(get_settings().cart_dir, x_session_id)
    return CartStore(storage)


async def current_customer(
    x_user_id: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
) -> Customer:
    return Customer(id=x_user_id, email=x_user_email, is_authenticated=bool(x_user_id))


async def require_customer(
    x_user_id: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
) -> Customer:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Sign in to view your orders")
    return Customer(id=x_user_id, email=x_user_email, is_authenticated=True)


def delivery_pricing() -> DeliveryPricing:
    """Default fee schedule; the application wires in the storefront's settings."""
    return DeliveryPricing()
