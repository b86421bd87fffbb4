"""Cart Store — session-scoped container around the ShoppingCart aggregate.

A ``CartStore`` is built with an explicit storage adapter, rehydrates the cart
from it once, and writes the full list of lines back after every mutation.
Persisted rows look like::

    [{"id": 1, "name": "Sourdough", "price": "10.00", "image": "...", "quantity": 2}]

Whatever is found under the storage key, the store never fails to start: data
that cannot be read back is logged and replaced by an empty cart.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal

import structlog
from protean.exceptions import ValidationError

from ordering.cart.cart import ShoppingCart
from ordering.cart.storage import CartStorage
from shared.money import from_cents, to_cents

logger = structlog.get_logger(__name__)

CART_STORAGE_KEY = "bakehouse_cart"


class MalformedCartData(ValueError):
    """Raised internally when persisted cart rows cannot be turned back into lines."""


@dataclass(frozen=True)
class CartLine:
    """Read-only view of one cart line."""

    id: int
    name: str
    price: Decimal
    image: str | None
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


def _parse_rows(raw: str) -> list[dict]:
    try:
        rows = json.loads(raw)
    except ValueError as exc:
        raise MalformedCartData(f"not JSON: {exc}") from None

    if not isinstance(rows, list):
        raise MalformedCartData("expected a list of cart lines")

    lines = []
    for row in rows:
        if not isinstance(row, dict):
            raise MalformedCartData("cart line is not an object")
        try:
            product_id = row["id"]
            quantity = row["quantity"]
            name = row["name"]
            price = to_cents(row["price"])
        except (KeyError, ValueError) as exc:
            raise MalformedCartData(f"invalid cart line: {exc}") from None

        if isinstance(product_id, bool) or not isinstance(product_id, int):
            raise MalformedCartData(f"invalid product id: {product_id!r}")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise MalformedCartData(f"invalid quantity: {quantity!r}")
        if not isinstance(name, str):
            raise MalformedCartData(f"invalid name: {name!r}")

        lines.append(
            {
                "product_id": product_id,
                "name": name,
                "unit_price": price,
                "image": row.get("image"),
                "quantity": quantity,
            }
        )
    return lines


class CartStore:
    def __init__(self, storage: CartStorage, key: str = CART_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self.cart = self._rehydrate()

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def _rehydrate(self) -> ShoppingCart:
        cart = ShoppingCart.create()

        raw = self.storage.get_item(self.key)
        if raw is None:
            return cart

        try:
            for line in _parse_rows(raw):
                cart.restore_line(**line)
        except (MalformedCartData, ValidationError) as exc:
            logger.warning("cart_rehydration_failed", key=self.key, error=str(exc))
            return ShoppingCart.create()

        return cart

    def _persist(self) -> None:
        rows = [item.to_storage() for item in self.cart.items]
        self.storage.set_item(self.key, json.dumps(rows))

    # -------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------
    def add_to_cart(self, item: Mapping) -> None:
        """Add one unit of ``item`` (``{id, name, price, image}``) to the cart."""
        try:
            product_id = int(item["id"])
        except (TypeError, ValueError):
            raise ValidationError({"id": [f"Invalid product id: {item['id']!r}"]}) from None
        try:
            unit_price = to_cents(item["price"])
        except ValueError as exc:
            raise ValidationError({"price": [str(exc)]}) from None

        self.cart.add_item(
            product_id=product_id,
            name=item["name"],
            unit_price=unit_price,
            image=item.get("image"),
        )
        self._persist()
        logger.debug("cart_item_added", product_id=product_id, item_count=self.cart.item_count)

    def update_quantity(self, product_id: int, quantity: int) -> None:
        self.cart.update_item_quantity(product_id, quantity)
        self._persist()

    def remove_from_cart(self, product_id: int) -> None:
        self.cart.remove_item(product_id)
        self._persist()

    def clear_cart(self) -> None:
        self.cart.clear()
        self._persist()

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    def get_cart_total(self) -> Decimal:
        return from_cents(self.cart.subtotal)

    def get_cart_item_count(self) -> int:
        return self.cart.item_count

    @property
    def subtotal_cents(self) -> int:
        return self.cart.subtotal

    @property
    def items(self) -> list[CartLine]:
        return [
            CartLine(
                id=item.product_id,
                name=item.name,
                price=item.price,
                image=item.image,
                quantity=item.quantity,
            )
            for item in self.cart.items
        ]

    def is_empty(self) -> bool:
        return not self.cart.items
