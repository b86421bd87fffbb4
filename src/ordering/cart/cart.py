"""Shopping Cart aggregate — the shopper's pending line items before checkout.

The cart is not kept in a repository. It belongs to a single browser session,
is persisted through a key-value storage adapter by ``CartStore`` and is
cleared once an order has been placed from it.

Each product appears at most once: adding a product that is already in the
cart bumps its quantity, and a quantity dropping to zero removes the line.
Lines keep insertion order, which is also display order.
"""

from datetime import UTC, datetime
from decimal import Decimal

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Integer, String

from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from ordering.domain import ordering
from shared.money import from_cents


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Integer(required=True)
    name = String(required=True, max_length=255)
    unit_price = Integer(required=True, min_value=0)  # cents
    image = String(max_length=1000)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @property
    def price(self) -> Decimal:
        return from_cents(self.unit_price)

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity

    def to_storage(self) -> dict:
        return {
            "id": self.product_id,
            "name": self.name,
            "price": str(self.price),
            "image": self.image,
            "quantity": self.quantity,
        }


@ordering.aggregate
class ShoppingCart:
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [item.product_id for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can only appear once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        now = datetime.now(UTC)
        return cls(created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def subtotal(self) -> int:
        """Sum of price x quantity over all lines, in cents."""
        return sum(item.line_total for item in self.items)

    @property
    def item_count(self) -> int:
        """Sum of quantities, not the number of lines."""
        return sum(item.quantity for item in self.items)

    def line_for(self, product_id):
        return next((i for i in self.items if i.product_id == int(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, name, unit_price, image=None):
        """Add one unit of a product, appending a new line if it is not in the cart yet."""
        existing = self.line_for(product_id)
        now = datetime.now(UTC)

        if existing:
            existing.quantity += 1
            quantity = existing.quantity
        else:
            self.add_items(
                CartItem(
                    product_id=int(product_id),
                    name=name,
                    unit_price=unit_price,
                    image=image,
                    quantity=1,
                    added_at=now,
                )
            )
            quantity = 1

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=int(product_id),
                quantity=quantity,
            )
        )

    def update_item_quantity(self, product_id, new_quantity):
        """Set the quantity of a line. Zero or less removes it; unknown products are ignored."""
        item = self.line_for(product_id)
        if item is None:
            return

        if new_quantity <= 0:
            self.remove_item(product_id)
            return

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=item.product_id,
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id):
        """Remove a line from the cart. Removing an absent product is a no-op."""
        item = self.line_for(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=item.product_id,
            )
        )

    def clear(self):
        lines = list(self.items)
        for line in lines:
            self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                lines_removed=len(lines),
            )
        )

    # -------------------------------------------------------------------
    # Rehydration
    # -------------------------------------------------------------------
    def restore_line(self, product_id, name, unit_price, quantity, image=None):
        """Put back a previously persisted line without raising events.

        Duplicate rows for the same product are folded into one line.
        """
        existing = self.line_for(product_id)
        if existing:
            existing.quantity += quantity
            return

        self.add_items(
            CartItem(
                product_id=int(product_id),
                name=name,
                unit_price=unit_price,
                image=image,
                quantity=quantity,
                added_at=datetime.now(UTC),
            )
        )
