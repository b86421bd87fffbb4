"""Product aggregate — a bakery item offered on the shop page.

Products carry small integer ids because shoppers' carts refer to them by
number. Ids are handed out by the ``ProductNumbering`` singleton so that they
never depend on the storage provider's key generation.
"""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from shared.money import from_cents
from storefront.catalogue.events import ProductAdded, ProductAvailabilityChanged, ProductUpdated
from storefront.domain import storefront

PRODUCT_NUMBERING_ID = "products"


@storefront.aggregate
class ProductNumbering:
    id: String(identifier=True, max_length=50)
    last_number: Integer(default=0, min_value=0)

    def next_number(self) -> int:
        self.last_number += 1
        return self.last_number


@storefront.aggregate
class Product:
    id: Integer(identifier=True)
    name: String(required=True, max_length=255)
    description: Text()
    price: Integer(required=True, min_value=0)  # cents
    image: String(max_length=1000)
    category_id: Identifier()
    in_stock: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @property
    def price_amount(self):
        return from_cents(self.price)

    @classmethod
    def add(cls, product_id, name, price, description=None, image=None, category_id=None, in_stock=True):
        now = datetime.now(UTC)
        product = cls(
            id=product_id,
            name=name,
            description=description,
            price=price,
            image=image,
            category_id=category_id,
            in_stock=in_stock,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=product.name,
                price=product.price,
                category_id=category_id,
                added_at=now,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, image=None, category_id=None):
        """Apply the given changes; ``None`` leaves a field as it is."""
        previous_price = self.price

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if image is not None:
            self.image = image
        if category_id is not None:
            self.category_id = category_id

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                previous_price=previous_price,
            )
        )

    def set_availability(self, in_stock: bool):
        if self.in_stock == in_stock:
            return

        self.in_stock = in_stock
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductAvailabilityChanged(product_id=self.id, in_stock=in_stock))
