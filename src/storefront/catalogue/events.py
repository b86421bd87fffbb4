"""Domain events for the Category and Product aggregates."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Category")
class CategoryCreated:
    """A new product category was added to the shop."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id: Integer(required=True)
    name: String(required=True)
    price: Integer(required=True)  # cents
    category_id: Identifier()
    added_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """A product's name, description, price, image or category changed."""

    __version__ = 1

    product_id: Integer(required=True)
    name: String(required=True)
    price: Integer(required=True)  # cents
    previous_price: Integer(required=True)  # cents


@storefront.event(part_of="Product")
class ProductAvailabilityChanged:
    """A product was marked in or out of stock."""

    __version__ = 1

    product_id: Integer(required=True)
    in_stock: Boolean(required=True)
