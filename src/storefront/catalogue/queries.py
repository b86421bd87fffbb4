"""Read side of the catalogue: category and product listings."""

from protean.utils.globals import current_domain

from shared.paging import fetch_all
from storefront.catalogue.category import Category
from storefront.catalogue.product import Product


def list_categories() -> list[Category]:
    categories = fetch_all(current_domain.repository_for(Category)._dao.query)
    return sorted(categories, key=lambda c: (c.display_order, c.name.lower()))


def list_products(category_id=None, in_stock_only=False) -> list[Product]:
    """Products newest first, optionally narrowed to one category or to what is in stock."""
    query = current_domain.repository_for(Product)._dao.query
    if category_id:
        query = query.filter(category_id=str(category_id))
    if in_stock_only:
        query = query.filter(in_stock=True)

    products = fetch_all(query.order_by("-created_at"))
    # Products added within the same clock tick fall back to id order.
    return sorted(products, key=lambda p: (p.created_at, p.id), reverse=True)


def get_product(product_id) -> Product:
    return current_domain.repository_for(Product).get(int(product_id))
