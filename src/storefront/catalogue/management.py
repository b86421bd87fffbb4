"""Catalogue management — commands and handlers for categories and products."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from shared.money import to_cents
from storefront.catalogue.category import Category, slugify
from storefront.catalogue.product import PRODUCT_NUMBERING_ID, Product, ProductNumbering
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


def _price_in_cents(value) -> int:
    try:
        return to_cents(value)
    except ValueError as exc:
        raise ValidationError({"price": [str(exc)]}) from None


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    display_order: Integer(default=0)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)

        slug = command.slug or slugify(command.name)
        if repo._dao.query.filter(slug=slug).all().items:
            raise ValidationError({"slug": [f"A category with slug '{slug}' already exists"]})

        category = Category.create(
            name=command.name,
            slug=slug,
            display_order=command.display_order or 0,
        )
        repo.add(category)
        return str(category.id)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    price: String(required=True, max_length=50)  # "35.00" or "$35.00"
    description: Text()
    image: String(max_length=1000)
    category_id: Identifier()
    in_stock: Boolean(default=True)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Integer(required=True)
    name: String(max_length=255)
    price: String(max_length=50)
    description: Text()
    image: String(max_length=1000)
    category_id: Identifier()


@storefront.command(part_of="Product")
class SetProductAvailability:
    product_id: Integer(required=True)
    in_stock: Boolean(required=True)


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id: Integer(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    def _allocate_product_id(self) -> int:
        repo = current_domain.repository_for(ProductNumbering)
        try:
            numbering = repo.get(PRODUCT_NUMBERING_ID)
        except ObjectNotFoundError:
            numbering = ProductNumbering(id=PRODUCT_NUMBERING_ID)

        number = numbering.next_number()
        repo.add(numbering)
        return number

    @handle(AddProduct)
    def add_product(self, command):
        price = _price_in_cents(command.price)
        if command.category_id:
            current_domain.repository_for(Category).get(command.category_id)

        product = Product.add(
            product_id=self._allocate_product_id(),
            name=command.name,
            price=price,
            description=command.description,
            image=command.image,
            category_id=command.category_id,
            in_stock=command.in_stock if command.in_stock is not None else True,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("product_added", product_id=product.id, price=price)
        return product.id

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.category_id:
            current_domain.repository_for(Category).get(command.category_id)

        product.update_details(
            name=command.name,
            description=command.description,
            price=_price_in_cents(command.price) if command.price is not None else None,
            image=command.image,
            category_id=command.category_id,
        )
        repo.add(product)

    @handle(SetProductAvailability)
    def set_availability(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.set_availability(command.in_stock)
        repo.add(product)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)

        logger.info("product_removed", product_id=command.product_id)
