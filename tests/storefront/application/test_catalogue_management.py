"""Application tests for the catalogue commands and queries."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.category import Category
from storefront.catalogue.management import (
    AddProduct,
    CreateCategory,
    RemoveProduct,
    SetProductAvailability,
    UpdateProduct,
)
from storefront.catalogue.product import Product
from storefront.catalogue.queries import get_product, list_categories, list_products


def _create_category(**overrides):
    defaults = {"name": "Cakes"}
    defaults.update(overrides)
    return current_domain.process(CreateCategory(**defaults), asynchronous=False)


def _add_product(**overrides):
    defaults = {"name": "Sourdough Loaf", "price": "8.50"}
    defaults.update(overrides)
    return current_domain.process(AddProduct(**defaults), asynchronous=False)


class TestCreateCategory:
    def test_creates_with_derived_slug(self):
        category_id = _create_category(name="Birthday Cakes")
        category = current_domain.repository_for(Category).get(category_id)
        assert category.slug == "birthday-cakes"

    def test_duplicate_slug_rejected(self):
        _create_category(name="Cakes")
        with pytest.raises(ValidationError) as exc:
            _create_category(name="CAKES")
        assert "slug" in exc.value.messages

    def test_categories_listed_by_display_order_then_name(self):
        _create_category(name="Pastries", display_order=2)
        _create_category(name="Cakes", display_order=1)
        _create_category(name="breads", display_order=2)
        assert [c.name for c in list_categories()] == ["Cakes", "breads", "Pastries"]


class TestAddProduct:
    def test_ids_are_sequential_integers(self):
        assert _add_product() == 1
        assert _add_product(name="Baguette", price="4.00") == 2

    def test_decorated_price_stored_in_cents(self):
        product_id = _add_product(price="$1,250.50")
        assert current_domain.repository_for(Product).get(product_id).price == 125050

    def test_bad_price_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _add_product(price="free")
        assert "price" in exc.value.messages

    def test_oversized_price_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _add_product(price="9" * 30)
        assert "price" in exc.value.messages

    def test_unknown_category_rejected(self):
        with pytest.raises(ObjectNotFoundError):
            _add_product(category_id="no-such-category")

    def test_product_in_category(self):
        category_id = _create_category()
        product_id = _add_product(name="Chocolate Cake", price="35.00", category_id=category_id)
        assert str(get_product(product_id).category_id) == category_id


class TestUpdateProduct:
    def test_update_price_and_name(self):
        product_id = _add_product()
        current_domain.process(
            UpdateProduct(product_id=product_id, name="Country Sourdough", price="9.00"),
            asynchronous=False,
        )
        product = get_product(product_id)
        assert product.name == "Country Sourdough"
        assert product.price == 900

    def test_update_missing_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateProduct(product_id=99, name="Ghost"), asynchronous=False)


class TestAvailabilityAndRemoval:
    def test_out_of_stock_hidden_from_in_stock_listing(self):
        kept = _add_product(name="Baguette", price="4.00")
        sold_out = _add_product(name="Croissant", price="3.00")
        current_domain.process(SetProductAvailability(product_id=sold_out, in_stock=False), asynchronous=False)

        assert [p.id for p in list_products(in_stock_only=True)] == [kept]
        assert {p.id for p in list_products()} == {kept, sold_out}

    def test_listing_newest_first(self):
        first = _add_product(name="Baguette", price="4.00")
        second = _add_product(name="Croissant", price="3.00")
        assert [p.id for p in list_products()] == [second, first]

    def test_listing_by_category(self):
        cakes = _create_category(name="Cakes")
        cake = _add_product(name="Chocolate Cake", price="35.00", category_id=cakes)
        _add_product(name="Baguette", price="4.00")
        assert [p.id for p in list_products(category_id=cakes)] == [cake]

    def test_remove_product(self):
        product_id = _add_product()
        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            get_product(product_id)

    def test_removed_ids_are_not_reused(self):
        product_id = _add_product()
        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
        assert _add_product(name="Baguette", price="4.00") == product_id + 1


class TestLongCatalogue:
    def test_listing_goes_past_one_page(self):
        for number in range(105):
            _add_product(name=f"Loaf {number}", price="4.00")

        products = list_products()
        assert len(products) == 105
        assert products[0].id == 105
