"""Tests for the Category aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.catalogue.category import Category, slugify
from storefront.catalogue.events import CategoryCreated


class TestSlugify:
    @pytest.mark.parametrize(
        "name, slug",
        [
            ("Cakes", "cakes"),
            ("Birthday Cakes", "birthday-cakes"),
            ("  Breads & Rolls!  ", "breads-rolls"),
        ],
    )
    def test_slugify(self, name, slug):
        assert slugify(name) == slug


class TestCategoryCreate:
    def test_slug_derived_from_name(self):
        category = Category.create(name="Celebration Cakes")
        assert category.slug == "celebration-cakes"
        assert category.display_order == 0
        assert category.created_at is not None

    def test_explicit_slug_kept(self):
        category = Category.create(name="Celebration Cakes", slug="cakes", display_order=3)
        assert category.slug == "cakes"
        assert category.display_order == 3

    def test_raises_category_created(self):
        category = Category.create(name="Pastries")
        event = category._events[0]
        assert isinstance(event, CategoryCreated)
        assert event.slug == "pastries"

    def test_name_required(self):
        with pytest.raises(ValidationError):
            Category.create(name="")
