"""Tests for the GalleryItem aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.gallery.gallery import GalleryItem


class TestGalleryItemCreate:
    def test_defaults_to_image(self):
        item = GalleryItem.create(name="Wedding Tier", image="wedding.jpg")
        assert item.media_type == "image"
        assert item.category_list == []

    def test_categories_are_trimmed_and_deduplicated(self):
        item = GalleryItem.create(
            name="Wedding Tier",
            image="wedding.jpg",
            categories=[" Weddings", "Cakes", "Weddings", ""],
        )
        assert item.category_list == ["Weddings", "Cakes"]

    def test_single_category_string(self):
        item = GalleryItem.create(name="Croissants", image="croissant.jpg", categories="Pastries")
        assert item.category_list == ["Pastries"]

    def test_non_string_category_rejected(self):
        with pytest.raises(ValidationError):
            GalleryItem.create(name="Croissants", image="croissant.jpg", categories=[42])

    def test_unknown_media_type_rejected(self):
        with pytest.raises(ValidationError):
            GalleryItem.create(name="Croissants", image="croissant.gif", media_type="hologram")


class TestGalleryItemCategories:
    def test_in_category_ignores_case(self):
        item = GalleryItem.create(name="Wedding Tier", image="wedding.jpg", categories=["Weddings"])
        assert item.in_category("weddings")
        assert not item.in_category("birthdays")


class TestGalleryItemUpdate:
    def test_update_replaces_categories(self):
        item = GalleryItem.create(name="Wedding Tier", image="wedding.jpg", categories=["Weddings"])
        item.update(categories=["Anniversaries"], media_type="video")
        assert item.category_list == ["Anniversaries"]
        assert item.media_type == "video"
        assert item.name == "Wedding Tier"
