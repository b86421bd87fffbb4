"""Gallery management — commands and handlers."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.gallery.gallery import GalleryItem


@storefront.command(part_of="GalleryItem")
class AddGalleryItem:
    name: String(required=True, max_length=255)
    image: String(required=True, max_length=1000)
    categories: Text()  # JSON array of category names
    media_type: String(max_length=10, default="image")


@storefront.command(part_of="GalleryItem")
class UpdateGalleryItem:
    gallery_item_id: Identifier(required=True)
    name: String(max_length=255)
    image: String(max_length=1000)
    categories: Text()  # JSON array of category names
    media_type: String(max_length=10)


@storefront.command(part_of="GalleryItem")
class RemoveGalleryItem:
    gallery_item_id: Identifier(required=True)


def _categories(raw):
    return json.loads(raw) if raw else None


@storefront.command_handler(part_of=GalleryItem)
class ManageGalleryHandler:
    @handle(AddGalleryItem)
    def add_gallery_item(self, command):
        item = GalleryItem.create(
            name=command.name,
            image=command.image,
            categories=_categories(command.categories),
            media_type=command.media_type or "image",
        )
        current_domain.repository_for(GalleryItem).add(item)
        return str(item.id)

    @handle(UpdateGalleryItem)
    def update_gallery_item(self, command):
        repo = current_domain.repository_for(GalleryItem)
        item = repo.get(command.gallery_item_id)
        item.update(
            name=command.name,
            image=command.image,
            categories=_categories(command.categories),
            media_type=command.media_type,
        )
        repo.add(item)

    @handle(RemoveGalleryItem)
    def remove_gallery_item(self, command):
        repo = current_domain.repository_for(GalleryItem)
        repo._dao.delete(repo.get(command.gallery_item_id))
