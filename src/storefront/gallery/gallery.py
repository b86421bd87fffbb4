"""GalleryItem aggregate — photos and videos of past bakes shown on the gallery page."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from storefront.domain import storefront


class MediaType(Enum):
    IMAGE = "image"
    VIDEO = "video"


def _normalise_categories(categories) -> list[str]:
    if categories is None:
        return []
    if isinstance(categories, str):
        categories = [categories]
    cleaned = []
    for category in categories:
        if not isinstance(category, str):
            raise ValidationError({"categories": ["Categories must be strings"]})
        category = category.strip()
        if category and category not in cleaned:
            cleaned.append(category)
    return cleaned


@storefront.aggregate
class GalleryItem:
    name: String(required=True, max_length=255)
    image: String(required=True, max_length=1000)
    categories: Text()  # JSON array of category names
    media_type: String(choices=MediaType, default=MediaType.IMAGE.value)
    created_at: DateTime()
    updated_at: DateTime()

    @property
    def category_list(self) -> list[str]:
        return json.loads(self.categories) if self.categories else []

    def in_category(self, category: str) -> bool:
        return category.lower() in (c.lower() for c in self.category_list)

    @classmethod
    def create(cls, name, image, categories=None, media_type=MediaType.IMAGE.value):
        now = datetime.now(UTC)
        return cls(
            name=name,
            image=image,
            categories=json.dumps(_normalise_categories(categories)),
            media_type=media_type,
            created_at=now,
            updated_at=now,
        )

    def update(self, name=None, image=None, categories=None, media_type=None):
        if name is not None:
            self.name = name
        if image is not None:
            self.image = image
        if categories is not None:
            self.categories = json.dumps(_normalise_categories(categories))
        if media_type is not None:
            self.media_type = media_type
        self.updated_at = datetime.now(UTC)
