"""Category aggregate — groups products on the shop page."""

import re
from datetime import UTC, datetime

from protean.fields import DateTime, Integer, String

from storefront.catalogue.events import CategoryCreated
from storefront.domain import storefront


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


@storefront.aggregate
class Category:
    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120)
    display_order: Integer(default=0)
    created_at: DateTime()

    @classmethod
    def create(cls, name, slug=None, display_order=0):
        category = cls(
            name=name,
            slug=slug or slugify(name),
            display_order=display_order,
            created_at=datetime.now(UTC),
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=category.name,
                slug=category.slug,
            )
        )
        return category
