from protean.utils.globals import current_domain

from shared.paging import fetch_all
from storefront.gallery.gallery import GalleryItem


def list_gallery(category=None) -> list[GalleryItem]:
    """Gallery items newest first, optionally only those tagged with ``category``."""
    items = fetch_all(current_domain.repository_for(GalleryItem)._dao.query.order_by("-created_at"))
    if category:
        items = [item for item in items if item.in_category(category)]
    return items
