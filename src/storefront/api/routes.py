"""FastAPI endpoints for the Storefront domain.

Reads are public. Writes come from the back office and need the
``X-Admin-Email`` header set by the auth gateway.
"""

import json

from fastapi import APIRouter, Depends
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from shared.auth import require_admin
from shared.config import get_settings
from shared.money import to_cents
from storefront.api.schemas import (
    AddGalleryItemRequest,
    AddProductRequest,
    CategoryIdResponse,
    CategoryResponse,
    CreateCategoryRequest,
    GalleryItemIdResponse,
    GalleryItemResponse,
    ProductIdResponse,
    ProductResponse,
    SetAvailabilityRequest,
    StatusResponse,
    UpdateGalleryItemRequest,
    UpdateProductRequest,
    WebsiteSettingsRequest,
    WebsiteSettingsResponse,
)
from storefront.catalogue.management import (
    AddProduct,
    CreateCategory,
    RemoveProduct,
    SetProductAvailability,
    UpdateProduct,
)
from storefront.catalogue.queries import get_product, list_categories, list_products
from storefront.gallery.management import AddGalleryItem, RemoveGalleryItem, UpdateGalleryItem
from storefront.gallery.queries import list_gallery
from storefront.settings.settings import SaveWebsiteSettings, current_settings

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
gallery_router = APIRouter(prefix="/gallery", tags=["gallery"])
settings_router = APIRouter(prefix="/settings", tags=["settings"])


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def browse_products(category_id: str | None = None, in_stock_only: bool = False) -> list[ProductResponse]:
    products = list_products(category_id=category_id, in_stock_only=in_stock_only)
    return [ProductResponse.from_product(product, get_settings().currency_symbol) for product in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def show_product(product_id: int) -> ProductResponse:
    return ProductResponse.from_product(get_product(product_id), get_settings().currency_symbol)


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest, admin_email: str = Depends(require_admin)) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        price=str(body.price),
        description=body.description,
        image=body.image,
        category_id=body.category_id,
        in_stock=body.in_stock,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(
    product_id: int,
    body: UpdateProductRequest,
    admin_email: str = Depends(require_admin),
) -> StatusResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        price=str(body.price) if body.price is not None else None,
        description=body.description,
        image=body.image,
        category_id=body.category_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/availability", response_model=StatusResponse)
async def set_product_availability(
    product_id: int,
    body: SetAvailabilityRequest,
    admin_email: str = Depends(require_admin),
) -> StatusResponse:
    command = SetProductAvailability(product_id=product_id, in_stock=body.in_stock)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: int, admin_email: str = Depends(require_admin)) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def browse_categories() -> list[CategoryResponse]:
    return [
        CategoryResponse(
            category_id=str(category.id),
            name=category.name,
            slug=category.slug,
            display_order=category.display_order,
        )
        for category in list_categories()
    ]


@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest, admin_email: str = Depends(require_admin)) -> CategoryIdResponse:
    command = CreateCategory(
        name=body.name,
        slug=body.slug,
        display_order=body.display_order,
    )
    result = current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=result)


# --- Gallery endpoints ---


@gallery_router.get("", response_model=list[GalleryItemResponse])
async def browse_gallery(category: str | None = None) -> list[GalleryItemResponse]:
    return [GalleryItemResponse.from_item(item) for item in list_gallery(category=category)]


@gallery_router.post("", status_code=201, response_model=GalleryItemIdResponse)
async def add_gallery_item(
    body: AddGalleryItemRequest,
    admin_email: str = Depends(require_admin),
) -> GalleryItemIdResponse:
    command = AddGalleryItem(
        name=body.name,
        image=body.image,
        categories=json.dumps(body.categories),
        media_type=body.media_type,
    )
    result = current_domain.process(command, asynchronous=False)
    return GalleryItemIdResponse(gallery_item_id=result)


@gallery_router.put("/{gallery_item_id}", response_model=StatusResponse)
async def update_gallery_item(
    gallery_item_id: str,
    body: UpdateGalleryItemRequest,
    admin_email: str = Depends(require_admin),
) -> StatusResponse:
    command = UpdateGalleryItem(
        gallery_item_id=gallery_item_id,
        name=body.name,
        image=body.image,
        categories=json.dumps(body.categories) if body.categories is not None else None,
        media_type=body.media_type,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@gallery_router.delete("/{gallery_item_id}", response_model=StatusResponse)
async def remove_gallery_item(gallery_item_id: str, admin_email: str = Depends(require_admin)) -> StatusResponse:
    current_domain.process(RemoveGalleryItem(gallery_item_id=gallery_item_id), asynchronous=False)
    return StatusResponse()


# --- Website settings endpoints ---


def _cents(value, field):
    if value is None:
        return None
    try:
        return to_cents(value)
    except ValueError as exc:
        raise ValidationError({field: [str(exc)]}) from None


@settings_router.get("", response_model=WebsiteSettingsResponse)
async def show_settings() -> WebsiteSettingsResponse:
    return WebsiteSettingsResponse.from_settings(current_settings())


@settings_router.put("", response_model=WebsiteSettingsResponse)
async def save_settings(
    body: WebsiteSettingsRequest,
    admin_email: str = Depends(require_admin),
) -> WebsiteSettingsResponse:
    command = SaveWebsiteSettings(
        business_name=body.business_name,
        tagline=body.tagline,
        description=body.description,
        phone=body.phone,
        email=body.email,
        address=body.address,
        business_hours=body.business_hours,
        delivery_area=body.delivery_area,
        delivery_fee=_cents(body.delivery_fee, "delivery_fee"),
        free_delivery_threshold=_cents(body.free_delivery_threshold, "free_delivery_threshold"),
        updated_by=admin_email,
    )
    current_domain.process(command, asynchronous=False)
    return WebsiteSettingsResponse.from_settings(current_settings())
