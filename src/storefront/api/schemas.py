"""Pydantic request/response schemas for the Storefront API."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from shared.money import format_price, from_cents


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
class CreateCategoryRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str | None = None
    display_order: int = 0


class CategoryIdResponse(BaseModel):
    category_id: str


class CategoryResponse(BaseModel):
    category_id: str
    name: str
    slug: str
    display_order: int


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    price: Decimal | str
    description: str | None = None
    image: str | None = None
    category_id: str | None = None
    in_stock: bool = True

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Chocolate Celebration Cake",
                    "price": "$35.00",
                    "description": "Three layers of chocolate sponge with ganache.",
                    "image": "https://cdn.example.com/choc-cake.jpg",
                    "category_id": None,
                    "in_stock": True,
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = None
    price: Decimal | str | None = None
    description: str | None = None
    image: str | None = None
    category_id: str | None = None


class SetAvailabilityRequest(BaseModel):
    in_stock: bool


class ProductIdResponse(BaseModel):
    product_id: int


class ProductResponse(BaseModel):
    product_id: int
    name: str
    description: str | None = None
    price: Decimal
    display_price: str
    image: str | None = None
    category_id: str | None = None
    in_stock: bool
    created_at: datetime | None = None

    @classmethod
    def from_product(cls, product, currency_symbol: str = "$") -> "ProductResponse":
        return cls(
            product_id=product.id,
            name=product.name,
            description=product.description,
            price=from_cents(product.price),
            display_price=format_price(product.price, currency_symbol),
            image=product.image,
            category_id=str(product.category_id) if product.category_id else None,
            in_stock=product.in_stock,
            created_at=product.created_at,
        )


# ---------------------------------------------------------------------------
# Gallery
# ---------------------------------------------------------------------------
class AddGalleryItemRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    image: str = Field(min_length=1)
    categories: list[str] = []
    media_type: str = "image"


class UpdateGalleryItemRequest(BaseModel):
    name: str | None = None
    image: str | None = None
    categories: list[str] | None = None
    media_type: str | None = None


class GalleryItemIdResponse(BaseModel):
    gallery_item_id: str


class GalleryItemResponse(BaseModel):
    gallery_item_id: str
    name: str
    image: str
    categories: list[str]
    media_type: str
    created_at: datetime | None = None

    @classmethod
    def from_item(cls, item) -> "GalleryItemResponse":
        return cls(
            gallery_item_id=str(item.id),
            name=item.name,
            image=item.image,
            categories=item.category_list,
            media_type=item.media_type,
            created_at=item.created_at,
        )


# ---------------------------------------------------------------------------
# Website settings
# ---------------------------------------------------------------------------
class WebsiteSettingsRequest(BaseModel):
    business_name: str | None = None
    tagline: str | None = None
    description: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    business_hours: str | None = None
    delivery_area: str | None = None
    delivery_fee: Decimal | None = None
    free_delivery_threshold: Decimal | None = None


class WebsiteSettingsResponse(BaseModel):
    business_name: str | None = None
    tagline: str | None = None
    description: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    business_hours: str | None = None
    delivery_area: str | None = None
    delivery_fee: Decimal
    free_delivery_threshold: Decimal

    @classmethod
    def from_settings(cls, settings) -> "WebsiteSettingsResponse":
        return cls(
            business_name=settings.business_name,
            tagline=settings.tagline,
            description=settings.description,
            phone=settings.phone,
            email=settings.email,
            address=settings.address,
            business_hours=settings.business_hours,
            delivery_area=settings.delivery_area,
            delivery_fee=from_cents(settings.delivery_fee),
            free_delivery_threshold=from_cents(settings.free_delivery_threshold),
        )


class StatusResponse(BaseModel):
    status: str = "ok"
