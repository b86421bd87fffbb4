"""WebsiteSettings — the single site-wide settings record.

Business details shown in the footer and contact page, and the delivery fee
schedule applied at checkout. Until the back office saves the record for the
first time, ``current_settings()`` hands out an unsaved record with defaults.
"""

from datetime import UTC, datetime

import structlog
from protean import handle, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront

logger = structlog.get_logger(__name__)

SETTINGS_ID = "website"

DEFAULT_DELIVERY_FEE = 1000  # cents
DEFAULT_FREE_DELIVERY_THRESHOLD = 7500  # cents

EDITABLE_FIELDS = (
    "business_name",
    "tagline",
    "description",
    "phone",
    "email",
    "address",
    "business_hours",
    "delivery_area",
    "delivery_fee",
    "free_delivery_threshold",
)


@storefront.aggregate
class WebsiteSettings:
    id: String(identifier=True, max_length=50, default=SETTINGS_ID)
    business_name: String(max_length=255, default="Bakehouse")
    tagline: String(max_length=255)
    description: Text()
    phone: String(max_length=50)
    email: String(max_length=255)
    address: Text()
    business_hours: Text()
    delivery_area: Text()
    delivery_fee: Integer(default=DEFAULT_DELIVERY_FEE)  # cents
    free_delivery_threshold: Integer(default=DEFAULT_FREE_DELIVERY_THRESHOLD)  # cents
    updated_at: DateTime()
    updated_by: String(max_length=255)

    @invariant.post
    def fees_are_not_negative(self):
        errors = {}
        if self.delivery_fee is not None and self.delivery_fee < 0:
            errors["delivery_fee"] = ["Delivery fee cannot be negative"]
        if self.free_delivery_threshold is not None and self.free_delivery_threshold < 0:
            errors["free_delivery_threshold"] = ["Free delivery threshold cannot be negative"]
        if errors:
            raise ValidationError(errors)


@storefront.command(part_of="WebsiteSettings")
class SaveWebsiteSettings:
    business_name: String(max_length=255)
    tagline: String(max_length=255)
    description: Text()
    phone: String(max_length=50)
    email: String(max_length=255)
    address: Text()
    business_hours: Text()
    delivery_area: Text()
    delivery_fee: Integer()  # cents
    free_delivery_threshold: Integer()  # cents
    updated_by: String(max_length=255)


@storefront.command_handler(part_of=WebsiteSettings)
class SaveWebsiteSettingsHandler:
    @handle(SaveWebsiteSettings)
    def save_settings(self, command):
        repo = current_domain.repository_for(WebsiteSettings)
        try:
            settings = repo.get(SETTINGS_ID)
        except ObjectNotFoundError:
            settings = WebsiteSettings(id=SETTINGS_ID)

        for field in EDITABLE_FIELDS:
            value = getattr(command, field)
            if value is not None:
                setattr(settings, field, value)
        settings.updated_at = datetime.now(UTC)
        settings.updated_by = command.updated_by

        repo.add(settings)
        logger.info("website_settings_saved", updated_by=command.updated_by)


def current_settings() -> WebsiteSettings:
    try:
        return current_domain.repository_for(WebsiteSettings).get(SETTINGS_ID)
    except ObjectNotFoundError:
        return WebsiteSettings(id=SETTINGS_ID)
