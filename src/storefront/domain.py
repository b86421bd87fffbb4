"""Storefront bounded context — catalogue, gallery and website settings.

Everything the back office curates and the shop front reads: products and
their categories, gallery media, and the single site-wide settings record
that also holds the delivery fee schedule used at checkout.
"""

import structlog
from protean.domain import Domain

logger = structlog.get_logger(__name__)

storefront = Domain(name="storefront")
