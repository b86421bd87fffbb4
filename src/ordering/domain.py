"""Ordering bounded context — Shopping Cart and Orders.

Holds the shopper's cart, the checkout that turns it into an order, and the
order status lifecycle with its append-only history.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
