"""Bakehouse FastAPI application.

Serves the shop front and back office over HTTP, processing commands
synchronously. Each request is wrapped in the correct domain context based on
its URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from ordering.domain import ordering
from shared.config import get_settings
from shared.logging import add_context, clear_context, configure_logging, get_logger
from storefront.domain import storefront

settings = get_settings()
configure_logging(log_dir=settings.log_dir)
logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the configuration overlay.
ordering.init()
storefront.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/cart": ordering,
    "/checkout": ordering,
    "/orders": ordering,
    "/admin/orders": ordering,
    "/products": storefront,
    "/categories": storefront,
    "/gallery": storefront,
    "/settings": storefront,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path == prefix or path.startswith(prefix + "/"):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Bakehouse API",
    description="Bakery storefront — Ordering & Storefront domains",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context and bind request details to log lines."""
    domain = _resolve_domain(request.url.path)
    clear_context()
    add_context(method=request.method, path=request.url.path, domain=domain.name if domain else None)
    try:
        if domain is not None:
            with domain.domain_context():
                return await call_next(request)
        # Health check and docs run outside any domain
        return await call_next(request)
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from ordering.api.dependencies import delivery_pricing  # noqa: E402
from ordering.api.routes import admin_order_router, cart_router, order_router  # noqa: E402
from ordering.checkout.checkout import DeliveryPricing  # noqa: E402
from storefront.api import category_router, gallery_router, product_router, settings_router  # noqa: E402
from storefront.settings.settings import current_settings  # noqa: E402

app.include_router(cart_router)
app.include_router(order_router)
app.include_router(admin_order_router)
app.include_router(product_router)
app.include_router(category_router)
app.include_router(gallery_router)
app.include_router(settings_router)


def storefront_delivery_pricing() -> DeliveryPricing:
    """Fee schedule from the storefront's website settings."""
    with storefront.domain_context():
        website = current_settings()
    return DeliveryPricing(
        delivery_fee=website.delivery_fee,
        free_delivery_threshold=website.free_delivery_threshold,
    )


app.dependency_overrides[delivery_pricing] = storefront_delivery_pricing


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "ordering": {"name": ordering.name},
                "storefront": {"name": storefront.name},
            },
        }
    )
