"""Storefront FastAPI application.

Serves catalogue browsing, cart, checkout, account and back-office endpoints,
processing every command synchronously inside the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level, once the routers are imported,
# so uvicorn workers share it.
# PROTEAN_ENV selects the domain.toml overlay (memory by default,
# PostgreSQL under "production").
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront import __version__
from storefront.domain import storefront
from storefront.utils.logging import bind_request

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Seed shop storefront: catalogue, cart, checkout and back-office",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context for each request."""
    bind_request(
        request_id=request.headers.get("X-Request-Id", uuid4().hex),
        method=request.method,
        path=request.url.path,
    )
    with storefront.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers and error mapping
# ---------------------------------------------------------------------------
from storefront.api.errors import register_storefront_exception_handlers  # noqa: E402
from storefront.catalogue.api import admin_catalogue_router, catalogue_router  # noqa: E402
from storefront.dashboard.routes import dashboard_router  # noqa: E402
from storefront.identity.api import account_profile_router, admin_user_router  # noqa: E402
from storefront.ordering.api import (  # noqa: E402
    account_order_router,
    admin_order_router,
    cart_router,
    checkout_router,
)
from storefront.payments.api import payment_router  # noqa: E402

storefront.init()

for router in (
    catalogue_router,
    cart_router,
    checkout_router,
    account_order_router,
    account_profile_router,
    dashboard_router,
    admin_catalogue_router,
    admin_order_router,
    admin_user_router,
    payment_router,
):
    app.include_router(router)

register_exception_handlers(app)
register_storefront_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": storefront.name,
            "version": __version__,
        }
    )
