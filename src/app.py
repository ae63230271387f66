"""Checkout FastAPI application.

Async web server that runs one idempotent checkout per request.
Each request to the checkout routes is wrapped in the ordering domain
context.

Usage:
    uvicorn app:create_app --factory --app-dir src --host 0.0.0.0 --port 8000

Startup requires ORDERS_STORE_URL and DEPLOYMENT_REGION; see ordering.config.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from payments.gateway import FakeGateway

from ordering.api.routes import checkout_router
from ordering.checkout.service import CheckoutService
from ordering.config import Settings
from ordering.domain import ordering
from ordering.order.store import SqlOrderStore
from ordering.utils.logging import configure_logging

_DOMAIN_PREFIXES = ("/checkout",)


def build_checkout_service(settings: Settings) -> CheckoutService:
    """Wire the checkout against the durable store named in ``settings``."""
    store = SqlOrderStore(settings.store_url, table_name=settings.orders_table)
    return CheckoutService(store, FakeGateway())


def create_app(service: CheckoutService | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Without an injected ``service`` the configuration is read from the
    environment, and a missing required value aborts startup with
    ``ConfigurationError``.
    """
    if service is None:
        settings = settings or Settings.from_env()
        configure_logging(settings.log_level, settings.log_json, region=settings.region)
        service = build_checkout_service(settings)

    ordering.init()

    app = FastAPI(
        title="Checkout API",
        description="Idempotent order checkout: one order per cart, payment after persistence",
    )
    app.state.checkout_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the ordering domain context for checkout requests."""
        if request.url.path.startswith(_DOMAIN_PREFIXES):
            with ordering.domain_context():
                response = await call_next(request)
            return response
        # No domain match, pass through
        return await call_next(request)

    app.include_router(checkout_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": ordering.name})

    return app
