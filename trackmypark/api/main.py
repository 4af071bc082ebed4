"""
FastAPI application - Main entry point
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from trackmypark.api.endpoints.checkout import router as checkout_router
from trackmypark.api.endpoints.payments import payments_api
from trackmypark.api.endpoints.webhook import router as webhook_router
from trackmypark.error_handler import ErrorHandler, PaymentsAPIError
from trackmypark.integrations.clients.mocks.payments import MockRazorpayClient, MockStripeCheckoutClient
from trackmypark.integrations.clients.real_http.razorpay import RazorpayClient
from trackmypark.integrations.clients.real_http.stripe_checkout import StripeCheckoutClient
from trackmypark.integrations.contracts.interfaces import CheckoutGateway, OrderGateway
from trackmypark.integrations.contracts.product_catalogues import ProductCatalog
from trackmypark.integrations.policy.checkout_service import CheckoutService
from trackmypark.integrations.policy.order_service import OrderService
from trackmypark.integrations.policy.verification_service import PaymentVerifier
from trackmypark.integrations.policy.webhook_service import StripeWebhookHandler
from trackmypark.utils.config_loader import PaymentsSettings, load_settings, mask_key

logger = logging.getLogger(__name__)

api_router = APIRouter()


# ============================================================================
# ENDPOINTS
# ============================================================================
@api_router.get("/health", tags=["Health"])
@api_router.get("/api/health", tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint."""
    return {
        "status": "ok",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "products": len(request.app.state.catalog),
    }


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================
def _select_order_gateway(settings: PaymentsSettings) -> OrderGateway:
    if settings.integrations_mode == "mock":
        return MockRazorpayClient()
    return RazorpayClient(key_id=settings.razorpay_key_id, key_secret=settings.razorpay_secret)


def _select_checkout_gateway(settings: PaymentsSettings) -> CheckoutGateway:
    if settings.integrations_mode == "mock":
        return MockStripeCheckoutClient()
    return StripeCheckoutClient(api_key=settings.stripe_secret_key)


def create_app(
    settings: Optional[PaymentsSettings] = None,
    *,
    order_gateway: Optional[OrderGateway] = None,
    checkout_gateway: Optional[CheckoutGateway] = None,
) -> FastAPI:
    """
    Build the application with its services wired in.

    Raises:
        ConfigurationError: If required credentials are missing
    """
    settings = settings or load_settings()
    settings.validate_credentials()

    catalog = ProductCatalog.from_config(settings.payments.products, currency=settings.payments.currency)
    order_gateway = order_gateway or _select_order_gateway(settings)
    checkout_gateway = checkout_gateway or _select_checkout_gateway(settings)

    app = FastAPI(
        title="TrackMyParking Payments API",
        description="Razorpay orders and Stripe Checkout sessions for parking bookings",
        version="1.0.0",
    )

    app.state.settings = settings
    app.state.catalog = catalog
    app.state.error_handler = ErrorHandler(debug=settings.is_development)
    app.state.order_service = OrderService(
        order_gateway,
        currency=settings.payments.currency,
        minimum_amount=settings.payments.minimum_order_amount,
        key_id=settings.razorpay_key_id,
    )
    app.state.payment_verifier = PaymentVerifier(settings.razorpay_secret)
    app.state.checkout_service = CheckoutService(checkout_gateway, catalog, settings.frontend_url)
    app.state.webhook_handler = StripeWebhookHandler(settings.stripe_webhook_secret)

    # CORS middleware
    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=".*",  # any origin while developing
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(api_router)
    app.include_router(payments_api)
    app.include_router(checkout_router)
    app.include_router(webhook_router)

    _register_exception_handlers(app)
    _register_lifecycle_events(app)
    return app


# ============================================================================
# ERROR HANDLING
# ============================================================================
def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PaymentsAPIError)
    async def payments_error_handler(request: Request, exc: PaymentsAPIError):
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.error)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
        )
        logger.warning("Rejected malformed body for %s: %s", request.url.path, details)
        return JSONResponse(status_code=400, content={"error": "Invalid request body", "message": details})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            logger.warning("404 - Route not found: %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Route not found",
                    "message": f"The requested route {request.url.path} does not exist",
                },
            )
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        payload = request.app.state.error_handler.handle_exception(
            exc, context={"method": request.method, "path": request.url.path}
        )
        return JSONResponse(status_code=500, content=payload)


# ============================================================================
# STARTUP/SHUTDOWN EVENTS
# ============================================================================
def _register_lifecycle_events(app: FastAPI) -> None:
    @app.on_event("startup")
    async def startup_event():
        """Log the effective configuration (secrets masked)."""
        settings: PaymentsSettings = app.state.settings
        logger.info("Starting TrackMyParking Payments API...")
        logger.info("Environment: %s, integrations mode: %s", settings.environment, settings.integrations_mode)
        logger.info("Razorpay key id: %s", mask_key(settings.razorpay_key_id))
        logger.info("Stripe integration: %s", "Configured" if settings.stripe_secret_key else "Not configured")
        logger.info("Available products: %d", len(app.state.catalog))
        if settings.is_development:
            logger.info("Development mode: allowing all CORS origins")
        else:
            logger.info("Allowed origins: %s", ", ".join(settings.allowed_origins))

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown"""
        logger.info("Shutting down TrackMyParking Payments API...")
