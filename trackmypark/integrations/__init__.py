"""
Integrations layer.
This package contains all code used to communicate with the payment gateways:
- Razorpay orders (amount-based parking spot bookings)
- Stripe Checkout sessions (catalogue-based prepaid parking)

Key rule:
- API endpoints MUST NOT call gateway SDKs or HTTP APIs directly.
- Endpoints call the services under integrations/policy, which call the
  clients under integrations/clients.
- MOCK clients are used with INTEGRATIONS_MODE=mock; REAL_HTTP clients otherwise.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (trackmypark/api/main.py).
"""

from .contracts.interfaces import (
    CheckoutGateway,
    CheckoutSessionRequest,
    CheckoutSessionResult,
    GatewayError,
    OrderGateway,
    OrderRequest,
    OrderResult,
    PaymentVerificationRequest,
    Product,
    SessionStatus,
    VehicleData,
    WebhookEvent,
)
from .contracts.payments import (
    compute_payment_signature,
    is_valid_payment_signature,
    to_minor_units,
    validate_checkout_request,
    validate_order_request,
    validate_verification_request,
)
from .contracts.product_catalogues import ProductCatalog

__all__ = [
    # interfaces
    "CheckoutGateway", "CheckoutSessionRequest", "CheckoutSessionResult",
    "GatewayError", "OrderGateway", "OrderRequest", "OrderResult",
    "PaymentVerificationRequest", "Product", "SessionStatus", "VehicleData",
    "WebhookEvent",
    # payments
    "compute_payment_signature", "is_valid_payment_signature", "to_minor_units",
    "validate_checkout_request", "validate_order_request", "validate_verification_request",
    # products
    "ProductCatalog",
]
