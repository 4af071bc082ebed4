"""Pytest fixtures for the payments API tests."""

import hashlib
import hmac
import time

import pytest
from fastapi.testclient import TestClient

from trackmypark.api.main import create_app
from trackmypark.integrations.clients.mocks.payments import MockRazorpayClient, MockStripeCheckoutClient
from trackmypark.integrations.contracts.product_catalogues import ProductCatalog
from trackmypark.utils.config_loader import PaymentsSettings, load_payments_config

RAZORPAY_SECRET = "rzp_test_secret"
WEBHOOK_SECRET = "whsec_test_secret"


@pytest.fixture
def settings():
    return PaymentsSettings(
        environment="test",
        integrations_mode="mock",
        razorpay_key_id="rzp_test_ABCDEFGHIJKL",
        razorpay_secret=RAZORPAY_SECRET,
        stripe_secret_key="sk_test_123",
        stripe_webhook_secret=WEBHOOK_SECRET,
        frontend_url="http://localhost:5173",
        payments=load_payments_config(),
    )


@pytest.fixture
def catalog(settings):
    return ProductCatalog.from_config(settings.payments.products, currency=settings.payments.currency)


@pytest.fixture
def order_gateway():
    return MockRazorpayClient()


@pytest.fixture
def checkout_gateway():
    return MockStripeCheckoutClient()


@pytest.fixture
def app(settings, order_gateway, checkout_gateway):
    return create_app(settings, order_gateway=order_gateway, checkout_gateway=checkout_gateway)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sign_webhook():
    """Build a Stripe-Signature header value for a raw payload."""

    def _sign(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int = None) -> str:
        timestamp = int(time.time()) if timestamp is None else timestamp
        signed = f"{timestamp}.{payload.decode('utf-8')}".encode("utf-8")
        digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
        return f"t={timestamp},v1={digest}"

    return _sign
