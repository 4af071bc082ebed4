"""FastAPI dependencies that hand out the services built once in create_app."""
from fastapi import Request

from trackmypark.integrations.policy.checkout_service import CheckoutService
from trackmypark.integrations.policy.order_service import OrderService
from trackmypark.integrations.policy.verification_service import PaymentVerifier
from trackmypark.integrations.policy.webhook_service import StripeWebhookHandler
from trackmypark.utils.config_loader import PaymentsSettings


def get_settings(request: Request) -> PaymentsSettings:
    return request.app.state.settings


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service


def get_payment_verifier(request: Request) -> PaymentVerifier:
    return request.app.state.payment_verifier


def get_checkout_service(request: Request) -> CheckoutService:
    return request.app.state.checkout_service


def get_webhook_handler(request: Request) -> StripeWebhookHandler:
    return request.app.state.webhook_handler
