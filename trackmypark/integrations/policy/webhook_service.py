"""
Stripe webhook handling.

The signature covers the exact request bytes, so verification must run on the
raw body before it is parsed. Events are only logged; nothing is stored.
"""

import json
import logging
from typing import Any, Callable, Dict, Optional

import stripe

from trackmypark.error_handler import ConfigurationError, SignatureVerificationError
from trackmypark.integrations.clients.real_http.stripe_checkout import plain_metadata
from trackmypark.integrations.contracts.interfaces import WebhookEvent

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_SECONDS = 300


class StripeWebhookHandler:
    def __init__(self, secret: str, tolerance: int = DEFAULT_TOLERANCE_SECONDS):
        if not secret:
            raise ConfigurationError("STRIPE_WEBHOOK_SECRET is required to verify webhook signatures.")
        self._secret = secret
        self.tolerance = tolerance
        self._handlers: Dict[str, Callable[[Dict[str, Any]], WebhookEvent]] = {
            "checkout.session.completed": self._on_checkout_session_completed,
            "payment_intent.succeeded": self._on_payment_intent_succeeded,
        }

    def verify(self, payload: bytes, signature: Optional[str]) -> Dict[str, Any]:
        """Check the Stripe-Signature header against the raw body and parse it."""
        if not signature:
            raise SignatureVerificationError("Missing Stripe-Signature header")

        try:
            text = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(text, signature, self._secret, self.tolerance)
            event = json.loads(text)
        except stripe.SignatureVerificationError as e:
            raise SignatureVerificationError(e.user_message or str(e)) from e
        except ValueError as e:
            raise SignatureVerificationError(f"Invalid payload: {e}") from e

        if not isinstance(event, dict) or not event.get("type"):
            raise SignatureVerificationError("Invalid payload: missing event type")
        if not isinstance(event["type"], str):
            raise SignatureVerificationError("Invalid payload: event type must be a string")
        return event

    def dispatch(self, event: Dict[str, Any]) -> WebhookEvent:
        handler = self._handlers.get(event["type"])
        if handler is None:
            logger.info("Unhandled event type %s", event["type"])
            return _to_webhook_event(event, handled=False)
        return handler(event)

    def handle(self, payload: bytes, signature: Optional[str]) -> WebhookEvent:
        event = self.verify(payload, signature)
        return self.dispatch(event)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_checkout_session_completed(self, event: Dict[str, Any]) -> WebhookEvent:
        webhook_event = _to_webhook_event(event, handled=True)
        logger.info("Payment successful for session: %s", webhook_event.object_id)
        logger.info("Vehicle data: %s", webhook_event.metadata)
        return webhook_event

    def _on_payment_intent_succeeded(self, event: Dict[str, Any]) -> WebhookEvent:
        webhook_event = _to_webhook_event(event, handled=True)
        logger.info("Payment intent succeeded: %s", webhook_event.object_id)
        return webhook_event


def _to_webhook_event(event: Dict[str, Any], handled: bool) -> WebhookEvent:
    data = event.get("data")
    obj = data.get("object") if isinstance(data, dict) else None
    if not isinstance(obj, dict):
        obj = {}
    return WebhookEvent(
        event_id=str(event.get("id", "")),
        event_type=event["type"],
        object_id=obj.get("id"),
        metadata=plain_metadata(obj.get("metadata")) if isinstance(obj.get("metadata"), dict) else {},
        handled=handled,
    )
