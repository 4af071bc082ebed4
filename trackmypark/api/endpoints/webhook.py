import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from trackmypark.api.dependencies import get_webhook_handler
from trackmypark.error_handler import SignatureVerificationError
from trackmypark.integrations.policy.webhook_service import StripeWebhookHandler

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/webhook", tags=["Webhook"])
async def stripe_webhook(request: Request, handler: StripeWebhookHandler = Depends(get_webhook_handler)):
    """
    Stripe webhook receiver.
    - Verifies the Stripe-Signature header against the raw body.
    - Acknowledges every verified event so Stripe stops retrying delivery.
    """
    payload = await request.body()
    signature = request.headers.get("stripe-signature")

    try:
        handler.handle(payload, signature)
    except SignatureVerificationError as e:
        logger.error("Webhook signature verification failed: %s", e.error)
        return PlainTextResponse(f"Webhook Error: {e.error}", status_code=400)

    return {"received": True}
