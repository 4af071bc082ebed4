import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from trackmypark.api.dependencies import get_order_service, get_payment_verifier
from trackmypark.integrations.policy.order_service import OrderService
from trackmypark.integrations.policy.verification_service import PaymentVerifier

logger = logging.getLogger(__name__)

api = APIRouter()
payments_api = api


class CreateOrderRequest(BaseModel):
    # Loosely typed on purpose: validate_order_request owns the rules and messages.
    amount: Optional[Any] = None
    spotName: Optional[Any] = None
    duration: Optional[Any] = None


class VerifyPaymentRequest(BaseModel):
    razorpay_order_id: Optional[Any] = None
    razorpay_payment_id: Optional[Any] = None
    razorpay_signature: Optional[Any] = None
    bookingData: Optional[Any] = None
    spotId: Optional[Any] = None
    userId: Optional[Any] = None


@api.post("/api/create-razorpay-order", tags=["Payments"])
async def create_razorpay_order(
    body: CreateOrderRequest,
    request: Request,
    service: OrderService = Depends(get_order_service),
):
    """Create a Razorpay order for a parking spot booking."""
    logger.info("Create order request from %s", request.client.host if request.client else "unknown")
    return await service.create_order(body.model_dump())


@api.post("/api/verify-razorpay-payment", tags=["Payments"])
async def verify_razorpay_payment(
    body: VerifyPaymentRequest,
    verifier: PaymentVerifier = Depends(get_payment_verifier),
):
    """Verify the Razorpay Checkout signature for a completed payment."""
    return verifier.verify(body.model_dump())


@api.get("/api/test-razorpay-connectivity", tags=["Payments"])
async def test_razorpay_connectivity(service: OrderService = Depends(get_order_service)):
    """Check that the configured Razorpay credentials are accepted."""
    return await service.check_connectivity()
