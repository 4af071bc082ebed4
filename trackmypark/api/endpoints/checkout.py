from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from trackmypark.api.dependencies import get_checkout_service
from trackmypark.integrations.policy.checkout_service import CheckoutService

router = APIRouter()


class CheckoutSessionBody(BaseModel):
    productId: Optional[Any] = None
    vehicleData: Optional[Any] = None
    successUrl: Optional[str] = None
    cancelUrl: Optional[str] = None


@router.get("/products", tags=["Products"])
async def list_products(service: CheckoutService = Depends(get_checkout_service)):
    return {"products": service.list_products()}


@router.get("/products/{product_id}", tags=["Products"])
async def get_product(product_id: str, service: CheckoutService = Depends(get_checkout_service)):
    return service.get_product(product_id)


@router.post("/create-checkout-session", tags=["Checkout"])
async def create_checkout_session(
    body: CheckoutSessionBody,
    service: CheckoutService = Depends(get_checkout_service),
):
    """
    Create a Stripe Checkout session for a prepaid parking product.
    Vehicle details are attached as session metadata for later correlation.
    """
    return await service.create_session(body.model_dump())


@router.get("/verify-session/{session_id}", tags=["Checkout"])
async def verify_session(session_id: str, service: CheckoutService = Depends(get_checkout_service)):
    return await service.verify_session(session_id)
