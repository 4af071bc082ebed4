"""
Checkout Service for the Stripe prepaid-parking flow.

Includes:
- Product lookups against the static catalogue
- Checkout session creation (one gateway call per request)
- Session verification after the customer returns from Stripe
"""

import logging
from typing import Any, Dict, List, Mapping

from trackmypark.error_handler import NotFoundError
from trackmypark.integrations.contracts.interfaces import CheckoutGateway, CheckoutSessionRequest, GatewayError
from trackmypark.integrations.contracts.payments import validate_checkout_request
from trackmypark.integrations.contracts.product_catalogues import ProductCatalog, product_info
from trackmypark.integrations.policy.error_mapping import to_api_error

logger = logging.getLogger(__name__)

CHECKOUT_SESSION_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


class CheckoutService:
    def __init__(self, gateway: CheckoutGateway, catalog: ProductCatalog, frontend_url: str):
        self.gateway = gateway
        self.catalog = catalog
        self.frontend_url = frontend_url

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def list_products(self) -> List[Dict[str, Any]]:
        return self.catalog.list_products()

    def get_product(self, product_id: str) -> Dict[str, Any]:
        product = self.catalog.get(product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return self.catalog.to_dict(product)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def build_session_params(self, request: CheckoutSessionRequest) -> Dict[str, Any]:
        product = request.product
        metadata = {
            "plateNumber": request.vehicle.plate_number,
            "ownerName": request.vehicle.owner_name,
            "hours": str(product.hours),
        }
        if request.vehicle.vehicle_model:
            metadata["vehicleModel"] = request.vehicle.vehicle_model

        plural = "s" if product.hours > 1 else ""
        return {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self.catalog.currency.lower(),
                        "product_data": {
                            "name": product.name,
                            "description": f"Prepaid parking for {product.hours} hour{plural}",
                            "metadata": dict(metadata),
                        },
                        "unit_amount": product.price,
                    },
                    "quantity": 1,
                }
            ],
            "mode": "payment",
            "success_url": request.success_url
            or f"{self.frontend_url}?payment=success&session_id={CHECKOUT_SESSION_PLACEHOLDER}",
            "cancel_url": request.cancel_url or f"{self.frontend_url}?payment=cancelled",
            "metadata": {**metadata, "productId": product.product_id},
        }

    async def create_session(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        request = validate_checkout_request(data, self.catalog.products)
        params = self.build_session_params(request)
        logger.info(
            "Creating checkout session: product=%s plate=%s",
            request.product.product_id,
            request.vehicle.plate_number,
        )

        try:
            session = await self.gateway.create_session(params)
        except GatewayError as e:
            logger.error("Error creating checkout session (status=%s): %s", e.status_code, e.message)
            raise to_api_error(e, "Failed to create checkout session") from e

        logger.info("Checkout session created: %s", session.session_id)
        return {
            "sessionId": session.session_id,
            "url": session.url,
            "productInfo": product_info(request.product),
        }

    async def verify_session(self, session_id: str) -> Dict[str, Any]:
        try:
            session = await self.gateway.retrieve_session(session_id)
        except GatewayError as e:
            logger.error("Error verifying session %s: %s", session_id, e.message)
            raise to_api_error(e, "Failed to verify session") from e

        if session.payment_status != "paid":
            logger.info("Session %s not paid yet (payment_status=%s)", session_id, session.payment_status)
            return {"success": False, "payment_status": session.payment_status}

        return {
            "success": True,
            "session": {
                "id": session.session_id,
                "payment_status": session.payment_status,
                "amount_total": session.amount_total,
                "metadata": session.metadata,
            },
        }
