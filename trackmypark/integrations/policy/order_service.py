"""
Order Service for the Razorpay booking flow.

Validates the booking request, builds the order payload, calls the gateway
exactly once and maps the outcome. Retrying is left to the caller.
"""

import logging
import time
from typing import Any, Dict, Mapping, Optional

from trackmypark.error_handler import PaymentsAPIError
from trackmypark.integrations.contracts.interfaces import GatewayError, OrderGateway, OrderRequest
from trackmypark.integrations.contracts.payments import to_minor_units, validate_order_request
from trackmypark.integrations.policy.error_mapping import to_api_error
from trackmypark.utils.config_loader import mask_key

logger = logging.getLogger(__name__)

# Connectivity probe messages by provider status.
_PROBE_MESSAGES = {
    401: "Razorpay authentication failed - check your credentials",
    403: "Razorpay access forbidden - check your permissions",
}


class OrderService:
    def __init__(
        self,
        gateway: OrderGateway,
        *,
        currency: str = "INR",
        minimum_amount: float = 50,
        key_id: Optional[str] = None,
    ):
        self.gateway = gateway
        self.currency = currency.upper()
        self.minimum_amount = minimum_amount
        self.key_id = key_id

    def build_payload(self, request: OrderRequest, timestamp_ms: Optional[int] = None) -> Dict[str, Any]:
        timestamp_ms = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
        return {
            "amount": to_minor_units(request.amount),
            "currency": self.currency,
            "receipt": f"receipt_order_{timestamp_ms}",
            "notes": {
                "spotName": request.spot_name,
                "duration": request.duration,
            },
        }

    async def create_order(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        request = validate_order_request(data, minimum_amount=self.minimum_amount, currency=self.currency)
        payload = self.build_payload(request)
        logger.info(
            "Creating Razorpay order: amount=%s %s spot=%s duration=%s",
            payload["amount"],
            payload["currency"],
            request.spot_name,
            request.duration,
        )

        try:
            order = await self.gateway.create_order(payload)
        except GatewayError as e:
            logger.error("Razorpay order creation failed (status=%s code=%s): %s", e.status_code, e.code, e.message)
            raise to_api_error(e, "Failed to create payment order") from e

        logger.info("Razorpay order created: %s (%s %s, receipt=%s)", order.order_id, order.amount, order.currency, order.receipt)
        return {"orderId": order.order_id, "amount": order.amount, "currency": order.currency}

    async def check_connectivity(self) -> Dict[str, Any]:
        """List a single order to prove the configured credentials work."""
        try:
            orders = await self.gateway.list_orders(count=1)
        except GatewayError as e:
            logger.error("Razorpay connectivity test failed: %s", e.message)
            raise PaymentsAPIError(
                _PROBE_MESSAGES.get(e.status_code, "Failed to connect to Razorpay API"),
                message=e.message,
                status_code=e.status_code or 500,
                extra={"success": False, "statusCode": e.status_code},
            ) from e

        logger.info("Razorpay connectivity test successful")
        return {
            "success": True,
            "message": "Razorpay API connectivity verified",
            "key_id": mask_key(self.key_id) if self.key_id else None,
            "orders_count": orders.get("count", 0),
        }
