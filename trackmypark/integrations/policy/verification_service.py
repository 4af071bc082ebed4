import logging
from typing import Any, Dict, Mapping

from trackmypark.error_handler import ConfigurationError, SignatureVerificationError
from trackmypark.integrations.contracts.payments import is_valid_payment_signature, validate_verification_request

logger = logging.getLogger(__name__)


class PaymentVerifier:
    """Checks the signature Razorpay Checkout hands back to the browser."""

    def __init__(self, secret: str):
        if not secret:
            raise ConfigurationError("RAZORPAY_SECRET is required to verify payment signatures.")
        self._secret = secret

    def verify(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        request = validate_verification_request(data)

        if not is_valid_payment_signature(request.order_id, request.payment_id, request.signature, self._secret):
            logger.warning(
                "Payment signature mismatch: order=%s payment=%s spot=%s user=%s",
                request.order_id,
                request.payment_id,
                request.spot_id,
                request.user_id,
            )
            raise SignatureVerificationError("Invalid payment signature")

        logger.info("Payment verified: %s (order %s, spot %s)", request.payment_id, request.order_id, request.spot_id)
        return {
            "success": True,
            "paymentId": request.payment_id,
            "orderId": request.order_id,
            "bookingData": request.booking_data,
        }
