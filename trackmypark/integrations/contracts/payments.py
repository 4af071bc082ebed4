import hashlib
import hmac
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Mapping, Optional, Union

from trackmypark.error_handler import ValidationError
from .interfaces import (
    CheckoutSessionRequest,
    OrderRequest,
    PaymentVerificationRequest,
    Product,
    VehicleData,
)

"""
Payment contract — validation and amount helpers for the booking flows.

Every helper here is pure: validation runs before any gateway is contacted,
and raises ValidationError naming what is wrong.
"""

MISSING_FIELDS = "Missing required fields"
INVALID_AMOUNT = "Invalid amount. Amount must be a positive number."

CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


# ---------------------------------------------------------------------------
# Amount helpers
# ---------------------------------------------------------------------------

def currency_symbol(currency: str) -> str:
    code = (currency or "").upper()
    return CURRENCY_SYMBOLS.get(code, f"{code} ")


def format_amount(value: Union[int, float]) -> Union[int, float]:
    """Drop a trailing ``.0`` so 50.0 is shown as 50."""
    return int(value) if float(value).is_integer() else value


def parse_amount(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or None if it is not a number."""
    if isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount):
        return None
    return amount


def to_minor_units(amount: Union[int, float]) -> int:
    """Convert major units to minor units, rounding half up (100.004 -> 10000)."""
    scaled = Decimal(str(amount)) * 100
    return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Request validation
# ---------------------------------------------------------------------------

def _is_missing(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def validate_order_request(data: Mapping[str, Any], *, minimum_amount: float, currency: str = "INR") -> OrderRequest:
    if any(_is_missing(data.get(key)) for key in ("amount", "spotName", "duration")):
        raise ValidationError(MISSING_FIELDS)

    amount = parse_amount(data.get("amount"))
    if amount is None or amount <= 0:
        raise ValidationError(INVALID_AMOUNT)

    if amount < minimum_amount:
        symbol = currency_symbol(currency)
        minimum = format_amount(minimum_amount)
        raise ValidationError(
            f"Minimum booking amount is {symbol}{minimum}. Your amount: {symbol}{format_amount(amount)}",
            extra={"minimumAmount": minimum},
        )

    return OrderRequest(amount=amount, spot_name=str(data["spotName"]), duration=data["duration"])


def validate_checkout_request(data: Mapping[str, Any], products: Mapping[str, Product]) -> CheckoutSessionRequest:
    product_id = data.get("productId")
    product = products.get(str(product_id)) if not _is_missing(product_id) else None
    if product is None:
        raise ValidationError("Invalid product ID")

    vehicle: Dict[str, Any] = data.get("vehicleData") or {}
    if not isinstance(vehicle, Mapping) or _is_missing(vehicle.get("plateNumber")) or _is_missing(vehicle.get("ownerName")):
        raise ValidationError("Vehicle data is required")

    model = vehicle.get("vehicleModel")
    return CheckoutSessionRequest(
        product=product,
        vehicle=VehicleData(
            plate_number=str(vehicle["plateNumber"]),
            owner_name=str(vehicle["ownerName"]),
            vehicle_model=str(model) if not _is_missing(model) else None,
        ),
        success_url=data.get("successUrl") or None,
        cancel_url=data.get("cancelUrl") or None,
    )


def validate_verification_request(data: Mapping[str, Any]) -> PaymentVerificationRequest:
    required = (
        "razorpay_order_id",
        "razorpay_payment_id",
        "razorpay_signature",
        "bookingData",
        "spotId",
        "userId",
    )
    missing = [key for key in required if _is_missing(data.get(key))]
    if missing:
        raise ValidationError(MISSING_FIELDS, extra={"missingFields": missing})

    return PaymentVerificationRequest(
        order_id=str(data["razorpay_order_id"]),
        payment_id=str(data["razorpay_payment_id"]),
        signature=str(data["razorpay_signature"]),
        booking_data=data["bookingData"],
        spot_id=data["spotId"],
        user_id=data["userId"],
    )


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------

def compute_payment_signature(order_id: str, payment_id: str, secret: str) -> str:
    """Razorpay checkout signature: hex HMAC-SHA256 of ``order_id|payment_id``."""
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def is_valid_payment_signature(order_id: str, payment_id: str, signature: str, secret: str) -> bool:
    expected = compute_payment_signature(order_id, payment_id, secret)
    candidate = (signature or "").strip().encode("utf-8")
    return hmac.compare_digest(expected.encode("utf-8"), candidate)
