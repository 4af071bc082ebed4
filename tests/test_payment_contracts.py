"""Tests for request validation and amount helpers."""

import pytest

from trackmypark.error_handler import ValidationError
from trackmypark.integrations.contracts.payments import (
    compute_payment_signature,
    is_valid_payment_signature,
    parse_amount,
    to_minor_units,
    validate_checkout_request,
    validate_order_request,
    validate_verification_request,
)


def test_to_minor_units_rounds_to_whole_paise():
    assert to_minor_units(100) == 10000
    assert to_minor_units(100.004) == 10000
    assert to_minor_units(0.295) == 30
    assert to_minor_units(19.99) == 1999


@pytest.mark.parametrize("value", [None, "abc", float("inf"), float("nan"), True, [], {}])
def test_parse_amount_rejects_non_numbers(value):
    assert parse_amount(value) is None


def test_parse_amount_accepts_numeric_strings():
    assert parse_amount("75.5") == 75.5


@pytest.mark.parametrize(
    "body",
    [
        {"spotName": "A1", "duration": "2h"},
        {"amount": 100, "duration": "2h"},
        {"amount": 100, "spotName": "  ", "duration": "2h"},
        {"amount": 0, "spotName": "A1", "duration": "2h"},
    ],
)
def test_order_missing_fields(body):
    with pytest.raises(ValidationError) as exc:
        validate_order_request(body, minimum_amount=50)
    assert exc.value.error == "Missing required fields"
    assert exc.value.status_code == 400


@pytest.mark.parametrize("amount", ["abc", -10, float("inf")])
def test_order_invalid_amount(amount):
    with pytest.raises(ValidationError) as exc:
        validate_order_request({"amount": amount, "spotName": "A1", "duration": "2h"}, minimum_amount=50)
    assert exc.value.error == "Invalid amount. Amount must be a positive number."


def test_order_below_minimum_states_minimum():
    with pytest.raises(ValidationError) as exc:
        validate_order_request({"amount": 49, "spotName": "A1", "duration": "2h"}, minimum_amount=50)
    assert exc.value.error == "Minimum booking amount is ₹50. Your amount: ₹49"
    assert exc.value.to_dict()["minimumAmount"] == 50


def test_order_minimum_is_inclusive():
    request = validate_order_request({"amount": 50, "spotName": "A1", "duration": "2h"}, minimum_amount=50.0)
    assert request.amount == 50
    assert request.spot_name == "A1"


def test_checkout_rejects_unknown_product(catalog):
    with pytest.raises(ValidationError) as exc:
        validate_checkout_request(
            {"productId": "999", "vehicleData": {"plateNumber": "KA01", "ownerName": "Asha"}},
            catalog.products,
        )
    assert exc.value.error == "Invalid product ID"


def test_checkout_requires_vehicle_owner(catalog):
    with pytest.raises(ValidationError) as exc:
        validate_checkout_request({"productId": "1", "vehicleData": {"plateNumber": "KA01"}}, catalog.products)
    assert exc.value.error == "Vehicle data is required"


def test_checkout_accepts_numeric_product_id(catalog):
    request = validate_checkout_request(
        {"productId": 24, "vehicleData": {"plateNumber": "KA01", "ownerName": "Asha", "vehicleModel": "Swift"}},
        catalog.products,
    )
    assert request.product.hours == 24
    assert request.vehicle.vehicle_model == "Swift"


VALID_VERIFICATION = {
    "razorpay_order_id": "order_1",
    "razorpay_payment_id": "pay_1",
    "razorpay_signature": "sig",
    "bookingData": {"spot": "A1"},
    "spotId": "spot-1",
    "userId": "user-1",
}


@pytest.mark.parametrize(
    "field",
    ["razorpay_order_id", "razorpay_payment_id", "razorpay_signature", "bookingData", "spotId", "userId"],
)
def test_verification_requires_every_field(field):
    body = {k: v for k, v in VALID_VERIFICATION.items() if k != field}
    with pytest.raises(ValidationError) as exc:
        validate_verification_request(body)
    assert exc.value.error == "Missing required fields"
    assert exc.value.extra["missingFields"] == [field]


def test_payment_signature_round_trip():
    signature = compute_payment_signature("order_1", "pay_1", "secret")
    assert is_valid_payment_signature("order_1", "pay_1", signature, "secret")
    assert not is_valid_payment_signature("order_1", "pay_2", signature, "secret")
    assert not is_valid_payment_signature("order_1", "pay_1", signature, "other-secret")


def test_non_ascii_signature_is_rejected_not_raised():
    assert not is_valid_payment_signature("order_1", "pay_1", "é" * 64, "secret")
