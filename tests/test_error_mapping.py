import pytest

from trackmypark.error_handler import ErrorHandler, GatewayAuthError, GatewayClientError, GatewayUnavailable
from trackmypark.integrations.contracts.interfaces import GatewayError
from trackmypark.integrations.policy.error_mapping import (
    GatewayErrorKind,
    classify_gateway_error,
    to_api_error,
)


@pytest.mark.parametrize(
    "error, kind",
    [
        (GatewayError("bad key", status_code=401), GatewayErrorKind.AUTHENTICATION),
        (GatewayError("bad amount", status_code=400, code="BAD_REQUEST_ERROR"), GatewayErrorKind.INVALID_REQUEST),
        (GatewayError("refused", code="connection_error"), GatewayErrorKind.NETWORK_UNREACHABLE),
        (GatewayError("slow", code="timeout"), GatewayErrorKind.NETWORK_UNREACHABLE),
        (GatewayError("down", status_code=502), GatewayErrorKind.UPSTREAM_UNAVAILABLE),
        (GatewayError("forbidden", status_code=403), GatewayErrorKind.UNKNOWN),
        (GatewayError("odd"), GatewayErrorKind.UNKNOWN),
    ],
)
def test_classify_gateway_error(error, kind):
    assert classify_gateway_error(error) == kind


def test_auth_failure_is_server_error_with_safe_message():
    err = to_api_error(GatewayError("Authentication failed", status_code=401), "Failed to create payment order")
    assert isinstance(err, GatewayAuthError)
    assert err.status_code == 500
    assert err.error == "Authentication failed with payment provider. Please check credentials."
    assert err.to_dict() == {
        "error": "Authentication failed with payment provider. Please check credentials.",
        "message": "Authentication failed",
        "statusCode": 401,
    }


def test_invalid_request_passes_through_as_client_error():
    err = to_api_error(GatewayError("amount too low", status_code=400), "Failed to create payment order")
    assert isinstance(err, GatewayClientError)
    assert err.status_code == 400


def test_network_and_upstream_failures_are_distinguishable():
    network = to_api_error(GatewayError("refused", code="connection_error"), "fallback")
    upstream = to_api_error(GatewayError("bad gateway", status_code=503), "fallback")
    assert isinstance(network, GatewayUnavailable) and network.status_code == 500
    assert isinstance(upstream, GatewayUnavailable) and upstream.status_code == 503
    assert "statusCode" not in network.to_dict()


def test_unclassified_error_uses_fallback_message():
    err = to_api_error(GatewayError("teapot", status_code=418), "Failed to create payment order")
    assert err.status_code == 500
    assert err.error == "Failed to create payment order"
    assert err.message == "teapot"


def test_error_handler_hides_detail_outside_development():
    assert ErrorHandler(debug=False).handle_exception(Exception("boom"))["message"] == "Something went wrong!"
    out = ErrorHandler(debug=True).handle_exception(Exception("boom"), context={"path": "/x"})
    assert out["error"] == "Internal server error"
    assert out["message"] == "boom"
