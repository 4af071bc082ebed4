from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Type

from trackmypark.error_handler import (
    GatewayAuthError,
    GatewayClientError,
    GatewayUnavailable,
    PaymentsAPIError,
)
from trackmypark.integrations.contracts.interfaces import GatewayError


class GatewayErrorKind(str, Enum):
    AUTHENTICATION = "AUTHENTICATION"
    INVALID_REQUEST = "INVALID_REQUEST"
    NETWORK_UNREACHABLE = "NETWORK_UNREACHABLE"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class ErrorPolicy:
    error_type: Type[PaymentsAPIError]
    status_code: int
    message: Optional[str] = None       # None -> caller's fallback message


# Provider HTTP status -> kind. Checked before transport codes.
STATUS_KINDS: Dict[int, GatewayErrorKind] = {
    401: GatewayErrorKind.AUTHENTICATION,
    400: GatewayErrorKind.INVALID_REQUEST,
}

# Transport / client error code -> kind.
CODE_KINDS: Dict[str, GatewayErrorKind] = {
    "connection_error": GatewayErrorKind.NETWORK_UNREACHABLE,
    "timeout": GatewayErrorKind.NETWORK_UNREACHABLE,
    "ENOTFOUND": GatewayErrorKind.NETWORK_UNREACHABLE,
    "ECONNREFUSED": GatewayErrorKind.NETWORK_UNREACHABLE,
}

KIND_POLICIES: Dict[GatewayErrorKind, ErrorPolicy] = {
    GatewayErrorKind.AUTHENTICATION: ErrorPolicy(
        GatewayAuthError, 500, "Authentication failed with payment provider. Please check credentials."
    ),
    GatewayErrorKind.INVALID_REQUEST: ErrorPolicy(
        GatewayClientError, 400, "Invalid request to payment provider. Please check the request data."
    ),
    GatewayErrorKind.NETWORK_UNREACHABLE: ErrorPolicy(
        GatewayUnavailable, 500, "Unable to connect to payment provider. Please try again later."
    ),
    GatewayErrorKind.UPSTREAM_UNAVAILABLE: ErrorPolicy(
        GatewayUnavailable, 503, "Payment provider is temporarily unavailable. Please try again later."
    ),
    GatewayErrorKind.UNKNOWN: ErrorPolicy(PaymentsAPIError, 500),
}


def classify_gateway_error(error: GatewayError) -> GatewayErrorKind:
    if error.status_code in STATUS_KINDS:
        return STATUS_KINDS[error.status_code]
    if error.code in CODE_KINDS:
        return CODE_KINDS[error.code]
    if error.status_code is not None and error.status_code >= 500:
        return GatewayErrorKind.UPSTREAM_UNAVAILABLE
    return GatewayErrorKind.UNKNOWN


def to_api_error(error: GatewayError, fallback_message: str) -> PaymentsAPIError:
    """Map a gateway failure to the error returned to the caller."""
    policy = KIND_POLICIES[classify_gateway_error(error)]
    extra = {"statusCode": error.status_code} if error.status_code is not None else {}
    return policy.error_type(
        policy.message or fallback_message,
        message=error.message,
        status_code=policy.status_code,
        extra=extra,
    )
