"""Error types and the fallback handler for the payments API."""
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Missing or invalid settings detected at startup."""


class PaymentsAPIError(Exception):
    """
    Base class for errors that are turned into an HTTP response.

    ``error`` is the user-facing summary; ``message`` carries extra detail
    (e.g. the provider's description) for operators.
    """

    status_code = 500

    def __init__(
        self,
        error: str,
        *,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(error)
        self.error = error
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra or {}

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        body.update(self.extra)
        return body


class ValidationError(PaymentsAPIError):
    status_code = 400


class NotFoundError(PaymentsAPIError):
    status_code = 404


class GatewayAuthError(PaymentsAPIError):
    # Bad credentials are our problem, not the caller's.
    status_code = 500


class GatewayClientError(PaymentsAPIError):
    status_code = 400


class GatewayUnavailable(PaymentsAPIError):
    status_code = 503


class SignatureVerificationError(PaymentsAPIError):
    status_code = 400


class ErrorHandler:
    def __init__(self, debug: bool = False) -> None:
        self.debug = debug

    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        logger.error("Unhandled exception in payments API: %s (context=%s)", exc, context or {}, exc_info=True)
        return {
            "error": "Internal server error",
            "message": str(exc) if self.debug else "Something went wrong!",
        }
