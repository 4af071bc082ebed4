from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class GatewayError(Exception):
    """
    Failure reported by (or while reaching) a payment gateway.

    ``status_code`` is the provider's HTTP status when it answered at all;
    ``code`` is a provider or transport error code (e.g. ``connection_error``).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Product:
    product_id: str
    name: str
    price: int                           # minor units (paise)
    hours: int


@dataclass
class OrderRequest:
    amount: float                        # major units, already validated
    spot_name: str
    duration: Any


@dataclass
class OrderResult:
    order_id: str
    amount: int                          # minor units
    currency: str
    status: str = "created"
    receipt: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass
class VehicleData:
    plate_number: str
    owner_name: str
    vehicle_model: Optional[str] = None


@dataclass
class CheckoutSessionRequest:
    product: Product
    vehicle: VehicleData
    success_url: Optional[str] = None
    cancel_url: Optional[str] = None


@dataclass
class CheckoutSessionResult:
    session_id: str
    url: str


@dataclass
class SessionStatus:
    session_id: str
    payment_status: str
    amount_total: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PaymentVerificationRequest:
    order_id: str
    payment_id: str
    signature: str
    booking_data: Any
    spot_id: Any
    user_id: Any


@dataclass
class WebhookEvent:
    event_id: str
    event_type: str
    object_id: Optional[str]
    metadata: Dict[str, Any] = field(default_factory=dict)
    handled: bool = False
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


# ---------------------------------------------------------------------------
# Abstract gateway interfaces
# ---------------------------------------------------------------------------

class OrderGateway(ABC):
    """Gateway that creates server-side orders paid through a client widget."""

    @abstractmethod
    async def create_order(self, payload: Dict[str, Any]) -> OrderResult:
        """Create an order. ``payload`` is the provider request body."""

    @abstractmethod
    async def list_orders(self, count: int = 1) -> Dict[str, Any]:
        """Return a page of orders; used as a credentials probe."""


class CheckoutGateway(ABC):
    """Gateway that hosts the checkout page itself."""

    @abstractmethod
    async def create_session(self, params: Dict[str, Any]) -> CheckoutSessionResult:
        """Create a hosted checkout session from provider parameters."""

    @abstractmethod
    async def retrieve_session(self, session_id: str) -> SessionStatus:
        """Fetch a session and its payment status."""
