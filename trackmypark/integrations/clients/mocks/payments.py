"""
Mock payment gateway clients.

⚠️  Development/testing only. No network calls are made.
    Orders and sessions live in memory and are lost on restart. Pass
    ``fail_with`` to make every call raise a GatewayError instead.
"""

import logging
import time
import uuid
from typing import Any, Dict, List, Optional

from trackmypark.integrations.contracts.interfaces import (
    CheckoutGateway,
    CheckoutSessionResult,
    GatewayError,
    OrderGateway,
    OrderResult,
    SessionStatus,
)

logger = logging.getLogger(__name__)


class MockRazorpayClient(OrderGateway):
    """
    Mock Razorpay Orders client.

    Parameters
    ----------
    fail_with : GatewayError, optional
        Raised by every call when set.
    """

    def __init__(self, fail_with: Optional[GatewayError] = None):
        self._fail_with = fail_with
        self.orders: Dict[str, Dict[str, Any]] = {}
        self.calls: List[Dict[str, Any]] = []
        logger.info("[RAZORPAY MOCK] Client initialised")

    async def create_order(self, payload: Dict[str, Any]) -> OrderResult:
        self.calls.append(payload)
        if self._fail_with is not None:
            raise self._fail_with

        order_id = f"order_{uuid.uuid4().hex[:14]}"
        order = {
            "id": order_id,
            "entity": "order",
            "amount": payload["amount"],
            "amount_paid": 0,
            "amount_due": payload["amount"],
            "currency": payload["currency"],
            "receipt": payload.get("receipt"),
            "status": "created",
            "notes": payload.get("notes", {}),
            "created_at": int(time.time()),
        }
        self.orders[order_id] = order
        logger.info("[RAZORPAY MOCK] Created order %s for %s %s", order_id, order["amount"], order["currency"])
        return OrderResult(
            order_id=order_id,
            amount=order["amount"],
            currency=order["currency"],
            status=order["status"],
            receipt=order["receipt"],
            raw=order,
        )

    async def list_orders(self, count: int = 1) -> Dict[str, Any]:
        if self._fail_with is not None:
            raise self._fail_with
        items = list(self.orders.values())[:count]
        return {"entity": "collection", "count": len(items), "items": items}


class MockStripeCheckoutClient(CheckoutGateway):
    """
    Mock Stripe Checkout client.

    Sessions start as ``unpaid``; call ``mark_paid`` to simulate the customer
    completing the hosted checkout page.
    """

    def __init__(self, fail_with: Optional[GatewayError] = None):
        self._fail_with = fail_with
        self.sessions: Dict[str, Dict[str, Any]] = {}
        self.calls: List[Dict[str, Any]] = []
        logger.info("[STRIPE MOCK] Client initialised")

    async def create_session(self, params: Dict[str, Any]) -> CheckoutSessionResult:
        self.calls.append(params)
        if self._fail_with is not None:
            raise self._fail_with

        session_id = f"cs_test_{uuid.uuid4().hex[:24]}"
        amount_total = sum(
            item["price_data"]["unit_amount"] * item.get("quantity", 1)
            for item in params.get("line_items", [])
        )
        self.sessions[session_id] = {
            "id": session_id,
            "url": f"https://checkout.stripe.com/c/pay/{session_id}",
            "payment_status": "unpaid",
            "amount_total": amount_total,
            "metadata": dict(params.get("metadata", {})),
        }
        logger.info("[STRIPE MOCK] Created checkout session %s (%s)", session_id, amount_total)
        return CheckoutSessionResult(session_id=session_id, url=self.sessions[session_id]["url"])

    async def retrieve_session(self, session_id: str) -> SessionStatus:
        if self._fail_with is not None:
            raise self._fail_with

        session = self.sessions.get(session_id)
        if session is None:
            raise GatewayError(f"No such checkout.session: '{session_id}'", status_code=404, code="resource_missing")
        return SessionStatus(
            session_id=session["id"],
            payment_status=session["payment_status"],
            amount_total=session["amount_total"],
            metadata=dict(session["metadata"]),
        )

    def mark_paid(self, session_id: str) -> None:
        self.sessions[session_id]["payment_status"] = "paid"
