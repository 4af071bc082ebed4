"""
Stripe Checkout client.

Wraps the blocking Stripe SDK calls and runs them in the thread pool so a slow
Stripe response only holds up the request that made it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import stripe
from fastapi.concurrency import run_in_threadpool

from trackmypark.integrations.contracts.interfaces import (
    CheckoutGateway,
    CheckoutSessionResult,
    GatewayError,
    SessionStatus,
)

logger = logging.getLogger(__name__)


class StripeCheckoutClient(CheckoutGateway):
    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ValueError("Stripe secret key is required.")
        # Passed per call instead of setting the global stripe.api_key.
        self._api_key = api_key

    async def create_session(self, params: Dict[str, Any]) -> CheckoutSessionResult:
        session = await self._call(stripe.checkout.Session.create, api_key=self._api_key, **params)
        return CheckoutSessionResult(session_id=session.id, url=session.url)

    async def retrieve_session(self, session_id: str) -> SessionStatus:
        session = await self._call(stripe.checkout.Session.retrieve, session_id, api_key=self._api_key)
        return SessionStatus(
            session_id=session.id,
            payment_status=session.payment_status,
            amount_total=session.amount_total,
            metadata=plain_metadata(session.metadata),
        )

    async def _call(self, fn, *args: Any, **kwargs: Any):
        try:
            return await run_in_threadpool(fn, *args, **kwargs)
        except stripe.APIConnectionError as e:
            logger.error("Unable to reach Stripe: %s", e)
            raise GatewayError(_describe(e), code="connection_error") from e
        except stripe.StripeError as e:
            logger.error("Stripe error (%s, HTTP %s): %s", type(e).__name__, e.http_status, e)
            raise GatewayError(_describe(e), status_code=e.http_status, code=e.code) from e


def plain_metadata(metadata: Any) -> Dict[str, Any]:
    if not metadata:
        return {}
    if isinstance(metadata, dict):
        return dict(metadata)
    to_dict = getattr(metadata, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return dict(metadata)


def _describe(error: stripe.StripeError) -> str:
    return error.user_message or str(error) or type(error).__name__
