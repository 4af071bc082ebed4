"""
Razorpay Orders HTTP Client.

Talks to the Razorpay REST API with HTTP basic auth (key id / key secret).
Every failure is raised as GatewayError so the policy layer can classify it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from trackmypark.integrations.contracts.interfaces import GatewayError, OrderGateway, OrderResult

logger = logging.getLogger(__name__)

RAZORPAY_API_URL = "https://api.razorpay.com/v1"


class RazorpayClient(OrderGateway):
    def __init__(
        self,
        key_id: str,
        key_secret: str,
        base_url: str = RAZORPAY_API_URL,
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not key_id or not key_secret:
            raise ValueError("Razorpay key id and secret are required.")
        self.key_id = key_id
        self._auth = (key_id, key_secret)
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def create_order(self, payload: Dict[str, Any]) -> OrderResult:
        data = await self._request("POST", "/orders", json=payload)
        return OrderResult(
            order_id=str(data.get("id", "")),
            amount=int(data.get("amount", payload.get("amount", 0))),
            currency=str(data.get("currency") or payload.get("currency", "")),
            status=str(data.get("status") or "created"),
            receipt=data.get("receipt"),
            raw=data,
        )

    async def list_orders(self, count: int = 1) -> Dict[str, Any]:
        return await self._request("GET", "/orders", params={"count": count})

    async def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(
                auth=self._auth,
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response.json() if response.content else {}
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            code, description = _error_details(e.response)
            logger.error("Razorpay %s %s failed: HTTP %s %s (%s)", method, path, status_code, code, description)
            raise GatewayError(description, status_code=status_code, code=code) from e
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            logger.error("Unable to reach Razorpay at %s: %s", url, e)
            raise GatewayError(str(e) or "Connection failed", code="connection_error") from e
        except httpx.TimeoutException as e:
            logger.error("Razorpay request timed out: %s %s", method, url)
            raise GatewayError(str(e) or "Request timed out", code="timeout") from e
        except httpx.RequestError as e:
            logger.error("Request error talking to Razorpay: %s", e)
            raise GatewayError(str(e) or "Request failed", code="request_error") from e


def _error_details(response: httpx.Response) -> tuple:
    """Pull ``error.code`` / ``error.description`` out of a Razorpay error body."""
    try:
        body = response.json()
    except ValueError:
        body = {}
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        return error.get("code"), error.get("description") or response.reason_phrase
    return None, response.text or response.reason_phrase
