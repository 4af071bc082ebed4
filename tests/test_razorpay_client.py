import base64
import json

import httpx
import pytest

from trackmypark.integrations.clients.real_http.razorpay import RazorpayClient
from trackmypark.integrations.contracts.interfaces import GatewayError

PAYLOAD = {
    "amount": 10000,
    "currency": "INR",
    "receipt": "receipt_order_1",
    "notes": {"spotName": "A1", "duration": "2h"},
}


def _client(handler):
    return RazorpayClient("rzp_test_key", "rzp_secret", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_create_order_posts_with_basic_auth():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        body = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "id": "order_ABC",
                "entity": "order",
                "amount": body["amount"],
                "currency": body["currency"],
                "receipt": body["receipt"],
                "status": "created",
            },
        )

    order = await _client(handler).create_order(PAYLOAD)

    assert seen["method"] == "POST"
    assert seen["url"] == "https://api.razorpay.com/v1/orders"
    assert seen["auth"] == "Basic " + base64.b64encode(b"rzp_test_key:rzp_secret").decode()
    assert order.order_id == "order_ABC"
    assert order.amount == 10000
    assert order.currency == "INR"
    assert order.receipt == "receipt_order_1"


@pytest.mark.asyncio
async def test_error_body_is_surfaced_as_gateway_error():
    def handler(request):
        return httpx.Response(
            400,
            json={"error": {"code": "BAD_REQUEST_ERROR", "description": "Order amount less than minimum amount allowed"}},
        )

    with pytest.raises(GatewayError) as exc:
        await _client(handler).create_order(PAYLOAD)
    assert exc.value.status_code == 400
    assert exc.value.code == "BAD_REQUEST_ERROR"
    assert exc.value.message == "Order amount less than minimum amount allowed"


@pytest.mark.asyncio
async def test_connection_failure_is_tagged():
    def handler(request):
        raise httpx.ConnectError("Name or service not known", request=request)

    with pytest.raises(GatewayError) as exc:
        await _client(handler).create_order(PAYLOAD)
    assert exc.value.code == "connection_error"
    assert exc.value.status_code is None


@pytest.mark.asyncio
async def test_list_orders_passes_count():
    def handler(request):
        assert request.url.params["count"] == "1"
        return httpx.Response(200, json={"entity": "collection", "count": 1, "items": [{"id": "order_1"}]})

    data = await _client(handler).list_orders(count=1)
    assert data["count"] == 1


def test_client_requires_credentials():
    with pytest.raises(ValueError):
        RazorpayClient("", "secret")
