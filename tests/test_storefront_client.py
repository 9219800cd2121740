"""Tests for the storefront HTTP client."""

import httpx
import pytest

from storefront_signals.clients import StorefrontClient
from storefront_signals.core.exceptions import PayloadParseError, TransportError

ORIGIN = "https://shop.example.com"

CART_JSON = {
    "token": "abc",
    "item_count": 2,
    "items": [
        {
            "product_title": "Linen Shirt",
            "final_line_price": 2500,
            "url": "/products/linen-shirt?variant=11",
            "image": "https://cdn.example.com/shirt.jpg",
            "quantity": 1,
        },
        {
            "product_title": "Gift Card",
            "final_line_price": 5000,
            "url": "/products/gift-card?variant=12",
            "image": None,
            "quantity": 1,
        },
    ],
}


def make_client(handler) -> StorefrontClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StorefrontClient(ORIGIN + "/", http_client=http_client)


class TestFetchCart:
    """Tests for StorefrontClient.fetch_cart."""

    async def test_parses_cart(self):
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, json=CART_JSON)

        cart = await make_client(handler).fetch_cart()

        assert requested == [ORIGIN + "/cart.js"]
        assert [line.product_title for line in cart.items] == ["Linen Shirt", "Gift Card"]
        assert cart.items[0].final_line_price == 2500
        assert cart.items[1].image is None

    async def test_empty_cart(self):
        cart = await make_client(lambda request: httpx.Response(200, json={"items": []})).fetch_cart()

        assert cart.is_empty

    async def test_non_success_status_raises(self):
        client = make_client(lambda request: httpx.Response(503, text="busy"))

        with pytest.raises(TransportError) as exc_info:
            await client.fetch_cart()

        assert exc_info.value.status_code == 503

    async def test_transport_failure_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError):
            await make_client(handler).fetch_cart()

    async def test_malformed_body_raises(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>login</html>"))

        with pytest.raises(PayloadParseError):
            await client.fetch_cart()


class TestFetchProductPage:
    """Tests for StorefrontClient.fetch_product_page."""

    async def test_returns_payload(self):
        client = make_client(lambda request: httpx.Response(200, json={"title": "Linen Shirt"}))

        payload = await client.fetch_product_page(ORIGIN + "/products/linen-shirt.js")

        assert payload == {"title": "Linen Shirt"}

    async def test_not_found_yields_none(self):
        client = make_client(lambda request: httpx.Response(404))

        assert await client.fetch_product_page(ORIGIN + "/products/gone.js") is None

    async def test_non_object_body_raises(self):
        client = make_client(lambda request: httpx.Response(200, json=[1, 2]))

        with pytest.raises(PayloadParseError):
            await client.fetch_product_page(ORIGIN + "/products/linen-shirt.js")
