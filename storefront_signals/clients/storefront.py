"""Storefront HTTP client.

Default implementation of the network capabilities the plugin needs:
reading the shopper's cart and reading a product's JSON resource.
"""

from typing import Any, Dict, Optional

import httpx
import structlog
from pydantic import ValidationError

from storefront_signals.config import settings
from storefront_signals.core.exceptions import PayloadParseError, TransportError
from storefront_signals.schemas.cart import Cart
from storefront_signals.utils.retry import http_retry

logger = structlog.get_logger(__name__)


class StorefrontClient:
    """Async client for a single storefront.

    The shopper's session lives in the client's cookies, so callers that
    need a specific cart should pass a pre-configured httpx.AsyncClient.
    """

    CART_PATH = "/cart.js"

    def __init__(self, origin: str, http_client: Optional[httpx.AsyncClient] = None):
        """Initialize the storefront client.

        Args:
            origin: Shop origin, e.g. "https://shop.example.com"
            http_client: Optional httpx client (created on first use otherwise)
        """
        self.origin = origin.rstrip("/")
        self._client = http_client
        self._owns_client = http_client is None
        self.logger = logger.bind(service="storefront_client", origin=self.origin)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=settings.HTTP_TIMEOUT_SECONDS,
                headers={"Accept": "application/json"},
            )
        return self._client

    @http_retry
    async def _get(self, url: str) -> httpx.Response:
        return await self._get_client().get(url)

    async def fetch_cart(self) -> Cart:
        """Fetch the shopper's cart.

        Returns:
            Parsed Cart

        Raises:
            TransportError: On transport failure or non-2xx status
            PayloadParseError: If the body is not a cart
        """
        url = self.origin + self.CART_PATH
        try:
            response = await self._get(url)
        except httpx.HTTPError as e:
            raise TransportError(url, str(e)) from e

        if not response.is_success:
            raise TransportError(url, f"HTTP {response.status_code}", response.status_code)

        try:
            cart = Cart.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise PayloadParseError("cart", str(e)) from e

        self.logger.debug("cart_fetched", lines=len(cart.items))
        return cart

    async def fetch_product_page(self, url: str) -> Optional[Dict[str, Any]]:
        """Fetch a product's JSON resource.

        Args:
            url: Product JSON URL ("<product-page-url>.js")

        Returns:
            Decoded payload, or None on a non-2xx status

        Raises:
            TransportError: On transport failure
            PayloadParseError: If the body is not a JSON object
        """
        try:
            response = await self._get(url)
        except httpx.HTTPError as e:
            raise TransportError(url, str(e)) from e

        if not response.is_success:
            self.logger.info("product_json_unavailable", url=url, status_code=response.status_code)
            return None

        try:
            payload = response.json()
        except ValueError as e:
            raise PayloadParseError("product JSON", str(e)) from e

        if not isinstance(payload, dict):
            raise PayloadParseError("product JSON", "expected an object")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
