"""Current-page product extraction.

Tries structured data first, then the storefront product JSON. The first
source producing a product wins; a failing source degrades to None.
"""

from typing import Callable, Optional

import structlog

from storefront_signals.host import FetchProductPage, PageSnapshot
from storefront_signals.products.base import Product
from storefront_signals.products.storefront import (
    parse_storefront_payload,
    product_from_storefront_payload,
    storefront_product_url,
)
from storefront_signals.products.structured_data import extract_structured_data_product

logger = structlog.get_logger(__name__)


class ProductExtractor:
    """Extracts the canonical product shown on the current page."""

    def __init__(
        self,
        current_page: Callable[[], PageSnapshot],
        fetch_product_page: FetchProductPage,
    ):
        """Initialize the extractor.

        Args:
            current_page: Returns the page currently displayed
            fetch_product_page: Fetches "<product-url>.js", None on non-2xx
        """
        self.current_page = current_page
        self.fetch_product_page = fetch_product_page
        self.logger = logger.bind(service="product_extractor")

    async def extract_current_product(self) -> Optional[Product]:
        """Extract the product on the current page.

        Returns:
            Product, or None for non-product pages and failed extractions
        """
        page = self.current_page()

        try:
            product = extract_structured_data_product(page.html)
        except Exception as e:
            self.logger.warning("structured_data_extraction_failed", url=page.url, error=str(e))
            product = None

        if product is not None:
            return product

        return await self._extract_from_storefront(page.url)

    async def _extract_from_storefront(self, page_url: str) -> Optional[Product]:
        json_url = storefront_product_url(page_url)
        if json_url is None:
            return None

        try:
            raw = await self.fetch_product_page(json_url)
            if raw is None:
                return None
            payload = parse_storefront_payload(raw)
        except Exception as e:
            self.logger.warning("storefront_product_fetch_failed", url=json_url, error=str(e))
            return None

        return product_from_storefront_payload(payload, page_url=page_url)
