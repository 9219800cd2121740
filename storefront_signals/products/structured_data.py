"""Product extraction from schema.org structured data (JSON-LD).

Scans the page's ``application/ld+json`` script blocks and normalizes the
first Product item found. This path needs no network round trip and is the
only one carrying currency information.
"""

import json
import re
from typing import Any, Dict, Iterator, Optional

import structlog
from bs4 import BeautifulSoup

from storefront_signals.products.base import Brand, Offer, Product
from storefront_signals.utils.normalizer import (
    PriceNormalizer,
    TextSanitizer,
    first_image,
    strip_schema_prefix,
)

logger = structlog.get_logger(__name__)

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")


def _iter_documents(html: str) -> Iterator[Any]:
    """Yield each parsed JSON-LD document on the page, skipping bad blocks."""
    soup = BeautifulSoup(html, "html.parser")

    for index, script in enumerate(soup.select('script[type="application/ld+json"]')):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue

        # Merchants often leave literal newlines inside string values
        raw = _LINE_BREAKS.sub(" ", raw)

        try:
            yield json.loads(raw)
        except ValueError as e:
            logger.warning("structured_data_parse_failed", block=index, error=str(e))


def _is_product(item: Any) -> bool:
    return isinstance(item, dict) and strip_schema_prefix(item.get("@type")) == "Product"


def find_product_item(html: str) -> Optional[Dict[str, Any]]:
    """Return the first Product item from the page's structured data.

    A block may hold a single item or a list of items.
    """
    for document in _iter_documents(html):
        items = document if isinstance(document, list) else [document]
        for item in items:
            if _is_product(item):
                return item
    return None


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        return str(value)
    return None


def _build_offer(raw: Any) -> Optional[Offer]:
    if isinstance(raw, list):
        raw = raw[0] if raw else None
    if not isinstance(raw, dict):
        return None

    return Offer(
        type=strip_schema_prefix(raw.get("@type")),
        price=PriceNormalizer.parse_price(raw.get("price")),
        price_currency=_as_text(raw.get("priceCurrency")),
        price_valid_until=_as_text(raw.get("priceValidUntil")),
        url=_as_text(raw.get("url")),
        item_condition=strip_schema_prefix(raw.get("itemCondition")),
        availability=strip_schema_prefix(raw.get("availability")),
    )


def _build_brand(raw: Any) -> Optional[Brand]:
    if isinstance(raw, str):
        return Brand(name=raw)
    if not isinstance(raw, dict):
        return None
    return Brand(
        name=_as_text(raw.get("name")),
        type=strip_schema_prefix(raw.get("@type")),
    )


def product_from_structured_data(item: Dict[str, Any]) -> Product:
    """Normalize a schema.org Product item.

    Args:
        item: Decoded JSON-LD object whose @type is Product

    Returns:
        Canonical Product
    """
    return Product(
        type=strip_schema_prefix(item.get("@type")),
        image=first_image(item.get("image")),
        name=TextSanitizer.sanitize(item.get("name")),
        description=TextSanitizer.sanitize(item.get("description")),
        sku=_as_text(item.get("sku")),
        gtin13=_as_text(item.get("gtin13")),
        offer=_build_offer(item.get("offers")),
        brand=_build_brand(item.get("brand")),
    )


def extract_structured_data_product(html: Optional[str]) -> Optional[Product]:
    """Extract the page's product from its structured data.

    Args:
        html: Page HTML

    Returns:
        Product, or None when the page declares no Product item
    """
    if not html:
        return None

    item = find_product_item(html)
    if item is None:
        logger.debug("structured_data_product_not_found")
        return None

    return product_from_structured_data(item)
