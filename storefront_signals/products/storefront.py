"""Product extraction from the storefront's per-product JSON resource.

Used when the page carries no structured data. The resource lives at the
product page URL with a ``.js`` suffix and has no currency information.
"""

import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from pydantic import ValidationError

from storefront_signals.core.exceptions import PayloadParseError
from storefront_signals.products.base import Brand, Offer, Product
from storefront_signals.schemas.storefront import StorefrontProductPayload
from storefront_signals.utils.normalizer import (
    PriceNormalizer,
    TextSanitizer,
    normalize_protocol,
)

# https://<host>/.../products/<slug>, nothing after the slug
PRODUCT_PAGE_PATTERN = re.compile(r"^https://[^/]+/(?:.*/)?products/[^/]+$")


def storefront_product_url(page_url: Optional[str]) -> Optional[str]:
    """Return the product JSON URL for a product page, or None.

    Query string and fragment of the page URL are ignored.

    Args:
        page_url: Current page URL

    Returns:
        "<product-page-url>.js", or None if the page is not a product page
    """
    if not page_url:
        return None

    parts = urlsplit(page_url)
    base = f"{parts.scheme}://{parts.netloc}{parts.path}"
    if not PRODUCT_PAGE_PATTERN.match(base):
        return None
    return base + ".js"


def parse_storefront_payload(raw: Dict[str, Any]) -> StorefrontProductPayload:
    """Validate a raw product payload.

    Raises:
        PayloadParseError: If the payload does not look like a product
    """
    try:
        return StorefrontProductPayload.model_validate(raw)
    except ValidationError as e:
        raise PayloadParseError("storefront product payload", str(e)) from e


def _images(payload: StorefrontProductPayload) -> List[str]:
    candidates = [payload.featured_image, *payload.images]
    return [url for url in (normalize_protocol(c) for c in candidates) if url]


def product_from_storefront_payload(
    payload: StorefrontProductPayload, page_url: Optional[str] = None
) -> Product:
    """Normalize a storefront product payload.

    Args:
        payload: Validated storefront product payload
        page_url: Product page URL, used as the offer URL

    Returns:
        Canonical Product
    """
    variant = payload.variants[0] if payload.variants else None
    raw_price = variant.price if variant and variant.price is not None else payload.price
    images = _images(payload)

    return Product(
        type="Product",
        image=images[0] if images else None,
        name=TextSanitizer.sanitize(payload.title),
        description=TextSanitizer.sanitize(payload.description),
        sku=variant.sku if variant else None,
        gtin13=variant.barcode if variant else None,
        offer=Offer(
            type="Offer",
            price=PriceNormalizer.cents_to_major(raw_price),
            price_currency=None,
            price_valid_until=None,
            url=page_url,
            item_condition=None,
            availability="InStock" if payload.available else "OutOfStock",
        ),
        brand=Brand(name=payload.vendor, type="Brand"),
    )
