"""Data normalization utilities for product text, prices, and URLs."""

import math
import re
from typing import Any, Optional

from bs4 import BeautifulSoup

from storefront_signals.config import settings

ELLIPSIS = "…"

# schema.org tokens are published both with and without TLS
_SCHEMA_ORG_PREFIX = re.compile(r"^https?://schema\.org/")


class TextSanitizer:
    """Strips HTML from free text and caps its length.

    Product names and descriptions come straight from merchant input and
    routinely carry markup. The sanitized text never exceeds ``max_length``
    characters, the ellipsis included.
    """

    @staticmethod
    def strip_tags(raw: str) -> str:
        """Remove HTML tags, keeping the text content.

        Args:
            raw: Text possibly containing HTML

        Returns:
            Text content with tags removed and entities decoded
        """
        return BeautifulSoup(raw, "html.parser").get_text()

    @classmethod
    def sanitize(cls, raw: Any, max_length: Optional[int] = None) -> Optional[str]:
        """Strip tags and truncate to ``max_length`` characters.

        Args:
            raw: Raw text (non-strings yield None)
            max_length: Length cap, defaults to SANITIZED_TEXT_MAX_LENGTH

        Returns:
            Sanitized text, or None if there was no text
        """
        if not isinstance(raw, str):
            return None

        limit = max_length or settings.SANITIZED_TEXT_MAX_LENGTH
        text = cls.strip_tags(raw).strip()

        if len(text) > limit:
            text = text[: limit - 1] + ELLIPSIS
        return text


class PriceNormalizer:
    """Price parsing utilities for structured data and storefront payloads."""

    @staticmethod
    def parse_price(raw: Any) -> Optional[float]:
        """Parse a price value as a float.

        Handles numbers and numeric strings. Strings with trailing garbage
        ("19.99abc") and NaN are rejected rather than partially parsed.

        Args:
            raw: Raw price value

        Returns:
            Float price, or None if parsing fails
        """
        if raw is None or isinstance(raw, bool):
            return None

        if isinstance(raw, (int, float)):
            price = float(raw)
        elif isinstance(raw, str):
            try:
                price = float(raw.strip())
            except ValueError:
                return None
        else:
            return None

        if math.isnan(price) or math.isinf(price):
            return None
        return price

    @staticmethod
    def cents_to_major(raw: Any) -> Optional[float]:
        """Convert a price expressed in cents to major currency units.

        Args:
            raw: Price in cents (int, float, or numeric string)

        Returns:
            Price in major units (e.g. dollars), or None
        """
        cents = PriceNormalizer.parse_price(raw)
        if cents is None:
            return None
        return cents / 100


def strip_schema_prefix(token: Any) -> Optional[str]:
    """Strip the schema.org URI prefix from a type or enumeration token.

    "http://schema.org/InStock" -> "InStock"
    """
    if not isinstance(token, str):
        return None
    return _SCHEMA_ORG_PREFIX.sub("", token)


def normalize_protocol(url: Any) -> Optional[str]:
    """Rewrite a protocol-relative URL ("//cdn...") to an https URL."""
    if not isinstance(url, str) or not url:
        return None
    if url.startswith("//"):
        return "https:" + url
    return url


def first_image(image: Any) -> Optional[str]:
    """Pick an image URL from a bare string or a list of URLs.

    Anything else (objects, numbers, empty lists) yields None.
    """
    if isinstance(image, list):
        image = image[0] if image else None
    if isinstance(image, str) and image:
        return image
    return None
