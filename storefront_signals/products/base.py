"""Canonical product records shared by all extraction sources.

Both the structured-data extractor and the storefront JSON extractor
produce these records, so callers never branch on where a product
came from.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Brand:
    """Product brand."""

    name: Optional[str] = None
    type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type}


@dataclass(frozen=True)
class Offer:
    """Product offer. Price is expressed in major currency units."""

    type: Optional[str] = None
    price: Optional[float] = None
    price_currency: Optional[str] = None
    price_valid_until: Optional[str] = None  # ISO-8601
    url: Optional[str] = None
    item_condition: Optional[str] = None
    availability: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "price": self.price,
            "priceCurrency": self.price_currency,
            "priceValidUntil": self.price_valid_until,
            "url": self.url,
            "itemCondition": self.item_condition,
            "availability": self.availability,
        }


@dataclass(frozen=True)
class Product:
    """Normalized product data structure returned by all extractors."""

    type: Optional[str] = None
    image: Optional[str] = None
    name: Optional[str] = None  # sanitized
    description: Optional[str] = None  # sanitized
    sku: Optional[str] = None
    gtin13: Optional[str] = None
    offer: Optional[Offer] = None
    brand: Optional[Brand] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the event payload form."""
        return {
            "type": self.type,
            "image": self.image,
            "name": self.name,
            "description": self.description,
            "sku": self.sku,
            "gtin13": self.gtin13,
            "offer": self.offer.to_dict() if self.offer else None,
            "brand": self.brand.to_dict() if self.brand else None,
        }
