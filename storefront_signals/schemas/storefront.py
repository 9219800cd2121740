"""Pydantic schemas for the storefront product resource (``<product-url>.js``).

Prices in this payload are expressed in cents. Only the fields consumed by
the product normalizer are declared.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StorefrontVariant(BaseModel):
    """A purchasable variant of a storefront product."""

    model_config = ConfigDict(extra="ignore")

    sku: Optional[str] = None
    barcode: Optional[str] = None
    price: Optional[Any] = None  # cents


class StorefrontProductPayload(BaseModel):
    """Storefront product JSON as returned by ``<product-url>.js``."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    vendor: Optional[str] = None
    available: bool = False
    price: Optional[Any] = None  # cents
    featured_image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    variants: List[StorefrontVariant] = Field(default_factory=list)
