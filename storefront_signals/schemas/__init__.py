"""Pydantic schemas for storefront payloads."""

from storefront_signals.schemas.cart import Cart, CartLine
from storefront_signals.schemas.storefront import StorefrontProductPayload, StorefrontVariant

__all__ = [
    # Cart
    "Cart",
    "CartLine",
    # Product
    "StorefrontProductPayload",
    "StorefrontVariant",
]
