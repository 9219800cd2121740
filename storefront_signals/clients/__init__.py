"""HTTP clients for storefront resources."""

from storefront_signals.clients.storefront import StorefrontClient

__all__ = ["StorefrontClient"]
