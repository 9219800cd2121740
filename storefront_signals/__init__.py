"""Storefront behavioral signals for a push notification platform.

This package provides:
- Cart reminder properties published by an adaptive cart poller
- Exit intent events carrying normalized product data
- Product normalization from structured data and storefront JSON
"""

from .config import ReminderOptions, settings
from .events import EventGate, EventMemory, ExitIntentDetector, PointerLeaveEvent
from .host import HostCapabilities, PageSnapshot
from .plugin import ShopifyPlugin
from .products import Brand, Offer, Product, ProductExtractor
from .reminder import CartPoller, ReminderProperties, derive_reminder_properties

__all__ = [
    # Entry point
    "ShopifyPlugin",
    "HostCapabilities",
    "PageSnapshot",
    "ReminderOptions",
    "settings",
    # Products
    "Brand",
    "Offer",
    "Product",
    "ProductExtractor",
    # Cart reminder
    "CartPoller",
    "ReminderProperties",
    "derive_reminder_properties",
    # Events
    "EventGate",
    "EventMemory",
    "ExitIntentDetector",
    "PointerLeaveEvent",
]
