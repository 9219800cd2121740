"""Capabilities the host environment injects into the plugin."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from storefront_signals.schemas.cart import Cart
from storefront_signals.sinks import Sink

FetchCart = Callable[[], Awaitable[Cart]]
FetchProductPage = Callable[[str], Awaitable[Optional[Dict[str, Any]]]]
IsSubscribed = Callable[[], Awaitable[bool]]
Translate = Callable[[str], str]


@dataclass(frozen=True)
class PageSnapshot:
    """The page the shopper is currently looking at."""

    url: str
    html: str = ""


@dataclass
class HostCapabilities:
    """Everything the plugin needs from its host.

    ``is_subscribed`` is optional; without it the cart poller keeps its
    cadence but skips its work. ``translate`` defaults to the built-in
    translation table.
    """

    fetch_cart: FetchCart
    fetch_product_page: FetchProductPage
    current_page: Callable[[], PageSnapshot]
    sink: Sink
    is_subscribed: Optional[IsSubscribed] = None
    translate: Optional[Translate] = None
