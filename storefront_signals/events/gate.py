"""Event deduplication and rate limiting.

The gate sits in front of the sink's ``track_event``. It suppresses:
- an event repeating the previous emitted event's type and product SKU
- an Exit event for the same page URL within the cooldown window

Each decision reads and updates the memory without awaiting in between,
so a decision and its own state update cannot interleave with another.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

import structlog

from storefront_signals.config import settings
from storefront_signals.products.base import Product
from storefront_signals.sinks import Sink

logger = structlog.get_logger(__name__)

EXIT_EVENT = "Exit"


@dataclass
class EventMemory:
    """Most recent emission state. Owned by a single gate."""

    last_event_type: Optional[str] = None
    last_event_sku: Optional[str] = None
    last_exit_url: Optional[str] = None
    last_exit_at: Optional[float] = None


class EventGate:
    """Decides whether a candidate event reaches the sink."""

    def __init__(
        self,
        sink: Sink,
        memory: Optional[EventMemory] = None,
        clock: Callable[[], float] = time.monotonic,
        exit_cooldown_seconds: Optional[float] = None,
    ):
        """Initialize event gate.

        Args:
            sink: Receives the events that pass
            memory: Emission memory (a fresh one if None)
            clock: Returns the current time in seconds
            exit_cooldown_seconds: Exit rate limit window, defaults to
                EXIT_EVENT_COOLDOWN_SECONDS
        """
        self.sink = sink
        self.memory = memory if memory is not None else EventMemory()
        self.clock = clock
        self.exit_cooldown_seconds = (
            exit_cooldown_seconds
            if exit_cooldown_seconds is not None
            else settings.EXIT_EVENT_COOLDOWN_SECONDS
        )
        self.logger = logger.bind(service="event_gate")

    def is_duplicate(self, event_type: str, product: Optional[Product]) -> bool:
        """True if this event repeats the last emitted one.

        Only the SKU is compared. A missing SKU never matches.
        """
        sku = product.sku if product else None
        return (
            sku is not None
            and self.memory.last_event_sku is not None
            and self.memory.last_event_type == event_type
            and self.memory.last_event_sku == sku
        )

    def is_rate_limited(self, event_type: str, url: Optional[str], now: float) -> bool:
        """True if an Exit event for this URL was emitted within the cooldown."""
        if event_type != EXIT_EVENT or self.memory.last_exit_at is None:
            return False
        return (
            url == self.memory.last_exit_url
            and now - self.memory.last_exit_at < self.exit_cooldown_seconds
        )

    def allow(self, event_type: str, product: Optional[Product], url: Optional[str]) -> bool:
        """Decide on an event and record it when allowed.

        Returns:
            True if the event should be forwarded to the sink
        """
        now = self.clock()

        if self.is_duplicate(event_type, product):
            self.logger.debug("event_deduplicated", event_type=event_type, sku=product.sku)
            return False

        if self.is_rate_limited(event_type, url, now):
            self.logger.debug(
                "event_rate_limited",
                event_type=event_type,
                url=url,
                elapsed_seconds=now - self.memory.last_exit_at,
            )
            return False

        self.memory.last_event_type = event_type
        self.memory.last_event_sku = product.sku if product else None
        if event_type == EXIT_EVENT:
            self.memory.last_exit_url = url
            self.memory.last_exit_at = now
        return True

    async def track(self, event_type: str, product: Optional[Product], url: Optional[str]) -> bool:
        """Forward an event to the sink unless it is suppressed.

        Args:
            event_type: Event name, e.g. "Exit"
            product: Product the event is about
            url: Current page URL

        Returns:
            True if the event was forwarded
        """
        if not self.allow(event_type, product, url):
            return False

        payload = {
            "product": product.to_dict() if product else None,
            "url": url,
        }
        await self.sink.track_event(event_type, payload)

        self.logger.info("event_tracked", event_type=event_type, url=url)
        return True
