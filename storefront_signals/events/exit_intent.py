"""Exit intent detection on product pages.

A pointer-leave event with no related target means the pointer left the
browser viewport, which is taken as a sign the shopper is about to leave.
The heuristic is imperfect across browsers and is kept as is.
"""

from dataclasses import dataclass
from typing import AsyncIterable, Awaitable, Callable, Optional

import structlog

from storefront_signals.events.gate import EXIT_EVENT, EventGate
from storefront_signals.host import PageSnapshot
from storefront_signals.products.base import Product

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PointerLeaveEvent:
    """A page-level pointer-leave signal.

    ``related_target`` identifies the element the pointer moved to, or is
    None when it left the page entirely.
    """

    related_target: Optional[str] = None

    @property
    def left_viewport(self) -> bool:
        return self.related_target is None


class ExitIntentDetector:
    """Turns exit signals into tracked Exit events."""

    def __init__(
        self,
        extract_product: Callable[[], Awaitable[Optional[Product]]],
        gate: EventGate,
        current_page: Callable[[], PageSnapshot],
    ):
        """Initialize exit intent detector.

        Args:
            extract_product: Extracts the current page's product
            gate: Deduplicates and rate limits emissions
            current_page: Returns the page currently displayed
        """
        self.extract_product = extract_product
        self.gate = gate
        self.current_page = current_page
        self.logger = logger.bind(service="exit_intent")

    async def handle_pointer_leave(self, event: PointerLeaveEvent) -> bool:
        """Handle one pointer-leave signal.

        Returns:
            True if an Exit event was emitted
        """
        if not event.left_viewport:
            return False

        product = await self.extract_product()
        if product is None:
            self.logger.debug("exit_intent_without_product")
            return False

        url = self.current_page().url
        return await self.gate.track(EXIT_EVENT, product, url)

    async def listen(self, events: AsyncIterable[PointerLeaveEvent]) -> None:
        """Consume pointer-leave signals until the stream ends (page unload).

        A failure while handling one signal never ends the listener.
        """
        async for event in events:
            try:
                await self.handle_pointer_leave(event)
            except Exception as e:
                self.logger.warning("exit_intent_handling_failed", error=str(e))
