"""Shopify plugin entry point.

Builds the cart reminder poller and the exit intent detector from the
host's options and capabilities.
"""

from typing import Any, AsyncIterable, Dict, Optional, Union

import structlog

from storefront_signals.config import ReminderOptions
from storefront_signals.events.exit_intent import ExitIntentDetector, PointerLeaveEvent
from storefront_signals.events.gate import EventGate, EventMemory
from storefront_signals.host import HostCapabilities
from storefront_signals.i18n import make_translator
from storefront_signals.products.extractor import ProductExtractor
from storefront_signals.reminder.poller import CartPoller
from storefront_signals.reminder.timers import APSchedulerTimer, Timer

logger = structlog.get_logger(__name__)


class ShopifyPlugin:
    """Cart reminder and exit intent signals for a Shopify storefront.

    Example:
        plugin = ShopifyPlugin({"cartReminderStrategy": "most-expensive"}, capabilities)
        plugin.start()
        await plugin.listen_for_exit_intent(pointer_leave_events)
    """

    def __init__(
        self,
        options: Union[ReminderOptions, Dict[str, Any], None],
        capabilities: HostCapabilities,
        timer: Optional[Timer] = None,
        origin: str = "",
    ):
        """Initialize the plugin.

        Args:
            options: Plugin options (camelCase or snake_case keys)
            capabilities: Host capabilities
            timer: Timer for the cart poller (APScheduler-backed if None)
            origin: Shop origin prefixed to site-relative reminder URLs
        """
        if isinstance(options, ReminderOptions):
            self.options = options
        else:
            self.options = ReminderOptions.model_validate(options or {})

        self.capabilities = capabilities
        self.timer = timer or APSchedulerTimer()
        translate = capabilities.translate or make_translator()

        self.poller = CartPoller(
            options=self.options,
            fetch_cart=capabilities.fetch_cart,
            sink=capabilities.sink,
            is_subscribed=capabilities.is_subscribed,
            translate=translate,
            timer=self.timer,
            origin=origin,
        )
        self.extractor = ProductExtractor(
            current_page=capabilities.current_page,
            fetch_product_page=capabilities.fetch_product_page,
        )
        self.exit_detector = ExitIntentDetector(
            extract_product=self.extractor.extract_current_product,
            gate=EventGate(sink=capabilities.sink, memory=EventMemory()),
            current_page=capabilities.current_page,
        )
        self.logger = logger.bind(service="shopify_plugin")
        self.logger.info("plugin_ready", options=self.options.model_dump())

    def start(self) -> None:
        """Start the cart reminder unless it is disabled."""
        if self.options.disable_cart_reminder:
            self.logger.info("cart_reminder_disabled")
            return
        self.poller.start()

    def stop(self) -> None:
        """Stop the cart reminder."""
        self.poller.stop()

    async def listen_for_exit_intent(self, events: AsyncIterable[PointerLeaveEvent]) -> None:
        """Feed the page's pointer-leave signals to the exit intent detector."""
        await self.exit_detector.listen(events)

    def close(self) -> None:
        """Stop polling and release the timer's scheduler."""
        self.stop()
        if isinstance(self.timer, APSchedulerTimer):
            self.timer.shutdown()
