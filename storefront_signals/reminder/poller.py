"""Adaptive cart polling.

The poller snapshots the cart every few seconds and publishes reminder
properties. Visitors who are not subscribed to notifications are sampled
on one cycle in ``unsubscribed_multiplier`` only: a fixed duty cycle, not
an exponential backoff.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

import structlog

from storefront_signals.config import ReminderOptions, settings
from storefront_signals.host import FetchCart, IsSubscribed
from storefront_signals.i18n import make_translator
from storefront_signals.reminder.properties import ReminderProperties, derive_reminder_properties
from storefront_signals.reminder.timers import APSchedulerTimer, Timer
from storefront_signals.sinks import Sink

logger = structlog.get_logger(__name__)


@dataclass
class SchedulerState:
    """Mutable state of the polling loop."""

    running: bool = False
    run_count: int = 0
    timer_handle: Optional[Any] = None


class CartPoller:
    """Polls the cart and publishes cart reminder properties.

    The loop is a RUNNING/STOPPED state machine driving one single-shot
    timer at a time:
    - each tick schedules the next one only after its own work settled,
      so slow updates delay the next tick and ticks never overlap
    - a failed update is logged and the loop carries on
    - stop() cancels the pending timer; an update already in flight
      still publishes its result
    """

    def __init__(
        self,
        options: ReminderOptions,
        fetch_cart: FetchCart,
        sink: Sink,
        is_subscribed: Optional[IsSubscribed] = None,
        translate: Optional[Callable[[str], str]] = None,
        timer: Optional[Timer] = None,
        interval_ms: Optional[int] = None,
        unsubscribed_multiplier: Optional[int] = None,
        origin: str = "",
    ):
        """Initialize cart poller.

        Args:
            options: Cart reminder options
            fetch_cart: Fetches the current cart, raises on failure
            sink: Receives the published properties
            is_subscribed: Optional subscription status check
            translate: Localizes the default message (built-in table if None)
            timer: Single-shot timer (APScheduler-backed if None)
            interval_ms: Delay between ticks, defaults to POLL_INTERVAL_MS
            unsubscribed_multiplier: Duty cycle divisor while unsubscribed
            origin: Shop origin prefixed to site-relative reminder URLs
        """
        self.options = options
        self.fetch_cart = fetch_cart
        self.sink = sink
        self.is_subscribed = is_subscribed
        self.translate = translate or make_translator()
        self.timer = timer or APSchedulerTimer()
        self.interval_ms = interval_ms if interval_ms is not None else settings.POLL_INTERVAL_MS
        self.unsubscribed_multiplier = (
            unsubscribed_multiplier or settings.UNSUBSCRIBED_POLL_MULTIPLIER
        )
        self.origin = origin
        self.state = SchedulerState()
        self._tick_in_flight = False
        self.logger = logger.bind(service="cart_poller")

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def run_count(self) -> int:
        return self.state.run_count

    def start(self) -> None:
        """Start polling. Starting an already scheduled loop only sets the flag."""
        self.state.running = True

        if self.state.timer_handle is None and not self._tick_in_flight:
            self._schedule(0)
            self.logger.info("cart_poller_started", interval_ms=self.interval_ms)
        else:
            self.logger.debug("cart_poller_already_scheduled")

    def stop(self) -> None:
        """Stop polling and cancel the pending tick, if any."""
        if not self.state.running:
            return

        self.state.running = False
        if self.state.timer_handle is not None:
            self.timer.cancel(self.state.timer_handle)
            self.state.timer_handle = None

        self.logger.info("cart_poller_stopped", run_count=self.state.run_count)

    async def update(self) -> ReminderProperties:
        """Fetch the cart once and publish the derived properties.

        Returns:
            The published properties

        Raises:
            Exception: Whatever the cart fetch raised
        """
        cart = await self.fetch_cart()
        properties = derive_reminder_properties(
            cart, self.options, self.translate, origin=self.origin
        )
        await self.sink.set_properties(properties.as_properties())

        self.logger.debug(
            "cart_reminder_published",
            lines=len(cart.items),
            cleared=properties.is_empty,
        )
        return properties

    def _schedule(self, delay_seconds: float) -> None:
        self.state.timer_handle = self.timer.call_later(delay_seconds, self._tick)

    async def _tick(self) -> None:
        self.state.timer_handle = None
        self.state.run_count += 1

        if not self.state.running:
            self.logger.debug("cart_poller_loop_ended", run_count=self.state.run_count)
            return

        self._tick_in_flight = True
        try:
            await self._run_cycle()
        finally:
            self._tick_in_flight = False

        self._schedule(self.interval_ms / 1000)

    async def _run_cycle(self) -> None:
        if self.is_subscribed is None:
            return

        try:
            subscribed = await self.is_subscribed()
        except Exception as e:
            self.logger.warning("subscription_check_failed", error=str(e))
            return

        if not subscribed and self.state.run_count % self.unsubscribed_multiplier != 1:
            return

        try:
            await self.update()
        except Exception as e:
            self.logger.warning(
                "cart_update_failed",
                run_count=self.state.run_count,
                subscribed=subscribed,
                error=str(e),
            )
