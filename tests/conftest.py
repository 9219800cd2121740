"""Pytest configuration and shared fixtures."""

from typing import Any, Callable, Dict, List, Tuple

import pytest

from storefront_signals.schemas.cart import Cart, CartLine


class FakeTimer:
    """Timer that only fires when a test tells it to."""

    def __init__(self):
        self.pending: Dict[int, Callable] = {}
        self.delays: List[float] = []
        self._next_handle = 0

    def call_later(self, delay: float, callback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self.pending[handle] = callback
        self.delays.append(delay)
        return handle

    def cancel(self, handle: int) -> None:
        self.pending.pop(handle, None)

    async def fire(self) -> None:
        """Run the oldest pending callback."""
        handle = min(self.pending)
        callback = self.pending.pop(handle)
        await callback()


class RecordingSink:
    """Sink keeping everything it receives."""

    def __init__(self):
        self.properties: List[Dict[str, Any]] = []
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    async def set_properties(self, properties: Dict[str, Any]) -> None:
        self.properties.append(properties)

    async def track_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        self.events.append((event_type, payload))


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_line(title: str = "Linen Shirt", price: int = 2500, **kwargs) -> CartLine:
    return CartLine(
        product_title=title,
        final_line_price=price,
        url=kwargs.get("url", f"/products/{title.lower().replace(' ', '-')}?variant=1"),
        image=kwargs.get("image", f"https://cdn.example.com/{title.lower().replace(' ', '-')}.jpg"),
    )


@pytest.fixture
def timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cart() -> Cart:
    """A two-line cart, newest line first."""
    return Cart(items=[make_line("Linen Shirt", 2500), make_line("Wool Scarf", 4000)])
