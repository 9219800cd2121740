"""Delivery sinks for computed properties and tracked events.

The host platform owns delivery; a sink is the hand-off point.
"""

from typing import Any, Dict, Protocol

import structlog

logger = structlog.get_logger(__name__)


class Sink(Protocol):
    """Hand-off interface to the notification platform."""

    async def set_properties(self, properties: Dict[str, Any]) -> None:
        """Publish flat key-value properties for the current visitor."""
        ...

    async def track_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        """Publish a structured event."""
        ...


class LoggingSink:
    """Sink that only logs what it receives. Used by the runner script."""

    def __init__(self):
        self.logger = logger.bind(service="logging_sink")

    async def set_properties(self, properties: Dict[str, Any]) -> None:
        self.logger.info("properties_published", **properties)

    async def track_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        self.logger.info("event_tracked", event_type=event_type, payload=payload)
