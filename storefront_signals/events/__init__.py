"""Tracked events: exit intent detection and the event gate."""

from .exit_intent import ExitIntentDetector, PointerLeaveEvent
from .gate import EXIT_EVENT, EventGate, EventMemory

__all__ = [
    "EXIT_EVENT",
    "EventGate",
    "EventMemory",
    "ExitIntentDetector",
    "PointerLeaveEvent",
]
