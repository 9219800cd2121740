"""Cart reminder: adaptive cart polling and reminder property derivation."""

from .poller import CartPoller, SchedulerState
from .properties import ReminderProperties, derive_reminder_properties, select_cart_line
from .timers import APSchedulerTimer, Timer

__all__ = [
    "CartPoller",
    "SchedulerState",
    "ReminderProperties",
    "derive_reminder_properties",
    "select_cart_line",
    "APSchedulerTimer",
    "Timer",
]
