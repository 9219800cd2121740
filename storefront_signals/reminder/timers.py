"""Single-shot timers for completion-chained polling.

The cart poller schedules one job at a time and only schedules the next
one once the current tick has settled, so a timer here is a one-shot
DateTrigger job rather than an interval job.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Optional, Protocol

import structlog
from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

logger = structlog.get_logger(__name__)

TimerCallback = Callable[[], Awaitable[None]]


class Timer(Protocol):
    """Schedules one callback after a delay and cancels it on request."""

    def call_later(self, delay: float, callback: TimerCallback) -> Any:
        """Run ``callback`` once after ``delay`` seconds. Returns a handle."""
        ...

    def cancel(self, handle: Any) -> None:
        """Cancel a pending callback. Unknown or fired handles are ignored."""
        ...


class APSchedulerTimer:
    """Timer backed by an APScheduler AsyncIOScheduler.

    The scheduler is started lazily on the first call, which must happen
    inside a running event loop.
    """

    def __init__(self, scheduler: Optional[AsyncIOScheduler] = None):
        self.scheduler = scheduler or AsyncIOScheduler(timezone="UTC")
        self.logger = logger.bind(service="apscheduler_timer")

    def call_later(self, delay: float, callback: TimerCallback) -> Job:
        if not self.scheduler.running:
            self.scheduler.start()
            self.logger.info("timer_scheduler_started")

        run_date = datetime.now(timezone.utc) + timedelta(seconds=delay)
        return self.scheduler.add_job(
            func=callback,
            trigger=DateTrigger(run_date=run_date, timezone="UTC"),
            misfire_grace_time=None,  # late ticks still run
            max_instances=1,
        )

    def cancel(self, handle: Job) -> None:
        try:
            handle.remove()
        except JobLookupError:
            self.logger.debug("timer_job_already_gone", job_id=handle.id)

    def shutdown(self) -> None:
        """Stop the underlying scheduler without waiting for running jobs."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            self.logger.info("timer_scheduler_stopped")
