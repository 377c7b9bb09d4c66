"""Scheduler service - triggers sweeps on a cron or interval cadence.

One sweep runs immediately on start, then on every tick. The job runs
with max_instances=1 and coalesce=True so a slow sweep makes APScheduler
skip overlapping ticks instead of piling them up; the coordinator's own
lock still serializes any sweep started elsewhere.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.base import BaseTrigger
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from .sweep import SweepCoordinator

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "run_sweep"


# Crontab numbers weekdays from Sunday (0 or 7); APScheduler from Monday
CRONTAB_WEEKDAYS = ["sun", "mon", "tue", "wed", "thu", "fri", "sat"]


def crontab_day_of_week(field: str) -> str:
    """Translate a crontab day-of-week field into APScheduler weekday names.

    Numeric values, ranges and steps are expanded into an explicit list of
    names ("1-5" becomes "mon,tue,wed,thu,fri"). Named values pass through.

    Raises ValueError for a value outside 0-7 or a malformed part.
    """
    if field == "*":
        return field

    days = []
    for part in field.lower().split(","):
        if any(c.isalpha() for c in part):
            days.append(part)
            continue

        span, _, step = part.partition("/")
        step = int(step) if step else 1
        if span == "*":
            first, last = 0, 6
        elif "-" in span:
            first, last = (int(v) for v in span.split("-", 1))
        else:
            first = int(span)
            last = 7 if step > 1 else first

        if not (0 <= first <= last <= 7) or step < 1:
            raise ValueError(f"Invalid day of week: {part!r}")

        for number in range(first, last + 1, step):
            name = CRONTAB_WEEKDAYS[number % 7]
            if name not in days:
                days.append(name)

    return ",".join(days)


def build_trigger(
    cron_schedule: Optional[str] = None,
    interval_seconds: Optional[int] = None,
) -> BaseTrigger:
    """Build the sweep trigger.

    An explicit interval wins over a cron schedule. Cron expressions may
    have 5 fields, or 6 with a leading seconds field. Weekday numbers
    follow crontab (0 and 7 are Sunday).

    Raises ValueError for a malformed cron expression.
    """
    if interval_seconds:
        return IntervalTrigger(seconds=interval_seconds, timezone=timezone.utc)

    if not cron_schedule:
        raise ValueError("Either a cron schedule or an interval is required")

    fields = cron_schedule.split()
    if len(fields) == 5:
        fields = ["0"] + fields
    if len(fields) == 6:
        second, minute, hour, day, month, day_of_week = fields
        return CronTrigger(
            second=second,
            minute=minute,
            hour=hour,
            day=day,
            month=month,
            day_of_week=crontab_day_of_week(day_of_week),
            timezone=timezone.utc,
        )
    raise ValueError(f"Wrong number of fields in cron schedule: got {len(fields)}, expected 5 or 6")


class SchedulerService:
    """Service for running sweeps periodically."""

    def __init__(self, coordinator: SweepCoordinator, trigger: BaseTrigger):
        self.coordinator = coordinator
        self.trigger = trigger
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._running = False

    def start(self, run_immediately: bool = True):
        """Start the scheduler. Must be called with a running event loop."""
        if self._running:
            return

        self.scheduler = AsyncIOScheduler(timezone=timezone.utc)

        job_kwargs = {}
        if run_immediately:
            # Startup sweep, before the first regular tick
            job_kwargs["next_run_time"] = datetime.now(timezone.utc)

        self.scheduler.add_job(
            self._run_sweep,
            trigger=self.trigger,
            id=SWEEP_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            misfire_grace_time=None,
            **job_kwargs,
        )

        self.scheduler.start()
        self._running = True
        logger.info(f"Scheduler started with trigger {self.trigger}")

    def stop(self):
        """Stop the scheduler."""
        if self.scheduler and self._running:
            self.scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Scheduler stopped")

    @property
    def running(self) -> bool:
        return self._running

    async def _run_sweep(self):
        """Job entry point; errors are logged so the job keeps its schedule."""
        logger.info("Running scheduled health check...")
        try:
            await self.coordinator.run_sweep()
        except Exception as e:
            logger.error(f"Error running health check: {type(e).__name__}: {e}")
