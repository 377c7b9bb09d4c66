"""Sweep coordinator - one evaluation pass over every configured endpoint.

Per endpoint, in configured order:
1. Read the current record, then probe and build a fresh StatusRecord.
2. Replace the stored record; the store persists the full snapshot and
   returns the record it replaced, which drives the next two steps.
3. If the status differs from the prior record (or there was none),
   append a transition log entry.
4. If this is an edge into DOWN (including a first observation of DOWN),
   notify. Notifier failures are logged only; the store and the log
   have already advanced.

Sweeps are serialized by a lock. A call made while another sweep is
running waits for it and then runs its own full pass.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Protocol

from ..models import Status, StatusRecord, TransitionLogEntry
from ..models.status_record import utcnow
from .prober import ProberService
from .status_store import StatusStore
from .transition_log import TransitionLog

logger = logging.getLogger(__name__)


@dataclass
class EndpointResult:
    """What one sweep did for one endpoint."""
    endpoint: str
    record: Optional[StatusRecord] = None
    previous_status: Optional[Status] = None
    transitioned: bool = False
    notified: bool = False
    delivered: bool = False
    error: Optional[str] = None


@dataclass
class SweepReport:
    """Summary of a completed sweep."""
    started_at: datetime
    finished_at: Optional[datetime] = None
    results: List[EndpointResult] = field(default_factory=list)

    @property
    def transitions(self) -> int:
        return sum(1 for r in self.results if r.transitioned)

    @property
    def notifications(self) -> int:
        return sum(1 for r in self.results if r.notified)

    @property
    def down(self) -> int:
        return sum(1 for r in self.results if r.record and r.record.status == Status.DOWN)


class Notifier(Protocol):
    """Alert channel invoked on down-edges."""

    async def notify(self, endpoint: str, reason: str) -> bool:
        ...


def is_down_edge(new_status: Status, prior: Optional[StatusRecord]) -> bool:
    """True when entering DOWN from OK or from no prior observation."""
    return new_status == Status.DOWN and (prior is None or prior.status != Status.DOWN)


class SweepCoordinator:
    """Runs sweeps one at a time."""

    def __init__(
        self,
        endpoints: List[str],
        store: StatusStore,
        transition_log: TransitionLog,
        prober: ProberService,
        notifier: Notifier,
        timeout: Optional[float] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.endpoints = list(endpoints)
        self.store = store
        self.transition_log = transition_log
        self.prober = prober
        self.notifier = notifier
        self.timeout = timeout
        self.clock = clock
        self._lock = asyncio.Lock()
        self.sweep_count = 0

    @property
    def running(self) -> bool:
        return self._lock.locked()

    async def run_sweep(self) -> SweepReport:
        """Probe every endpoint once. Never raises for per-endpoint failures."""
        if self._lock.locked():
            logger.info("Sweep already in progress, waiting for it to finish")

        async with self._lock:
            report = SweepReport(started_at=self.clock())

            if not self.endpoints:
                logger.info("No endpoints configured, nothing to check")

            for endpoint in self.endpoints:
                try:
                    result = await self._check_endpoint(endpoint)
                except Exception as e:
                    logger.error(f"Error checking {endpoint}: {type(e).__name__}: {e}")
                    result = EndpointResult(endpoint=endpoint, error=str(e))
                report.results.append(result)

            report.finished_at = self.clock()
            self.sweep_count += 1

        logger.info(
            f"Health check completed: {len(report.results)} endpoint(s), "
            f"{report.down} down, {report.transitions} transition(s), "
            f"{report.notifications} notification(s)"
        )
        return report

    async def _check_endpoint(self, endpoint: str) -> EndpointResult:
        previous = self.store.get(endpoint)
        outcome = await self.prober.check(endpoint, self.timeout)

        record = StatusRecord(
            status=outcome.status,
            detail=outcome.detail,
            last_checked_at=self.clock(),
        )
        prior = self.store.update(endpoint, record)

        result = EndpointResult(
            endpoint=endpoint,
            record=record,
            previous_status=previous.status if previous else None,
        )

        if prior is None or prior.status != record.status:
            result.transitioned = True
            self.transition_log.append(TransitionLogEntry(
                timestamp=record.last_checked_at,
                endpoint=endpoint,
                new_status=record.status,
                reason=record.detail or "OK",
            ))
            logger.info(
                f"{endpoint}: {prior.status.value if prior else 'unknown'} -> "
                f"{record.status.value}"
            )

        if is_down_edge(record.status, prior):
            logger.info(f"Service at {endpoint} is down. Sending notification...")
            result.notified = True
            result.delivered = await self._notify(endpoint, record.detail)

        return result

    async def _notify(self, endpoint: str, reason: str) -> bool:
        """Returns True if the notifier reported success."""
        try:
            delivered = await self.notifier.notify(endpoint, reason)
        except Exception as e:
            logger.error(f"Error sending notification for {endpoint}: {type(e).__name__}: {e}")
            return False

        if not delivered:
            logger.warning(f"Notification for {endpoint} was not delivered")
        return bool(delivered)
