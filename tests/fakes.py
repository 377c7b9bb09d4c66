"""Test doubles and helpers shared across test modules."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

import httpx

from healthwatch.models import Status
from healthwatch.services.prober import ProbeOutcome, ProberService


class ScriptedProber:
    """Returns queued outcomes per endpoint; OK once the queue runs out."""

    def __init__(self, outcomes: Optional[Dict[str, List[ProbeOutcome]]] = None, delay: float = 0.0):
        self.outcomes = {k: list(v) for k, v in (outcomes or {}).items()}
        self.delay = delay
        self.calls: List[str] = []

    def queue(self, endpoint: str, *outcomes: ProbeOutcome) -> None:
        self.outcomes.setdefault(endpoint, []).extend(outcomes)

    async def check(self, endpoint: str, timeout: Optional[float] = None) -> ProbeOutcome:
        self.calls.append(endpoint)
        if self.delay:
            await asyncio.sleep(self.delay)
        queued = self.outcomes.get(endpoint)
        if queued:
            return queued.pop(0)
        return ProbeOutcome(status=Status.OK)


class RecordingNotifier:
    """Notifier double that records calls."""

    def __init__(self, result: bool = True, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.calls: List[tuple] = []

    async def notify(self, endpoint: str, reason: str) -> bool:
        self.calls.append((endpoint, reason))
        if self.error:
            raise self.error
        return self.result


def ok(detail: Optional[str] = None) -> ProbeOutcome:
    return ProbeOutcome(status=Status.OK, detail=detail)


def down(detail: str) -> ProbeOutcome:
    return ProbeOutcome(status=Status.DOWN, detail=detail)


def make_clock(start: Optional[datetime] = None) -> Callable[[], datetime]:
    """Clock that advances one second per call."""
    current = [start or datetime(2025, 1, 1, tzinfo=timezone.utc)]

    def clock() -> datetime:
        current[0] = current[0] + timedelta(seconds=1)
        return current[0]

    return clock


def mock_prober(handler) -> ProberService:
    """A real ProberService backed by httpx.MockTransport."""
    return ProberService(timeout=5.0, transport=httpx.MockTransport(handler))
