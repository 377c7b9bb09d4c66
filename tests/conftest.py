"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from healthwatch.services.status_store import StatusStore
from healthwatch.services.sweep import SweepCoordinator
from healthwatch.services.transition_log import TransitionLog
from tests.fakes import RecordingNotifier, ScriptedProber, make_clock


@pytest.fixture
def store(tmp_path: Path) -> StatusStore:
    return StatusStore(str(tmp_path / "health-status.json"))


@pytest.fixture
def transition_log(tmp_path: Path) -> TransitionLog:
    return TransitionLog(str(tmp_path / "health-events.log"))


@pytest.fixture
def prober() -> ScriptedProber:
    return ScriptedProber()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def make_coordinator(store, transition_log, prober, notifier):
    """Build a SweepCoordinator over the shared fixtures."""
    def factory(endpoints: List[str], **kwargs) -> SweepCoordinator:
        kwargs.setdefault("store", store)
        kwargs.setdefault("transition_log", transition_log)
        kwargs.setdefault("prober", prober)
        kwargs.setdefault("notifier", notifier)
        kwargs.setdefault("clock", make_clock())
        return SweepCoordinator(endpoints=endpoints, **kwargs)

    return factory
