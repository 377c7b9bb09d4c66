"""Tests for the inspection API."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from healthwatch.config import Settings
from healthwatch.main import create_app
from healthwatch.models import Status, StatusRecord, TransitionLogEntry
from healthwatch.services.status_store import StatusStore
from healthwatch.services.transition_log import TransitionLog

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def app(tmp_path: Path, store: StatusStore, transition_log: TransitionLog):
    app = create_app(Settings(target_urls="", data_path=str(tmp_path)))
    app.state.store = store
    app.state.transition_log = transition_log
    return app


@pytest.fixture
def client(app) -> TestClient:
    # No context manager: lifespan (and the scheduler) stays off
    return TestClient(app)


class TestCurrentStatus:
    def test_empty(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {}

    def test_snapshot(self, client: TestClient, store: StatusStore) -> None:
        store.update("https://a.test", StatusRecord(status=Status.OK, last_checked_at=T0))
        store.update("https://b.test", StatusRecord(
            status=Status.DOWN, detail="timed out", last_checked_at=T0,
        ))

        data = client.get("/health").json()
        assert data["https://a.test"] == {
            "status": "ok",
            "detail": None,
            "last_checked_at": "2025-01-01T00:00:00+00:00",
        }
        assert data["https://b.test"]["status"] == "down"
        assert data["https://b.test"]["detail"] == "timed out"


class TestHistory:
    def test_no_history(self, client: TestClient) -> None:
        resp = client.get("/health/history")
        assert resp.status_code == 404
        assert resp.text == "No history log found."

    def test_raw_history(self, client: TestClient, transition_log: TransitionLog) -> None:
        transition_log.append(TransitionLogEntry(
            timestamp=T0, endpoint="https://a.test", new_status=Status.DOWN, reason="timed out",
        ))
        resp = client.get("/health/history")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == "2025-01-01T00:00:00.000Z | DOWN | https://a.test | Reason: timed out\n"

    def test_read_error(self, app, client: TestClient, tmp_path: Path) -> None:
        (tmp_path / "unreadable.log").mkdir()
        app.state.transition_log = TransitionLog(str(tmp_path / "unreadable.log"))
        resp = client.get("/health/history")
        assert resp.status_code == 500
        assert resp.text == "Error reading history log."

    def test_entries(self, client: TestClient, transition_log: TransitionLog) -> None:
        for status, reason in [(Status.DOWN, "server error 500"), (Status.OK, "OK")]:
            transition_log.append(TransitionLogEntry(
                timestamp=T0, endpoint="https://a.test", new_status=status, reason=reason,
            ))
        data = client.get("/health/history/entries").json()
        assert [e["status"] for e in data] == ["down", "ok"]
        assert data[0]["reason"] == "server error 500"
        assert data[0]["timestamp"] == "2025-01-01T00:00:00.000Z"


def test_monitor_status_without_lifespan(client: TestClient) -> None:
    data = client.get("/status").json()
    assert data["status"] == "healthy"
    assert data["endpoints"] == 0
    assert data["scheduler_running"] is False


def test_lifespan_wires_components(tmp_path: Path) -> None:
    app = create_app(Settings(target_urls="", data_path=str(tmp_path), environment="production"))
    with TestClient(app) as client:
        data = client.get("/status").json()
        assert data["scheduler_running"] is True
        assert data["endpoints"] == 0
        assert data["environment"] == "production"
        assert client.get("/health").json() == {}
    assert app.state.scheduler.running is False


def test_lifespan_recovers_from_corrupt_status_file(tmp_path: Path) -> None:
    (tmp_path / "health-status.json").write_text("{not json")
    app = create_app(Settings(target_urls="", data_path=str(tmp_path)))
    with TestClient(app) as client:
        assert client.get("/health").json() == {}
