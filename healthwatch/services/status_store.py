"""Status store - latest StatusRecord per endpoint with durable snapshots.

The in-memory mapping is the source of truth for the running process.
The snapshot file is rewritten in full after every update so that a
restart can pick up where the last completed update left off:

- Writes go to a temporary file in the same directory, are fsync'd, and
  then atomically replace the snapshot. A reader never sees a torn file.
- A write failure is logged and does not roll back the in-memory update.
- A missing or corrupt snapshot at startup means starting empty.
"""
import json
import logging
import os
import tempfile
from typing import Dict, Optional

from ..models import StatusRecord

logger = logging.getLogger(__name__)

StoreSnapshot = Dict[str, StatusRecord]


class StatusStore:
    """Holds the latest status per endpoint and persists it to a JSON file."""

    def __init__(self, path: str):
        self.path = path
        self._records: StoreSnapshot = {}

    def load(self) -> StoreSnapshot:
        """Rebuild state from the snapshot file.

        Never raises: an absent, unreadable or invalid file yields an
        empty store and a warning.
        """
        self._records = self._read_snapshot()
        return self.snapshot()

    def _read_snapshot(self) -> StoreSnapshot:
        if not os.path.exists(self.path):
            logger.info(f"No status file at {self.path}, starting with a clean state")
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Error reading status file, starting with a clean state: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(
                f"Status file {self.path} does not hold an object, starting with a clean state"
            )
            return {}

        records: StoreSnapshot = {}
        try:
            for endpoint, raw in data.items():
                records[endpoint] = StatusRecord.from_dict(raw)
        except ValueError as e:
            logger.warning(f"Invalid record in status file, starting with a clean state: {e}")
            return {}

        logger.info(f"Loaded previous health status for {len(records)} endpoint(s)")
        return records

    def get(self, endpoint: str) -> Optional[StatusRecord]:
        return self._records.get(endpoint)

    def snapshot(self) -> StoreSnapshot:
        """Copy of the full mapping for readers."""
        return dict(self._records)

    def update(self, endpoint: str, record: StatusRecord) -> Optional[StatusRecord]:
        """Replace the record for an endpoint and persist the whole snapshot.

        Returns the record that was there before, or None.
        """
        previous = self._records.get(endpoint)
        self._records[endpoint] = record
        self.persist()
        return previous

    def persist(self) -> bool:
        """Write the full snapshot atomically. Returns False on failure."""
        payload = {endpoint: record.to_dict() for endpoint, record in self._records.items()}
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None

        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=directory,
                prefix=".health-status-",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write status to file: {e}")
            return False
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
