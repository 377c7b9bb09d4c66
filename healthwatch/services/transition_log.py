"""Transition log - append-only history of status changes."""
import logging
import os
from typing import List, Optional

from ..models import TransitionLogEntry

logger = logging.getLogger(__name__)


class TransitionLog:
    """Newline-delimited log of every status change (not every probe)."""

    def __init__(self, path: str):
        self.path = path

    def append(self, entry: TransitionLogEntry) -> bool:
        """Append one entry. Returns False if the write failed."""
        try:
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(entry.to_line() + "\n")
                f.flush()
                os.fsync(f.fileno())
            return True
        except OSError as e:
            logger.error(f"Failed to write to log file: {e}")
            return False

    def read_raw(self) -> Optional[str]:
        """Raw log contents, or None if there is no history yet.

        Raises OSError if the file exists but cannot be read.
        """
        if not os.path.exists(self.path):
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            content = f.read()
        return content or None

    def history(self) -> List[TransitionLogEntry]:
        """Parsed entries in append order. Malformed lines are skipped."""
        try:
            content = self.read_raw()
        except OSError as e:
            logger.error(f"Failed to read log file: {e}")
            return []

        if not content:
            return []

        entries = []
        for line_number, line in enumerate(content.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                entries.append(TransitionLogEntry.from_line(line))
            except ValueError as e:
                logger.debug(f"Skipping malformed log line {line_number}: {e}")
        return entries
