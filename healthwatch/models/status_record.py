"""StatusRecord model - latest classification of one endpoint."""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class Status(str, Enum):
    """Reachability of an endpoint."""
    OK = "ok"
    DOWN = "down"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z'."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class StatusRecord:
    """Latest probe result for an endpoint.

    ``detail`` is always set for DOWN; for OK it only carries an
    informational note such as a 4xx response code.
    """
    status: Status
    last_checked_at: datetime
    detail: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "detail": self.detail,
            "last_checked_at": self.last_checked_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "StatusRecord":
        """Build a record from its serialized form.

        Raises ValueError if the data is not a valid record.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Record must be an object, got {type(data).__name__}")

        detail = data.get("detail")
        if detail is not None and not isinstance(detail, str):
            raise ValueError("Record detail must be a string or null")

        checked_at = data.get("last_checked_at")
        if not isinstance(checked_at, str):
            raise ValueError("Record last_checked_at must be a timestamp string")

        try:
            status = Status(data.get("status"))
        except ValueError:
            raise ValueError(f"Unknown status: {data.get('status')!r}")

        if status == Status.DOWN and not detail:
            raise ValueError("DOWN record is missing its detail")

        return cls(
            status=status,
            detail=detail,
            last_checked_at=parse_timestamp(checked_at),
        )
