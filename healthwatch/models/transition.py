"""TransitionLogEntry model - one line of the status change history."""
from dataclasses import dataclass
from datetime import datetime, timezone

from .status_record import Status, parse_timestamp

SEPARATOR = " | "
REASON_PREFIX = "Reason: "


def format_timestamp(value: datetime) -> str:
    """Format as UTC ISO-8601 with millisecond precision and a 'Z' suffix."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class TransitionLogEntry:
    """A status change of one endpoint. Never mutated once written."""
    timestamp: datetime
    endpoint: str
    new_status: Status
    reason: str

    def to_line(self) -> str:
        """Render as ``<timestamp> | <STATUS> | <endpoint> | Reason: <reason>``."""
        return SEPARATOR.join([
            format_timestamp(self.timestamp),
            self.new_status.value.upper(),
            self.endpoint,
            f"{REASON_PREFIX}{self.reason}",
        ])

    @classmethod
    def from_line(cls, line: str) -> "TransitionLogEntry":
        """Parse a log line. Raises ValueError on malformed input."""
        # Endpoints may contain the separator, so split the fixed fields off each end
        head, sep, reason = line.rstrip("\n").rpartition(SEPARATOR + REASON_PREFIX)
        if not sep:
            raise ValueError(f"Missing reason field: {line!r}")

        parts = head.split(SEPARATOR, 2)
        if len(parts) != 3:
            raise ValueError(f"Expected timestamp, status and endpoint: {line!r}")
        timestamp, status, endpoint = parts

        return cls(
            timestamp=parse_timestamp(timestamp),
            endpoint=endpoint,
            new_status=Status(status.lower()),
            reason=reason,
        )

    def to_dict(self) -> dict:
        return {
            "timestamp": format_timestamp(self.timestamp),
            "endpoint": self.endpoint,
            "status": self.new_status.value,
            "reason": self.reason,
        }
