"""Status schemas for the inspection API."""
from typing import Optional
from pydantic import BaseModel

from ..models import StatusRecord, TransitionLogEntry


class StatusRecordResponse(BaseModel):
    """Latest status of one endpoint."""
    status: str  # ok, down
    detail: Optional[str] = None
    last_checked_at: str

    @classmethod
    def from_record(cls, record: StatusRecord) -> "StatusRecordResponse":
        return cls(**record.to_dict())


class TransitionEntryResponse(BaseModel):
    """One status change from the history log."""
    timestamp: str
    endpoint: str
    status: str
    reason: str

    @classmethod
    def from_entry(cls, entry: TransitionLogEntry) -> "TransitionEntryResponse":
        return cls(**entry.to_dict())


class MonitorStatusResponse(BaseModel):
    """Liveness of the monitor process itself."""
    status: str
    environment: str
    endpoints: int
    sweeps_completed: int
    sweep_running: bool
    scheduler_running: bool
