"""Pydantic schemas for API response models."""
from .status import (
    StatusRecordResponse,
    TransitionEntryResponse,
    MonitorStatusResponse,
)

__all__ = [
    "StatusRecordResponse",
    "TransitionEntryResponse",
    "MonitorStatusResponse",
]
