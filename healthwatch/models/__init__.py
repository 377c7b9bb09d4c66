"""Status and transition models."""
from .status_record import Status, StatusRecord
from .transition import TransitionLogEntry

__all__ = ["Status", "StatusRecord", "TransitionLogEntry"]
