"""Services for probing, status storage, sweeps, scheduling, and alerting."""
from .prober import ProberService, ProbeOutcome
from .status_store import StatusStore
from .transition_log import TransitionLog
from .sweep import SweepCoordinator, SweepReport
from .scheduler import SchedulerService
from .alerter import AlerterService

__all__ = [
    "ProberService",
    "ProbeOutcome",
    "StatusStore",
    "TransitionLog",
    "SweepCoordinator",
    "SweepReport",
    "SchedulerService",
    "AlerterService",
]
