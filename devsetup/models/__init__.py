"""
Data models for the devsetup installer.
"""

from .profile import Profile
from .component import AttemptOutcome, ComponentSpec, ErrorKind, Method, Probe, ProbeResult
from .results import ComponentResult, ComponentStatus, InstallAttempt, RunState, SkipReason
from .events import Event, EventPhase

__all__ = [
    "Profile",
    "AttemptOutcome",
    "ComponentSpec",
    "ErrorKind",
    "Method",
    "Probe",
    "ProbeResult",
    "ComponentResult",
    "ComponentStatus",
    "InstallAttempt",
    "RunState",
    "SkipReason",
    "Event",
    "EventPhase",
]
