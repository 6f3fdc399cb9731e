"""
Event log models.
"""

from enum import Enum
from datetime import datetime
from pydantic import BaseModel, Field


class EventPhase(str, Enum):
    """Phase of a component's lifecycle an event belongs to."""
    STARTED = "started"
    ATTEMPTED = "attempted"
    VERIFIED = "verified"
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Event(BaseModel):
    """A single append-only log entry."""
    component_id: str
    phase: EventPhase
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        frozen = True

    def to_line(self) -> str:
        return f"{self.timestamp.isoformat()} [{self.phase.value.upper():<9}] {self.component_id}: {self.message}"
