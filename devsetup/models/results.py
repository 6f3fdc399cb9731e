"""
Installation result models and the per-run state.
"""

from enum import Enum
from typing import List, Optional, Dict, Tuple
from datetime import datetime
from pydantic import BaseModel, Field, PrivateAttr

from .component import AttemptOutcome, ProbeResult


class ComponentStatus(str, Enum):
    """Final status of a component within a run."""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"
    ALREADY_PRESENT = "already_present"


class SkipReason(str, Enum):
    """Why a component was not attempted."""
    NOT_IN_PROFILE = "not_in_profile"
    PRIOR_CRITICAL_FAILURE = "prior_critical_failure"
    HALTED = "halted"


class InstallAttempt(BaseModel):
    """One method attempt and the probe observation that followed it."""
    component_id: str
    method_name: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    outcome: AttemptOutcome
    probe: ProbeResult

    class Config:
        frozen = True


class ComponentResult(BaseModel):
    """Final, write-once result for a component."""
    component_id: str = Field(..., description="Component identifier")
    status: ComponentStatus = Field(..., description="Final status")
    chosen_method: Optional[str] = Field(None, description="Method verified by the probe")
    attempts: Tuple[InstallAttempt, ...] = ()
    skip_reason: Optional[SkipReason] = None
    diagnostic: Optional[str] = Field(None, description="Last attempt diagnostic on failure")
    version: Optional[str] = Field(None, description="Version reported by the probe")

    class Config:
        frozen = True

    @classmethod
    def skipped(cls, component_id: str, reason: SkipReason) -> "ComponentResult":
        return cls(component_id=component_id, status=ComponentStatus.SKIPPED, skip_reason=reason)

    @property
    def chosen_method_index(self) -> Optional[int]:
        if self.status != ComponentStatus.SUCCESS:
            return None
        return len(self.attempts) - 1


class RunState(BaseModel):
    """
    Mutable state of a single installation run.

    The failure flags can only be raised, never cleared, and each component
    result is recorded exactly once.
    """
    profile: str = Field(..., description="Selected profile identifier")
    force_reinstall: bool = Field(default=False)
    started_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None

    _critical_failure: bool = PrivateAttr(default=False)
    _halted: bool = PrivateAttr(default=False)
    _halted_by: Optional[str] = PrivateAttr(default=None)
    _results: List[ComponentResult] = PrivateAttr(default_factory=list)
    _recorded_ids: set = PrivateAttr(default_factory=set)

    @property
    def critical_failure(self) -> bool:
        return self._critical_failure

    @property
    def halted(self) -> bool:
        return self._halted

    @property
    def halted_by(self) -> Optional[str]:
        return self._halted_by

    @property
    def results(self) -> List[ComponentResult]:
        return list(self._results)

    def mark_critical_failure(self) -> None:
        self._critical_failure = True

    def mark_halted(self, component_id: str) -> None:
        if self._halted:
            return
        self._halted = True
        self._halted_by = component_id

    def record(self, result: ComponentResult) -> None:
        """Append a component result; each component may be recorded once."""
        if result.component_id in self._recorded_ids:
            raise ValueError(f"Result for {result.component_id} already recorded")
        self._recorded_ids.add(result.component_id)
        self._results.append(result)

    def result_for(self, component_id: str) -> Optional[ComponentResult]:
        for result in self._results:
            if result.component_id == component_id:
                return result
        return None

    def counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in ComponentStatus}
        for result in self._results:
            counts[result.status.value] += 1
        return counts

    def complete(self) -> None:
        self.completed_at = datetime.utcnow()

    @property
    def duration_seconds(self) -> Optional[float]:
        if not self.completed_at:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    @property
    def exit_code(self) -> int:
        return 1 if self._halted else 0
