"""
Component catalog models: installable units, their methods and probes.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import FrozenSet, List, Optional
from pydantic import BaseModel, Field, validator


class ErrorKind(str, Enum):
    """Why an installation attempt did not succeed."""
    NOT_FOUND = "not_found"
    EXECUTION_FAILURE = "execution_failure"
    VERIFICATION_FAILURE = "verification_failure"
    CONFIGURATION_FAILURE = "configuration_failure"


class AttemptOutcome(BaseModel):
    """Raw, self-reported outcome of one method attempt."""
    success: bool = Field(..., description="What the method reported")
    message: str = Field(default="", description="Free-text diagnostic")
    error_kind: Optional[ErrorKind] = Field(None, description="Failure category, if any")

    class Config:
        frozen = True

    @classmethod
    def ok(cls, message: str = "") -> "AttemptOutcome":
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, message: str, kind: ErrorKind = ErrorKind.EXECUTION_FAILURE) -> "AttemptOutcome":
        return cls(success=False, message=message, error_kind=kind)


class ProbeResult(BaseModel):
    """Observed presence of a component."""
    present: bool
    version: Optional[str] = None

    class Config:
        frozen = True


class Probe(ABC):
    """Side-effect-free presence check for a component."""

    @abstractmethod
    def check(self) -> ProbeResult:
        ...

    def describe(self) -> str:
        return type(self).__name__


class Method(ABC):
    """One concrete installation strategy for a component."""

    name: str = "method"

    @abstractmethod
    def attempt(self) -> AttemptOutcome:
        """
        Perform the installation action.

        Implementations may raise any exception; the installer treats that
        as a failed attempt.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ComponentSpec(BaseModel):
    """Immutable catalog entry for one installable unit."""
    id: str = Field(..., description="Component identifier")
    description: str = Field(default="", description="Human readable description")
    critical: bool = Field(default=False, description="Failure degrades later critical components")
    halt_on_failure: bool = Field(default=False, description="Failure halts the remaining run")
    relevant_profiles: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Profiles this component belongs to; empty means every profile"
    )
    probe: Probe = Field(..., description="Presence check shared by all methods")
    methods: List[Method] = Field(default_factory=list, description="Methods in preference order")

    @validator('methods')
    def validate_unique_method_names(cls, v):
        names = [m.name for m in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate method names: {', '.join(duplicates)}")
        return v

    @validator('halt_on_failure')
    def validate_halt_requires_critical(cls, v, values):
        # Halting is only reachable through a critical failure.
        if v and not values.get('critical'):
            raise ValueError("halt_on_failure requires critical=True")
        return v

    @property
    def method_names(self) -> List[str]:
        return [m.name for m in self.methods]

    class Config:
        frozen = True
        arbitrary_types_allowed = True
