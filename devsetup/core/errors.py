"""
Error taxonomy for the installer.
"""

from ..models.component import ErrorKind


class DevSetupError(Exception):
    """Base class for all installer errors."""


class AttemptError(DevSetupError):
    """An installation attempt failed; converted into an attempt outcome by the installer."""
    kind: ErrorKind = ErrorKind.EXECUTION_FAILURE


class NotFoundError(AttemptError):
    """A method's prerequisite is absent."""
    kind = ErrorKind.NOT_FOUND


class ExecutionFailure(AttemptError):
    """An installation action ran and failed."""
    kind = ErrorKind.EXECUTION_FAILURE


class VerificationFailure(AttemptError):
    """An action reported success but the probe disagrees."""
    kind = ErrorKind.VERIFICATION_FAILURE


class ConfigurationFailure(AttemptError):
    """Durable configuration could not be changed."""
    kind = ErrorKind.CONFIGURATION_FAILURE


class UnknownProfileError(DevSetupError):
    """An unrecognized profile identifier was supplied."""

    def __init__(self, profile: str):
        super().__init__(f"Unknown profile: {profile}")
        self.profile = profile


class CatalogError(DevSetupError):
    """Static catalog data is inconsistent."""


class UserAbort(DevSetupError):
    """The user chose to quit before anything was installed."""
