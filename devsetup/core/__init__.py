"""
Core modules for the devsetup installer.
"""

from .errors import (
    DevSetupError,
    NotFoundError,
    ExecutionFailure,
    VerificationFailure,
    ConfigurationFailure,
    UnknownProfileError,
    CatalogError,
    UserAbort,
)
from .profiles import ProfileCatalog, FULL_PROFILE
from .catalog import ComponentCatalog
from .search_path import DurableSearchPath
from .installer import ResilientInstaller
from .orchestrator import InstallationOrchestrator
from .aggregator import EventLog, ReportWriter, SummaryRenderer

__all__ = [
    "DevSetupError",
    "NotFoundError",
    "ExecutionFailure",
    "VerificationFailure",
    "ConfigurationFailure",
    "UnknownProfileError",
    "CatalogError",
    "UserAbort",
    "ProfileCatalog",
    "FULL_PROFILE",
    "ComponentCatalog",
    "DurableSearchPath",
    "ResilientInstaller",
    "InstallationOrchestrator",
    "EventLog",
    "ReportWriter",
    "SummaryRenderer",
]
