"""
Orchestrator - single sequential pass over the component catalog.
"""

import logging
from typing import List, Optional, Tuple

from ..models.component import ComponentSpec
from ..models.events import EventPhase
from ..models.results import ComponentResult, ComponentStatus, RunState, SkipReason
from .aggregator import EventLog
from .catalog import ComponentCatalog
from .installer import ResilientInstaller
from .profiles import ProfileCatalog


class InstallationOrchestrator:
    """Walks the catalog in declared order and applies failure policy."""

    def __init__(self,
                 catalog: ComponentCatalog,
                 events: EventLog,
                 installer: Optional[ResilientInstaller] = None,
                 force_reinstall: bool = False):
        """
        Initialize the orchestrator.

        Args:
            catalog: Ordered component catalog (carries its profile catalog)
            events: Event log shared with the installer
            installer: Installer to delegate to; built from the event log if omitted
            force_reinstall: Bypass the already-present check
        """
        self.logger = logging.getLogger(__name__)
        self.catalog = catalog
        self.profiles: ProfileCatalog = catalog.profiles
        self.events = events
        self.force_reinstall = force_reinstall
        self.installer = installer or ResilientInstaller(events, force_reinstall=force_reinstall)

    def _skip_reason(self, state: RunState, component: ComponentSpec) -> Optional[SkipReason]:
        if state.halted:
            return SkipReason.HALTED
        if state.critical_failure and component.critical:
            return SkipReason.PRIOR_CRITICAL_FAILURE
        if not self.profiles.should_run(state.profile, component):
            return SkipReason.NOT_IN_PROFILE
        return None

    def plan(self, profile: str) -> List[Tuple[ComponentSpec, Optional[SkipReason]]]:
        """
        Preview which components would run for a profile.

        Nothing is installed or probed; failure policy cannot be predicted,
        so only profile relevance is reported.
        """
        self.profiles.require(profile)
        return [
            (c, None if self.profiles.should_run(profile, c) else SkipReason.NOT_IN_PROFILE)
            for c in self.catalog
        ]

    def run(self, profile: str) -> RunState:
        """
        Run every component once, in catalog order.

        Raises:
            UnknownProfileError: Before any component is touched
        """
        self.profiles.require(profile)
        state = RunState(profile=profile, force_reinstall=self.force_reinstall)
        self.events.open_run(profile)
        self.logger.info(f"Starting run for profile {profile} ({len(self.catalog)} components)")

        for component in self.catalog:
            reason = self._skip_reason(state, component)
            if reason is not None:
                state.record(ComponentResult.skipped(component.id, reason))
                self.events.emit(component.id, EventPhase.SKIPPED, reason.value)
                continue

            result = self.installer.install(component)
            state.record(result)

            if result.status == ComponentStatus.FAILED and component.critical:
                state.mark_critical_failure()
                self.logger.error(f"Critical component {component.id} failed")
                if component.halt_on_failure:
                    state.mark_halted(component.id)
                    self.logger.error("Halting: remaining components will be skipped")

        state.complete()
        self.logger.info(f"Run complete: {state.counts()} (exit code {state.exit_code})")
        return state
