"""
Resilient installer: tries a component's methods in order and trusts only
the probe.

A method's reported outcome is recorded but never decides success. Some
actions leave a working tool behind while reporting an error, and others
report success while the tool is still not usable from a fresh lookup.
"""

import logging
from typing import List

from ..models.component import AttemptOutcome, ComponentSpec, ErrorKind, Method, ProbeResult
from ..models.events import EventPhase
from ..models.results import ComponentResult, ComponentStatus, InstallAttempt
from .aggregator import EventLog
from .errors import AttemptError, VerificationFailure


class ResilientInstaller:
    """Installs one component by trying its methods until the probe confirms presence."""

    def __init__(self, events: EventLog, force_reinstall: bool = False):
        """
        Args:
            events: Event log receiving progress events
            force_reinstall: Skip the initial presence check
        """
        self.logger = logging.getLogger(__name__)
        self.events = events
        self.force_reinstall = force_reinstall

    def install(self, component: ComponentSpec) -> ComponentResult:
        """Install a component; never raises for method failures."""
        self.events.emit(component.id, EventPhase.STARTED,
                         f"{len(component.methods)} method(s): {', '.join(component.method_names) or 'none'}")

        if not self.force_reinstall:
            initial = self._probe(component)
            if initial.present:
                self.events.emit(component.id, EventPhase.VERIFIED,
                                 f"already present{self._version_suffix(initial)}")
                self.events.emit(component.id, EventPhase.SUCCEEDED, "already present")
                return ComponentResult(
                    component_id=component.id,
                    status=ComponentStatus.ALREADY_PRESENT,
                    version=initial.version,
                )

        attempts: List[InstallAttempt] = []
        for index, method in enumerate(component.methods):
            outcome = self._attempt(component, method)
            probe = self._probe(component)

            if not probe.present and outcome.success:
                outcome = AttemptOutcome.failed(
                    str(VerificationFailure(
                        f"{method.name} reported success but {component.probe.describe()} found nothing"
                    )),
                    ErrorKind.VERIFICATION_FAILURE,
                )

            attempts.append(InstallAttempt(
                component_id=component.id,
                method_name=method.name,
                outcome=outcome,
                probe=probe,
            ))

            if probe.present:
                note = "" if outcome.success else f" despite reported failure ({outcome.message})"
                self.events.emit(component.id, EventPhase.VERIFIED,
                                 f"{method.name} verified{self._version_suffix(probe)}{note}")
                self.events.emit(component.id, EventPhase.SUCCEEDED,
                                 f"installed via {method.name} (method {index + 1}/{len(component.methods)})")
                return ComponentResult(
                    component_id=component.id,
                    status=ComponentStatus.SUCCESS,
                    chosen_method=method.name,
                    attempts=tuple(attempts),
                    version=probe.version,
                )

            self.events.emit(component.id, EventPhase.VERIFIED, f"{method.name} not verified: {outcome.message}")

        diagnostic = attempts[-1].outcome.message if attempts else "no install methods declared"
        self.events.emit(component.id, EventPhase.FAILED, diagnostic)
        return ComponentResult(
            component_id=component.id,
            status=ComponentStatus.FAILED,
            attempts=tuple(attempts),
            diagnostic=diagnostic,
        )

    def _attempt(self, component: ComponentSpec, method: Method) -> AttemptOutcome:
        try:
            outcome = method.attempt()
        except AttemptError as e:
            outcome = AttemptOutcome.failed(str(e), e.kind)
        except Exception as e:
            self.logger.debug(f"{component.id}/{method.name} raised", exc_info=True)
            outcome = AttemptOutcome.failed(f"{type(e).__name__}: {e}")
        if not isinstance(outcome, AttemptOutcome):
            outcome = AttemptOutcome.failed(
                f"{method.name} returned {type(outcome).__name__} instead of an outcome",
                ErrorKind.EXECUTION_FAILURE,
            )
        self.events.emit(component.id, EventPhase.ATTEMPTED,
                         f"{method.name} reported {'success' if outcome.success else 'failure'}"
                         + (f": {outcome.message}" if outcome.message else ""))
        return outcome

    def _probe(self, component: ComponentSpec) -> ProbeResult:
        try:
            return component.probe.check()
        except Exception as e:
            self.logger.warning(f"Probe for {component.id} raised {type(e).__name__}: {e}")
            return ProbeResult(present=False)

    @staticmethod
    def _version_suffix(probe: ProbeResult) -> str:
        return f" (version {probe.version})" if probe.version else ""
