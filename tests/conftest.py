# tests/conftest.py
from typing import List, Optional

import pytest

from devsetup.catalog import build_profile_catalog
from devsetup.core.aggregator import EventLog
from devsetup.core.catalog import ComponentCatalog
from devsetup.models.component import AttemptOutcome, ComponentSpec, Method, Probe, ProbeResult


class FakeProbe(Probe):
    """Probe backed by a mutable flag, counting how often it is checked."""

    def __init__(self, present: bool = False, version: Optional[str] = None):
        self.present = present
        self.version = version
        self.checks = 0

    def check(self) -> ProbeResult:
        self.checks += 1
        return ProbeResult(present=self.present, version=self.version if self.present else None)


class FakeMethod(Method):
    """
    Method with a scripted report and a scripted effect on the probe.

    `reports` is what attempt() claims; `installs` is whether the tool is
    actually present afterwards; `raises` makes attempt() throw instead.
    """

    def __init__(self, name: str, probe: FakeProbe, reports: bool = True,
                 installs: Optional[bool] = None, raises: Optional[Exception] = None,
                 calls: Optional[List[str]] = None):
        self.name = name
        self.probe = probe
        self.reports = reports
        self.installs = reports if installs is None else installs
        self.raises = raises
        self.calls = calls if calls is not None else []

    def attempt(self) -> AttemptOutcome:
        self.calls.append(self.name)
        if self.installs:
            self.probe.present = True
        if self.raises:
            raise self.raises
        if self.reports:
            return AttemptOutcome.ok(f"{self.name} ok")
        return AttemptOutcome.failed(f"{self.name} failed")


@pytest.fixture
def profiles():
    return build_profile_catalog()


@pytest.fixture
def events():
    return EventLog()


@pytest.fixture
def calls():
    """Shared, ordered record of every fake method invocation."""
    return []


@pytest.fixture
def make_component(calls):
    """
    Factory for components with fake methods.

    `methods` is a list of (reports, installs) tuples or FakeMethod kwargs dicts.
    """
    def _make(component_id, methods=(), present=False, critical=False,
              halt_on_failure=False, relevant_profiles=()):
        probe = FakeProbe(present=present, version="1.0")
        fakes = []
        for index, method in enumerate(methods):
            kwargs = method if isinstance(method, dict) else {"reports": method[0], "installs": method[1]}
            fakes.append(FakeMethod(f"{component_id}-m{index}", probe, calls=calls, **kwargs))
        return ComponentSpec(
            id=component_id,
            critical=critical,
            halt_on_failure=halt_on_failure,
            relevant_profiles=frozenset(relevant_profiles),
            probe=probe,
            methods=fakes,
        )
    return _make


@pytest.fixture
def make_catalog(profiles):
    def _make(*components):
        return ComponentCatalog(components, profiles)
    return _make
