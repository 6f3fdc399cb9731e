import pytest

from devsetup.core.errors import UnknownProfileError
from devsetup.core.orchestrator import InstallationOrchestrator
from devsetup.models.events import EventPhase
from devsetup.models.results import ComponentStatus, SkipReason


def test_scenario_halt_on_critical_failure(events, make_component, make_catalog, calls):
    """A failed critical+halting component skips everything after it and exits 1."""
    x = make_component("x", methods=[(False, False), (False, False)], critical=True, halt_on_failure=True)
    y = make_component("y", methods=[(True, True)])
    state = InstallationOrchestrator(make_catalog(x, y), events).run("Full")

    assert state.result_for("x").status == ComponentStatus.FAILED
    assert state.halted is True
    assert state.halted_by == "x"
    assert state.result_for("y").status == ComponentStatus.SKIPPED
    assert state.result_for("y").skip_reason == SkipReason.HALTED
    assert state.exit_code == 1
    assert "y-m0" not in calls


def test_scenario_fallback_success(events, make_component, make_catalog):
    x = make_component("x", methods=[(False, False), (True, True)])
    state = InstallationOrchestrator(make_catalog(x), events).run("Minimal")

    result = state.result_for("x")
    assert result.status == ComponentStatus.SUCCESS
    assert result.chosen_method_index == 1
    assert state.exit_code == 0


def test_scenario_not_in_profile(events, make_component, make_catalog, calls):
    z = make_component("z", methods=[(True, True)], relevant_profiles={"AI_ML_Stack"})
    state = InstallationOrchestrator(make_catalog(z), events).run("Minimal")

    assert state.result_for("z").status == ComponentStatus.SKIPPED
    assert state.result_for("z").skip_reason == SkipReason.NOT_IN_PROFILE
    assert calls == []


def test_scenario_already_present(events, make_component, make_catalog):
    w = make_component("w", methods=[(True, True)], present=True)
    state = InstallationOrchestrator(make_catalog(w), events).run("Minimal")

    assert state.result_for("w").status == ComponentStatus.ALREADY_PRESENT
    assert state.result_for("w").attempts == ()


def test_critical_failure_without_halt_skips_later_critical_only(events, make_component, make_catalog, calls):
    java = make_component("java", methods=[(False, False)], critical=True)
    spark = make_component("spark", methods=[(True, True)], critical=True)
    dask = make_component("dask", methods=[(True, True)])
    state = InstallationOrchestrator(make_catalog(java, spark, dask), events).run("Full")

    assert state.critical_failure is True
    assert state.halted is False
    assert state.result_for("spark").skip_reason == SkipReason.PRIOR_CRITICAL_FAILURE
    assert state.result_for("dask").status == ComponentStatus.SUCCESS
    assert state.exit_code == 0
    assert "spark-m0" not in calls


def test_non_critical_failure_affects_nothing(events, make_component, make_catalog):
    a = make_component("a", methods=[(False, False)])
    b = make_component("b", methods=[(True, True)], critical=True)
    state = InstallationOrchestrator(make_catalog(a, b), events).run("Full")

    assert state.result_for("a").status == ComponentStatus.FAILED
    assert state.result_for("b").status == ComponentStatus.SUCCESS
    assert state.critical_failure is False
    assert state.exit_code == 0


def test_halted_flag_takes_precedence_over_profile(events, make_component, make_catalog):
    x = make_component("x", methods=[(False, False)], critical=True, halt_on_failure=True)
    z = make_component("z", methods=[(True, True)], relevant_profiles={"AI_ML_Stack"})
    state = InstallationOrchestrator(make_catalog(x, z), events).run("Minimal")

    assert state.result_for("z").skip_reason == SkipReason.HALTED


def test_every_component_recorded_once_in_order(events, make_component, make_catalog):
    components = [
        make_component("a", methods=[(True, True)]),
        make_component("b", methods=[(False, False)], critical=True, halt_on_failure=True),
        make_component("c", methods=[(True, True)]),
        make_component("d", methods=[(True, True)], relevant_profiles={"Big_Data_Stack"}),
    ]
    catalog = make_catalog(*components)
    state = InstallationOrchestrator(catalog, events).run("Minimal")

    assert [r.component_id for r in state.results] == catalog.ids
    assert len(state.results) == len(catalog)


def test_skips_are_logged(events, make_component, make_catalog):
    z = make_component("z", relevant_profiles={"AI_ML_Stack"})
    InstallationOrchestrator(make_catalog(z), events).run("Minimal")

    [event] = events.for_component("z")
    assert event.phase == EventPhase.SKIPPED
    assert event.message == SkipReason.NOT_IN_PROFILE.value


def test_unknown_profile_aborts_before_any_component(events, make_component, make_catalog, calls):
    x = make_component("x", methods=[(True, True)])
    with pytest.raises(UnknownProfileError):
        InstallationOrchestrator(make_catalog(x), events).run("Nope")
    assert calls == []
    assert events.events == ()


def test_force_reinstall_runs_methods_for_present_components(events, make_component, make_catalog, calls):
    w = make_component("w", methods=[(True, True)], present=True)
    state = InstallationOrchestrator(make_catalog(w), events, force_reinstall=True).run("Minimal")

    assert state.result_for("w").status == ComponentStatus.SUCCESS
    assert state.force_reinstall is True
    assert calls == ["w-m0"]


def test_plan_does_not_touch_components(events, make_component, make_catalog, calls):
    a = make_component("a", methods=[(True, True)])
    z = make_component("z", methods=[(True, True)], relevant_profiles={"AI_ML_Stack"})
    plan = InstallationOrchestrator(make_catalog(a, z), events).plan("Minimal")

    assert [(c.id, reason) for c, reason in plan] == [("a", None), ("z", SkipReason.NOT_IN_PROFILE)]
    assert calls == []
    assert a.probe.checks == 0
