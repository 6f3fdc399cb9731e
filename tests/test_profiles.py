import pytest

from devsetup.catalog import PROFILE_IDS
from devsetup.core.errors import CatalogError, UnknownProfileError
from devsetup.core.profiles import FULL_PROFILE, ProfileCatalog
from devsetup.models.profile import Profile


def test_default_profiles_are_defined(profiles):
    """The six selectable profiles exist in display order."""
    assert profiles.ids == PROFILE_IDS


def test_reachable_follows_implies_edges(profiles):
    """AI_ML_Stack reaches Data_Science_Core, VCS_Dev_Essentials and Minimal."""
    assert profiles.reachable("AI_ML_Stack") == {
        "AI_ML_Stack", "Data_Science_Core", "VCS_Dev_Essentials", "Minimal"
    }
    assert profiles.reachable("Minimal") == {"Minimal"}


def test_reachable_is_idempotent(profiles):
    first = profiles.reachable("Big_Data_Stack")
    second = profiles.reachable("Big_Data_Stack")
    assert first == second


def test_full_reaches_every_profile(profiles):
    assert profiles.reachable(FULL_PROFILE) == set(PROFILE_IDS)


@pytest.mark.parametrize("profile", PROFILE_IDS)
def test_profile_agnostic_component_runs_for_every_profile(profiles, make_component, profile):
    """Components with no relevant profiles run everywhere."""
    component = make_component("agnostic")
    assert profiles.should_run(profile, component) is True


@pytest.mark.parametrize("relevant", [{"Minimal"}, {"AI_ML_Stack"}, {"Big_Data_Stack"}])
def test_full_profile_runs_every_component(profiles, make_component, relevant):
    component = make_component("scoped", relevant_profiles=relevant)
    assert profiles.should_run(FULL_PROFILE, component) is True


def test_component_outside_profile_closure_does_not_run(profiles, make_component):
    component = make_component("z", relevant_profiles={"AI_ML_Stack"})
    assert profiles.should_run("Minimal", component) is False
    assert profiles.should_run("Big_Data_Stack", component) is False
    assert profiles.should_run("AI_ML_Stack", component) is True


def test_component_in_implied_profile_runs(profiles, make_component):
    component = make_component("git", relevant_profiles={"VCS_Dev_Essentials"})
    assert profiles.should_run("Data_Science_Core", component) is True
    assert profiles.should_run("Big_Data_Stack", component) is True


def test_unknown_profile_is_rejected(profiles, make_component):
    with pytest.raises(UnknownProfileError):
        profiles.should_run("Everything", make_component("x"))
    with pytest.raises(UnknownProfileError):
        profiles.reachable("Everything")


def test_cyclic_implies_edges_rejected():
    with pytest.raises(CatalogError, match="Cyclic"):
        ProfileCatalog([
            Profile(id="A", implies={"B"}),
            Profile(id="B", implies={"C"}),
            Profile(id="C", implies={"A"}),
            Profile(id=FULL_PROFILE),
        ])


def test_dangling_implies_edge_rejected():
    with pytest.raises(CatalogError, match="unknown profiles"):
        ProfileCatalog([Profile(id="A", implies={"Missing"}), Profile(id=FULL_PROFILE)])


def test_duplicate_profile_rejected():
    with pytest.raises(CatalogError, match="Duplicate"):
        ProfileCatalog([Profile(id="A"), Profile(id="A"), Profile(id=FULL_PROFILE)])


def test_missing_full_profile_rejected():
    with pytest.raises(CatalogError, match="full profile"):
        ProfileCatalog([Profile(id="A")])


def test_profile_cannot_imply_itself():
    with pytest.raises(ValueError):
        Profile(id="A", implies={"A"})
