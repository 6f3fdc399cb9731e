"""
Profile catalog and profile relevance resolution.
"""

import logging
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, List

from ..models.profile import Profile
from ..models.component import ComponentSpec
from .errors import CatalogError, UnknownProfileError

FULL_PROFILE = "Full"


class ProfileCatalog:
    """Immutable set of profiles forming an acyclic 'implies' graph."""

    def __init__(self, profiles: Iterable[Profile], full_profile: str = FULL_PROFILE):
        """
        Build and validate the catalog.

        Args:
            profiles: Profile definitions, in display order
            full_profile: Identifier of the profile that implies every other profile

        Raises:
            CatalogError: On duplicate ids, dangling implies edges or cycles
        """
        self.logger = logging.getLogger(__name__)
        self._profiles: Dict[str, Profile] = {}
        for profile in profiles:
            if profile.id in self._profiles:
                raise CatalogError(f"Duplicate profile id: {profile.id}")
            self._profiles[profile.id] = profile

        if full_profile not in self._profiles:
            raise CatalogError(f"Designated full profile {full_profile!r} is not defined")
        self.full_profile = full_profile

        for profile in self._profiles.values():
            unknown = sorted(profile.implies - set(self._profiles))
            if unknown:
                raise CatalogError(
                    f"Profile {profile.id} implies unknown profiles: {', '.join(unknown)}"
                )

        self._check_acyclic()
        self._closure = lru_cache(maxsize=None)(self._compute_closure)

    def _check_acyclic(self) -> None:
        visiting, done = set(), set()

        def visit(profile_id: str, path: List[str]) -> None:
            if profile_id in done:
                return
            if profile_id in visiting:
                cycle = path[path.index(profile_id):] + [profile_id]
                raise CatalogError(f"Cyclic implies edges: {' -> '.join(cycle)}")
            visiting.add(profile_id)
            for implied in sorted(self._profiles[profile_id].implies):
                visit(implied, path + [profile_id])
            visiting.discard(profile_id)
            done.add(profile_id)

        for profile_id in self._profiles:
            visit(profile_id, [])

    def _compute_closure(self, profile_id: str) -> FrozenSet[str]:
        reachable = set()
        pending = [profile_id]
        while pending:
            current = pending.pop()
            if current in reachable:
                continue
            reachable.add(current)
            pending.extend(self._profiles[current].implies)
        return frozenset(reachable)

    def __contains__(self, profile_id: str) -> bool:
        return profile_id in self._profiles

    def __iter__(self):
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)

    @property
    def ids(self) -> List[str]:
        return list(self._profiles)

    def get(self, profile_id: str) -> Profile:
        try:
            return self._profiles[profile_id]
        except KeyError:
            raise UnknownProfileError(profile_id) from None

    def require(self, profile_id: str) -> None:
        if profile_id not in self._profiles:
            raise UnknownProfileError(profile_id)

    def reachable(self, profile_id: str) -> FrozenSet[str]:
        """Return the profile plus every profile reachable through implies edges."""
        self.require(profile_id)
        if profile_id == self.full_profile:
            return frozenset(self._profiles)
        return self._closure(profile_id)

    def should_run(self, selected_profile: str, component: ComponentSpec) -> bool:
        """Decide whether a component is relevant to the selected profile."""
        self.require(selected_profile)
        if selected_profile == self.full_profile:
            return True
        if not component.relevant_profiles:
            return True
        return bool(self.reachable(selected_profile) & component.relevant_profiles)
