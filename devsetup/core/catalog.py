"""
Ordered, validated component catalog.
"""

import logging
from typing import Iterable, Iterator, List, Tuple

from ..models.component import ComponentSpec
from .errors import CatalogError
from .profiles import ProfileCatalog


class ComponentCatalog:
    """
    Immutable ordered sequence of components.

    Declaration order is execution order: a component must come after
    anything it needs at install time.
    """

    def __init__(self, components: Iterable[ComponentSpec], profiles: ProfileCatalog):
        self.logger = logging.getLogger(__name__)
        self._components: Tuple[ComponentSpec, ...] = tuple(components)
        self.profiles = profiles

        seen = set()
        for component in self._components:
            if component.id in seen:
                raise CatalogError(f"Duplicate component id: {component.id}")
            seen.add(component.id)

            unknown = sorted(component.relevant_profiles - set(profiles.ids))
            if unknown:
                raise CatalogError(
                    f"Component {component.id} references unknown profiles: {', '.join(unknown)}"
                )
            if not component.methods:
                self.logger.warning(f"Component {component.id} declares no install methods")

    def __iter__(self) -> Iterator[ComponentSpec]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __getitem__(self, index: int) -> ComponentSpec:
        return self._components[index]

    @property
    def ids(self) -> List[str]:
        return [c.id for c in self._components]

    def get(self, component_id: str) -> ComponentSpec:
        for component in self._components:
            if component.id == component_id:
                return component
        raise KeyError(component_id)
