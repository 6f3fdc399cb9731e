"""
Static profile and component catalogs.
"""

from .default import PROFILE_IDS, build_profile_catalog, build_component_catalog

__all__ = ["PROFILE_IDS", "build_profile_catalog", "build_component_catalog"]
