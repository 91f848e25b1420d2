"""Registry snapshot package."""

from label_maker.registry.application.snapshot_cache import RegistrySnapshotCache
from label_maker.registry.domain.models import RegistrySnapshot
from label_maker.registry.domain.rules import normalize_nation_name

__all__ = ["normalize_nation_name", "RegistrySnapshot", "RegistrySnapshotCache"]
