"""Provider registry mapping IDE versions to adapter classes."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Type

from slncmake.provider.snapshot import (
    SnapshotProvider,
    Vs2015SnapshotProvider,
    Vs2017SnapshotProvider,
)

logger = logging.getLogger("slncmake.provider.registry")


class ProviderRegistry:
    """Global registry of snapshot adapters, keyed by IDE version.

    Versions are matched on their major component, so ``15.0`` and
    ``15.9.28307`` select the same adapter.
    """

    _instance: Optional["ProviderRegistry"] = None

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[SnapshotProvider]] = {}

    @classmethod
    def get_instance(cls) -> "ProviderRegistry":
        """Get singleton instance with the built-in adapters registered."""
        if cls._instance is None:
            registry = cls()
            registry.register(Vs2015SnapshotProvider.IDE_VERSION, Vs2015SnapshotProvider)
            registry.register(Vs2017SnapshotProvider.IDE_VERSION, Vs2017SnapshotProvider)
            cls._instance = registry
        return cls._instance

    @staticmethod
    def _major(version: str) -> str:
        return version.strip().split(".", 1)[0]

    def register(self, ide_version: str, adapter_class: Type[SnapshotProvider]) -> None:
        """Register an adapter for an IDE version.

        Args:
            ide_version: IDE version string (e.g. ``15.0``).
            adapter_class: Provider class decoding snapshots of that version.
        """
        major = self._major(ide_version)
        if major in self._adapters:
            logger.warning(
                "Overwriting existing adapter for IDE version '%s': %s -> %s",
                ide_version,
                self._adapters[major].__name__,
                adapter_class.__name__,
            )
        self._adapters[major] = adapter_class
        logger.debug("Registered adapter for '%s': %s", ide_version, adapter_class.__name__)

    def get_adapter(self, ide_version: str) -> Optional[Type[SnapshotProvider]]:
        return self._adapters.get(self._major(ide_version))

    def list_versions(self) -> List[str]:
        return sorted(f"{major}.0" for major in self._adapters)


__all__ = ["ProviderRegistry"]
