"""Project Model Provider interfaces and snapshot adapters."""

from .base import (
    CompilerTool,
    ConfigurationEnumeration,
    LinkerTool,
    MacroEvaluation,
    ProjectModelProvider,
    RawDescriptorAccess,
)
from .descriptor import RawDescriptor, configuration_condition
from .loader import load_provider
from .registry import ProviderRegistry
from .snapshot import SnapshotProvider, Vs2015SnapshotProvider, Vs2017SnapshotProvider

__all__ = [
    "CompilerTool",
    "ConfigurationEnumeration",
    "LinkerTool",
    "MacroEvaluation",
    "ProjectModelProvider",
    "RawDescriptorAccess",
    "RawDescriptor",
    "configuration_condition",
    "load_provider",
    "ProviderRegistry",
    "SnapshotProvider",
    "Vs2015SnapshotProvider",
    "Vs2017SnapshotProvider",
]
