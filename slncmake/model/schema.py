"""Canonical project model types.

Enums and immutable records describing what the Project Model Provider
reports about a solution: configurations, targets and their files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class OutputKind(str, Enum):
    """Kind of binary a target produces."""

    EXECUTABLE = "executable"
    STATIC_LIBRARY = "static_library"
    SHARED_LIBRARY = "shared_library"
    UTILITY = "utility"

    @property
    def description(self) -> str:
        """Human readable name used in error messages."""
        return {
            OutputKind.EXECUTABLE: "executable",
            OutputKind.STATIC_LIBRARY: "static link library",
            OutputKind.SHARED_LIBRARY: "dynamic link library",
            OutputKind.UTILITY: "utility",
        }[self]


class MfcUsage(str, Enum):
    """Use of MFC."""

    NONE = "none"
    STATIC = "static"
    DYNAMIC = "dynamic"

    @property
    def enabled(self) -> bool:
        return self is not MfcUsage.NONE


class CharacterSet(str, Enum):
    NOT_SET = "not_set"
    UNICODE = "unicode"
    MBCS = "mbcs"


class SubSystem(str, Enum):
    NOT_SET = "not_set"
    CONSOLE = "console"
    WINDOWS = "windows"


class FileKind(str, Enum):
    """Classification of project files relevant to the descriptor."""

    SOURCE = "source"
    HEADER = "header"
    RESOURCE = "resource"
    OTHER = "other"


@dataclass(frozen=True)
class BuildConfiguration:
    """A resolved build configuration of one target.

    Attributes:
        name: Name emitted in generator expressions. When a solution maps
            project configurations this is the solution configuration name.
        platform: Platform identifier (e.g. ``x64``).
        project_configuration: The project's own configuration name, used
            for provider lookups.
    """

    name: str
    platform: str
    project_configuration: str = ""

    def __post_init__(self) -> None:
        if not self.project_configuration:
            object.__setattr__(self, "project_configuration", self.name)

    @property
    def key(self) -> str:
        """Provider lookup key ``Configuration|Platform``."""
        return f"{self.project_configuration}|{self.platform}"


@dataclass(frozen=True)
class ConfigurationInfo:
    """What the provider reports for one configuration of one project."""

    name: str
    platform: str
    output_kind: OutputKind
    mfc_usage: MfcUsage = MfcUsage.NONE
    character_set: CharacterSet = CharacterSet.NOT_SET
    subsystem: SubSystem = SubSystem.NOT_SET
    primary_output: str = ""
    import_library: str = ""

    @property
    def key(self) -> str:
        return f"{self.name}|{self.platform}"


@dataclass(frozen=True)
class SourceFile:
    """A file of a target.

    Attributes:
        relative_path: Path relative to the project directory, ``/`` separated.
        full_path: Absolute path, ``/`` separated.
        kind: File classification.
    """

    relative_path: str
    full_path: str
    kind: FileKind


@dataclass
class Target:
    """One buildable unit with its resolved configurations.

    Invariant: ``output_kind`` and ``mfc_usage`` are identical across all
    configurations; the Configuration Resolver refuses to build a Target
    otherwise.
    """

    name: str
    project_path: str
    project_dir: str
    output_kind: OutputKind
    mfc_usage: MfcUsage
    subsystem: SubSystem
    configurations: List[BuildConfiguration]
    infos: Dict[str, ConfigurationInfo] = field(default_factory=dict)
    files: List[SourceFile] = field(default_factory=list)

    @property
    def configuration_names(self) -> List[str]:
        return [cfg.name for cfg in self.configurations]

    def configuration(self, name: str) -> BuildConfiguration:
        for cfg in self.configurations:
            if cfg.name == name:
                return cfg
        raise KeyError(name)

    def info(self, name: str) -> ConfigurationInfo:
        """Return provider information for a configuration name."""
        return self.infos[name]

    @property
    def output_paths(self) -> Dict[str, str]:
        """Configuration name -> primary output path."""
        return {name: info.primary_output for name, info in self.infos.items()}

    @property
    def import_libraries(self) -> Dict[str, str]:
        """Configuration name -> import library path."""
        return {name: info.import_library for name, info in self.infos.items()}

    @property
    def sources(self) -> List[SourceFile]:
        return [f for f in self.files if f.kind is FileKind.SOURCE]

    @property
    def project(self) -> "ProjectRef":
        """Provider handle of the project this target was built from."""
        return ProjectRef(name=self.name, path=self.project_path)


@dataclass(frozen=True)
class SolutionContext:
    """One project entry of a solution configuration."""

    project: str
    configuration: str
    platform: str
    should_build: bool = True


@dataclass(frozen=True)
class SolutionConfiguration:
    name: str
    platform: str
    contexts: Tuple[SolutionContext, ...] = ()


@dataclass(frozen=True)
class Solution:
    """Solution-level grouping of projects."""

    name: str
    path: str
    directory: str
    configurations: Tuple[SolutionConfiguration, ...] = ()


@dataclass(frozen=True)
class ProjectRef:
    """A project as enumerated by the provider.

    Attributes:
        name: Project name (becomes the CMake target name).
        path: Full path of the project file, ``/`` separated.
        solution_path: Path of the project relative to the solution, as
            listed in solution contexts.
        is_vc_project: False for projects that are not Visual C++ projects.
    """

    name: str
    path: str
    solution_path: str = ""
    is_vc_project: bool = True

    @property
    def directory(self) -> str:
        head, _, _ = self.path.rpartition("/")
        return head


__all__ = [
    "OutputKind",
    "MfcUsage",
    "CharacterSet",
    "SubSystem",
    "FileKind",
    "BuildConfiguration",
    "ConfigurationInfo",
    "SourceFile",
    "Target",
    "SolutionContext",
    "SolutionConfiguration",
    "Solution",
    "ProjectRef",
]
