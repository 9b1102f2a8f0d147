"""Project Model Provider interfaces.

The conversion core never talks to an IDE directly. It consumes a provider
exposing three capabilities:

1. ConfigurationEnumeration - configurations, files and tool values
2. MacroEvaluation - expansion of ``$(Macro)`` text in a configuration
3. RawDescriptorAccess - the raw project descriptor for properties the
   object model omits

Each IDE version gets one concrete adapter implementing all three.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from slncmake.model import (
    DEFAULT_PCH_FILE_PATH,
    DEFAULT_PCH_HEADER_PATH,
    ConfigurationInfo,
    PchMode,
    ProjectRef,
    Solution,
    SourceFile,
)
from slncmake.provider.descriptor import RawDescriptor

logger = logging.getLogger("slncmake.provider.base")


@dataclass(frozen=True)
class CompilerTool:
    """Raw compiler tool values of a project or file configuration.

    List-valued properties are kept as the IDE reports them (``;``
    separated); splitting is the extractor's job. ``sdl_check`` is only
    set when the object model reports it for this exact tool; it is never
    inherited from the project tool.
    """

    additional_include_directories: str = ""
    preprocessor_definitions: str = ""
    use_precompiled_header: PchMode = PchMode.NONE
    precompiled_header_through: str = DEFAULT_PCH_HEADER_PATH
    precompiled_header_file: str = DEFAULT_PCH_FILE_PATH
    sdl_check: Optional[bool] = None


@dataclass(frozen=True)
class LinkerTool:
    """Raw linker tool values of a project configuration."""

    additional_library_directories: str = ""
    additional_dependencies: str = ""


class ConfigurationEnumeration(ABC):
    """Enumerates configurations, files and tool settings of projects."""

    @abstractmethod
    def configurations(self, project: ProjectRef) -> List[ConfigurationInfo]:
        """Return every configuration of a project, in IDE order."""
        raise NotImplementedError

    @abstractmethod
    def files(self, project: ProjectRef) -> List[SourceFile]:
        """Return the project's files with their classification."""
        raise NotImplementedError

    @abstractmethod
    def compiler_tool(self, project: ProjectRef, configuration_key: str) -> CompilerTool:
        """Return project-level compiler values for ``Config|Platform``."""
        raise NotImplementedError

    @abstractmethod
    def linker_tool(self, project: ProjectRef, configuration_key: str) -> LinkerTool:
        """Return project-level linker values for ``Config|Platform``."""
        raise NotImplementedError

    @abstractmethod
    def file_compiler_tool(
        self, project: ProjectRef, file: SourceFile, configuration_key: str
    ) -> Optional[CompilerTool]:
        """Return effective compiler values of one file.

        Returns:
            Optional[CompilerTool]: None when the provider has no file-level
            tool for the configuration; callers then inherit project values.
        """
        raise NotImplementedError


class MacroEvaluation(ABC):
    """Evaluates macro-bearing strings in a configuration context."""

    @abstractmethod
    def evaluate(self, project: ProjectRef, configuration_key: str, text: str) -> str:
        """Expand every macro of ``text``; undefined macros expand to ``""``."""
        raise NotImplementedError


class RawDescriptorAccess(ABC):
    """Gives access to the raw project descriptor."""

    @abstractmethod
    def raw_descriptor(self, project: ProjectRef) -> RawDescriptor:
        """Return the parsed descriptor of a project.

        Raises:
            DescriptorParseError: If the descriptor text is malformed.
        """
        raise NotImplementedError


class ProjectModelProvider(ConfigurationEnumeration, MacroEvaluation, RawDescriptorAccess):
    """Full provider consumed by the conversion pipeline."""

    IDE_VERSION: str = ""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the solution (or of the exported model)."""
        raise NotImplementedError

    @property
    @abstractmethod
    def source_root(self) -> str:
        """Root directory of the project tree, ``/`` separated."""
        raise NotImplementedError

    @abstractmethod
    def solution(self) -> Optional[Solution]:
        """Return the solution grouping, if the model has one."""
        raise NotImplementedError

    @abstractmethod
    def projects(self) -> List[ProjectRef]:
        """Return every project, in enumeration order."""
        raise NotImplementedError

    def project(self, name: str) -> ProjectRef:
        for project in self.projects():
            if project.name == name:
                return project
        raise KeyError(name)


__all__ = [
    "CompilerTool",
    "LinkerTool",
    "ConfigurationEnumeration",
    "MacroEvaluation",
    "RawDescriptorAccess",
    "ProjectModelProvider",
]
