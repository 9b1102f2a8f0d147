"""Settings value objects.

All settings types are frozen dataclasses so that equality is structural:
two ``PchSetting`` instances are equal iff mode, header and pch path are
equal, never by identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from slncmake.model.schema import SourceFile, Target

DEFAULT_PCH_FILE_PATH = "$(IntDir)$(TargetName).pch"
DEFAULT_PCH_HEADER_PATH = "stdafx.h"


class PchMode(str, Enum):
    """Precompiled header mode of a compiler tool."""

    NONE = "none"
    USE = "use"
    CREATE = "create"


@dataclass(frozen=True)
class PchSetting:
    """Precompiled header setting."""

    mode: PchMode = PchMode.NONE
    header_path: str = DEFAULT_PCH_HEADER_PATH
    pch_path: str = DEFAULT_PCH_FILE_PATH

    def option_string(self) -> str:
        """Build the MSVC option string, ``""`` when PCH is unused.

        Header and pch paths are only spelled out when they differ from the
        IDE defaults.
        """
        if self.mode is PchMode.NONE:
            return ""

        option = "/Yu" if self.mode is PchMode.USE else "/Yc"
        if self.header_path != DEFAULT_PCH_HEADER_PATH:
            option += f'"{self.header_path}"'
        if self.pch_path != DEFAULT_PCH_FILE_PATH:
            option += f' /Fp"{self.pch_path}"'
        return option


@dataclass(frozen=True)
class Settings:
    """Build settings of a target or a file for one configuration.

    Attributes:
        include_dirs: Additional include directories, in declared order.
        definitions: Preprocessor definitions, in declared order.
        library_dirs: Additional library directories (target level only).
        link_libraries: Link library tokens (target level only).
        pch: Precompiled header setting.
        sdl_check: SDL check flag; None means unset, which is distinct from
            an explicit False.
    """

    include_dirs: Tuple[str, ...] = ()
    definitions: Tuple[str, ...] = ()
    library_dirs: Tuple[str, ...] = ()
    link_libraries: Tuple[str, ...] = ()
    pch: PchSetting = field(default_factory=PchSetting)
    sdl_check: Optional[bool] = None


@dataclass
class FileSettings:
    """Settings of one source file, keyed by configuration name."""

    file: SourceFile
    per_config: Dict[str, Settings] = field(default_factory=dict)

    @property
    def path(self) -> str:
        return self.file.relative_path


@dataclass
class TargetSettings:
    """Extraction result for one target."""

    target: Target
    per_config: Dict[str, Settings] = field(default_factory=dict)
    files: List[FileSettings] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.target.name

    def settings(self, configuration: str) -> Settings:
        return self.per_config[configuration]


@dataclass(frozen=True)
class LinkCandidate:
    """A literal library reference and the absolute paths it may denote."""

    configuration: str
    token: str
    translated: str
    candidates: Tuple[str, ...] = ()


__all__ = [
    "DEFAULT_PCH_FILE_PATH",
    "DEFAULT_PCH_HEADER_PATH",
    "PchMode",
    "PchSetting",
    "Settings",
    "FileSettings",
    "TargetSettings",
    "LinkCandidate",
]
