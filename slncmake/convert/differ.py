"""Settings differ.

Decides which per-file overrides a target needs by comparing every source
file's settings with the project settings of the same configuration.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, List, Tuple

from slncmake.model import FileSettings, PchMode, Settings, TargetSettings

logger = logging.getLogger("slncmake.convert.differ")


class SettingCategory(str, Enum):
    """Setting categories that may be overridden per file."""

    INCLUDE_DIRS = "include_dirs"
    DEFINITIONS = "definitions"
    LIBRARY_DIRS = "library_dirs"
    SDL_CHECK = "sdl_check"
    PCH = "pch"


_EQUALITY: Dict[SettingCategory, Callable[[Settings, Settings], bool]] = {
    SettingCategory.INCLUDE_DIRS: lambda lhs, rhs: lhs.include_dirs == rhs.include_dirs,
    # Definitions are a set for equivalence; emitted text keeps declared order.
    SettingCategory.DEFINITIONS: lambda lhs, rhs: sorted(lhs.definitions)
    == sorted(rhs.definitions),
    SettingCategory.LIBRARY_DIRS: lambda lhs, rhs: lhs.library_dirs == rhs.library_dirs,
    SettingCategory.SDL_CHECK: lambda lhs, rhs: lhs.sdl_check == rhs.sdl_check,
    SettingCategory.PCH: lambda lhs, rhs: lhs.pch == rhs.pch,
}


def settings_equal(category: SettingCategory, lhs: Settings, rhs: Settings) -> bool:
    """Compare one category of two settings."""
    return _EQUALITY[category](lhs, rhs)


class SettingsDiffer:
    """Compare file settings of one target against its project settings."""

    def __init__(self, target_settings: TargetSettings) -> None:
        self.target_settings = target_settings
        self.configurations = target_settings.target.configuration_names

    def differing_configurations(
        self, file: FileSettings, category: SettingCategory
    ) -> List[str]:
        """Configurations where ``category`` of ``file`` differs, in order."""
        return [
            name
            for name in self.configurations
            if not settings_equal(
                category, file.per_config[name], self.target_settings.settings(name)
            )
        ]

    def overrides(self, category: SettingCategory) -> List[Tuple[FileSettings, List[str]]]:
        """Files overriding ``category`` with their differing configurations.

        Files are returned in extraction order; files without a difference
        are omitted.
        """
        result = []
        for file in self.target_settings.files:
            differing = self.differing_configurations(file, category)
            if differing:
                logger.debug(
                    "%s: %s overrides %s in %s",
                    self.target_settings.name,
                    file.path,
                    category.value,
                    ", ".join(differing),
                )
                result.append((file, differing))
        return result

    def pch_mixed_mode(self) -> bool:
        """Whether PCH options must be pushed down to every source file.

        This is the case when the target uses a precompiled header in at
        least one configuration and some source file does not use one in
        at least one configuration: CMake cannot express "no flag" under
        an active target-level option.
        """
        target_uses = any(
            self.target_settings.settings(name).pch.mode is PchMode.USE
            for name in self.configurations
        )
        if not target_uses:
            return False
        return any(
            file.per_config[name].pch.mode is PchMode.NONE
            for file in self.target_settings.files
            for name in self.configurations
        )

    def pch_groups(self) -> List[Tuple[Tuple[str, ...], List[FileSettings]]]:
        """Group source files by their per-configuration PCH option strings.

        Groups appear in first-seen order. The option tuple is aligned with
        the target's configuration order.
        """
        groups: Dict[Tuple[str, ...], List[FileSettings]] = {}
        for file in self.target_settings.files:
            options = tuple(
                file.per_config[name].pch.option_string() for name in self.configurations
            )
            groups.setdefault(options, []).append(file)
        return list(groups.items())


__all__ = ["SettingCategory", "settings_equal", "SettingsDiffer"]
