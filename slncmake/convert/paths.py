"""Path translation.

Turns macro-bearing IDE paths into paths a CMake descriptor can carry:

* directories inside the target's project directory become
  ``${CMAKE_CURRENT_SOURCE_DIR}/...``;
* directories inside the source tree become ``${CMAKE_SOURCE_DIR}/...``;
* anything else keeps its original spelling with IDE macros expanded and
  every other ``$(Name)`` rewritten to ``$ENV{Name}``.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from slncmake.model import BuildConfiguration, Target
from slncmake.provider.base import MacroEvaluation
from slncmake.utils.path_utils import (
    is_rooted,
    join_path,
    normalize_path,
    quote_if_needed,
    relative_to,
    to_unix_path,
)

logger = logging.getLogger("slncmake.convert.paths")

CURRENT_SOURCE_DIR = "${CMAKE_CURRENT_SOURCE_DIR}"
SOURCE_DIR = "${CMAKE_SOURCE_DIR}"

# Macros defined by the IDE itself. Anything else is assumed to come from
# the environment of the build machine.
IDE_MACROS = (
    "RemoteMachine",
    "Configuration",
    "Platform",
    "ParentName",
    "RootNameSpace",
    "IntDir",
    "OutDir",
    "DevEnvDir",
    "InputDir",
    "InputPath",
    "InputName",
    "InputFileName",
    "InputExt",
    "ProjectDir",
    "ProjectPath",
    "ProjectName",
    "ProjectFileName",
    "ProjectExt",
    "SolutionDir",
    "SolutionPath",
    "SolutionName",
    "SolutionFileName",
    "SolutionExt",
    "TargetDir",
    "TargetPath",
    "TargetName",
    "TargetFileName",
    "TargetExt",
    "VSInstallDir",
    "VCInstallDir",
    "FrameworkDir",
    "FrameworkVersion",
    "FrameworkSDKDir",
    "WebDeployPath",
    "WebDeployRoot",
    "SafeParentName",
    "SafeInputName",
    "SafeRootNamespace",
    "FxCopDir",
    "NOINHERIT",
)

_IDE_MACROS_LOWER = frozenset(name.lower() for name in IDE_MACROS)
_MACRO_PATTERN = re.compile(r"\$\(([^()]*)\)")


def is_ide_macro(name: str) -> bool:
    return name.strip().lower() in _IDE_MACROS_LOWER


class PathTranslator:
    """Translate paths of one target.

    Args:
        provider: Macro evaluation capability of the provider.
        target: Target whose configurations give macros their values.
        source_root: Root directory of the source tree, ``/`` separated.
    """

    def __init__(self, provider: MacroEvaluation, target: Target, source_root: str) -> None:
        self.provider = provider
        self.target = target
        self.source_root = source_root
        self._environment_variables: List[str] = []

    @property
    def environment_variables(self) -> List[str]:
        """Environment variables referenced by translated directories.

        First-seen order, without duplicates.
        """
        return list(self._environment_variables)

    def evaluate(self, text: str, configuration: BuildConfiguration) -> str:
        """Expand every macro of ``text`` in a configuration."""
        return self.provider.evaluate(self.target.project, configuration.key, text)

    def translate(self, path: str, configuration: BuildConfiguration) -> str:
        """Evaluate macros and normalize the result.

        Rooted results have ``.``/``..`` collapsed; all results use ``/``
        separators. An empty evaluation yields ``""``.
        """
        evaluated = self.evaluate(path, configuration)
        if not evaluated:
            return ""
        if is_rooted(evaluated):
            return normalize_path(evaluated)
        return to_unix_path(evaluated)

    def translate_directory(
        self, path: str, configuration: BuildConfiguration, quote: bool = True
    ) -> Optional[str]:
        """Translate an include or library directory.

        Args:
            path: Directory as written in the project.
            configuration: Configuration the macros are evaluated for.
            quote: Wrap directories containing whitespace in double quotes.
                Callers embedding the result in an already quoted argument
                pass False.

        Returns:
            Optional[str]: The portable spelling of the directory, or None
            when the directory evaluates to nothing and must be dropped.
        """
        translated = self.translate(path, configuration)
        if not translated:
            return None

        absolute = translated
        if not is_rooted(absolute):
            # The IDE resolves relative directories against the project.
            absolute = normalize_path(join_path(self.target.project_dir, absolute))

        result = self._relocate(absolute)
        if result is None:
            result = self._expand_ide_macros(path, configuration)

        result = result.rstrip("/")
        logger.debug("%s [%s]: %s -> %s", self.target.name, configuration.name, path, result)
        return quote_if_needed(result) if quote else result

    def _relocate(self, absolute: str) -> Optional[str]:
        inside_target = relative_to(absolute, self.target.project_dir)
        if inside_target is not None:
            return f"{CURRENT_SOURCE_DIR}/{inside_target}"
        if self.source_root:
            inside_root = relative_to(absolute, self.source_root)
            if inside_root is not None:
                return f"{SOURCE_DIR}/{inside_root}"
        return None

    def _expand_ide_macros(self, text: str, configuration: BuildConfiguration) -> str:
        def _replace(match: "re.Match[str]") -> str:
            name = match.group(1)
            if is_ide_macro(name):
                return to_unix_path(self.evaluate(match.group(0), configuration))
            self._record(name)
            return "$ENV{%s}" % name

        return to_unix_path(_MACRO_PATTERN.sub(_replace, text))

    def _record(self, name: str) -> None:
        if name not in self._environment_variables:
            logger.debug("%s references environment variable %s", self.target.name, name)
            self._environment_variables.append(name)


__all__ = [
    "CURRENT_SOURCE_DIR",
    "SOURCE_DIR",
    "IDE_MACROS",
    "is_ide_macro",
    "PathTranslator",
]
