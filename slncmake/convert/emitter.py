"""CMake descriptor emitter.

Serializes the normalized settings of a target into a ``CMakeLists.txt``
and builds the aggregate descriptor of a solution. Output only depends on
the input model: file lists are sorted, configurations keep their resolved
order, and rendering the same input twice yields identical text.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from slncmake.config.schema import DEFAULT_CMAKE_MINIMUM_VERSION
from slncmake.convert.differ import SettingCategory, SettingsDiffer
from slncmake.convert.expressions import config_expressions
from slncmake.convert.paths import PathTranslator
from slncmake.model import (
    BuildConfiguration,
    FileKind,
    FileSettings,
    MfcUsage,
    OutputKind,
    SubSystem,
    TargetSettings,
)
from slncmake.utils.path_utils import file_stem, is_rooted, quote_if_needed, relative_path

logger = logging.getLogger("slncmake.convert.emitter")

INDENT = "  "

# Separators between config-expressions of the different statement shapes.
LINE_SEPARATOR = "\n  "
QUOTED_LINE_SEPARATOR = '"\n  "'
FLAGS_SEPARATOR = " \\\n   "


def indent_text(text: str) -> str:
    """Indent every non-empty line of ``text`` by one level."""
    return "".join(f"{INDENT}{line}\n" for line in text.split("\n") if line)


def environment_check(variables: Sequence[str]) -> str:
    """Block warning at configure time about undefined environment variables."""
    if not variables:
        return ""
    return (
        f"foreach (EnvVar IN ITEMS {' '.join(variables)})\n"
        '  if ("$ENV{${EnvVar}}" STREQUAL "")\n'
        "    message(WARNING \"Environmental variable '${EnvVar}' is not defined.\")\n"
        "  endif ()\n"
        "endforeach ()\n"
    )


def _source_flags(paths: Sequence[str], expressions: str) -> str:
    # Leading space keeps appended flags apart from flags set elsewhere.
    return (
        f"set_property(SOURCE {' '.join(paths)}\n"
        "  APPEND_STRING PROPERTY COMPILE_FLAGS\n"
        f'  " {expressions}")\n'
    )


class DescriptorEmitter:
    """Render target and solution descriptors.

    Args:
        cmake_minimum_version: Version written to ``cmake_minimum_required``.
    """

    def __init__(self, cmake_minimum_version: str = DEFAULT_CMAKE_MINIMUM_VERSION) -> None:
        self.cmake_minimum_version = cmake_minimum_version

    # ------------------------------------------------------------------
    # Target descriptor
    # ------------------------------------------------------------------

    def render_target(
        self,
        target_settings: TargetSettings,
        translator: PathTranslator,
        links: Optional[Dict[str, List[str]]] = None,
    ) -> str:
        """Render the descriptor of one target.

        Args:
            target_settings: Extracted settings of the target.
            translator: Path translator of the target; collects the
                environment variables the descriptor references.
            links: Resolved link entries per configuration name, as
                returned by ``LibraryLinkResolver.resolve``.

        Returns:
            str: Descriptor text with ``\\n`` line endings.
        """
        target = target_settings.target
        differ = SettingsDiffer(target_settings)

        body = [self._configuration_types(target_settings)]
        if target.mfc_usage.enabled:
            flag = 1 if target.mfc_usage is MfcUsage.STATIC else 2
            body.append(f"# Use of MFC\nset(CMAKE_MFC_FLAG {flag})\n")
        body.append(self._declaration(target_settings))

        sections: List[Tuple[str, str]] = [
            ("Output file name", self._output_names(target_settings)),
            (
                "Additional include directories",
                self._include_directories(target_settings, differ, translator),
            ),
            ("Preprocessor definitions", self._definitions(target_settings, differ)),
            ("SDL check", self._sdl_check(target_settings, differ)),
            ("Precompiled header files", self._precompiled_headers(target_settings, differ)),
            (
                "Additional library directories",
                self._library_directories(target_settings, translator),
            ),
            ("Link libraries", self._link_libraries(target_settings, links or {})),
        ]
        for title, code in sections:
            if code:
                body.append(f"# {title}\n{code}")

        header = (
            f"cmake_minimum_required(VERSION {self.cmake_minimum_version})\n"
            "\n"
            f"project({target.name})\n"
            "\n"
        )
        check = environment_check(translator.environment_variables)
        if check:
            header += check + "\n"

        logger.debug("Rendered %s (%d section(s))", target.name, len(body))
        return header + "\n".join(body).strip() + "\n"

    def _configuration_types(self, target_settings: TargetSettings) -> str:
        names = ";".join(target_settings.target.configuration_names)
        return (
            f'set(CMAKE_CONFIGURATION_TYPES "{names}"\n'
            '    CACHE STRING "Configuration types" FORCE)\n'
        )

    def _declaration(self, target_settings: TargetSettings) -> str:
        target = target_settings.target
        if target.output_kind is OutputKind.EXECUTABLE:
            text = f"add_executable({target.name}\n"
            if target.subsystem is SubSystem.WINDOWS:
                text += f"{INDENT}WIN32\n"
        elif target.output_kind is OutputKind.SHARED_LIBRARY:
            text = f"add_library({target.name} SHARED\n"
        else:
            text = f"add_library({target.name} STATIC\n"

        paths = sorted(f.relative_path for f in target.files if f.kind is not FileKind.OTHER)
        text += "".join(f"{INDENT}{quote_if_needed(path)}\n" for path in paths)
        return text + ")\n"

    def _output_names(self, target_settings: TargetSettings) -> str:
        target = target_settings.target
        stems = [
            (cfg.name, file_stem(target.info(cfg.name).primary_output))
            for cfg in target.configurations
        ]
        if all(not stem or stem == target.name for _name, stem in stems):
            return ""

        lines = [f"set_target_properties({target.name}", f"{INDENT}PROPERTIES"]
        lines.extend(
            f"{INDENT}OUTPUT_NAME_{name.upper()} {stem or target.name}" for name, stem in stems
        )
        lines.append(")")
        return "\n".join(lines) + "\n"

    def _source_path(self, target_settings: TargetSettings, file: FileSettings) -> str:
        source = file.file
        if is_rooted(source.full_path) and target_settings.target.project_dir:
            path = relative_path(source.full_path, target_settings.target.project_dir)
        else:
            path = source.relative_path
        return quote_if_needed(path)

    def _translated_directories(
        self,
        directories: Sequence[str],
        configuration: BuildConfiguration,
        translator: PathTranslator,
        quote: bool = True,
    ) -> List[str]:
        result = []
        for directory in directories:
            translated = translator.translate_directory(directory, configuration, quote=quote)
            if translated is not None:
                result.append(translated)
        return result

    def _include_directories(
        self,
        target_settings: TargetSettings,
        differ: SettingsDiffer,
        translator: PathTranslator,
    ) -> str:
        target = target_settings.target
        text = ""

        pairs = []
        for cfg in target.configurations:
            dirs = self._translated_directories(
                target_settings.settings(cfg.name).include_dirs, cfg, translator
            )
            value = ("\n    " + ";\n    ".join(dirs)) if dirs else ""
            pairs.append((cfg.name, value))
        expressions = config_expressions(pairs, LINE_SEPARATOR)
        if expressions:
            text += (
                f"set_property(TARGET {target.name}\n"
                "  APPEND PROPERTY INCLUDE_DIRECTORIES\n"
                f"  {expressions}\n"
                ")\n"
            )

        for file, differing in differ.overrides(SettingCategory.INCLUDE_DIRS):
            file_pairs = []
            for name in differing:
                cfg = target.configuration(name)
                # The whole property value is one quoted argument.
                dirs = self._translated_directories(
                    file.per_config[name].include_dirs, cfg, translator, quote=False
                )
                file_pairs.append((name, ";".join(dirs)))
            expressions = config_expressions(file_pairs, QUOTED_LINE_SEPARATOR)
            if expressions:
                text += (
                    f"set_property(SOURCE {self._source_path(target_settings, file)}\n"
                    "  APPEND PROPERTY INCLUDE_DIRECTORIES\n"
                    f'  "{expressions}"\n'
                    ")\n"
                )
        return text

    def _definitions(self, target_settings: TargetSettings, differ: SettingsDiffer) -> str:
        target = target_settings.target
        text = ""

        expressions = config_expressions(
            [
                (name, ";".join(target_settings.settings(name).definitions))
                for name in target.configuration_names
            ],
            LINE_SEPARATOR,
        )
        if expressions:
            text += f"target_compile_definitions({target.name} PRIVATE\n  {expressions}\n)\n"

        for file, differing in differ.overrides(SettingCategory.DEFINITIONS):
            expressions = config_expressions(
                [
                    (name, " ".join(f"-D{d}" for d in file.per_config[name].definitions))
                    for name in differing
                ],
                FLAGS_SEPARATOR,
            )
            if expressions:
                text += _source_flags([self._source_path(target_settings, file)], expressions)
        return text

    @staticmethod
    def _sdl_option(value: Optional[bool]) -> str:
        if value is None:
            return ""
        return "/sdl" if value else "/sdl-"

    def _sdl_check(self, target_settings: TargetSettings, differ: SettingsDiffer) -> str:
        target = target_settings.target
        text = ""

        expressions = config_expressions(
            [
                (name, self._sdl_option(target_settings.settings(name).sdl_check))
                for name in target.configuration_names
            ],
            QUOTED_LINE_SEPARATOR,
        )
        if expressions:
            text += f'target_compile_options({target.name} PRIVATE\n  "{expressions}"\n)\n'

        for file, differing in differ.overrides(SettingCategory.SDL_CHECK):
            expressions = config_expressions(
                [(name, self._sdl_option(file.per_config[name].sdl_check)) for name in differing],
                FLAGS_SEPARATOR,
            )
            if expressions:
                text += _source_flags([self._source_path(target_settings, file)], expressions)
        return text

    def _precompiled_headers(
        self, target_settings: TargetSettings, differ: SettingsDiffer
    ) -> str:
        target = target_settings.target
        names = target.configuration_names
        text = ""

        if differ.pch_mixed_mode():
            logger.debug("%s: precompiled header options are emitted per file", target.name)
            for options, files in differ.pch_groups():
                expressions = config_expressions(zip(names, options), FLAGS_SEPARATOR)
                if not expressions:
                    continue
                paths = [self._source_path(target_settings, file) for file in files]
                text += _source_flags(paths, expressions)
        else:
            expressions = config_expressions(
                [(name, target_settings.settings(name).pch.option_string()) for name in names],
                QUOTED_LINE_SEPARATOR,
            )
            if expressions:
                text += f'target_compile_options({target.name} PRIVATE\n  "{expressions}"\n)\n'

            for file, differing in differ.overrides(SettingCategory.PCH):
                expressions = config_expressions(
                    [(name, file.per_config[name].pch.option_string()) for name in differing],
                    FLAGS_SEPARATOR,
                )
                if expressions:
                    text += _source_flags([self._source_path(target_settings, file)], expressions)

        if not text:
            return ""
        return "if (MSVC)\n" + indent_text(text) + "endif ()\n"

    def _library_directories(
        self, target_settings: TargetSettings, translator: PathTranslator
    ) -> str:
        target = target_settings.target
        per_config = [
            (
                cfg.name,
                self._translated_directories(
                    target_settings.settings(cfg.name).library_dirs, cfg, translator
                ),
            )
            for cfg in target.configurations
        ]
        if not any(dirs for _name, dirs in per_config):
            return ""

        def _options(option: str) -> str:
            text = f"target_link_options({target.name} PRIVATE\n"
            for name, dirs in per_config:
                if not dirs:
                    continue
                text += f"  $<$<CONFIG:{name}>:\n"
                text += "\n".join(f"    {option}{d}" for d in dirs) + ">\n"
            return text + ")\n"

        return (
            "if (MSVC)\n"
            + indent_text(_options("/LIBPATH:"))
            + "else ()\n"
            + indent_text(_options("-L"))
            + "endif ()\n"
        )

    def _link_libraries(
        self, target_settings: TargetSettings, links: Dict[str, List[str]]
    ) -> str:
        target = target_settings.target
        expressions = config_expressions(
            [(name, ";".join(links.get(name, []))) for name in target.configuration_names],
            QUOTED_LINE_SEPARATOR,
        )
        if not expressions:
            return ""
        return (
            f"set_property(TARGET {target.name}\n"
            "  APPEND PROPERTY LINK_LIBRARIES\n"
            f'  "{expressions}"\n'
            ")\n"
        )

    # ------------------------------------------------------------------
    # Aggregate descriptor
    # ------------------------------------------------------------------

    def render_solution(self, name: str, subdirectories: Sequence[str]) -> str:
        """Render the aggregate descriptor referencing every target.

        Args:
            name: Solution (or model) name.
            subdirectories: Target directories relative to the output root,
                in target enumeration order.
        """
        text = (
            f"cmake_minimum_required(VERSION {self.cmake_minimum_version})\n"
            "\n"
            f"project({name})\n"
            "\n"
        )
        text += "".join(f"add_subdirectory({quote_if_needed(sub)})\n" for sub in subdirectories)
        return text


__all__ = ["DescriptorEmitter", "environment_check", "indent_text"]
