"""Settings extraction.

Reads project-level and file-level build settings of a target from the
Project Model Provider. The SDL check is not reliably exposed by the
object model, so it is also looked up in the raw project descriptor; the
two sources are merged by :func:`assemble_settings`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from slncmake.model import (
    BuildConfiguration,
    CharacterSet,
    ConfigurationInfo,
    FileSettings,
    PchSetting,
    Settings,
    SourceFile,
    Target,
    TargetSettings,
)
from slncmake.provider.base import CompilerTool, ProjectModelProvider
from slncmake.provider.descriptor import RawDescriptor

_module_logger = logging.getLogger("slncmake.convert.extractor")

_LINK_SEPARATORS = re.compile(r"[\s;]+")


def split_list(value: str) -> Tuple[str, ...]:
    """Split a ``;`` separated property value, dropping empty entries."""
    return tuple(token.strip() for token in value.split(";") if token.strip())


def split_link_libraries(value: str) -> Tuple[str, ...]:
    """Split link dependencies on whitespace (and ``;``), dropping empties."""
    return tuple(token for token in _LINK_SEPARATORS.split(value) if token)


def derived_definitions(info: ConfigurationInfo) -> List[str]:
    """Definitions implied by the character set and the use of MFC."""
    definitions = []
    if info.character_set is CharacterSet.MBCS:
        definitions.append("_MBCS")
    elif info.character_set is CharacterSet.UNICODE:
        definitions.append("_UNICODE")
    if info.mfc_usage.enabled:
        definitions.append("_AFXDLL")
    return definitions


def assemble_settings(
    object_model: Settings,
    raw_sdl: Optional[bool],
    inherited: Optional[bool] = None,
) -> Settings:
    """Merge object-model settings with raw-descriptor values.

    Precedence for the SDL check: the object model wins when it reports a
    value, then the raw descriptor, then ``inherited`` (the project value,
    for file settings). Every other field comes from the object model.

    Args:
        object_model: Settings built from the provider's object model.
        raw_sdl: SDL check read from the raw descriptor, None when absent.
        inherited: Value to fall back to when neither source has one.

    Returns:
        Settings: The merged settings.
    """
    sdl_check = object_model.sdl_check
    if sdl_check is None:
        sdl_check = raw_sdl
    if sdl_check is None:
        sdl_check = inherited
    return replace(object_model, sdl_check=sdl_check)


def _compiler_settings(tool: CompilerTool, info: ConfigurationInfo) -> Settings:
    definitions = derived_definitions(info)
    definitions.extend(split_list(tool.preprocessor_definitions))
    return Settings(
        include_dirs=split_list(tool.additional_include_directories),
        definitions=tuple(definitions),
        pch=PchSetting(
            mode=tool.use_precompiled_header,
            header_path=tool.precompiled_header_through,
            pch_path=tool.precompiled_header_file,
        ),
        sdl_check=tool.sdl_check,
    )


class SettingsExtractor:
    """Extract the settings of a target, per configuration and per file.

    Args:
        logger: Sink for per-setting traces; defaults to the module logger.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or _module_logger

    def extract(self, target: Target, provider: ProjectModelProvider) -> TargetSettings:
        """Extract project and source file settings of ``target``.

        Raises:
            DescriptorParseError: If the raw descriptor is malformed.
        """
        descriptor = provider.raw_descriptor(target.project)

        per_config: Dict[str, Settings] = {}
        for configuration in target.configurations:
            per_config[configuration.name] = self._project_settings(
                target, configuration, provider, descriptor
            )

        files = [
            self._file_settings(target, source, provider, descriptor, per_config)
            for source in target.sources
        ]
        self.logger.debug(
            "Extracted %s: %d configuration(s), %d source file(s)",
            target.name,
            len(per_config),
            len(files),
        )
        return TargetSettings(target=target, per_config=per_config, files=files)

    def _project_settings(
        self,
        target: Target,
        configuration: BuildConfiguration,
        provider: ProjectModelProvider,
        descriptor: RawDescriptor,
    ) -> Settings:
        project = target.project
        info = target.info(configuration.name)
        compiler = provider.compiler_tool(project, configuration.key)
        linker = provider.linker_tool(project, configuration.key)

        object_model = replace(
            _compiler_settings(compiler, info),
            library_dirs=split_list(linker.additional_library_directories),
            link_libraries=split_link_libraries(linker.additional_dependencies),
        )
        raw_sdl = descriptor.project_sdl_check(
            configuration.project_configuration, configuration.platform
        )
        settings = assemble_settings(object_model, raw_sdl)

        self._trace(target, configuration, "Additional include directories", settings.include_dirs)
        self._trace(target, configuration, "Preprocessor definitions", settings.definitions)
        self._trace(target, configuration, "Additional library directories", settings.library_dirs)
        self._trace(target, configuration, "Link libraries", settings.link_libraries)
        return settings

    def _file_settings(
        self,
        target: Target,
        source: SourceFile,
        provider: ProjectModelProvider,
        descriptor: RawDescriptor,
        project_settings: Dict[str, Settings],
    ) -> FileSettings:
        project = target.project
        result = FileSettings(file=source)
        for configuration in target.configurations:
            defaults = project_settings[configuration.name]
            tool = provider.file_compiler_tool(project, source, configuration.key)
            if tool is None:
                object_model = replace(defaults, sdl_check=None)
            else:
                # Files have no linker; they share the project's link settings.
                object_model = replace(
                    _compiler_settings(tool, target.info(configuration.name)),
                    library_dirs=defaults.library_dirs,
                    link_libraries=defaults.link_libraries,
                )
            raw_sdl = descriptor.file_sdl_check(
                source.relative_path,
                configuration.project_configuration,
                configuration.platform,
            )
            result.per_config[configuration.name] = assemble_settings(
                object_model, raw_sdl, inherited=defaults.sdl_check
            )
        return result

    def _trace(
        self,
        target: Target,
        configuration: BuildConfiguration,
        name: str,
        items: Tuple[str, ...],
    ) -> None:
        self.logger.debug(
            "--- %s (%s|%s) --- %s",
            name,
            target.name,
            configuration.key,
            "; ".join(items) if items else "<none>",
        )


__all__ = [
    "split_list",
    "split_link_libraries",
    "derived_definitions",
    "assemble_settings",
    "SettingsExtractor",
]
