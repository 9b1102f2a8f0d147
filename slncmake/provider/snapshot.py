"""Snapshot-backed Project Model Provider adapters.

A snapshot carries the values the IDE automation API reported. The two
supported IDE versions encode enumerations differently:

* Visual Studio 2015 (``14.0``) exports automation enum names
  (``typeApplication``, ``useMfcDynamic``...) or their integer values.
* Visual Studio 2017 (``15.0``) exports MSBuild property strings
  (``Application``, ``Dynamic``...).

``SnapshotProvider`` implements every capability once; the version
subclasses only supply decoding tables.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from slncmake.errors import SnapshotError
from slncmake.model import (
    CharacterSet,
    ConfigurationInfo,
    FileKind,
    MfcUsage,
    OutputKind,
    PchMode,
    ProjectRef,
    Solution,
    SolutionConfiguration,
    SolutionContext,
    SourceFile,
    SubSystem,
)
from slncmake.provider.base import CompilerTool, LinkerTool, ProjectModelProvider
from slncmake.provider.descriptor import RawDescriptor
from slncmake.provider.snapshot_schema import (
    CompilerToolModel,
    ProjectConfigurationModel,
    ProjectModel,
    SnapshotDocument,
)
from slncmake.utils.path_utils import (
    directory_of,
    file_stem,
    join_path,
    normalize_path,
    to_unix_path,
)

logger = logging.getLogger("slncmake.provider.snapshot")

_MACRO_PATTERN = re.compile(r"\$\(([^()]*)\)")


def _lookup(table: Mapping[Any, Any], value: Any, what: str) -> Any:
    key = value.lower() if isinstance(value, str) else value
    try:
        return table[key]
    except KeyError as exc:
        raise SnapshotError(f"Unknown {what} value {value!r}") from exc


def _with_trailing_slash(path: str) -> str:
    if path and not path.endswith("/"):
        return path + "/"
    return path


class SnapshotProvider(ProjectModelProvider):
    """Provider answering from a validated snapshot document.

    Args:
        document: Validated snapshot.
        base_dir: Directory relative descriptor paths are resolved against.
    """

    # Decoding tables; keys are lower-cased strings or ints.
    CONFIGURATION_TYPES: Dict[Any, OutputKind] = {}
    MFC_USAGES: Dict[Any, MfcUsage] = {}
    CHARACTER_SETS: Dict[Any, CharacterSet] = {}
    SUBSYSTEMS: Dict[Any, SubSystem] = {}
    PCH_MODES: Dict[Any, PchMode] = {}
    FILE_KINDS: Dict[Any, FileKind] = {}

    def __init__(self, document: SnapshotDocument, base_dir: Optional[Path] = None) -> None:
        self.document = document
        self.base_dir = base_dir or Path.cwd()
        self._projects: Dict[str, ProjectModel] = {p.name: p for p in document.projects}
        self._descriptors: Dict[str, RawDescriptor] = {}
        self._solution = self._build_solution()
        logger.debug(
            "%s initialized with %d project(s)",
            self.__class__.__name__,
            len(self._projects),
        )

    # ------------------------------------------------------------------
    # Solution / projects
    # ------------------------------------------------------------------

    def _build_solution(self) -> Optional[Solution]:
        model = self.document.solution
        if model is None:
            return None
        path = normalize_path(model.path)
        configurations = tuple(
            SolutionConfiguration(
                name=cfg.name,
                platform=cfg.platform,
                contexts=tuple(
                    SolutionContext(
                        project=to_unix_path(ctx.project),
                        configuration=ctx.configuration,
                        platform=ctx.platform,
                        should_build=ctx.should_build,
                    )
                    for ctx in cfg.contexts
                ),
            )
            for cfg in model.configurations
        )
        return Solution(
            name=file_stem(path),
            path=path,
            directory=directory_of(path),
            configurations=configurations,
        )

    @property
    def name(self) -> str:
        if self._solution is not None:
            return self._solution.name
        if self.document.name:
            return self.document.name
        return "solution"

    @property
    def source_root(self) -> str:
        if self._solution is not None:
            return self._solution.directory
        if self.document.root:
            return normalize_path(self.document.root).rstrip("/")
        directories = [directory_of(normalize_path(p.path)) for p in self.document.projects]
        if not directories:
            return ""
        return _common_directory(directories)

    def solution(self) -> Optional[Solution]:
        return self._solution

    def projects(self) -> List[ProjectRef]:
        return [
            ProjectRef(
                name=model.name,
                path=normalize_path(model.path),
                solution_path=to_unix_path(model.solution_path or ""),
                is_vc_project=model.is_vc_project,
            )
            for model in self.document.projects
        ]

    def _project_model(self, project: ProjectRef) -> ProjectModel:
        try:
            return self._projects[project.name]
        except KeyError as exc:
            raise SnapshotError(f"Unknown project '{project.name}'") from exc

    def _configuration_model(
        self, project: ProjectRef, configuration_key: str
    ) -> ProjectConfigurationModel:
        for cfg in self._project_model(project).configurations:
            if f"{cfg.name}|{cfg.platform}" == configuration_key:
                return cfg
        raise SnapshotError(
            f"Project '{project.name}' has no configuration '{configuration_key}'"
        )

    # ------------------------------------------------------------------
    # ConfigurationEnumeration
    # ------------------------------------------------------------------

    def configurations(self, project: ProjectRef) -> List[ConfigurationInfo]:
        infos = []
        for cfg in self._project_model(project).configurations:
            infos.append(
                ConfigurationInfo(
                    name=cfg.name,
                    platform=cfg.platform,
                    output_kind=_lookup(
                        self.CONFIGURATION_TYPES, cfg.configuration_type, "configuration type"
                    ),
                    mfc_usage=_lookup(self.MFC_USAGES, cfg.use_of_mfc, "use of MFC"),
                    character_set=_lookup(
                        self.CHARACTER_SETS, cfg.character_set, "character set"
                    ),
                    subsystem=_lookup(self.SUBSYSTEMS, cfg.subsystem, "subsystem"),
                    primary_output=normalize_path(cfg.primary_output),
                    import_library=normalize_path(cfg.import_library),
                )
            )
        return infos

    def files(self, project: ProjectRef) -> List[SourceFile]:
        result = []
        for model in self._project_model(project).files:
            relative = to_unix_path(model.relative_path)
            full = model.full_path or join_path(project.directory, relative)
            result.append(
                SourceFile(
                    relative_path=relative,
                    full_path=normalize_path(full),
                    kind=self.FILE_KINDS.get(
                        model.file_type.lower()
                        if isinstance(model.file_type, str)
                        else model.file_type,
                        FileKind.OTHER,
                    ),
                )
            )
        return result

    def _decode_compiler(
        self, model: CompilerToolModel, inherited: Optional[CompilerTool] = None
    ) -> CompilerTool:
        base = inherited or CompilerTool()
        pch = base.use_precompiled_header
        if model.use_precompiled_header is not None:
            pch = _lookup(self.PCH_MODES, model.use_precompiled_header, "precompiled header")
        return CompilerTool(
            additional_include_directories=_pick(
                model.additional_include_directories, base.additional_include_directories
            ),
            preprocessor_definitions=_pick(
                model.preprocessor_definitions, base.preprocessor_definitions
            ),
            use_precompiled_header=pch,
            precompiled_header_through=_pick(
                model.precompiled_header_through, base.precompiled_header_through
            ),
            precompiled_header_file=_pick(
                model.precompiled_header_file, base.precompiled_header_file
            ),
            sdl_check=model.sdl_check,
        )

    def compiler_tool(self, project: ProjectRef, configuration_key: str) -> CompilerTool:
        cfg = self._configuration_model(project, configuration_key)
        return self._decode_compiler(cfg.compiler)

    def linker_tool(self, project: ProjectRef, configuration_key: str) -> LinkerTool:
        cfg = self._configuration_model(project, configuration_key)
        return LinkerTool(
            additional_library_directories=cfg.linker.additional_library_directories,
            additional_dependencies=cfg.linker.additional_dependencies,
        )

    def file_compiler_tool(
        self, project: ProjectRef, file: SourceFile, configuration_key: str
    ) -> Optional[CompilerTool]:
        for model in self._project_model(project).files:
            if to_unix_path(model.relative_path) != file.relative_path:
                continue
            file_cfg = model.configurations.get(configuration_key)
            if file_cfg is None:
                return None
            return self._decode_compiler(
                file_cfg, inherited=self.compiler_tool(project, configuration_key)
            )
        return None

    # ------------------------------------------------------------------
    # MacroEvaluation
    # ------------------------------------------------------------------

    def macros(self, project: ProjectRef, configuration_key: str) -> Dict[str, str]:
        """Macro table of a configuration, keyed by lower-cased name.

        Built-in macros are derived from the project and solution paths;
        explicit snapshot values override them.
        """
        cfg = self._configuration_model(project, configuration_key)
        project_dir = _with_trailing_slash(project.directory)
        table: Dict[str, str] = {
            "configuration": cfg.name,
            "platform": cfg.platform,
            "projectname": project.name,
            "projectdir": project_dir,
            "projectpath": project.path,
            "projectfilename": project.path.rsplit("/", 1)[-1],
            "projectext": "." + project.path.rsplit(".", 1)[-1] if "." in project.path else "",
        }
        if self._solution is not None:
            table.update(
                {
                    "solutiondir": _with_trailing_slash(self._solution.directory),
                    "solutionpath": self._solution.path,
                    "solutionname": self._solution.name,
                    "solutionfilename": self._solution.path.rsplit("/", 1)[-1],
                    "solutionext": ".sln",
                }
            )
        if cfg.primary_output:
            output = normalize_path(cfg.primary_output)
            target_dir = _with_trailing_slash(directory_of(output))
            file_name = output.rsplit("/", 1)[-1]
            table.update(
                {
                    "targetdir": target_dir,
                    "outdir": target_dir,
                    "targetpath": output,
                    "targetfilename": file_name,
                    "targetname": file_stem(output),
                    "targetext": file_name[len(file_stem(output)) :],
                }
            )
        for key, value in cfg.macros.items():
            table[key.lower()] = to_unix_path(value)
        return table

    def evaluate(self, project: ProjectRef, configuration_key: str, text: str) -> str:
        if not text:
            return ""
        table = self.macros(project, configuration_key)
        environment = {k.lower(): v for k, v in self.document.environment.items()}

        def _replace(match: "re.Match[str]") -> str:
            key = match.group(1).strip().lower()
            if key in table:
                return table[key]
            return environment.get(key, "")

        return _MACRO_PATTERN.sub(_replace, text)

    # ------------------------------------------------------------------
    # RawDescriptorAccess
    # ------------------------------------------------------------------

    def raw_descriptor(self, project: ProjectRef) -> RawDescriptor:
        if project.name in self._descriptors:
            return self._descriptors[project.name]

        model = self._project_model(project)
        if model.descriptor_text is not None:
            descriptor = RawDescriptor.from_text(
                model.descriptor_text, source=project.path, target=project.name
            )
        elif model.descriptor_path:
            path = Path(model.descriptor_path)
            if not path.is_absolute():
                path = self.base_dir / path
            try:
                text = path.read_text(encoding="utf-8-sig")
            except OSError as exc:
                raise SnapshotError(
                    f"Failed to read descriptor {path}: {exc}", target=project.name
                ) from exc
            descriptor = RawDescriptor.from_text(text, source=str(path), target=project.name)
        else:
            logger.debug("Project %s has no raw descriptor", project.name)
            descriptor = RawDescriptor.empty()

        self._descriptors[project.name] = descriptor
        return descriptor


def _pick(value: Optional[str], fallback: str) -> str:
    return fallback if value is None else value


def _common_directory(directories: List[str]) -> str:
    parts = [d.split("/") for d in directories]
    common: List[str] = []
    for segments in zip(*parts):
        if any(s.lower() != segments[0].lower() for s in segments):
            break
        common.append(segments[0])
    return "/".join(common)


class Vs2015SnapshotProvider(SnapshotProvider):
    """Visual Studio 2015 snapshots: automation API enum names or values."""

    IDE_VERSION = "14.0"

    CONFIGURATION_TYPES = {
        1: OutputKind.EXECUTABLE,
        2: OutputKind.SHARED_LIBRARY,
        4: OutputKind.STATIC_LIBRARY,
        10: OutputKind.UTILITY,
        "typeapplication": OutputKind.EXECUTABLE,
        "typedynamiclibrary": OutputKind.SHARED_LIBRARY,
        "typestaticlibrary": OutputKind.STATIC_LIBRARY,
        "typegeneric": OutputKind.UTILITY,
        "typeunknown": OutputKind.UTILITY,
    }
    MFC_USAGES = {
        0: MfcUsage.NONE,
        1: MfcUsage.STATIC,
        2: MfcUsage.DYNAMIC,
        "usemfcstdwin": MfcUsage.NONE,
        "usemfcstatic": MfcUsage.STATIC,
        "usemfcdynamic": MfcUsage.DYNAMIC,
    }
    CHARACTER_SETS = {
        0: CharacterSet.NOT_SET,
        1: CharacterSet.UNICODE,
        2: CharacterSet.MBCS,
        "charsetnotset": CharacterSet.NOT_SET,
        "charsetunicode": CharacterSet.UNICODE,
        "charsetmbcs": CharacterSet.MBCS,
    }
    SUBSYSTEMS = {
        0: SubSystem.NOT_SET,
        1: SubSystem.CONSOLE,
        2: SubSystem.WINDOWS,
        "subsystemnotset": SubSystem.NOT_SET,
        "subsystemconsole": SubSystem.CONSOLE,
        "subsystemwindows": SubSystem.WINDOWS,
    }
    PCH_MODES = {
        0: PchMode.NONE,
        1: PchMode.CREATE,
        2: PchMode.NONE,
        3: PchMode.USE,
        "pchnone": PchMode.NONE,
        "pchcreateusingspecific": PchMode.CREATE,
        "pchgenerateauto": PchMode.NONE,
        "pchuseusingspecific": PchMode.USE,
    }
    FILE_KINDS = {
        "efiletypecppcode": FileKind.SOURCE,
        "efiletypecppheader": FileKind.HEADER,
        "efiletyperc": FileKind.RESOURCE,
        "efiletypebmp": FileKind.RESOURCE,
        "efiletypeico": FileKind.RESOURCE,
    }


class Vs2017SnapshotProvider(SnapshotProvider):
    """Visual Studio 2017 snapshots: MSBuild property strings."""

    IDE_VERSION = "15.0"

    CONFIGURATION_TYPES = {
        "application": OutputKind.EXECUTABLE,
        "dynamiclibrary": OutputKind.SHARED_LIBRARY,
        "staticlibrary": OutputKind.STATIC_LIBRARY,
        "utility": OutputKind.UTILITY,
        "makefile": OutputKind.UTILITY,
    }
    MFC_USAGES = {
        False: MfcUsage.NONE,
        0: MfcUsage.NONE,
        "": MfcUsage.NONE,
        "false": MfcUsage.NONE,
        "static": MfcUsage.STATIC,
        "dynamic": MfcUsage.DYNAMIC,
    }
    CHARACTER_SETS = {
        0: CharacterSet.NOT_SET,
        "": CharacterSet.NOT_SET,
        "notset": CharacterSet.NOT_SET,
        "unicode": CharacterSet.UNICODE,
        "multibyte": CharacterSet.MBCS,
    }
    SUBSYSTEMS = {
        0: SubSystem.NOT_SET,
        "": SubSystem.NOT_SET,
        "notset": SubSystem.NOT_SET,
        "console": SubSystem.CONSOLE,
        "windows": SubSystem.WINDOWS,
    }
    PCH_MODES = {
        "": PchMode.NONE,
        "notusing": PchMode.NONE,
        "create": PchMode.CREATE,
        "use": PchMode.USE,
    }
    FILE_KINDS = {
        "clcompile": FileKind.SOURCE,
        "clinclude": FileKind.HEADER,
        "resourcecompile": FileKind.RESOURCE,
        "image": FileKind.RESOURCE,
    }


__all__ = ["SnapshotProvider", "Vs2015SnapshotProvider", "Vs2017SnapshotProvider"]
