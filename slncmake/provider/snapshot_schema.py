"""Pydantic models of a project model snapshot.

A snapshot is a JSON/TOML export of the IDE object model for one solution:
the values the automation API reports, already resolved. Enum-valued fields
are kept as raw ``int``/``str`` here because their encoding depends on the
IDE version; the version adapters decode them.

Example (JSON)::

    {
      "ide_version": "15.0",
      "solution": {
        "path": "C:/work/App/App.sln",
        "configurations": [
          {"name": "Debug", "platform": "x64",
           "contexts": [{"project": "main/main.vcxproj",
                         "configuration": "Debug", "platform": "x64"}]}
        ]
      },
      "projects": [
        {"name": "main", "path": "C:/work/App/main/main.vcxproj",
         "solution_path": "main/main.vcxproj",
         "configurations": [{"name": "Debug", "platform": "x64",
                             "configuration_type": "Application"}],
         "files": [{"relative_path": "main.cpp", "file_type": "ClCompile"}]}
      ]
    }
"""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

EnumValue = Union[int, str, bool]


class CompilerToolModel(BaseModel):
    """Compiler tool values; None means "not reported", inherit."""

    additional_include_directories: Optional[str] = None
    preprocessor_definitions: Optional[str] = None
    use_precompiled_header: Optional[EnumValue] = None
    precompiled_header_through: Optional[str] = None
    precompiled_header_file: Optional[str] = None
    sdl_check: Optional[bool] = None

    model_config = {"extra": "forbid"}


class LinkerToolModel(BaseModel):
    additional_library_directories: str = ""
    additional_dependencies: str = ""

    model_config = {"extra": "forbid"}


class ProjectConfigurationModel(BaseModel):
    """One configuration of a project.

    Attributes:
        macros: Macro values of this configuration (``ProjectDir``,
            ``IntDir``...). Built-in macros are derived when missing.
    """

    name: str
    platform: str
    configuration_type: EnumValue
    use_of_mfc: EnumValue = 0
    character_set: EnumValue = 0
    subsystem: EnumValue = 0
    primary_output: str = ""
    import_library: str = ""
    macros: Dict[str, str] = Field(default_factory=dict)
    compiler: CompilerToolModel = Field(default_factory=CompilerToolModel)
    linker: LinkerToolModel = Field(default_factory=LinkerToolModel)

    model_config = {"extra": "forbid"}


class FileModel(BaseModel):
    """One project file.

    Attributes:
        configurations: File-level compiler values keyed by
            ``Config|Platform``; missing keys inherit project values.
    """

    relative_path: str
    full_path: Optional[str] = None
    file_type: EnumValue
    configurations: Dict[str, CompilerToolModel] = Field(default_factory=dict)

    model_config = {"extra": "forbid"}


class ProjectModel(BaseModel):
    name: str
    path: str
    solution_path: Optional[str] = None
    is_vc_project: bool = True
    descriptor_path: Optional[str] = None
    descriptor_text: Optional[str] = None
    configurations: List[ProjectConfigurationModel] = Field(default_factory=list)
    files: List[FileModel] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Project names become CMake target names and must not be blank."""
        if not v.strip():
            raise ValueError("project name must not be empty")
        return v


class SolutionContextModel(BaseModel):
    project: str
    configuration: str
    platform: str
    should_build: bool = True


class SolutionConfigurationModel(BaseModel):
    name: str
    platform: str
    contexts: List[SolutionContextModel] = Field(default_factory=list)


class SolutionModel(BaseModel):
    path: str
    configurations: List[SolutionConfigurationModel] = Field(default_factory=list)


class SnapshotDocument(BaseModel):
    """Top-level snapshot document.

    Attributes:
        ide_version: IDE version the snapshot was exported from; selects
            the provider adapter.
        name: Model name used when there is no solution.
        root: Source-tree root used when there is no solution.
        environment: Environment variables visible to macro evaluation.
    """

    ide_version: str
    name: Optional[str] = None
    root: Optional[str] = None
    environment: Dict[str, str] = Field(default_factory=dict)
    solution: Optional[SolutionModel] = None
    projects: List[ProjectModel] = Field(default_factory=list)

    @field_validator("projects")
    @classmethod
    def validate_unique_names(cls, v: List[ProjectModel]) -> List[ProjectModel]:
        """Project names must be unique; they are CMake target names."""
        seen = set()
        for project in v:
            if project.name in seen:
                raise ValueError(f"duplicate project name '{project.name}'")
            seen.add(project.name)
        return v


__all__ = [
    "CompilerToolModel",
    "LinkerToolModel",
    "ProjectConfigurationModel",
    "FileModel",
    "ProjectModel",
    "SolutionContextModel",
    "SolutionConfigurationModel",
    "SolutionModel",
    "SnapshotDocument",
]
