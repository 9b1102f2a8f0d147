"""Shared fixtures: snapshot documents of a small solution under C:/work/App."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

import pytest

from slncmake.convert.resolver import ConfigurationResolver
from slncmake.model import Target
from slncmake.provider.loader import load_provider
from slncmake.provider.snapshot import SnapshotProvider

SOLUTION_DIR = "C:/work/App"

_EXTENSIONS = {
    "Application": ".exe",
    "DynamicLibrary": ".dll",
    "StaticLibrary": ".lib",
}


def project_model(
    name: str,
    configuration_type: str = "Application",
    configurations: Sequence[str] = ("Debug", "Release"),
    platform: str = "x64",
    files: Optional[List[Dict[str, object]]] = None,
    compiler: Optional[Dict[str, object]] = None,
    linker: Optional[Dict[str, object]] = None,
    **fields: object,
) -> Dict[str, object]:
    """Snapshot entry of a project located at ``C:/work/App/<name>/``."""
    extension = _EXTENSIONS.get(configuration_type, "")
    entries = []
    for configuration in configurations:
        entry: Dict[str, object] = {
            "name": configuration,
            "platform": platform,
            "configuration_type": configuration_type,
            "primary_output": f"{SOLUTION_DIR}/out/{configuration}/{name}{extension}",
        }
        if configuration_type == "DynamicLibrary":
            entry["import_library"] = f"{SOLUTION_DIR}/out/{configuration}/{name}.lib"
        if compiler:
            entry["compiler"] = dict(compiler)
        if linker:
            entry["linker"] = dict(linker)
        entries.append(entry)

    model: Dict[str, object] = {
        "name": name,
        "path": f"{SOLUTION_DIR}/{name}/{name}.vcxproj",
        "solution_path": f"{name}/{name}.vcxproj",
        "configurations": entries,
        "files": files
        if files is not None
        else [{"relative_path": f"{name}.cpp", "file_type": "ClCompile"}],
    }
    model.update(fields)
    return model


def snapshot_document(
    projects: Iterable[Dict[str, object]],
    configurations: Sequence[str] = ("Debug", "Release"),
    platform: str = "x64",
) -> Dict[str, object]:
    """Snapshot of ``C:/work/App/App.sln`` building every project everywhere."""
    projects = list(projects)
    return {
        "ide_version": "15.0",
        "solution": {
            "path": f"{SOLUTION_DIR}/App.sln",
            "configurations": [
                {
                    "name": configuration,
                    "platform": platform,
                    "contexts": [
                        {
                            "project": project["solution_path"],
                            "configuration": configuration,
                            "platform": platform,
                        }
                        for project in projects
                    ],
                }
                for configuration in configurations
            ],
        },
        "projects": projects,
    }


def resolve_targets(
    document: Dict[str, object],
    configurations: Optional[Sequence[str]] = None,
    platform: str = "x64",
) -> "tuple[SnapshotProvider, Dict[str, Target]]":
    """Load a snapshot and resolve its targets, keyed by name."""
    provider = load_provider(document)
    targets = ConfigurationResolver(provider).resolve(configurations, platform)
    return provider, {target.name: target for target in targets}


@pytest.fixture
def make_project():
    return project_model


@pytest.fixture
def make_snapshot():
    return snapshot_document


@pytest.fixture
def resolve():
    return resolve_targets


@pytest.fixture
def app_snapshot() -> Dict[str, object]:
    """An executable linking a static library of the same solution."""
    core = project_model(
        "core",
        configuration_type="StaticLibrary",
        files=[
            {"relative_path": "core.cpp", "file_type": "ClCompile"},
            {"relative_path": "core.h", "file_type": "ClInclude"},
        ],
    )
    main = project_model(
        "main",
        compiler={
            "additional_include_directories": "$(ProjectDir)include;$(SolutionDir)core",
            "preprocessor_definitions": "WIN32;_CONSOLE",
        },
        linker={
            "additional_library_directories": "$(SolutionDir)out\\$(Configuration)",
            "additional_dependencies": "core.lib kernel32.lib",
        },
        files=[
            {"relative_path": "main.cpp", "file_type": "ClCompile"},
            {"relative_path": "app.rc", "file_type": "ResourceCompile"},
            {"relative_path": "notes.txt", "file_type": "None"},
        ],
    )
    for entry in main["configurations"]:
        entry["subsystem"] = "Console"
        entry["character_set"] = "Unicode"
    return snapshot_document([core, main])
