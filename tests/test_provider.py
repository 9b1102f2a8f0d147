"""Tests for snapshot loading, version adapters and the raw descriptor reader."""

from __future__ import annotations

from pathlib import Path

import pytest

from slncmake.errors import DescriptorParseError, SnapshotError
from slncmake.model import CharacterSet, FileKind, MfcUsage, OutputKind, PchMode, SubSystem
from slncmake.provider.descriptor import RawDescriptor, configuration_condition
from slncmake.provider.loader import load_provider
from slncmake.provider.registry import ProviderRegistry
from slncmake.provider.snapshot import Vs2015SnapshotProvider, Vs2017SnapshotProvider

VS2015_SNAPSHOT = {
    "ide_version": "14.0",
    "root": "C:/work/Legacy",
    "environment": {"SDK_ROOT": "D:\\sdk"},
    "projects": [
        {
            "name": "legacy",
            "path": "C:\\work\\Legacy\\legacy\\legacy.vcxproj",
            "configurations": [
                {
                    "name": "Debug",
                    "platform": "Win32",
                    "configuration_type": 1,
                    "use_of_mfc": "useMfcDynamic",
                    "character_set": 2,
                    "subsystem": "subSystemWindows",
                    "primary_output": "C:\\work\\Legacy\\Debug\\legacy.exe",
                    "compiler": {"use_precompiled_header": "pchUseUsingSpecific"},
                },
            ],
            "files": [
                {"relative_path": "src\\main.cpp", "file_type": "eFileTypeCppCode"},
                {"relative_path": "res\\app.ico", "file_type": "eFileTypeICO"},
                {"relative_path": "readme.md", "file_type": "eFileTypeDocument"},
            ],
        }
    ],
}


def test_registry_matches_major_version() -> None:
    registry = ProviderRegistry.get_instance()

    assert registry.get_adapter("15.9.28307") is Vs2017SnapshotProvider
    assert registry.get_adapter("14.0") is Vs2015SnapshotProvider
    assert registry.get_adapter("16.0") is None
    assert registry.list_versions() == ["14.0", "15.0"]


def test_vs2015_enumerations_are_decoded() -> None:
    provider = load_provider(VS2015_SNAPSHOT)
    project = provider.projects()[0]

    info = provider.configurations(project)[0]

    assert isinstance(provider, Vs2015SnapshotProvider)
    assert info.output_kind is OutputKind.EXECUTABLE
    assert info.mfc_usage is MfcUsage.DYNAMIC
    assert info.character_set is CharacterSet.MBCS
    assert info.subsystem is SubSystem.WINDOWS
    assert info.primary_output == "C:/work/Legacy/Debug/legacy.exe"
    assert provider.compiler_tool(project, "Debug|Win32").use_precompiled_header is PchMode.USE


def test_files_are_classified_with_full_paths() -> None:
    provider = load_provider(VS2015_SNAPSHOT)

    files = provider.files(provider.projects()[0])

    assert [(f.relative_path, f.kind) for f in files] == [
        ("src/main.cpp", FileKind.SOURCE),
        ("res/app.ico", FileKind.RESOURCE),
        ("readme.md", FileKind.OTHER),
    ]
    assert files[0].full_path == "C:/work/Legacy/legacy/src/main.cpp"


def test_macro_evaluation_uses_builtins_and_environment() -> None:
    provider = load_provider(VS2015_SNAPSHOT)
    project = provider.projects()[0]

    evaluated = provider.evaluate(
        project, "Debug|Win32", "$(ProjectDir)$(Configuration);$(sdk_root)\\inc;$(Nope)"
    )

    assert evaluated == "C:/work/Legacy/legacy/Debug;D:\\sdk\\inc;"
    assert provider.evaluate(project, "Debug|Win32", "$(TargetName)") == "legacy"
    assert provider.source_root == "C:/work/Legacy"
    assert provider.solution() is None


def test_unknown_enum_value_is_snapshot_error() -> None:
    document = {**VS2015_SNAPSHOT, "projects": [dict(VS2015_SNAPSHOT["projects"][0])]}
    document["projects"][0]["configurations"] = [
        {"name": "Debug", "platform": "Win32", "configuration_type": "typeBogus"}
    ]
    provider = load_provider(document)

    with pytest.raises(SnapshotError):
        provider.configurations(provider.projects()[0])


def test_invalid_snapshots_are_rejected(tmp_path: Path) -> None:
    with pytest.raises(SnapshotError):
        load_provider({"projects": []})
    with pytest.raises(SnapshotError):
        load_provider({"ide_version": "15.0", "projects": [{"name": "a", "path": "C:/a/a.vcxproj"}, {"name": "a", "path": "C:/b/a.vcxproj"}]})

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(SnapshotError):
        load_provider(broken)
    with pytest.raises(SnapshotError):
        load_provider(tmp_path / "missing.json")


def test_toml_snapshot_and_descriptor_file(tmp_path: Path) -> None:
    (tmp_path / "main.vcxproj").write_text(
        "<Project><ItemDefinitionGroup Condition=\"'$(Configuration)|$(Platform)' == 'Release|x64'\">"
        "<ClCompile><SDLCheck>true</SDLCheck></ClCompile></ItemDefinitionGroup></Project>",
        encoding="utf-8",
    )
    snapshot = tmp_path / "snapshot.toml"
    snapshot.write_text(
        """
ide_version = "15.0"
root = "C:/work/App"

[[projects]]
name = "main"
path = "C:/work/App/main/main.vcxproj"
descriptor_path = "main.vcxproj"

[[projects.configurations]]
name = "Release"
platform = "x64"
configuration_type = "Application"
""",
        encoding="utf-8",
    )

    provider = load_provider(snapshot)
    descriptor = provider.raw_descriptor(provider.projects()[0])

    assert isinstance(provider, Vs2017SnapshotProvider)
    assert descriptor.project_sdl_check("Release", "x64") is True
    assert descriptor.project_sdl_check("Debug", "x64") is None


def test_descriptor_lookups_need_exactly_one_node() -> None:
    condition = configuration_condition("Debug", "x64")
    descriptor = RawDescriptor.from_text(
        "<Project>"
        f'<ItemDefinitionGroup Condition="{condition}"><ClCompile><SDLCheck>false</SDLCheck></ClCompile></ItemDefinitionGroup>'
        f'<ItemDefinitionGroup Condition="{condition}"><ClCompile><SDLCheck>true</SDLCheck></ClCompile></ItemDefinitionGroup>'
        "<ItemGroup>"
        f'<ClCompile Include="Src\\Util.cpp"><SDLCheck Condition="{condition}">true</SDLCheck></ClCompile>'
        "</ItemGroup>"
        "</Project>"
    )

    assert condition == "'$(Configuration)|$(Platform)'=='Debug|x64'"
    assert descriptor.project_sdl_check("Debug", "x64") is None
    assert descriptor.file_sdl_check("src/util.cpp", "Debug", "x64") is True
    assert descriptor.file_sdl_check("src/util.cpp", "Release", "x64") is None
    assert RawDescriptor.empty().project_sdl_check("Debug", "x64") is None


def test_malformed_descriptor_text() -> None:
    with pytest.raises(DescriptorParseError):
        RawDescriptor.from_text("<Project>", source="main.vcxproj", target="main")
