"""Tests for per-file override detection."""

from __future__ import annotations

from typing import Dict

from slncmake.convert.differ import SettingCategory, SettingsDiffer
from slncmake.model import (
    BuildConfiguration,
    FileKind,
    FileSettings,
    MfcUsage,
    OutputKind,
    PchMode,
    PchSetting,
    Settings,
    SourceFile,
    SubSystem,
    Target,
    TargetSettings,
)

USE = PchSetting(mode=PchMode.USE)
NONE = PchSetting(mode=PchMode.NONE)


def _target_settings(project: Dict[str, Settings], **files: Dict[str, Settings]) -> TargetSettings:
    target = Target(
        name="main",
        project_path="C:/work/App/main/main.vcxproj",
        project_dir="C:/work/App/main",
        output_kind=OutputKind.EXECUTABLE,
        mfc_usage=MfcUsage.NONE,
        subsystem=SubSystem.CONSOLE,
        configurations=[BuildConfiguration(name, "x64") for name in project],
    )
    file_settings = [
        FileSettings(
            file=SourceFile(f"{name}.cpp", f"C:/work/App/main/{name}.cpp", FileKind.SOURCE),
            per_config=per_config,
        )
        for name, per_config in files.items()
    ]
    return TargetSettings(target=target, per_config=project, files=file_settings)


def test_definition_order_is_not_an_override() -> None:
    """Definitions compare as sets; the same defines in another order match."""

    project = {"Debug": Settings(definitions=("A", "B"))}
    settings = _target_settings(project, main={"Debug": Settings(definitions=("B", "A"))})

    differ = SettingsDiffer(settings)

    assert differ.overrides(SettingCategory.DEFINITIONS) == []
    assert all(differ.overrides(category) == [] for category in SettingCategory)


def test_include_dir_order_is_an_override() -> None:
    project = {"Debug": Settings(include_dirs=("a", "b"))}
    settings = _target_settings(project, main={"Debug": Settings(include_dirs=("b", "a"))})

    assert SettingsDiffer(settings).differing_configurations(
        settings.files[0], SettingCategory.INCLUDE_DIRS
    ) == ["Debug"]


def test_overrides_list_only_differing_configurations() -> None:
    project = {
        "Debug": Settings(sdl_check=True),
        "Release": Settings(sdl_check=True),
    }
    settings = _target_settings(
        project,
        legacy={"Debug": Settings(sdl_check=False), "Release": Settings(sdl_check=True)},
        main={"Debug": Settings(sdl_check=True), "Release": Settings(sdl_check=True)},
    )

    overrides = SettingsDiffer(settings).overrides(SettingCategory.SDL_CHECK)

    assert [(file.path, cfgs) for file, cfgs in overrides] == [("legacy.cpp", ["Debug"])]


def test_unset_sdl_differs_from_false() -> None:
    project = {"Debug": Settings(sdl_check=None)}
    settings = _target_settings(project, main={"Debug": Settings(sdl_check=False)})

    assert SettingsDiffer(settings).differing_configurations(
        settings.files[0], SettingCategory.SDL_CHECK
    ) == ["Debug"]


def test_pch_mixed_mode_requires_target_use_and_file_without_pch() -> None:
    project = {"Debug": Settings(pch=USE), "Release": Settings(pch=USE)}
    mixed = _target_settings(
        project,
        main={"Debug": Settings(pch=USE), "Release": Settings(pch=USE)},
        plain={"Debug": Settings(pch=USE), "Release": Settings(pch=NONE)},
    )
    uniform = _target_settings(
        project,
        main={"Debug": Settings(pch=USE), "Release": Settings(pch=USE)},
    )
    unused = _target_settings(
        {"Debug": Settings(pch=NONE)},
        main={"Debug": Settings(pch=NONE)},
    )

    assert SettingsDiffer(mixed).pch_mixed_mode()
    assert not SettingsDiffer(uniform).pch_mixed_mode()
    assert not SettingsDiffer(unused).pch_mixed_mode()


def test_pch_groups_keep_first_seen_order() -> None:
    create = PchSetting(mode=PchMode.CREATE)
    project = {"Debug": Settings(pch=USE)}
    settings = _target_settings(
        project,
        stdafx={"Debug": Settings(pch=create)},
        main={"Debug": Settings(pch=USE)},
        util={"Debug": Settings(pch=USE)},
    )

    groups = SettingsDiffer(settings).pch_groups()

    assert [(options, [f.path for f in files]) for options, files in groups] == [
        (("/Yc",), ["stdafx.cpp"]),
        (("/Yu",), ["main.cpp", "util.cpp"]),
    ]
