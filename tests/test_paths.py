"""Tests for path translation of include and library directories."""

from __future__ import annotations

from slncmake.convert.paths import PathTranslator, is_ide_macro


def _translator(resolve, document, name: str = "main"):
    provider, targets = resolve(document)
    target = targets[name]
    return PathTranslator(provider, target, provider.source_root), target


def test_directories_inside_project_use_current_source_dir(resolve, app_snapshot) -> None:
    translator, target = _translator(resolve, app_snapshot)
    debug = target.configurations[0]

    assert (
        translator.translate_directory("$(ProjectDir)include\\", debug)
        == "${CMAKE_CURRENT_SOURCE_DIR}/include"
    )


def test_directories_inside_source_tree_use_source_dir(resolve, app_snapshot) -> None:
    translator, target = _translator(resolve, app_snapshot)
    debug = target.configurations[0]

    assert translator.translate_directory("$(SolutionDir)core", debug) == "${CMAKE_SOURCE_DIR}/core"
    assert translator.translate_directory("$(OutDir)", debug) == "${CMAKE_SOURCE_DIR}/out/Debug"


def test_relative_directories_resolve_against_project(resolve, app_snapshot) -> None:
    translator, target = _translator(resolve, app_snapshot)
    debug = target.configurations[0]

    assert translator.translate_directory("..\\core", debug) == "${CMAKE_SOURCE_DIR}/core"
    assert translator.translate_directory("detail", debug) == "${CMAKE_CURRENT_SOURCE_DIR}/detail"


def test_unknown_macros_become_environment_references(resolve, app_snapshot) -> None:
    """Non-IDE macros outside the tree are kept as $ENV{} and recorded once."""

    translator, target = _translator(resolve, app_snapshot)
    debug = target.configurations[0]

    assert translator.translate_directory("$(BOOST_ROOT)\\include", debug) == "$ENV{BOOST_ROOT}/include"
    assert translator.translate_directory("$(QT_DIR)/lib", debug) == "$ENV{QT_DIR}/lib"
    translator.translate_directory("$(BOOST_ROOT)/lib", debug)

    assert translator.environment_variables == ["BOOST_ROOT", "QT_DIR"]


def test_ide_macros_outside_tree_are_expanded(resolve, app_snapshot) -> None:
    for entry in app_snapshot["projects"][1]["configurations"]:
        entry["macros"] = {"VCInstallDir": "C:\\VS\\VC\\"}
    translator, target = _translator(resolve, app_snapshot)
    debug = target.configurations[0]

    assert translator.translate_directory("$(VCInstallDir)include", debug) == "C:/VS/VC/include"
    assert translator.environment_variables == []


def test_paths_with_spaces_are_quoted(resolve, app_snapshot) -> None:
    translator, target = _translator(resolve, app_snapshot)
    debug = target.configurations[0]

    assert (
        translator.translate_directory("C:\\Program Files\\SDK\\include", debug)
        == '"C:/Program Files/SDK/include"'
    )
    assert (
        translator.translate_directory("C:\\Program Files\\SDK\\include", debug, quote=False)
        == "C:/Program Files/SDK/include"
    )


def test_directories_evaluating_to_nothing_are_dropped(resolve, app_snapshot) -> None:
    translator, target = _translator(resolve, app_snapshot)
    debug = target.configurations[0]

    assert translator.translate_directory("$(UNDEFINED)", debug) is None
    assert translator.translate("", debug) == ""


def test_is_ide_macro_is_case_insensitive() -> None:
    assert is_ide_macro("solutiondir")
    assert is_ide_macro("IntDir")
    assert not is_ide_macro("BOOST_ROOT")
