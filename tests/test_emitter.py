"""Tests for CMake descriptor rendering."""

from __future__ import annotations

from slncmake.convert.emitter import DescriptorEmitter, environment_check
from slncmake.convert.extractor import SettingsExtractor
from slncmake.convert.graph import TargetGraph
from slncmake.convert.linker import LibraryLinkResolver
from slncmake.convert.paths import PathTranslator

SDL_DESCRIPTOR = """\
<Project xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
  <ItemDefinitionGroup Condition="'$(Configuration)|$(Platform)'=='Debug|x64'">
    <ClCompile>
      <SDLCheck>true</SDLCheck>
    </ClCompile>
  </ItemDefinitionGroup>
  <ItemGroup>
    <ClCompile Include="legacy.cpp">
      <SDLCheck Condition="'$(Configuration)|$(Platform)'=='Debug|x64'">false</SDLCheck>
    </ClCompile>
  </ItemGroup>
</Project>
"""

EXPECTED_MAIN = """\
cmake_minimum_required(VERSION 3.12.2)

project(main)

set(CMAKE_CONFIGURATION_TYPES "Debug;Release"
    CACHE STRING "Configuration types" FORCE)

add_executable(main
  app.rc
  main.cpp
)

# Additional include directories
set_property(TARGET main
  APPEND PROPERTY INCLUDE_DIRECTORIES
  $<$<CONFIG:Debug>:
    ${CMAKE_CURRENT_SOURCE_DIR}/include;
    ${CMAKE_SOURCE_DIR}/core>
  $<$<CONFIG:Release>:
    ${CMAKE_CURRENT_SOURCE_DIR}/include;
    ${CMAKE_SOURCE_DIR}/core>
)

# Preprocessor definitions
target_compile_definitions(main PRIVATE
  $<$<CONFIG:Debug>:_UNICODE;WIN32;_CONSOLE>
  $<$<CONFIG:Release>:_UNICODE;WIN32;_CONSOLE>
)

# Additional library directories
if (MSVC)
  target_link_options(main PRIVATE
    $<$<CONFIG:Debug>:
      /LIBPATH:${CMAKE_SOURCE_DIR}/out/Debug>
    $<$<CONFIG:Release>:
      /LIBPATH:${CMAKE_SOURCE_DIR}/out/Release>
  )
else ()
  target_link_options(main PRIVATE
    $<$<CONFIG:Debug>:
      -L${CMAKE_SOURCE_DIR}/out/Debug>
    $<$<CONFIG:Release>:
      -L${CMAKE_SOURCE_DIR}/out/Release>
  )
endif ()

# Link libraries
set_property(TARGET main
  APPEND PROPERTY LINK_LIBRARIES
  "$<$<CONFIG:Debug>:core;kernel32.lib>"
  "$<$<CONFIG:Release>:core;kernel32.lib>"
)
"""

EXPECTED_CORE = """\
cmake_minimum_required(VERSION 3.12.2)

project(core)

set(CMAKE_CONFIGURATION_TYPES "Debug"
    CACHE STRING "Configuration types" FORCE)

add_library(core STATIC
  core.cpp
  core.h
)
"""


def _render(resolve, document, name: str, configurations=None) -> str:
    provider, targets = resolve(document, configurations)
    linker = LibraryLinkResolver(TargetGraph(targets.values()))
    target = targets[name]
    settings = SettingsExtractor().extract(target, provider)
    translator = PathTranslator(provider, target, provider.source_root)
    links = linker.resolve(settings, translator)
    return DescriptorEmitter().render_target(settings, translator, links)


def test_executable_descriptor(resolve, app_snapshot) -> None:
    assert _render(resolve, app_snapshot, "main") == EXPECTED_MAIN


def test_static_library_without_settings_has_no_empty_blocks(resolve, app_snapshot) -> None:
    assert _render(resolve, app_snapshot, "core", ["Debug"]) == EXPECTED_CORE


def test_rendering_is_deterministic(resolve, app_snapshot) -> None:
    assert _render(resolve, app_snapshot, "main") == _render(resolve, app_snapshot, "main")


def test_configuration_order_follows_request(resolve, app_snapshot) -> None:
    text = _render(resolve, app_snapshot, "main", ["Release", "Debug"])

    assert 'set(CMAKE_CONFIGURATION_TYPES "Release;Debug"' in text
    assert text.index("$<$<CONFIG:Release>:_UNICODE") < text.index("$<$<CONFIG:Debug>:_UNICODE")


def test_mfc_windows_sdl_and_precompiled_headers(resolve, make_project, make_snapshot) -> None:
    project = make_project(
        "gui",
        compiler={"use_precompiled_header": "Use"},
        files=[
            {"relative_path": "main.cpp", "file_type": "ClCompile"},
            {"relative_path": "legacy.cpp", "file_type": "ClCompile"},
            {
                "relative_path": "stdafx.cpp",
                "file_type": "ClCompile",
                "configurations": {
                    "Debug|x64": {"use_precompiled_header": "Create"},
                    "Release|x64": {"use_precompiled_header": "Create"},
                },
            },
        ],
        descriptor_text=SDL_DESCRIPTOR,
    )
    for entry in project["configurations"]:
        entry["use_of_mfc"] = "Static"
        entry["subsystem"] = "Windows"
    project["configurations"][0]["primary_output"] = "C:/work/App/out/Debug/guid.exe"

    text = _render(resolve, make_snapshot([project]), "gui")

    assert "# Use of MFC\nset(CMAKE_MFC_FLAG 1)\n" in text
    assert "add_executable(gui\n  WIN32\n  legacy.cpp\n  main.cpp\n  stdafx.cpp\n)\n" in text
    assert (
        "# Output file name\n"
        "set_target_properties(gui\n"
        "  PROPERTIES\n"
        "  OUTPUT_NAME_DEBUG guid\n"
        "  OUTPUT_NAME_RELEASE gui\n"
        ")\n"
    ) in text
    assert (
        "target_compile_definitions(gui PRIVATE\n"
        "  $<$<CONFIG:Debug>:_AFXDLL>\n"
        "  $<$<CONFIG:Release>:_AFXDLL>\n"
        ")\n"
    ) in text
    assert (
        "# SDL check\n"
        "target_compile_options(gui PRIVATE\n"
        '  "$<$<CONFIG:Debug>:/sdl>"\n'
        ")\n"
        "set_property(SOURCE legacy.cpp\n"
        "  APPEND_STRING PROPERTY COMPILE_FLAGS\n"
        '  " $<$<CONFIG:Debug>:/sdl->")\n'
    ) in text
    assert (
        "# Precompiled header files\n"
        "if (MSVC)\n"
        "  target_compile_options(gui PRIVATE\n"
        '    "$<$<CONFIG:Debug>:/Yu>"\n'
        '    "$<$<CONFIG:Release>:/Yu>"\n'
        "  )\n"
        "  set_property(SOURCE stdafx.cpp\n"
        "    APPEND_STRING PROPERTY COMPILE_FLAGS\n"
        '    " $<$<CONFIG:Debug>:/Yc> \\\n'
        '     $<$<CONFIG:Release>:/Yc>")\n'
        "endif ()\n"
    ) in text


def test_mixed_precompiled_header_usage_is_emitted_per_file(
    resolve, make_project, make_snapshot
) -> None:
    """A file without PCH under a PCH target pushes the options down to files."""

    not_using = {"use_precompiled_header": "NotUsing"}
    project = make_project(
        "mix",
        compiler={"use_precompiled_header": "Use"},
        files=[
            {"relative_path": "main.cpp", "file_type": "ClCompile"},
            {
                "relative_path": "plain.c",
                "file_type": "ClCompile",
                "configurations": {"Debug|x64": not_using, "Release|x64": not_using},
            },
        ],
    )

    text = _render(resolve, make_snapshot([project]), "mix")

    assert "target_compile_options(mix" not in text
    assert (
        "  set_property(SOURCE main.cpp\n"
        "    APPEND_STRING PROPERTY COMPILE_FLAGS\n"
        '    " $<$<CONFIG:Debug>:/Yu> \\\n'
        '     $<$<CONFIG:Release>:/Yu>")\n'
    ) in text
    assert text.count("plain.c") == 1


def test_per_file_include_directories_and_definitions(resolve, make_project, make_snapshot) -> None:
    project = make_project(
        "lib",
        configuration_type="StaticLibrary",
        compiler={"preprocessor_definitions": "WIN32"},
        files=[
            {"relative_path": "base.cpp", "file_type": "ClCompile"},
            {
                "relative_path": "extra.cpp",
                "file_type": "ClCompile",
                "configurations": {
                    "Debug|x64": {
                        "additional_include_directories": "$(ProjectDir)extra",
                        "preprocessor_definitions": "EXTRA;WIN32",
                    },
                    "Release|x64": {"preprocessor_definitions": "WIN32"},
                },
            },
        ],
    )

    text = _render(resolve, make_snapshot([project]), "lib")

    assert (
        "# Additional include directories\n"
        "set_property(SOURCE extra.cpp\n"
        "  APPEND PROPERTY INCLUDE_DIRECTORIES\n"
        '  "$<$<CONFIG:Debug>:${CMAKE_CURRENT_SOURCE_DIR}/extra>"\n'
        ")\n"
    ) in text
    assert (
        "set_property(SOURCE extra.cpp\n"
        "  APPEND_STRING PROPERTY COMPILE_FLAGS\n"
        '  " $<$<CONFIG:Debug>:-DEXTRA -DWIN32>")\n'
    ) in text
    assert "$<$<CONFIG:Release>:-D" not in text


def test_per_file_include_directory_with_spaces_is_quoted_once(
    resolve, make_project, make_snapshot
) -> None:
    project = make_project(
        "lib",
        configuration_type="StaticLibrary",
        files=[
            {"relative_path": "base.cpp", "file_type": "ClCompile"},
            {
                "relative_path": "sdk.cpp",
                "file_type": "ClCompile",
                "configurations": {
                    "Debug|x64": {"additional_include_directories": "D:\\Program Files\\sdk"},
                },
            },
        ],
    )

    text = _render(resolve, make_snapshot([project]), "lib")

    assert (
        "set_property(SOURCE sdk.cpp\n"
        "  APPEND PROPERTY INCLUDE_DIRECTORIES\n"
        '  "$<$<CONFIG:Debug>:D:/Program Files/sdk>"\n'
        ")\n"
    ) in text
    assert '"$<$<CONFIG:Debug>:"' not in text


def test_environment_variables_are_checked(resolve, app_snapshot) -> None:
    main = app_snapshot["projects"][1]
    for entry in main["configurations"]:
        entry["compiler"]["additional_include_directories"] = "$(BOOST_ROOT)\\include"

    text = _render(resolve, app_snapshot, "main")

    assert text.startswith(
        "cmake_minimum_required(VERSION 3.12.2)\n\nproject(main)\n\n" + environment_check(["BOOST_ROOT"]) + "\n"
    )
    assert "$<$<CONFIG:Debug>:\n    $ENV{BOOST_ROOT}/include>" in text


def test_environment_check_block() -> None:
    assert environment_check([]) == ""
    assert environment_check(["QTDIR", "BOOST_ROOT"]) == (
        "foreach (EnvVar IN ITEMS QTDIR BOOST_ROOT)\n"
        '  if ("$ENV{${EnvVar}}" STREQUAL "")\n'
        "    message(WARNING \"Environmental variable '${EnvVar}' is not defined.\")\n"
        "  endif ()\n"
        "endforeach ()\n"
    )


def test_solution_descriptor() -> None:
    text = DescriptorEmitter("3.20").render_solution("App", ["core", "main app"])

    assert text == (
        "cmake_minimum_required(VERSION 3.20)\n"
        "\n"
        "project(App)\n"
        "\n"
        "add_subdirectory(core)\n"
        'add_subdirectory("main app")\n'
    )
