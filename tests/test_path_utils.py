"""Tests for IDE path helpers."""

from __future__ import annotations

import pytest

from slncmake.utils.path_utils import (
    file_stem,
    is_rooted,
    join_path,
    normalize_path,
    paths_equal,
    quote_if_needed,
    relative_path,
    relative_to,
)


def test_normalize_path_collapses_dots_and_separators() -> None:
    """Backslashes become slashes and ``..`` segments are collapsed."""

    assert normalize_path("C:\\work\\App\\main\\..\\core\\") == "C:/work/App/core"
    assert normalize_path("include\\detail") == "include/detail"


@pytest.mark.parametrize(
    "path, expected",
    [
        ("C:/work", True),
        ("c:\\work", True),
        ("\\\\server\\share", True),
        ("/usr/include", True),
        ("include", False),
        ("$(BOOST_ROOT)/include", False),
    ],
)
def test_is_rooted(path: str, expected: bool) -> None:
    assert is_rooted(path) is expected


def test_relative_to_respects_directory_boundary() -> None:
    """A sibling directory sharing a name prefix is not contained."""

    assert relative_to("C:/work/App/main/include", "C:/work/App/main") == "include"
    assert relative_to("C:/work/App/main", "C:/work/App/main/") == ""
    assert relative_to("C:/work/App/mainlib/include", "C:/work/App/main") is None


def test_relative_to_is_case_insensitive_and_keeps_path_casing() -> None:
    assert relative_to("c:/WORK/app/Main/Include", "C:/work/App") == "Main/Include"


def test_relative_path_walks_up_outside_start() -> None:
    assert relative_path("C:/work/App/main", "C:/work/App") == "main"
    assert relative_path("C:/work/App", "C:/work/App") == ""
    assert relative_path("C:/work/Other/lib", "C:/work/App") == "../Other/lib"


def test_join_path_prefers_rooted_name() -> None:
    assert join_path("C:/work/App/", "core.lib") == "C:/work/App/core.lib"
    assert join_path("C:/work/App", "lib\\core.lib") == "C:/work/App/lib/core.lib"
    assert join_path("C:/work/App", "D:\\libs\\core.lib") == "D:/libs/core.lib"


def test_paths_equal_ignores_case_and_separators() -> None:
    assert paths_equal("C:\\Work\\App\\out\\core.lib", "c:/work/app/out/./core.lib")
    assert not paths_equal("C:/work/App/out/core.lib", "C:/work/App/out/core2.lib")


def test_file_stem_and_quoting() -> None:
    assert file_stem("C:/work/App/out/Debug/maind.exe") == "maind"
    assert file_stem("") == ""
    assert quote_if_needed("C:/Program Files/SDK") == '"C:/Program Files/SDK"'
    assert quote_if_needed("C:/SDK") == "C:/SDK"
