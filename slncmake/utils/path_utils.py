"""Path helpers for IDE-style paths.

Paths reported by the project model are Windows paths (``C:\\work\\app``)
regardless of the host running the conversion, so these helpers operate on
strings with ``/`` separators instead of the host ``pathlib`` flavour.
Comparisons are case-insensitive, like the file system they come from.
"""

from __future__ import annotations

import posixpath
import re
from typing import Optional

_DRIVE_ROOT = re.compile(r"^[A-Za-z]:/")


def to_unix_path(path: str) -> str:
    """Replace backslashes with forward slashes."""
    return path.replace("\\", "/")


def is_rooted(path: str) -> bool:
    """Return True for drive-rooted, UNC or ``/``-rooted paths."""
    unix = to_unix_path(path)
    return bool(_DRIVE_ROOT.match(unix)) or unix.startswith("/")


def normalize_path(path: str) -> str:
    """Normalize separators and collapse ``.``/``..`` of a rooted path.

    Relative paths only get their separators normalized.

    Examples:
        >>> normalize_path("C:\\\\work\\\\app\\\\..\\\\lib\\\\")
        'C:/work/lib'
    """
    unix = to_unix_path(path)
    if not is_rooted(unix):
        return unix
    drive = ""
    rest = unix
    if _DRIVE_ROOT.match(unix):
        drive, rest = unix[:2], unix[2:]
    normalized = posixpath.normpath(rest)
    return drive + normalized


def strip_trailing_separators(path: str) -> str:
    return to_unix_path(path).rstrip("/")


def paths_equal(lhs: str, rhs: str) -> bool:
    """Case-insensitive comparison of normalized paths."""
    return normalize_path(lhs).lower() == normalize_path(rhs).lower()


def relative_to(path: str, directory: str) -> Optional[str]:
    """Return ``path`` relative to ``directory`` or None when outside.

    Both arguments must be rooted; comparison is case-insensitive and the
    returned text keeps the casing of ``path``. A path equal to the
    directory yields ``""``.
    """
    norm_path = normalize_path(path)
    norm_dir = strip_trailing_separators(normalize_path(directory))
    if not norm_dir:
        return None
    lowered_path = norm_path.lower()
    lowered_dir = norm_dir.lower()
    if lowered_path == lowered_dir:
        return ""
    if lowered_path.startswith(lowered_dir + "/"):
        return norm_path[len(norm_dir) + 1 :]
    return None


def relative_path(path: str, start: str) -> str:
    """Relative path from ``start`` to ``path``, allowing ``..`` segments.

    Used for directory layout of written descriptors; the drive letter is
    compared case-insensitively.
    """
    norm_path = strip_trailing_separators(normalize_path(path))
    norm_start = strip_trailing_separators(normalize_path(start))
    inside = relative_to(norm_path, norm_start)
    if inside is not None:
        return inside

    path_parts = norm_path.split("/")
    start_parts = norm_start.split("/")
    common = 0
    for lhs, rhs in zip(path_parts, start_parts):
        if lhs.lower() != rhs.lower():
            break
        common += 1
    ups = [".."] * (len(start_parts) - common)
    return "/".join(ups + path_parts[common:])


def join_path(directory: str, name: str) -> str:
    """Join like ``Path.Combine``: a rooted ``name`` wins."""
    name = to_unix_path(name)
    if is_rooted(name) or not directory:
        return name
    directory = to_unix_path(directory)
    if directory.endswith("/"):
        return directory + name
    return directory + "/" + name


def file_stem(path: str) -> str:
    """File name without directory and last extension."""
    base = posixpath.basename(to_unix_path(path))
    stem, _ext = posixpath.splitext(base)
    return stem


def directory_of(path: str) -> str:
    return posixpath.dirname(to_unix_path(path))


def quote_if_needed(path: str) -> str:
    """Wrap a path in double quotes when it contains whitespace."""
    if any(ch.isspace() for ch in path):
        return f'"{path}"'
    return path


__all__ = [
    "to_unix_path",
    "is_rooted",
    "normalize_path",
    "strip_trailing_separators",
    "paths_equal",
    "relative_to",
    "relative_path",
    "join_path",
    "file_stem",
    "directory_of",
    "quote_if_needed",
]
