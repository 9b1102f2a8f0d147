"""Configuration schema definitions using Pydantic for validation.

Configuration errors (unsupported platform, malformed version string) are
caught before any project is touched, with clear error messages.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, field_validator

DEFAULT_CMAKE_MINIMUM_VERSION = "3.12.2"
DEFAULT_PLATFORM = "x64"
DEFAULT_DESCRIPTOR_NAME = "CMakeLists.txt"

# Platform values denoting "any CPU"; a native build needs a concrete one.
UNSUPPORTED_PLATFORMS = frozenset({"", "any cpu", "anycpu"})

_VERSION_PATTERN = re.compile(r"^\d+(\.\d+){0,3}$")


def is_supported_platform(platform: str) -> bool:
    return platform.strip().lower() not in UNSUPPORTED_PLATFORMS


class ConverterConfig(BaseModel):
    """Top-level converter configuration.

    Attributes:
        platform: Target platform (e.g. ``x64``, ``Win32``).
        configurations: Requested configuration names; None selects every
            configuration of the platform.
        cmake_minimum_version: Version written to ``cmake_minimum_required``.
        descriptor_name: File name of written descriptors.
        newline: Line ending of written descriptors.
        output_dir: Root directory descriptors are written under; None
            writes next to the snapshot.
    """

    platform: str = DEFAULT_PLATFORM
    configurations: Optional[List[str]] = None
    cmake_minimum_version: str = DEFAULT_CMAKE_MINIMUM_VERSION
    descriptor_name: str = DEFAULT_DESCRIPTOR_NAME
    newline: Literal["lf", "crlf"] = "lf"
    output_dir: Optional[str] = None

    model_config = {"extra": "forbid"}

    @field_validator("cmake_minimum_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """The minimum version must be a dotted numeric version."""
        if not _VERSION_PATTERN.match(v):
            raise ValueError(f"Invalid CMake version '{v}'")
        return v

    @field_validator("configurations")
    @classmethod
    def validate_configurations(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Requested configurations must be non-empty and unique."""
        if v is None:
            return v
        if not v:
            raise ValueError("configurations must not be an empty list")
        seen = set()
        for name in v:
            if not name.strip():
                raise ValueError("configuration names must not be empty")
            if name in seen:
                raise ValueError(f"duplicate configuration '{name}'")
            seen.add(name)
        return v

    @field_validator("descriptor_name")
    @classmethod
    def validate_descriptor_name(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Invalid descriptor file name '{v}'")
        return v

    @property
    def line_ending(self) -> str:
        return "\r\n" if self.newline == "crlf" else "\n"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConverterConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    def merged(self, **overrides: Any) -> "ConverterConfig":
        """Return a copy with every non-None override applied."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ConverterConfig.model_validate(values)
