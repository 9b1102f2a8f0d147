"""Configuration schema and validation for slncmake."""

from .schema import (
    DEFAULT_CMAKE_MINIMUM_VERSION,
    DEFAULT_DESCRIPTOR_NAME,
    DEFAULT_PLATFORM,
    ConverterConfig,
    is_supported_platform,
)

__all__ = [
    "DEFAULT_CMAKE_MINIMUM_VERSION",
    "DEFAULT_DESCRIPTOR_NAME",
    "DEFAULT_PLATFORM",
    "ConverterConfig",
    "is_supported_platform",
]
