"""Helpers for loading converter configuration from TOML/JSON sources.

This module provides a single entry point `load_converter_config`
that accepts various configuration sources:

* None -> default ConverterConfig
* dict -> ConverterConfig.from_dict
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings

The configuration may sit at the top level of the document or under a
``[slncmake]`` table.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from slncmake.config.schema import ConverterConfig

logger = logging.getLogger("slncmake.runtime.config_loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def parse_toml(text: str) -> Dict[str, Any]:
    """Parse TOML text into a dict.

    Uses stdlib tomllib on Python 3.11+ and falls back to `tomli` on older
    interpreters. Import is local to avoid a hard dependency at import time.
    """
    try:
        import tomllib  # type: ignore[attr-defined]
    except ImportError:  # pragma: no cover - Python <3.11 path
        import tomli as tomllib  # type: ignore[import-not-found,no-redef]
    return tomllib.loads(text)


def load_converter_config(source: ConfigSource) -> ConverterConfig:
    """Load ConverterConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns ConverterConfig()
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        ConverterConfig instance.
    """
    if source is None:
        logger.debug("No config source provided; using default ConverterConfig")
        return ConverterConfig()

    if isinstance(source, dict):
        logger.debug("Loading ConverterConfig from provided dict")
        return ConverterConfig.from_dict(_unwrap(source))

    if isinstance(source, (str, Path)):
        path = Path(source)
        text: Optional[str] = None
        fmt: Optional[str] = None

        if path.exists():
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                stripped = text.lstrip()
                fmt = "json" if stripped.startswith(("{", "[")) else "toml"
            logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            stripped = text.lstrip()
            fmt = "json" if stripped.startswith(("{", "[")) else "toml"
            logger.info("Loading configuration from inline %s string", fmt)

        if fmt == "json":
            data = json.loads(text)
        else:
            data = parse_toml(text)

        if not isinstance(data, dict):
            raise ValueError("Top-level configuration must be a mapping/dict")

        return ConverterConfig.from_dict(_unwrap(data))

    raise TypeError(f"Unsupported config source type: {type(source)!r}")


def _unwrap(data: Dict[str, Any]) -> Dict[str, Any]:
    section = data.get("slncmake")
    if isinstance(section, dict):
        return section
    return data


__all__ = ["load_converter_config", "parse_toml"]
