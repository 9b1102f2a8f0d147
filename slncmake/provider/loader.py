"""Load a snapshot document and build the matching provider adapter.

Accepted sources:

* dict -> validated directly
* Path / path-like string -> ``.json`` or ``.toml`` file (format guessed
  from content for other suffixes)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from slncmake.errors import SnapshotError
from slncmake.provider.registry import ProviderRegistry
from slncmake.provider.snapshot import SnapshotProvider
from slncmake.provider.snapshot_schema import SnapshotDocument
from slncmake.runtime.config_loader import parse_toml

logger = logging.getLogger("slncmake.provider.loader")

SnapshotSource = Union[str, Path, Dict[str, Any]]


def _read_mapping(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise SnapshotError(f"Failed to read snapshot {path}: {exc}") from exc

    suffix = path.suffix.lower()
    if suffix == ".json" or (suffix not in {".toml", ".tml"} and text.lstrip().startswith("{")):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"Invalid JSON in snapshot {path}: {exc}") from exc
    else:
        try:
            data = parse_toml(text)
        except ValueError as exc:
            raise SnapshotError(f"Invalid TOML in snapshot {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise SnapshotError(f"Top-level snapshot value must be a mapping: {path}")
    return data


def load_provider(source: SnapshotSource) -> SnapshotProvider:
    """Load a snapshot and instantiate the adapter for its IDE version.

    Args:
        source: Snapshot mapping or path to a snapshot file.

    Returns:
        SnapshotProvider: Adapter answering from the snapshot.

    Raises:
        SnapshotError: If the snapshot cannot be read, fails validation or
            names an unsupported IDE version.
    """
    base_dir = Path.cwd()
    if isinstance(source, dict):
        data = source
    elif isinstance(source, (str, Path)):
        path = Path(source)
        data = _read_mapping(path)
        base_dir = path.resolve().parent
        logger.info("Loading snapshot from file: %s", path)
    else:
        raise TypeError(f"Unsupported snapshot source type: {type(source)!r}")

    try:
        document = SnapshotDocument.model_validate(data)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid snapshot: {exc}") from exc

    registry = ProviderRegistry.get_instance()
    adapter = registry.get_adapter(document.ide_version)
    if adapter is None:
        raise SnapshotError(
            f"Unsupported IDE version '{document.ide_version}'",
            details=[f"supported: {', '.join(registry.list_versions())}"],
        )
    logger.debug("Using %s for IDE version %s", adapter.__name__, document.ide_version)
    return adapter(document, base_dir=base_dir)


__all__ = ["load_provider"]
