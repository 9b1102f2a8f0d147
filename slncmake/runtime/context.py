"""Run context dataclasses for conversion execution.

``StageContext`` is the explicit logging sink handed to every conversion
stage: a logger plus the shared warning list of the run. Tests construct
one around a capturing logger to observe a single stage.

``ConversionState`` carries what the phases produce for each other. It is
owned by the ``Converter`` and discarded once the run has been reported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

from slncmake.config.schema import ConverterConfig
from slncmake.errors import ConversionError
from slncmake.model import Target, TargetSettings
from slncmake.provider.base import ProjectModelProvider

if TYPE_CHECKING:  # pragma: no cover
    from slncmake.convert.graph import TargetGraph
    from slncmake.convert.paths import PathTranslator


@dataclass
class StageContext:
    """Logging sink and configuration shared by the stages of one run.

    Args:
        config: Converter configuration of the run.
        logger: Logger stages write progress and traces to.
        warnings: Non-fatal findings, in the order they were raised.
    """

    config: ConverterConfig = field(default_factory=ConverterConfig)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("slncmake"))
    warnings: List[str] = field(default_factory=list)

    def warn(self, message: str, *args: object) -> None:
        """Record a warning and log it."""
        text = message % args if args else message
        self.warnings.append(text)
        self.logger.warning(text)

    def for_stage(self, name: str) -> "StageContext":
        """Context for a named stage sharing this run's warning list."""
        return StageContext(
            config=self.config,
            logger=self.logger.getChild(name),
            warnings=self.warnings,
        )


@dataclass
class RenderedDescriptor:
    """A descriptor rendered in memory, not yet written.

    Attributes:
        name: Target name, or the solution name for the aggregate.
        path: Destination file.
        text: Descriptor text with ``\\n`` line endings.
        kind: Output kind description, ``solution`` for the aggregate.
        configurations: Emitted configuration names.
    """

    name: str
    path: Path
    text: str
    kind: str = ""
    configurations: List[str] = field(default_factory=list)


@dataclass
class ConversionState:
    """Results handed from one phase to the next."""

    provider: ProjectModelProvider
    output_root: Path
    targets: List[Target] = field(default_factory=list)
    settings: Dict[str, TargetSettings] = field(default_factory=dict)
    translators: Dict[str, "PathTranslator"] = field(default_factory=dict)
    links: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)
    graph: Optional["TargetGraph"] = None
    rendered: List[RenderedDescriptor] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    errors: List[ConversionError] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.errors)


__all__ = ["StageContext", "RenderedDescriptor", "ConversionState"]
