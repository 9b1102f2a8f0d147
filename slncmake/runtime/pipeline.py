"""Conversion pipeline.

Runs the phases of a conversion in dependency order:

1. RESOLVE - targets and configurations (fatal on any failure)
2. EXTRACT - settings of every target (target-scoped failures recorded)
3. LINK    - cross-target library resolution, after every extraction
4. RENDER  - descriptors in memory
5. WRITE   - all descriptors, or none when any target failed
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from slncmake.config.schema import ConverterConfig
from slncmake.errors import ConversionError, ResolutionError
from slncmake.provider.base import ProjectModelProvider
from slncmake.provider.loader import SnapshotSource, load_provider
from slncmake.runtime.context import ConversionState, RenderedDescriptor, StageContext
from slncmake.runtime.phases import ExtractPhase, LinkPhase, RenderPhase, ResolvePhase, WritePhase

logger = logging.getLogger("slncmake.runtime.pipeline")


@dataclass
class ConversionResult:
    """Outcome of a conversion run.

    Attributes:
        errors: Fatal or target-scoped errors; any error fails the run.
        warnings: Non-fatal findings, in the order raised.
        descriptors: Rendered descriptors (targets, then the aggregate).
        written: Files written; empty for failed or dry runs.
        links: Cross-target links as ``(target, dependency, configurations)``.
    """

    errors: List[ConversionError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    descriptors: List[RenderedDescriptor] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    links: List[Tuple[str, str, List[str]]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class Converter:
    """Convert the model of a provider into CMake descriptors.

    Args:
        provider: Project Model Provider of the run.
        config: Converter configuration; defaults apply when omitted.
        output_root: Directory the aggregate descriptor is written to;
            ``config.output_dir`` or the current directory when omitted.
        logger: Logging sink handed to every stage.
    """

    def __init__(
        self,
        provider: ProjectModelProvider,
        config: Optional[ConverterConfig] = None,
        output_root: Optional[Path] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.provider = provider
        self.config = config or ConverterConfig()
        if output_root is None:
            output_root = Path(self.config.output_dir) if self.config.output_dir else Path.cwd()
        self.output_root = Path(output_root)
        self.logger = logger or logging.getLogger("slncmake")

    def run(self, dry_run: bool = False) -> ConversionResult:
        """Run every phase and report the outcome.

        Conversion errors never propagate; they are returned on the result.
        """
        context = StageContext(config=self.config, logger=self.logger)
        state = ConversionState(provider=self.provider, output_root=self.output_root)

        phases = [
            ResolvePhase(state),
            ExtractPhase(state),
            LinkPhase(state),
            RenderPhase(state),
            WritePhase(state, dry_run=dry_run),
        ]
        try:
            for phase in phases:
                phase.run(context)
        except ResolutionError as error:
            self.logger.error("%s", error)
            state.errors.append(error)

        result = ConversionResult(
            errors=list(state.errors),
            warnings=list(context.warnings),
            descriptors=list(state.rendered) if not state.failed else [],
            written=list(state.written),
            links=state.graph.link_edges() if state.graph is not None else [],
        )
        if result.success:
            self.logger.info("Converted %d target(s)", len(state.targets))
        return result


def convert(
    source: Union[SnapshotSource, ProjectModelProvider],
    config: Optional[ConverterConfig] = None,
    output_root: Optional[Path] = None,
    dry_run: bool = False,
) -> ConversionResult:
    """Convert a snapshot (or an already built provider) in one call.

    Snapshot loading failures are reported on the result like any other
    resolution error.
    """
    config = config or ConverterConfig()
    if isinstance(source, ProjectModelProvider):
        provider = source
    else:
        try:
            provider = load_provider(source)
        except ResolutionError as error:
            logger.error("%s", error)
            return ConversionResult(errors=[error])
        if output_root is None and config.output_dir is None and not isinstance(source, dict):
            output_root = Path(source).resolve().parent
    return Converter(provider, config, output_root=output_root).run(dry_run=dry_run)


__all__ = ["ConversionResult", "Converter", "convert"]
