"""WRITE phase: put rendered descriptors on disk, all or nothing."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from slncmake.errors import DescriptorWriteError
from slncmake.runtime.context import ConversionState, RenderedDescriptor, StageContext
from slncmake.runtime.phases.base import BasePhase, ConversionPhase

STAGING_SUFFIX = ".slncmake-tmp"


class WritePhase(BasePhase):
    """Write every rendered descriptor once.

    Nothing is written when any target failed, so that a failed run never
    leaves a mix of fresh and stale descriptors behind. Descriptors are
    first staged next to their destination; destinations are replaced only
    once every descriptor has been staged.

    Args:
        state: Shared conversion state.
        dry_run: Render only; leave the file system untouched.
    """

    PHASE = ConversionPhase.WRITE

    def __init__(self, state: ConversionState, dry_run: bool = False) -> None:
        super().__init__(state)
        self.dry_run = dry_run

    def execute(self, context: StageContext) -> None:
        if self.state.failed:
            context.logger.error(
                "Conversion failed for %d target(s); no descriptor written.",
                len(self.state.errors),
            )
            return
        if self.dry_run:
            context.logger.info("Dry run; %d descriptor(s) not written", len(self.state.rendered))
            return

        staged: List[Tuple[RenderedDescriptor, Path]] = []
        current = None
        try:
            for current in self.state.rendered:
                staging = current.path.with_name(current.path.name + STAGING_SUFFIX)
                staged.append((current, staging))
                self._stage(current, staging, context.config.line_ending)
            for current, staging in staged:
                staging.replace(current.path)
                self.state.written.append(current.path)
                context.logger.info("  %s -> %s", current.name, current.path)
        except OSError as e:
            context.logger.error("Failed to write %s: %s", current.path, e)
            self.state.errors.append(
                DescriptorWriteError(current.name, str(current.path), e.strerror or str(e))
            )
        finally:
            for _, staging in staged:
                if staging.is_file():
                    staging.unlink()

    @staticmethod
    def _stage(descriptor: RenderedDescriptor, staging: Path, line_ending: str) -> None:
        text = descriptor.text
        if line_ending != "\n":
            text = text.replace("\n", line_ending)
        descriptor.path.parent.mkdir(parents=True, exist_ok=True)
        with staging.open("w", encoding="utf-8", newline="") as handle:
            handle.write(text)
