"""
Base phase class implementing template method pattern.

Every conversion phase runs with the same flow:
- Phase setup (logging)
- execute() - implemented by the subclass
- Error logging for conversion and I/O failures
- Phase cleanup

Subclasses only need to implement the execute() method with their
specific business logic.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum

from slncmake.errors import ConversionError
from slncmake.runtime.context import ConversionState, StageContext

# Failures that are logged with phase context before they propagate
_LOGGED_EXCEPTIONS = (
    ConversionError,
    OSError,
    ValueError,
    KeyError,
)

logger = logging.getLogger("slncmake.runtime.phase")


class ConversionPhase(str, Enum):
    """Phases of a conversion run, in execution order."""

    RESOLVE = "resolve"
    EXTRACT = "extract"
    LINK = "link"
    RENDER = "render"
    WRITE = "write"


class BasePhase(ABC):
    """
    Abstract base class for all conversion phases.

    Execution Flow:
        1. _before_execute() - Phase setup (logging)
        2. execute() - **SUBCLASS IMPLEMENTS THIS** (core business logic)
        3. _after_execute() - Phase cleanup

    Target-scoped failures are recorded on ``state.errors`` by the phases
    themselves; anything reaching ``run`` aborts the run.

    Attributes:
        PHASE: Phase identifier used in logs.
        state: ConversionState shared across all phases
    """

    PHASE: ConversionPhase

    def __init__(self, state: ConversionState) -> None:
        self.state = state

    def run(self, context: StageContext) -> None:
        """
        Template method: execute the phase with standardized flow.

        Args:
            context: Logging sink of the run

        Raises:
            ConversionError: If the phase fails for the whole run
        """
        self._before_execute(context)
        try:
            self.execute(context)
        except _LOGGED_EXCEPTIONS as error:
            logger.debug("Phase %s failed: %s", self.PHASE.name, error)
            raise
        self._after_execute(context)

    @abstractmethod
    def execute(self, context: StageContext) -> None:
        """
        Execute the phase-specific business logic.

        This method should:
        - Read inputs from self.state
        - Perform phase-specific work
        - Store results on self.state

        Args:
            context: Logging sink of the run
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement execute()")

    def _before_execute(self, context: StageContext) -> None:
        context.logger.info("=== Phase: %s ===", self.PHASE.name)

    def _after_execute(self, _context: StageContext) -> None:
        """Phase cleanup (override if needed)."""


__all__ = ["BasePhase", "ConversionPhase"]
