"""RESOLVE phase: build the targets and their configuration sets."""

from __future__ import annotations

from slncmake.convert.resolver import ConfigurationResolver
from slncmake.runtime.context import StageContext
from slncmake.runtime.phases.base import BasePhase, ConversionPhase


class ResolvePhase(BasePhase):
    """Resolve configurations of every project; any failure aborts the run."""

    PHASE = ConversionPhase.RESOLVE

    def execute(self, context: StageContext) -> None:
        resolver = ConfigurationResolver(self.state.provider, context.for_stage("resolver"))
        self.state.targets = resolver.resolve(
            context.config.configurations, context.config.platform
        )
