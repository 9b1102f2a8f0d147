"""LINK phase: resolve library references across targets."""

from __future__ import annotations

from slncmake.convert.graph import TargetGraph
from slncmake.convert.linker import LibraryLinkResolver
from slncmake.runtime.context import StageContext
from slncmake.runtime.phases.base import BasePhase, ConversionPhase


class LinkPhase(BasePhase):
    """Match link libraries against sibling targets' outputs.

    Requires every target to be extracted; the graph holds all resolved
    targets, including ones whose extraction failed, since their outputs
    are known from configuration resolution.
    """

    PHASE = ConversionPhase.LINK

    def execute(self, context: StageContext) -> None:
        graph = TargetGraph(self.state.targets)
        resolver = LibraryLinkResolver(graph, context.for_stage("linker").logger)

        for target in self.state.targets:
            target_settings = self.state.settings.get(target.name)
            if target_settings is None:
                continue
            self.state.links[target.name] = resolver.resolve(
                target_settings, self.state.translators[target.name]
            )

        for cycle in resolver.cycles():
            context.warn("Link dependency cycle: %s", " -> ".join(cycle + cycle[:1]))
        self.state.graph = graph
