"""Target graph.

All targets of a conversion run plus the link edges resolved between
them, stored in a ``networkx.DiGraph``. Node order is target enumeration
order; an edge ``A -> B`` means A links against B.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import networkx as nx

from slncmake.model import OutputKind, Target

logger = logging.getLogger("slncmake.convert.graph")


class TargetGraph:
    """Read-mostly graph of the targets of one run."""

    def __init__(self, targets: Iterable[Target] = ()) -> None:
        self._graph = nx.DiGraph()
        for target in targets:
            self.add_target(target)

    def add_target(self, target: Target) -> None:
        if self._graph.has_node(target.name):
            logger.warning("Target %s added twice; keeping the first one", target.name)
            return
        self._graph.add_node(target.name, target=target, kind=target.output_kind.value)

    @property
    def targets(self) -> List[Target]:
        """Targets in enumeration order."""
        return [data["target"] for _name, data in self._graph.nodes(data=True)]

    def target(self, name: str) -> Target:
        try:
            return self._graph.nodes[name]["target"]
        except KeyError as exc:
            raise KeyError(f"Unknown target '{name}'") from exc

    def library_output(self, target: Target, configuration: str) -> Optional[str]:
        """Path other targets link against for one configuration.

        Static libraries are linked through their primary output, shared
        libraries through their import library. Executables yield None.
        """
        if configuration not in target.infos:
            return None
        if target.output_kind is OutputKind.STATIC_LIBRARY:
            return target.output_paths[configuration] or None
        if target.output_kind is OutputKind.SHARED_LIBRARY:
            return target.import_libraries[configuration] or None
        return None

    def add_link(self, source: str, dependency: str, configuration: str) -> None:
        """Record that ``source`` links ``dependency`` in a configuration."""
        if self._graph.has_edge(source, dependency):
            configurations = self._graph.edges[source, dependency]["configurations"]
            if configuration not in configurations:
                configurations.append(configuration)
            return
        self._graph.add_edge(source, dependency, configurations=[configuration])
        logger.debug("Link edge %s -> %s (%s)", source, dependency, configuration)

    def dependencies(self, name: str) -> List[str]:
        """Targets ``name`` links against, in edge insertion order."""
        return list(self._graph.successors(name))

    def link_configurations(self, source: str, dependency: str) -> List[str]:
        if not self._graph.has_edge(source, dependency):
            return []
        return list(self._graph.edges[source, dependency]["configurations"])

    def link_edges(self) -> List[Tuple[str, str, List[str]]]:
        """Every resolved link as ``(source, dependency, configurations)``.

        Sources follow target enumeration order.
        """
        return [
            (target.name, dependency, self.link_configurations(target.name, dependency))
            for target in self.targets
            for dependency in self.dependencies(target.name)
        ]

    def find_cycles(self) -> List[List[str]]:
        """Dependency cycles between targets, each as a list of names."""
        return [list(cycle) for cycle in nx.simple_cycles(self._graph)]

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, name: object) -> bool:
        return self._graph.has_node(name)


__all__ = ["TargetGraph"]
