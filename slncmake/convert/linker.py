"""Library link resolution.

Replaces literal library references with the names of sibling targets
producing those libraries, so that CMake knows about the dependency. Runs
only after every target of the run has been extracted.

Policy: the first matching target in enumeration order wins. When several
targets produce the same library path the choice is arbitrary but stable.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from slncmake.convert.graph import TargetGraph
from slncmake.convert.paths import PathTranslator
from slncmake.model import BuildConfiguration, LinkCandidate, Settings, Target, TargetSettings
from slncmake.utils.path_utils import is_rooted, join_path, normalize_path, paths_equal

_module_logger = logging.getLogger("slncmake.convert.linker")


class LibraryLinkResolver:
    """Resolve link libraries of targets against a ``TargetGraph``.

    Args:
        graph: Every target of the run; link edges are recorded on it.
        logger: Sink for resolution traces; defaults to the module logger.
    """

    def __init__(self, graph: TargetGraph, logger: Optional[logging.Logger] = None) -> None:
        self.graph = graph
        self.logger = logger or _module_logger

    def candidates(
        self,
        target: Target,
        settings: Settings,
        token: str,
        configuration: BuildConfiguration,
        translator: PathTranslator,
    ) -> LinkCandidate:
        """Absolute paths a literal link token may denote.

        A rooted token is its own single candidate; otherwise every library
        directory of the configuration is joined with the token, relative
        directories being resolved against the project directory.
        """
        translated = translator.translate(token, configuration)
        if not translated:
            return LinkCandidate(configuration.name, token, translated)
        if is_rooted(translated):
            return LinkCandidate(configuration.name, token, translated, (translated,))

        paths: List[str] = []
        for directory in settings.library_dirs:
            evaluated = translator.evaluate(directory, configuration)
            if not evaluated:
                continue
            joined = join_path(evaluated, translated)
            if not is_rooted(joined):
                joined = join_path(target.project_dir, joined)
            paths.append(normalize_path(joined))
        return LinkCandidate(configuration.name, token, translated, tuple(paths))

    def match(self, target: Target, candidate: LinkCandidate) -> Optional[Target]:
        """First other target whose library output equals a candidate path."""
        for path in candidate.candidates:
            for other in self.graph.targets:
                if other.name == target.name:
                    continue
                output = self.graph.library_output(other, candidate.configuration)
                if output and paths_equal(path, output):
                    return other
        return None

    def resolve(
        self, target_settings: TargetSettings, translator: PathTranslator
    ) -> Dict[str, List[str]]:
        """Resolve every link library of a target.

        Returns:
            Dict[str, List[str]]: Configuration name -> link entries, each a
            sibling target name or the translated literal path, in declared
            order.
        """
        target = target_settings.target
        resolved: Dict[str, List[str]] = {}
        for configuration in target.configurations:
            settings = target_settings.settings(configuration.name)
            links: List[str] = []
            for token in settings.link_libraries:
                candidate = self.candidates(target, settings, token, configuration, translator)
                producer = self.match(target, candidate)
                if producer is not None:
                    self.logger.debug(
                        "%s [%s]: %s -> target %s",
                        target.name,
                        configuration.name,
                        token,
                        producer.name,
                    )
                    self.graph.add_link(target.name, producer.name, configuration.name)
                    links.append(producer.name)
                elif candidate.translated:
                    links.append(candidate.translated)
            resolved[configuration.name] = links
        return resolved

    def cycles(self) -> List[List[str]]:
        """Dependency cycles created by the resolved links."""
        return self.graph.find_cycles()


__all__ = ["LibraryLinkResolver"]
