"""RENDER phase: descriptors of every target and the aggregate, in memory."""

from __future__ import annotations

from typing import Dict, List, Optional

from slncmake.convert.emitter import DescriptorEmitter
from slncmake.errors import OutputLocationConflict
from slncmake.model import Target
from slncmake.runtime.context import RenderedDescriptor, StageContext
from slncmake.runtime.phases.base import BasePhase, ConversionPhase
from slncmake.utils.path_utils import relative_path


class RenderPhase(BasePhase):
    """Render descriptors; nothing touches the file system yet.

    A target whose descriptor cannot be placed (source root, outside the
    source tree, shared directory) is recorded as ``OutputLocationConflict``.
    """

    PHASE = ConversionPhase.RENDER

    def execute(self, context: StageContext) -> None:
        config = context.config
        emitter = DescriptorEmitter(config.cmake_minimum_version)
        source_root = self.state.provider.source_root
        output_root = self.state.output_root

        owners: Dict[str, str] = {}
        subdirectories: List[str] = []
        for target in self.state.targets:
            target_settings = self.state.settings.get(target.name)
            if target_settings is None:
                continue

            subdirectory = self._subdirectory(context, target, source_root)
            if subdirectory is None:
                continue
            owner = owners.setdefault(subdirectory.lower(), target.name)
            if owner != target.name:
                self._conflict(
                    context,
                    target,
                    f"Targets '{owner}' and '{target.name}' share the directory "
                    f"'{subdirectory}'; their descriptors would overwrite each other.",
                )
                continue

            text = emitter.render_target(
                target_settings,
                self.state.translators[target.name],
                self.state.links.get(target.name, {}),
            )
            self.state.rendered.append(
                RenderedDescriptor(
                    name=target.name,
                    path=output_root / subdirectory / config.descriptor_name,
                    text=text,
                    kind=target.output_kind.description,
                    configurations=target.configuration_names,
                )
            )
            subdirectories.append(subdirectory)

        name = self.state.provider.name
        context.logger.info("--- Converting %s ---", name)
        self.state.rendered.append(
            RenderedDescriptor(
                name=name,
                path=output_root / config.descriptor_name,
                text=emitter.render_solution(name, subdirectories),
                kind="solution",
            )
        )

    def _subdirectory(
        self, context: StageContext, target: Target, source_root: str
    ) -> Optional[str]:
        """Directory of a target's descriptor relative to the output root."""
        if not source_root:
            self._conflict(context, target, f"Cannot place '{target.name}': unknown source root.")
            return None

        subdirectory = relative_path(target.project_dir, source_root)
        if subdirectory == "":
            self._conflict(
                context,
                target,
                f"Project '{target.name}' is located in the source root; its descriptor "
                "would overwrite the aggregate descriptor.",
            )
            return None
        if subdirectory == ".." or subdirectory.startswith("../"):
            self._conflict(
                context,
                target,
                f"Project '{target.name}' is located outside the source root '{source_root}'.",
            )
            return None
        return subdirectory

    def _conflict(self, context: StageContext, target: Target, message: str) -> None:
        error = OutputLocationConflict(message, target=target.name)
        context.logger.error("%s", error)
        self.state.errors.append(error)
