"""EXTRACT phase: settings of every target, before any cross-target work."""

from __future__ import annotations

from slncmake.convert.extractor import SettingsExtractor
from slncmake.convert.paths import PathTranslator
from slncmake.errors import TargetError
from slncmake.runtime.context import StageContext
from slncmake.runtime.phases.base import BasePhase, ConversionPhase


class ExtractPhase(BasePhase):
    """Extract settings target by target.

    A target-scoped failure (malformed raw descriptor) is recorded and the
    remaining targets are still extracted.
    """

    PHASE = ConversionPhase.EXTRACT

    def execute(self, context: StageContext) -> None:
        provider = self.state.provider
        extractor = SettingsExtractor(context.for_stage("extractor").logger)
        source_root = provider.source_root

        for target in self.state.targets:
            context.logger.info("--- Converting %s ---", target.project_path)
            try:
                self.state.settings[target.name] = extractor.extract(target, provider)
            except TargetError as error:
                context.logger.error("%s", error)
                self.state.errors.append(error)
                continue
            self.state.translators[target.name] = PathTranslator(provider, target, source_root)
