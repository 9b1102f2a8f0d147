"""Configuration resolution.

Determines the working set of build configurations of every target and
validates that the configurations of one target agree on what is built.
All failures here are fatal to the run: later stages assume a consistent
configuration set.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple, Union

from slncmake.config.schema import is_supported_platform
from slncmake.errors import (
    ConfigurationNotFound,
    InconsistentMfcUsage,
    InconsistentOutputKind,
    NoMatchingConfigurations,
    SolutionConsistencyError,
    UnsupportedOutputKind,
    UnsupportedPlatform,
)
from slncmake.model import (
    BuildConfiguration,
    ConfigurationInfo,
    OutputKind,
    ProjectRef,
    Solution,
    SolutionConfiguration,
    SolutionContext,
    Target,
)
from slncmake.provider.base import ProjectModelProvider
from slncmake.runtime.context import StageContext
from slncmake.utils.path_utils import join_path, normalize_path

RequestedConfiguration = Union[str, BuildConfiguration]

SUPPORTED_OUTPUT_KINDS = (
    OutputKind.EXECUTABLE,
    OutputKind.STATIC_LIBRARY,
    OutputKind.SHARED_LIBRARY,
)


def check_platform(platform: str) -> None:
    """Reject platforms denoting "any CPU".

    Raises:
        UnsupportedPlatform: If the platform is empty or "Any CPU".
    """
    if not is_supported_platform(platform):
        raise UnsupportedPlatform(platform)


class ConfigurationResolver:
    """Resolve targets and their configurations from a provider.

    Args:
        provider: Project Model Provider of the run.
        context: Logging sink; a default one is created when omitted.
    """

    def __init__(
        self, provider: ProjectModelProvider, context: Optional[StageContext] = None
    ) -> None:
        self.provider = provider
        self.context = context or StageContext()

    # ------------------------------------------------------------------
    # Whole run
    # ------------------------------------------------------------------

    def resolve(
        self, requested: Optional[Sequence[str]], platform: str
    ) -> List[Target]:
        """Resolve every target of the model.

        With a solution, configurations come from the solution's contexts;
        otherwise the requested names (or every configuration of the
        platform) are looked up in each project.
        """
        check_platform(platform)
        projects = self.provider.projects()
        solution = self.provider.solution()

        if solution is not None:
            per_project = self.resolve_solution(solution, projects, requested, platform)
            targets = [
                self.resolve_target(project, per_project[project.name], platform)
                for project in projects
                if project.name in per_project
            ]
        else:
            targets = []
            for project in projects:
                if not project.is_vc_project:
                    self.context.warn("Project '%s' is not a Visual C++ project.", project.name)
                    continue
                targets.append(self.resolve_target(project, requested, platform))

        if not targets:
            raise NoMatchingConfigurations(
                "No Visual C++ projects to build.", target=self.provider.name
            )
        self.context.logger.info(
            "Resolved %d target(s) for platform %s", len(targets), platform
        )
        return targets

    # ------------------------------------------------------------------
    # Single target
    # ------------------------------------------------------------------

    def resolve_target(
        self,
        project: ProjectRef,
        requested: Optional[Sequence[RequestedConfiguration]],
        platform: str,
    ) -> Target:
        """Resolve the configurations of one project into a ``Target``.

        Args:
            project: Project to resolve.
            requested: Configurations to build, by project configuration
                name or as ``BuildConfiguration``; None selects every
                configuration of the platform in provider order.
            platform: Target platform.

        Raises:
            UnsupportedPlatform: For "Any CPU" or an empty platform.
            ConfigurationNotFound: If a requested configuration is missing.
            NoMatchingConfigurations: If nothing is left to build.
            InconsistentOutputKind: If configurations build different kinds.
            InconsistentMfcUsage: If configurations use MFC differently.
            UnsupportedOutputKind: If the target is not an executable or a
                library.
        """
        check_platform(platform)
        available = self.provider.configurations(project)

        if requested is None:
            selected = [
                (BuildConfiguration(info.name, platform), info)
                for info in available
                if info.platform == platform
            ]
        else:
            by_key = {info.key: info for info in available}
            selected = []
            for item in requested:
                configuration = (
                    item if isinstance(item, BuildConfiguration) else BuildConfiguration(item, platform)
                )
                info = by_key.get(configuration.key)
                if info is None:
                    raise ConfigurationNotFound(project.name, configuration.key)
                selected.append((configuration, info))

        if not selected:
            raise NoMatchingConfigurations(
                f"Project '{project.name}' has no configuration for platform '{platform}'.",
                target=project.name,
            )

        self._check_consistency(project, selected)

        first = selected[0][1]
        if first.output_kind not in SUPPORTED_OUTPUT_KINDS:
            raise UnsupportedOutputKind(
                f"Project '{project.name}' builds a {first.output_kind.description}; "
                "only executables and libraries can be converted.",
                target=project.name,
            )

        files = sorted(self.provider.files(project), key=lambda f: f.relative_path)
        target = Target(
            name=project.name,
            project_path=project.path,
            project_dir=project.directory,
            output_kind=first.output_kind,
            mfc_usage=first.mfc_usage,
            subsystem=first.subsystem,
            configurations=[cfg for cfg, _info in selected],
            infos={cfg.name: info for cfg, info in selected},
            files=files,
        )
        self.context.logger.debug(
            "Target %s: %s, configurations %s",
            target.name,
            target.output_kind.description,
            ", ".join(cfg.key for cfg in target.configurations),
        )
        return target

    @staticmethod
    def _check_consistency(
        project: ProjectRef, selected: List[Tuple[BuildConfiguration, ConfigurationInfo]]
    ) -> None:
        if len({info.output_kind for _cfg, info in selected}) != 1:
            raise InconsistentOutputKind(
                project.name,
                [f"{info.output_kind.description} ({cfg.key})" for cfg, info in selected],
            )
        if len({info.mfc_usage for _cfg, info in selected}) != 1:
            raise InconsistentMfcUsage(
                project.name,
                [f"{info.mfc_usage.value} ({cfg.key})" for cfg, info in selected],
            )

    # ------------------------------------------------------------------
    # Solution
    # ------------------------------------------------------------------

    def resolve_solution(
        self,
        solution: Solution,
        projects: Sequence[ProjectRef],
        requested: Optional[Sequence[str]],
        platform: str,
    ) -> Dict[str, List[BuildConfiguration]]:
        """Verify the solution and map its configurations onto projects.

        Returns:
            Dict[str, List[BuildConfiguration]]: Project name -> ordered
            configurations, in project enumeration order. Configuration
            names are solution configuration names.

        Raises:
            UnsupportedPlatform: For "Any CPU" or an empty platform.
            ConfigurationNotFound: If a requested solution configuration is
                missing.
            NoMatchingConfigurations: If a selected configuration builds
                nothing or nothing is selected.
            SolutionConsistencyError: If contexts target another platform or
                configurations build different sets of projects.
        """
        check_platform(platform)
        self.context.logger.info("Checking the solution %s", solution.name)

        candidates = [cfg for cfg in solution.configurations if cfg.platform == platform]
        if requested is None:
            selected = candidates
        else:
            by_name = {cfg.name: cfg for cfg in candidates}
            selected = []
            for name in requested:
                if name not in by_name:
                    raise ConfigurationNotFound(solution.name, f"{name}|{platform}")
                selected.append(by_name[name])

        if not selected:
            raise NoMatchingConfigurations(
                f"The solution does not contain configurations on platform '{platform}'.",
                target=solution.name,
            )

        built = [self._built_contexts(solution, cfg, platform) for cfg in selected]

        reference = sorted(built[0])
        for cfg, contexts in zip(selected[1:], built[1:]):
            if sorted(contexts) != reference:
                raise SolutionConsistencyError(
                    "The project configurations are different.",
                    target=solution.name,
                    configuration=cfg.name,
                    details=[
                        f"{selected[0].name}: {', '.join(reference)}",
                        f"{cfg.name}: {', '.join(sorted(contexts))}",
                    ],
                )

        result: Dict[str, List[BuildConfiguration]] = {}
        for project in projects:
            key = self._match_context(project, built[0])
            if key is None:
                self.context.logger.debug("Project %s is not built on %s", project.name, platform)
                continue
            if not project.is_vc_project:
                self.context.warn("Project '%s' is not a Visual C++ project.", project.name)
                continue
            result[project.name] = [
                BuildConfiguration(
                    name=cfg.name,
                    platform=platform,
                    project_configuration=contexts[key].configuration,
                )
                for cfg, contexts in zip(selected, built)
            ]
        return result

    def _built_contexts(
        self, solution: Solution, configuration: SolutionConfiguration, platform: str
    ) -> Dict[str, SolutionContext]:
        contexts: Dict[str, SolutionContext] = {}
        for context in configuration.contexts:
            if not context.should_build:
                continue
            if context.platform != platform:
                raise SolutionConsistencyError(
                    f"The platform of {context.project} does not match {platform}.",
                    target=solution.name,
                    configuration=configuration.name,
                    details=[f"{context.project}: {context.platform}"],
                )
            if context.configuration != configuration.name:
                self.context.warn(
                    "Configuration of %s does not match the solution: "
                    "'%s' is replaced by '%s'.",
                    context.project,
                    context.configuration,
                    configuration.name,
                )
            contexts[self._context_key(solution, context.project)] = context

        if not contexts:
            raise NoMatchingConfigurations(
                f"No project to build in configuration {configuration.name}.",
                target=solution.name,
                configuration=configuration.name,
            )
        return contexts

    @staticmethod
    def _context_key(solution: Solution, project: str) -> str:
        return normalize_path(join_path(solution.directory, project)).lower()

    @staticmethod
    def _match_context(
        project: ProjectRef, contexts: Dict[str, SolutionContext]
    ) -> Optional[str]:
        key = project.path.lower()
        if key in contexts:
            return key
        for candidate, context in contexts.items():
            if context.project == project.name:
                return candidate
        return None


__all__ = ["ConfigurationResolver", "check_platform", "SUPPORTED_OUTPUT_KINDS"]
