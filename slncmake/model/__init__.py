"""Project model types shared by every conversion stage."""

from .schema import (
    BuildConfiguration,
    CharacterSet,
    ConfigurationInfo,
    FileKind,
    MfcUsage,
    OutputKind,
    ProjectRef,
    Solution,
    SolutionConfiguration,
    SolutionContext,
    SourceFile,
    SubSystem,
    Target,
)
from .settings import (
    DEFAULT_PCH_FILE_PATH,
    DEFAULT_PCH_HEADER_PATH,
    FileSettings,
    LinkCandidate,
    PchMode,
    PchSetting,
    Settings,
    TargetSettings,
)

__all__ = [
    "BuildConfiguration",
    "CharacterSet",
    "ConfigurationInfo",
    "FileKind",
    "MfcUsage",
    "OutputKind",
    "ProjectRef",
    "Solution",
    "SolutionConfiguration",
    "SolutionContext",
    "SourceFile",
    "SubSystem",
    "Target",
    "DEFAULT_PCH_FILE_PATH",
    "DEFAULT_PCH_HEADER_PATH",
    "FileSettings",
    "LinkCandidate",
    "PchMode",
    "PchSetting",
    "Settings",
    "TargetSettings",
]
