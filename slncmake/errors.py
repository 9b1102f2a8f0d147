"""Exception hierarchy for slncmake conversions.

Errors fall into three groups:

1. Run-level errors raised while resolving configurations. They abort the
   whole conversion because later stages assume a consistent configuration
   set.
2. Target-level errors raised while extracting a single target. They are
   collected per target; sibling targets still convert but the run is
   reported as failed.
3. Output errors raised while writing descriptors to disk.
"""

from __future__ import annotations

from typing import Iterable, List, Optional


class ConversionError(Exception):
    """Base class for all conversion errors.

    Attributes:
        target: Name of the target (or solution) the error refers to.
        configuration: Offending configuration, if any.
        details: Additional lines describing offending values.
    """

    def __init__(
        self,
        message: str,
        target: Optional[str] = None,
        configuration: Optional[str] = None,
        details: Optional[Iterable[str]] = None,
    ) -> None:
        self.message = message
        self.target = target
        self.configuration = configuration
        self.details: List[str] = list(details or [])
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message
        if self.details:
            text += "\n" + "\n".join(f"  {line}" for line in self.details)
        return text


# =============================================================================
# Run-level errors (configuration resolution)
# =============================================================================


class ResolutionError(ConversionError):
    """Configuration resolution failed; the whole run is aborted."""


class UnsupportedPlatform(ResolutionError):
    """The requested platform denotes "any CPU" or is empty."""

    def __init__(self, platform: str) -> None:
        super().__init__(f"Platform '{platform}' is not supported.")
        self.platform = platform


class ConfigurationNotFound(ResolutionError):
    """A requested configuration does not exist in a target."""

    def __init__(self, target: str, configuration: str) -> None:
        super().__init__(
            f"Project '{target}' does not contain the configuration '{configuration}'.",
            target=target,
            configuration=configuration,
        )


class NoMatchingConfigurations(ResolutionError):
    """None of the requested or derived configurations exist for a platform."""


class InconsistentOutputKind(ResolutionError):
    """Configurations of one target declare different output kinds."""

    def __init__(self, target: str, details: Iterable[str]) -> None:
        super().__init__(
            f"Mismatch the type of output in project '{target}':",
            target=target,
            details=details,
        )


class InconsistentMfcUsage(ResolutionError):
    """Configurations of one target declare different MFC usage."""

    def __init__(self, target: str, details: Iterable[str]) -> None:
        super().__init__(
            f"Mismatch 'Use of MFC' in project '{target}':",
            target=target,
            details=details,
        )


class UnsupportedOutputKind(ResolutionError):
    """The target builds something other than an executable or a library."""


class SolutionConsistencyError(ResolutionError):
    """Solution configurations disagree about platforms or built projects."""


class SnapshotError(ResolutionError):
    """The provider document is invalid or cannot be read."""


# =============================================================================
# Target-level errors
# =============================================================================


class TargetError(ConversionError):
    """Error scoped to a single target."""


class DescriptorParseError(TargetError):
    """The raw project descriptor of a target is malformed."""


class OutputLocationConflict(TargetError):
    """A target descriptor would overwrite the aggregate descriptor."""


# =============================================================================
# Output errors
# =============================================================================


class DescriptorWriteError(ConversionError):
    """A rendered descriptor could not be put on disk."""

    def __init__(self, target: str, path: str, reason: str) -> None:
        super().__init__(
            f"Cannot write the descriptor of '{target}' to '{path}': {reason}",
            target=target,
        )
        self.path = path


__all__ = [
    "ConversionError",
    "ResolutionError",
    "UnsupportedPlatform",
    "ConfigurationNotFound",
    "NoMatchingConfigurations",
    "InconsistentOutputKind",
    "InconsistentMfcUsage",
    "UnsupportedOutputKind",
    "SolutionConsistencyError",
    "SnapshotError",
    "TargetError",
    "DescriptorParseError",
    "OutputLocationConflict",
    "DescriptorWriteError",
]
