"""Runtime orchestration: configuration loading, run context and phases.

The pipeline itself lives in ``slncmake.runtime.pipeline`` and is imported
explicitly to keep this package free of import cycles with the stages.
"""

from .config_loader import load_converter_config, parse_toml
from .context import ConversionState, RenderedDescriptor, StageContext

__all__ = [
    "load_converter_config",
    "parse_toml",
    "ConversionState",
    "RenderedDescriptor",
    "StageContext",
]
