"""Conversion stages: resolve, extract, diff, translate, link and emit."""

from .differ import SettingCategory, SettingsDiffer, settings_equal
from .emitter import DescriptorEmitter
from .expressions import config_expression, config_expressions
from .extractor import SettingsExtractor, assemble_settings
from .graph import TargetGraph
from .linker import LibraryLinkResolver
from .paths import IDE_MACROS, PathTranslator
from .resolver import ConfigurationResolver

__all__ = [
    "SettingCategory",
    "SettingsDiffer",
    "settings_equal",
    "DescriptorEmitter",
    "config_expression",
    "config_expressions",
    "SettingsExtractor",
    "assemble_settings",
    "TargetGraph",
    "LibraryLinkResolver",
    "IDE_MACROS",
    "PathTranslator",
    "ConfigurationResolver",
]
