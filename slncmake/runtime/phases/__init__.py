"""
Phase implementations of a conversion run.

Each phase is a separate class implementing the BasePhase interface.
"""

from .base import BasePhase, ConversionPhase
from .resolve import ResolvePhase
from .extract import ExtractPhase
from .link import LinkPhase
from .render import RenderPhase
from .write import WritePhase

__all__ = [
    "BasePhase",
    "ConversionPhase",
    "ResolvePhase",
    "ExtractPhase",
    "LinkPhase",
    "RenderPhase",
    "WritePhase",
]
