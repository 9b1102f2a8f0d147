"""CLI commands for slncmake."""

from slncmake.cli.convert import convert_command

__all__ = ["convert_command"]
