"""Utility helpers shared across slncmake."""
