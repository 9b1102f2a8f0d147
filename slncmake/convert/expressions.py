"""Config-expression builder.

A config-expression scopes a value to one build configuration:
``$<$<CONFIG:Debug>:value>``. Builders never re-sort their input; the
configuration order given by the caller is the order emitted.
"""

from __future__ import annotations

from typing import Iterable, Tuple


def config_expression(configuration: str, value: str) -> str:
    """Return ``$<$<CONFIG:configuration>:value>``."""
    return f"$<$<CONFIG:{configuration}>:{value}>"


def config_expressions(pairs: Iterable[Tuple[str, str]], separator: str) -> str:
    """Join per-configuration values into config-expressions.

    Pairs with an empty value are dropped. When every value is empty the
    result is ``""`` and callers skip the enclosing construct.

    Args:
        pairs: ``(configuration, value)`` pairs in configuration order.
        separator: Text placed between consecutive expressions.

    Returns:
        str: Joined expressions, or ``""``.
    """
    return separator.join(
        config_expression(configuration, value) for configuration, value in pairs if value
    )


__all__ = ["config_expression", "config_expressions"]
