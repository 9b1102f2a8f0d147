"""Tests for config-expression building."""

from __future__ import annotations

from slncmake.convert.expressions import config_expression, config_expressions


def test_config_expression_wraps_value() -> None:
    assert config_expression("Debug", "_DEBUG") == "$<$<CONFIG:Debug>:_DEBUG>"


def test_config_expressions_keep_order_and_drop_empty_values() -> None:
    """Caller order is preserved and empty values produce no expression."""

    text = config_expressions(
        [("Release", "NDEBUG"), ("Profile", ""), ("Debug", "_DEBUG")],
        "\n  ",
    )

    assert text == "$<$<CONFIG:Release>:NDEBUG>\n  $<$<CONFIG:Debug>:_DEBUG>"


def test_config_expressions_all_empty_yields_empty_string() -> None:
    assert config_expressions([("Debug", ""), ("Release", "")], " ") == ""
