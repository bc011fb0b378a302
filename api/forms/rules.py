"""Rule expression parsing.

Field-level expressions use ``field=value``. Expressions embedded in a form
tag use ``field:value`` because ``=`` already separates form-tag keys from
their values.
"""
from __future__ import annotations

import math
import re
from typing import Any, Callable

from .elements import (
    EFFECT_DISABLE,
    EFFECT_ENABLE,
    EFFECT_HIDE,
    EFFECT_SHOW,
    Condition,
    Rule,
)

_TRUE_LITERALS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_LITERALS = {"0", "f", "F", "FALSE", "false", "False"}

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_FLOAT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_HEX_FLOAT_RE = re.compile(r"[+-]?0[xX]([0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# Evaluated in order, first non-empty expression wins.
RULE_PRIORITY: list[tuple[str, str]] = [
    ("visible_if", EFFECT_SHOW),
    ("hide_if", EFFECT_HIDE),
    ("enable_if", EFFECT_ENABLE),
    ("disable_if", EFFECT_DISABLE),
]


def parse_condition_value(val: str) -> Any:
    """Coerce a condition literal: bool, then int64, then float, then string.

    Floats are ASCII decimal (``1.5``, ``-2e3``) or hex (``0x1p4``) literals.
    A literal that does not give a finite float stays a string.
    """
    if val in _TRUE_LITERALS:
        return True
    if val in _FALSE_LITERALS:
        return False

    if _INT_RE.fullmatch(val):
        i = int(val)
        if _INT64_MIN <= i <= _INT64_MAX:
            return i

    try:
        if _DECIMAL_FLOAT_RE.fullmatch(val):
            f = float(val)
        elif _HEX_FLOAT_RE.fullmatch(val):
            f = float.fromhex(val)
        else:
            return val
    except OverflowError:
        return val

    if math.isfinite(f):
        return f
    return val


def parse_rule_expression(expr: str, effect: str) -> Rule | None:
    """Parse ``field=value`` into a rule scoped at ``#/properties/<field>``.

    Returns None for an empty expression, a missing ``=`` or an empty field.
    """
    if not expr:
        return None

    field_name, sep, raw_value = expr.partition("=")
    if not sep:
        return None

    field_name = field_name.strip()
    if not field_name:
        return None

    return Rule(
        effect=effect,
        condition=Condition(
            scope="#/properties/" + field_name,
            schema={"const": parse_condition_value(raw_value.strip())},
        ),
    )


def parse_form_rule_expression(expr: str, effect: str) -> Rule | None:
    """Parse a form-tag ``field:value`` expression."""
    return parse_rule_expression(expr.replace(":", "=", 1), effect)


def select_rule(
    source: Any,
    parse: Callable[[str, str], Rule | None] = parse_rule_expression,
) -> Rule | None:
    """Return the rule for the first populated expression on ``source``.

    ``source`` is any object exposing ``visible_if``/``hide_if``/``enable_if``/
    ``disable_if`` string attributes. A populated but malformed expression
    still wins the priority slot and yields None.
    """
    for attr, effect in RULE_PRIORITY:
        expr = getattr(source, attr, "")
        if expr:
            return parse(expr, effect)
    return None
