"""Tests for rule expression parsing and priority selection."""
import json
import os
import sys
from types import SimpleNamespace

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from forms.rules import (
    parse_condition_value,
    parse_form_rule_expression,
    parse_rule_expression,
    select_rule,
)


# ---------------------------------------------------------------------------
# Condition literal coercion
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("raw", ["true", "True", "TRUE", "t", "1"])
def test_true_literals(raw):
    assert parse_condition_value(raw) is True


@pytest.mark.parametrize("raw", ["false", "False", "f", "0"])
def test_false_literals(raw):
    assert parse_condition_value(raw) is False


def test_integer_literal():
    assert parse_condition_value("42") == 42
    assert isinstance(parse_condition_value("-7"), int)


def test_float_literal():
    assert parse_condition_value("3.14") == pytest.approx(3.14)
    assert parse_condition_value("1e3") == 1000.0


def test_integer_beyond_int64_becomes_float():
    value = parse_condition_value("9223372036854775808")
    assert isinstance(value, float)


def test_string_literal():
    assert parse_condition_value("premium") == "premium"
    assert parse_condition_value("yes") == "yes"


def test_underscored_number_stays_string():
    assert parse_condition_value("1_000") == "1_000"


def test_float_overflow_stays_string():
    assert parse_condition_value("1e400") == "1e400"


@pytest.mark.parametrize("raw", ["nan", "NaN", "inf", "-Infinity", "0x1p99999"])
def test_non_finite_literals_stay_strings(raw):
    assert parse_condition_value(raw) == raw


def test_hex_float_literal():
    assert parse_condition_value("0x1p4") == 16.0
    assert parse_condition_value("-0x1.8p1") == -3.0


@pytest.mark.parametrize("raw", ["１２", "1.5\n", "٣.٥", " 2.5"])
def test_non_ascii_or_padded_numbers_stay_strings(raw):
    assert parse_condition_value(raw) == raw


def test_non_finite_literal_serializes_as_json():
    rule = parse_rule_expression("a=nan", "SHOW")
    assert json.loads(json.dumps(rule.to_dict(), allow_nan=False))["condition"]["schema"] == {"const": "nan"}


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

def test_parse_rule_expression():
    rule = parse_rule_expression("active=true", "SHOW")
    assert rule.effect == "SHOW"
    assert rule.condition.scope == "#/properties/active"
    assert rule.condition.schema == {"const": True}


def test_parse_rule_expression_trims_whitespace():
    rule = parse_rule_expression(" count = 3 ", "HIDE")
    assert rule.condition.scope == "#/properties/count"
    assert rule.condition.schema["const"] == 3


def test_value_may_contain_separator():
    rule = parse_rule_expression("expr=a=b", "SHOW")
    assert rule.condition.schema["const"] == "a=b"


@pytest.mark.parametrize("expr", ["", "active", "=true", "  =x"])
def test_malformed_expressions_yield_no_rule(expr):
    assert parse_rule_expression(expr, "SHOW") is None


def test_form_rule_uses_colon():
    rule = parse_form_rule_expression("plan:pro", "ENABLE")
    assert rule.effect == "ENABLE"
    assert rule.condition.scope == "#/properties/plan"
    assert rule.condition.schema["const"] == "pro"


def test_form_rule_only_first_colon_is_separator():
    rule = parse_form_rule_expression("time:12:30", "SHOW")
    assert rule.condition.scope == "#/properties/time"
    assert rule.condition.schema["const"] == "12:30"


def test_rule_to_dict():
    rule = parse_rule_expression("age=18", "DISABLE")
    assert rule.to_dict() == {
        "effect": "DISABLE",
        "condition": {"scope": "#/properties/age", "schema": {"const": 18}},
    }


# ---------------------------------------------------------------------------
# Priority
# ---------------------------------------------------------------------------

def _source(**kw):
    base = {"visible_if": "", "hide_if": "", "enable_if": "", "disable_if": ""}
    base.update(kw)
    return SimpleNamespace(**base)


def test_no_expression_no_rule():
    assert select_rule(_source()) is None


def test_show_beats_everything():
    rule = select_rule(_source(visible_if="a=1", hide_if="b=1", enable_if="c=1", disable_if="d=1"))
    assert rule.effect == "SHOW"
    assert rule.condition.scope == "#/properties/a"


def test_hide_beats_enable_and_disable():
    rule = select_rule(_source(hide_if="b=1", enable_if="c=1", disable_if="d=1"))
    assert rule.effect == "HIDE"


def test_enable_beats_disable():
    assert select_rule(_source(enable_if="c=1", disable_if="d=1")).effect == "ENABLE"


def test_disable_alone():
    assert select_rule(_source(disable_if="d=1")).effect == "DISABLE"


def test_malformed_winner_blocks_lower_priority():
    assert select_rule(_source(visible_if="broken", hide_if="b=1")) is None


def test_select_rule_with_form_parser():
    rule = select_rule(_source(hide_if="status:closed"), parse_form_rule_expression)
    assert rule.effect == "HIDE"
    assert rule.condition.schema == {"const": "closed"}
