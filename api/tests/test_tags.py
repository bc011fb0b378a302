"""Tests for field tag and form tag decoding."""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from forms.options import AccessLevel, Options
from forms.tags import (
    LayoutMode,
    decode_field_metadata,
    parse_default_value,
    parse_enum_values,
    parse_field_tags,
    parse_form_tag,
)
from sources import fields as ft
from sources.fields import FieldDescriptor, FieldType


def _desc(name="field", kind=ft.STRING, **tags):
    return FieldDescriptor(name=name, type=FieldType(kind), tags=tags)


# ---------------------------------------------------------------------------
# Form tag
# ---------------------------------------------------------------------------

def test_empty_form_tag():
    opts = parse_form_tag("")
    assert opts.label == ""
    assert not opts.hidden


def test_form_tag_flags_and_values():
    opts = parse_form_tag("label=Full name;multiline;readonly;category=Personal")
    assert opts.label == "Full name"
    assert opts.multiline
    assert opts.readonly
    assert opts.category == "Personal"
    assert not opts.hidden


def test_form_tag_hidden():
    assert parse_form_tag("hidden").hidden


def test_form_tag_ignores_blank_parts_and_unknown_keys():
    opts = parse_form_tag(" ; label = Name ;; color=red; category")
    assert opts.label == "Name"
    assert opts.category == ""


def test_form_tag_layout_and_group():
    opts = parse_form_tag("layout=horizontal;layoutGroup=place")
    assert opts.layout == "horizontal"
    assert opts.layout_group == "place"


def test_form_tag_category_rule_and_i18n():
    opts = parse_form_tag("category=Billing;visibleIf=plan:pro;i18n=tabs.billing")
    assert opts.visible_if == "plan:pro"
    assert opts.i18n_key == "tabs.billing"


# ---------------------------------------------------------------------------
# Field tags
# ---------------------------------------------------------------------------

def test_parse_enum_values():
    assert parse_enum_values("a, b,,c ") == ["a", "b", "c"]
    assert parse_enum_values(["x", "y"]) == ["x", "y"]


def test_parse_default_value_coerces_by_kind():
    assert parse_default_value("true", "boolean") is True
    assert parse_default_value("0", "boolean") is False
    assert parse_default_value("5", "integer") == 5
    assert parse_default_value("2.5", "number") == 2.5
    assert parse_default_value("abc", "integer") == "abc"
    assert parse_default_value("hello", "string") == "hello"
    assert parse_default_value(7, "integer") == 7


def test_parse_field_tags():
    tags = parse_field_tags(
        {
            "required": "true",
            "default": "3",
            "enum": "1,2,3",
            "minimum": "1",
            "maxLength": "10",
            "i18n": "order.qty",
            "visibleIf": "active=true",
            "renderer": "slider",
            "omitempty": "true",
        },
        kind="integer",
    )
    assert tags.required
    assert tags.default == 3
    assert tags.enum == ["1", "2", "3"]
    assert tags.minimum == 1.0
    assert tags.max_length == 10
    assert tags.i18n_key == "order.qty"
    assert tags.visible_if == "active=true"
    assert tags.renderer == "slider"
    assert tags.omitempty


def test_parse_field_tags_empty():
    tags = parse_field_tags({})
    assert not tags.required
    assert tags.default is None
    assert tags.enum is None
    assert tags.min_length is None


def test_unparseable_bounds_are_dropped():
    tags = parse_field_tags({"minLength": "lots", "maximum": "big"})
    assert tags.min_length is None
    assert tags.maximum is None


# ---------------------------------------------------------------------------
# decode_field_metadata
# ---------------------------------------------------------------------------

def test_decode_plain_field():
    meta = decode_field_metadata(_desc())
    assert meta.layout == LayoutMode.NONE
    assert meta.rule is None
    assert meta.access == AccessLevel.FULL
    assert not meta.is_hidden
    assert not meta.is_readonly


def test_decode_horizontal_layout():
    meta = decode_field_metadata(_desc(form="layout=horizontal"))
    assert meta.layout == LayoutMode.HORIZONTAL
    assert meta.layout_group == ""


def test_layout_group_implies_horizontal():
    meta = decode_field_metadata(_desc(form="layoutGroup=place"))
    assert meta.layout == LayoutMode.HORIZONTAL
    assert meta.layout_group == "place"


def test_decode_field_rule_and_category_rule():
    meta = decode_field_metadata(
        _desc(hideIf="archived=true", form="category=Billing;enableIf=plan:pro;i18n=tabs.billing")
    )
    assert meta.rule.effect == "HIDE"
    assert meta.rule.condition.scope == "#/properties/archived"
    assert meta.category == "Billing"
    assert meta.category_rule.effect == "ENABLE"
    assert meta.category_rule.condition.schema == {"const": "pro"}
    assert meta.category_i18n == "tabs.billing"


def test_decode_role_access():
    opts = Options(
        role="viewer",
        role_permissions={"viewer": {"salary": AccessLevel.HIDDEN, "*": AccessLevel.READ_ONLY}},
    )
    assert decode_field_metadata(_desc("salary"), opts).is_hidden
    name_meta = decode_field_metadata(_desc("name"), opts)
    assert name_meta.is_readonly
    assert not name_meta.is_hidden


def test_form_flags_win_without_role():
    meta = decode_field_metadata(_desc(form="hidden;readonly"))
    assert meta.is_hidden
    assert meta.is_readonly
