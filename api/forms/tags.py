"""Field metadata decoding.

Fields carry raw string metadata, the Python counterpart of struct tags:

    name: str = field(metadata={
        "json": "name",
        "required": "true",
        "i18n": "user.name",
        "form": "label=Full name;category=Personal;layout=horizontal",
    })

``parse_field_tags`` reads the field-level keys, ``parse_form_tag`` splits the
``form`` value (``key=value;flag`` pairs), and ``decode_field_metadata``
combines both with the role permission table into one FieldMetadata record.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import rbac

from .elements import Rule
from .options import AccessLevel, Options
from .rules import parse_form_rule_expression, parse_rule_expression, select_rule

if TYPE_CHECKING:
    from sources.fields import FieldDescriptor

LAYOUT_HORIZONTAL = "horizontal"

_TRUE_LITERALS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_LITERALS = {"0", "f", "F", "FALSE", "false", "False"}


class LayoutMode(enum.Enum):
    NONE = "none"
    HORIZONTAL = "horizontal"


@dataclass
class FieldTags:
    """Field-level metadata (everything except the ``form`` sub-tags)."""

    required: bool = False
    default: Any = None
    enum: list | None = None
    format: str = ""
    form: str = ""
    i18n_key: str = ""
    visible_if: str = ""
    hide_if: str = ""
    enable_if: str = ""
    disable_if: str = ""
    renderer: str = ""
    description: str = ""
    title: str = ""
    min_length: int | None = None
    max_length: int | None = None
    minimum: float | None = None
    maximum: float | None = None
    pattern: str = ""
    omitempty: bool = False


@dataclass
class FormOptions:
    """Parsed ``form`` tag."""

    label: str = ""
    hidden: bool = False
    readonly: bool = False
    multiline: bool = False
    # Tab name inside a Categorization layout
    category: str = ""
    layout: str = ""
    layout_group: str = ""
    # Rules and i18n key for the owning Category, "field:value" syntax
    visible_if: str = ""
    hide_if: str = ""
    enable_if: str = ""
    disable_if: str = ""
    i18n_key: str = ""


@dataclass(frozen=True)
class FieldMetadata:
    label: str = ""
    hidden: bool = False
    readonly: bool = False
    multiline: bool = False
    category: str = ""
    layout: LayoutMode = LayoutMode.NONE
    layout_group: str = ""
    rule: Rule | None = None
    category_rule: Rule | None = None
    category_i18n: str = ""
    i18n_key: str = ""
    renderer: str = ""
    access: AccessLevel = AccessLevel.FULL

    @property
    def is_hidden(self) -> bool:
        return self.hidden or self.access == AccessLevel.HIDDEN

    @property
    def is_readonly(self) -> bool:
        return self.readonly or self.access == AccessLevel.READ_ONLY


def _str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return _str(value).lower() == "true"


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(_str(value))
    except ValueError:
        return None


def _parse_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(_str(value))
    except ValueError:
        return None


def parse_enum_values(value: Any) -> list:
    """Split ``"a, b,,c"`` into ``["a", "b", "c"]``; lists pass through."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [p.strip() for p in _str(value).split(",") if p.strip()]


def parse_default_value(value: Any, kind: str) -> Any:
    """Coerce a string default to the field's type, keeping the string on failure."""
    if not isinstance(value, str):
        return value

    if kind == "boolean":
        if value in _TRUE_LITERALS:
            return True
        if value in _FALSE_LITERALS:
            return False
        return value
    if kind == "integer":
        try:
            return int(value)
        except ValueError:
            return value
    if kind == "number":
        try:
            return float(value)
        except ValueError:
            return value
    return value


def parse_field_tags(tags: dict[str, Any], kind: str = "string") -> FieldTags:
    """Extract schema-relevant metadata from a field's raw tags."""
    ft = FieldTags()
    ft.required = _truthy(tags.get("required"))

    default = tags.get("default")
    if default is not None and default != "":
        ft.default = parse_default_value(default, kind)

    if tags.get("enum"):
        ft.enum = parse_enum_values(tags["enum"]) or None

    ft.format = _str(tags.get("format"))
    ft.form = _str(tags.get("form"))
    ft.i18n_key = _str(tags.get("i18n"))
    ft.renderer = _str(tags.get("renderer"))

    ft.visible_if = _str(tags.get("visibleIf"))
    ft.hide_if = _str(tags.get("hideIf"))
    ft.enable_if = _str(tags.get("enableIf"))
    ft.disable_if = _str(tags.get("disableIf"))

    ft.description = _str(tags.get("description"))
    ft.title = _str(tags.get("title"))
    if tags.get("minLength") is not None:
        ft.min_length = _parse_int(tags["minLength"])
    if tags.get("maxLength") is not None:
        ft.max_length = _parse_int(tags["maxLength"])
    if tags.get("minimum") is not None:
        ft.minimum = _parse_float(tags["minimum"])
    if tags.get("maximum") is not None:
        ft.maximum = _parse_float(tags["maximum"])
    ft.pattern = _str(tags.get("pattern"))
    ft.omitempty = _truthy(tags.get("omitempty"))
    return ft


def parse_form_tag(tag: str) -> FormOptions:
    """Parse a form tag value like ``"label=Full name;multiline;readonly"``."""
    opts = FormOptions()
    if not tag:
        return opts

    for part in tag.split(";"):
        part = part.strip()
        if not part:
            continue

        key, sep, value = part.partition("=")
        key = key.strip()
        value = value.strip()
        has_value = bool(sep)

        if key == "hidden":
            opts.hidden = True
        elif key == "readonly":
            opts.readonly = True
        elif key == "multiline":
            opts.multiline = True
        elif not has_value:
            continue
        elif key == "label":
            opts.label = value
        elif key == "category":
            opts.category = value
        elif key == "layout":
            opts.layout = value
        elif key == "layoutGroup":
            opts.layout_group = value
        elif key == "i18n":
            opts.i18n_key = value
        elif key == "visibleIf":
            opts.visible_if = value
        elif key == "hideIf":
            opts.hide_if = value
        elif key == "enableIf":
            opts.enable_if = value
        elif key == "disableIf":
            opts.disable_if = value

    return opts


def _layout_mode(form: FormOptions) -> LayoutMode:
    if form.layout_group or form.layout.lower() == LAYOUT_HORIZONTAL:
        return LayoutMode.HORIZONTAL
    return LayoutMode.NONE


def decode_field_metadata(
    descriptor: FieldDescriptor, opts: Options | None = None
) -> FieldMetadata:
    """Decode everything the UI builder needs to know about one field."""
    tags = parse_field_tags(descriptor.tags, descriptor.type.kind)
    form = parse_form_tag(tags.form)

    access = AccessLevel.FULL
    if opts is not None:
        access = rbac.resolve_access(descriptor.name, opts.role, opts.role_permissions)

    return FieldMetadata(
        label=form.label,
        hidden=form.hidden,
        readonly=form.readonly,
        multiline=form.multiline,
        category=form.category,
        layout=_layout_mode(form),
        layout_group=form.layout_group,
        rule=select_rule(tags, parse_rule_expression),
        category_rule=select_rule(form, parse_form_rule_expression),
        category_i18n=form.i18n_key,
        i18n_key=tags.i18n_key,
        renderer=tags.renderer,
        access=access,
    )
