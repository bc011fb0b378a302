"""UI schema elements: the JSON Forms presentation tree.

A single dataclass covers both halves of the tree: Controls (which point at a
data property through ``scope``) and layouts (VerticalLayout, HorizontalLayout,
Group, Categorization, Category) which hold ordered ``elements``.

Usage:
    from forms.elements import new_control, new_vertical_layout

    root = new_vertical_layout()
    root.elements.append(new_control("#/properties/name"))
    payload = root.to_dict()
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Element types
VERTICAL_LAYOUT = "VerticalLayout"
HORIZONTAL_LAYOUT = "HorizontalLayout"
GROUP = "Group"
CATEGORIZATION = "Categorization"
CATEGORY = "Category"
CONTROL = "Control"

# Rule effects
EFFECT_SHOW = "SHOW"
EFFECT_HIDE = "HIDE"
EFFECT_ENABLE = "ENABLE"
EFFECT_DISABLE = "DISABLE"


@dataclass
class Condition:
    scope: str
    schema: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"scope": self.scope, "schema": dict(self.schema)}


@dataclass
class Rule:
    """Conditional visibility/enablement rule attached to an element."""

    effect: str
    condition: Condition

    def to_dict(self) -> dict:
        return {"effect": self.effect, "condition": self.condition.to_dict()}


@dataclass
class LayoutHints:
    """Construction-time bookkeeping for the grouping and categorization passes.

    Never serialized. Each pass clears the fields it consumes.
    """

    category: str = ""
    category_rule: Rule | None = None
    category_i18n: str = ""
    horizontal: bool = False
    layout_group: str = ""

    def has_category(self) -> bool:
        return bool(self.category)

    def clear_layout(self) -> None:
        self.horizontal = False
        self.layout_group = ""

    def clear_category(self) -> None:
        self.category = ""
        self.category_rule = None
        self.category_i18n = ""

    def is_empty(self) -> bool:
        return not (
            self.category
            or self.category_rule
            or self.category_i18n
            or self.horizontal
            or self.layout_group
        )


@dataclass(eq=False)
class UISchemaElement:
    type: str
    label: str = ""
    i18n: str = ""
    scope: str = ""
    elements: list[UISchemaElement] | None = None
    options: dict[str, Any] | None = None
    rule: Rule | None = None
    hints: LayoutHints | None = field(default=None, repr=False)

    def set_option(self, key: str, value: Any) -> None:
        if self.options is None:
            self.options = {}
        self.options[key] = value

    def ensure_hints(self) -> LayoutHints:
        if self.hints is None:
            self.hints = LayoutHints()
        return self.hints

    def drop_empty_hints(self) -> None:
        if self.hints is not None and self.hints.is_empty():
            self.hints = None

    def to_dict(self) -> dict:
        """Serialize to the JSON Forms shape, omitting empty values."""
        out: dict = {"type": self.type}
        if self.label:
            out["label"] = self.label
        if self.i18n:
            out["i18n"] = self.i18n
        if self.scope:
            out["scope"] = self.scope
        if self.elements:
            out["elements"] = [el.to_dict() for el in self.elements]
        if self.options:
            out["options"] = {k: _serialize(v) for k, v in self.options.items()}
        if self.rule is not None:
            out["rule"] = self.rule.to_dict()
        return out


def _serialize(value: Any) -> Any:
    if isinstance(value, UISchemaElement):
        return value.to_dict()
    return value


# ── Factories ────────────────────────────────────────────────────────────────

def new_vertical_layout(elements: list[UISchemaElement] | None = None) -> UISchemaElement:
    return UISchemaElement(type=VERTICAL_LAYOUT, elements=list(elements or []))


def new_horizontal_layout(elements: list[UISchemaElement] | None = None) -> UISchemaElement:
    return UISchemaElement(type=HORIZONTAL_LAYOUT, elements=list(elements or []))


def new_group(label: str) -> UISchemaElement:
    return UISchemaElement(type=GROUP, label=label, elements=[])


def new_categorization() -> UISchemaElement:
    """Top-level layout whose Category children render as tabs."""
    return UISchemaElement(type=CATEGORIZATION, elements=[])


def new_category(label: str) -> UISchemaElement:
    return UISchemaElement(type=CATEGORY, label=label, elements=[])


def new_control(scope: str) -> UISchemaElement:
    return UISchemaElement(type=CONTROL, scope=scope)
