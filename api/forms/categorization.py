"""Tab categorization of the root element list.

When any root element carries a category hint, every root element is
distributed into Category tabs (uncategorized ones into "Other") under a
single Categorization layout. Tabs keep the order in which their names were
first seen; "Other" is not moved to the end.
"""
from __future__ import annotations

from .elements import (
    UISchemaElement,
    new_categorization,
    new_category,
    new_vertical_layout,
)
from .grouping import group_horizontal
from .i18n import translate_label
from .options import Options

OTHER_CATEGORY = "Other"


def has_categorized_elements(elements: list[UISchemaElement]) -> bool:
    return any(el.hints is not None and el.hints.has_category() for el in elements)


def _lift_rule(category: UISchemaElement, members: list[UISchemaElement]) -> None:
    for member in members:
        if member.hints is not None and member.hints.category_rule is not None:
            category.rule = member.hints.category_rule
            member.hints.category_rule = None
            return


def _lift_i18n(
    category: UISchemaElement, members: list[UISchemaElement], opts: Options | None
) -> None:
    for member in members:
        if member.hints is not None and member.hints.category_i18n:
            category.i18n = member.hints.category_i18n
            category.label = translate_label(category.label, category.i18n, opts)
            member.hints.category_i18n = ""
            return


def categorize(
    siblings: list[UISchemaElement], opts: Options | None = None
) -> UISchemaElement:
    """Wrap the root list into a Categorization, or a VerticalLayout if uncategorized."""
    if not has_categorized_elements(siblings):
        return new_vertical_layout(siblings)

    buckets: dict[str, list[UISchemaElement]] = {}
    for el in siblings:
        name = OTHER_CATEGORY
        if el.hints is not None and el.hints.category:
            name = el.hints.category
            el.hints.category = ""
        buckets.setdefault(name, []).append(el)

    categorization = new_categorization()
    for name, members in buckets.items():
        category = new_category(name)
        category.elements = group_horizontal(members)
        _lift_rule(category, members)
        _lift_i18n(category, members, opts)
        for member in members:
            if member.hints is not None:
                member.hints.clear_category()
                member.drop_empty_hints()
        categorization.elements.append(category)

    return categorization
