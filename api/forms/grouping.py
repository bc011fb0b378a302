"""Horizontal grouping of sibling elements.

Elements flagged ``layout=horizontal`` are merged side by side:

* unnamed members merge with their horizontal neighbours only;
* named members (``layoutGroup=<name>``) merge wherever they sit in the list,
  and the whole group is emitted at the position of its first member.

A unit with a single member is emitted as-is; two or more are wrapped in a
HorizontalLayout. The pass works on one sibling list and never looks across
list boundaries.
"""
from __future__ import annotations

from .elements import UISchemaElement, new_horizontal_layout


def _is_horizontal(el: UISchemaElement) -> bool:
    return el.hints is not None and el.hints.horizontal


def _group_name(el: UISchemaElement) -> str:
    return el.hints.layout_group if el.hints is not None else ""


def _hoist_category(wrapper: UISchemaElement, members: list[UISchemaElement]) -> None:
    """Move member category hints onto the wrapper; the first of each wins."""
    for member in members:
        if member.hints is None:
            continue
        if member.hints.category or member.hints.category_rule or member.hints.category_i18n:
            hints = wrapper.ensure_hints()
            if not hints.category:
                hints.category = member.hints.category
            if hints.category_rule is None:
                hints.category_rule = member.hints.category_rule
            if not hints.category_i18n:
                hints.category_i18n = member.hints.category_i18n
            member.hints.clear_category()
            member.drop_empty_hints()


def _flush(members: list[UISchemaElement]) -> UISchemaElement | None:
    if not members:
        return None

    for member in members:
        member.hints.clear_layout()
        member.drop_empty_hints()

    if len(members) == 1:
        return members[0]

    wrapper = new_horizontal_layout(members)
    _hoist_category(wrapper, members)
    return wrapper


def group_horizontal(siblings: list[UISchemaElement]) -> list[UISchemaElement]:
    """Merge horizontally flagged siblings into HorizontalLayout containers."""
    # Classify up front: flushing a named bucket clears its members' hints
    # before the walk reaches the later members.
    classified: list[tuple[UISchemaElement, bool, str]] = []
    named: dict[str, list[UISchemaElement]] = {}
    for el in siblings:
        horizontal = _is_horizontal(el)
        name = _group_name(el) if horizontal else ""
        classified.append((el, horizontal, name))
        if name:
            named.setdefault(name, []).append(el)

    if not any(horizontal for _, horizontal, _ in classified):
        return list(siblings)

    result: list[UISchemaElement] = []
    pending: list[UISchemaElement] = []
    emitted: set[str] = set()

    def flush_pending() -> None:
        unit = _flush(pending)
        if unit is not None:
            result.append(unit)
        pending.clear()

    for el, horizontal, name in classified:
        if not horizontal:
            flush_pending()
            result.append(el)
            continue

        if not name:
            pending.append(el)
            continue

        flush_pending()
        if name in emitted:
            continue
        emitted.add(name)
        result.append(_flush(named[name]))

    flush_pending()
    return result
