"""UI schema synthesis from a typed record description.

    fields ──► build_elements ──► group_horizontal ──► categorize ──► root

``build_elements`` walks the ordered fields and recurses into nested records
(Group) and arrays of records (Control with an item ``detail`` layout). Every
nested list is grouped before it is attached; the root list is grouped and
then categorized once.
"""
from __future__ import annotations

import logging

from sources.fields import FieldDescriptor

from .categorization import categorize
from .elements import (
    UISchemaElement,
    new_control,
    new_group,
    new_vertical_layout,
)
from .grouping import group_horizontal
from .i18n import translate_label
from .options import Options
from .tags import FieldMetadata, LayoutMode, decode_field_metadata

logger = logging.getLogger(__name__)

ROOT_PATH = "#/properties"


def synthesize(fields: list[FieldDescriptor], opts: Options | None = None) -> UISchemaElement:
    """Build the full UI schema tree for a record.

    The root is a VerticalLayout, or a Categorization when any root field
    declares a category.
    """
    elements = group_horizontal(build_elements(fields, ROOT_PATH, opts))
    root = categorize(elements, opts)
    logger.debug("Synthesized %s with %d root elements", root.type, len(root.elements or []))
    return root


def build_elements(
    fields: list[FieldDescriptor], base_path: str, opts: Options | None = None
) -> list[UISchemaElement]:
    """Build one flat, ordered element per visible field."""
    elements: list[UISchemaElement] = []
    for desc in fields:
        meta = decode_field_metadata(desc, opts)
        if meta.is_hidden:
            continue

        scope = f"{base_path}/{desc.name}"
        if desc.type.is_record:
            elements.append(_build_group(desc, meta, scope, opts))
        else:
            elements.append(_build_control(desc, meta, scope, opts))
    return elements


def _build_nested(fields: list[FieldDescriptor], base_path: str, opts: Options | None) -> list[UISchemaElement]:
    """Build and group a nested level.

    Category hints below the root have no Categorization to land in and are
    dropped here.
    """
    children = group_horizontal(build_elements(fields, base_path, opts))
    for child in children:
        if child.hints is not None:
            child.hints.clear_category()
            child.drop_empty_hints()
    return children


def _build_group(
    desc: FieldDescriptor, meta: FieldMetadata, scope: str, opts: Options | None
) -> UISchemaElement:
    label = translate_label(meta.label or desc.name, meta.i18n_key, opts)
    group = new_group(label)
    if meta.i18n_key:
        group.i18n = meta.i18n_key
    group.elements = _build_nested(desc.type.fields, scope + "/properties", opts)
    group.rule = meta.rule
    _stash_category(group, meta)
    return group


def _build_control(
    desc: FieldDescriptor, meta: FieldMetadata, scope: str, opts: Options | None
) -> UISchemaElement:
    control = new_control(scope)

    label = translate_label(meta.label, meta.i18n_key, opts)
    if label:
        control.label = label
    if meta.i18n_key:
        control.i18n = meta.i18n_key

    if meta.is_readonly:
        control.set_option("readonly", True)
    if meta.multiline:
        control.set_option("multi", True)

    renderer = _resolve_renderer(scope, meta.renderer, opts)
    if renderer:
        control.set_option("renderer", renderer)

    element = desc.type.element_record()
    if element is not None:
        detail = _build_nested(element.fields, ROOT_PATH, opts)
        if detail:
            control.set_option("detail", new_vertical_layout(detail))

    control.rule = meta.rule
    _stash_category(control, meta)

    if meta.layout == LayoutMode.HORIZONTAL:
        hints = control.ensure_hints()
        hints.horizontal = True
        hints.layout_group = meta.layout_group

    return control


def _stash_category(el: UISchemaElement, meta: FieldMetadata) -> None:
    if not meta.category:
        return
    hints = el.ensure_hints()
    hints.category = meta.category
    hints.category_rule = meta.category_rule
    hints.category_i18n = meta.category_i18n


def _resolve_renderer(scope: str, tag_renderer: str, opts: Options | None) -> str:
    if tag_renderer:
        return tag_renderer
    if opts is not None and opts.renderers:
        return opts.renderers.get(scope, "")
    return ""
