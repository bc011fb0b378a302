"""JSON Schema (draft-07 / 2019-09) model and generation from field descriptors."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sources import fields as ft
from sources.fields import FieldDescriptor, FieldType

from .options import Options
from .tags import FieldTags, parse_field_tags

_UNSET = object()


@dataclass(eq=False)
class JSONSchema:
    schema: str = ""
    type: str = ""
    properties: dict[str, JSONSchema] | None = None
    items: JSONSchema | None = None
    additional_properties: JSONSchema | None = None
    required: list[str] = field(default_factory=list)
    format: str = ""
    default: Any = None
    enum: list | None = None
    description: str = ""
    title: str = ""
    const: Any = _UNSET
    min_length: int | None = None
    max_length: int | None = None
    minimum: float | None = None
    maximum: float | None = None
    pattern: str = ""

    def to_dict(self) -> dict:
        """Serialize with JSON Schema keyword names, omitting unset values."""
        out: dict = {}
        if self.schema:
            out["$schema"] = self.schema
        if self.type:
            out["type"] = self.type
        if self.title:
            out["title"] = self.title
        if self.description:
            out["description"] = self.description
        if self.properties:
            out["properties"] = {k: v.to_dict() for k, v in self.properties.items()}
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.additional_properties is not None:
            out["additionalProperties"] = self.additional_properties.to_dict()
        if self.required:
            out["required"] = list(self.required)
        if self.format:
            out["format"] = self.format
        if self.default is not None:
            out["default"] = self.default
        if self.enum:
            out["enum"] = list(self.enum)
        if self.const is not _UNSET:
            out["const"] = self.const
        if self.min_length is not None:
            out["minLength"] = self.min_length
        if self.max_length is not None:
            out["maxLength"] = self.max_length
        if self.minimum is not None:
            out["minimum"] = self.minimum
        if self.maximum is not None:
            out["maximum"] = self.maximum
        if self.pattern:
            out["pattern"] = self.pattern
        return out


def new_json_schema(opts: Options | None = None) -> JSONSchema:
    """Root object schema with ``$schema`` set for the configured draft."""
    url = opts.draft_url() if opts is not None else Options().draft_url()
    return JSONSchema(schema=url, type="object", properties={})


def build_json_schema(fields: list[FieldDescriptor], opts: Options | None = None) -> JSONSchema:
    root = new_json_schema(opts)
    _populate_properties(root, fields)
    return root


def _populate_properties(obj: JSONSchema, fields: list[FieldDescriptor]) -> None:
    if obj.properties is None:
        obj.properties = {}
    for desc in fields:
        prop = type_to_schema(desc.type)
        tags = parse_field_tags(desc.tags, desc.type.kind)
        apply_tags(prop, tags)
        if tags.required:
            obj.required.append(desc.name)
        obj.properties[desc.name] = prop


def type_to_schema(t: FieldType) -> JSONSchema:
    if t.kind == ft.TIMESTAMP:
        return JSONSchema(type="string", format=t.format or "date-time")
    if t.kind in (ft.STRING, ft.BOOLEAN, ft.INTEGER, ft.NUMBER, ft.NULL):
        return JSONSchema(type=t.kind, format=t.format)
    if t.kind == ft.ARRAY:
        items = type_to_schema(t.items) if t.items is not None else JSONSchema()
        return JSONSchema(type="array", items=items)
    if t.kind == ft.MAP:
        if not t.string_keys:
            return JSONSchema(type="object")
        additional = type_to_schema(t.items) if t.items is not None else None
        return JSONSchema(type="object", additional_properties=additional)
    if t.kind == ft.RECORD:
        obj = JSONSchema(type="object", properties={})
        _populate_properties(obj, t.fields)
        return obj
    if t.kind == ft.ANY:
        return JSONSchema()
    return JSONSchema(type="string")


def apply_tags(prop: JSONSchema, tags: FieldTags) -> None:
    """Apply schema-relevant tag values to a property."""
    if tags.default is not None:
        prop.default = tags.default
    if tags.enum:
        prop.enum = tags.enum
    if tags.format:
        prop.format = tags.format
    if tags.description:
        prop.description = tags.description
    if tags.title:
        prop.title = tags.title
    if tags.min_length is not None:
        prop.min_length = tags.min_length
    if tags.max_length is not None:
        prop.max_length = tags.max_length
    if tags.minimum is not None:
        prop.minimum = tags.minimum
    if tags.maximum is not None:
        prop.maximum = tags.maximum
    if tags.pattern:
        prop.pattern = tags.pattern
