"""Schemas for a named component of an OpenAPI 3.x document.

Properties may carry UI metadata through ``x-`` extensions, which are read as
field tags: ``x-form: "category=Billing;layout=horizontal"``, ``x-i18n``,
``x-renderer``, ``x-visibleIf``...
"""
from __future__ import annotations

import json
from typing import Any

from forms.builder import synthesize
from forms.elements import UISchemaElement
from forms.json_schema import JSONSchema, build_json_schema
from forms.options import Options, default_options

from . import fields as ft
from .errors import InvalidOpenAPIError, SchemaNotFoundError
from .fields import FieldDescriptor, FieldType

REF_PREFIX = "#/components/schemas/"

# OpenAPI keywords copied onto field tags
_TAG_KEYWORDS = {
    "default": "default",
    "enum": "enum",
    "format": "format",
    "description": "description",
    "title": "title",
    "minLength": "minLength",
    "maxLength": "maxLength",
    "minimum": "minimum",
    "maximum": "maximum",
    "pattern": "pattern",
}


def generate_from_openapi(
    data: str | bytes | dict, schema_name: str, opts: Options | None = None
) -> tuple[JSONSchema, UISchemaElement]:
    """Generate both schemas for ``components.schemas[schema_name]``.

    Raises:
        InvalidOpenAPIError: not JSON, no ``components.schemas``, or a
            malformed schema (non-object ``properties``, non-list ``required``).
        SchemaNotFoundError: ``schema_name`` is not a component.
    """
    opts = opts or default_options()
    doc = _load(data)

    components = doc.get("components")
    schemas = components.get("schemas") if isinstance(components, dict) else None
    if not isinstance(schemas, dict) or not schemas:
        raise InvalidOpenAPIError("no components.schemas found")

    if schema_name not in schemas:
        raise SchemaNotFoundError(schema_name)

    target = schemas[schema_name]
    if not isinstance(target, dict):
        raise InvalidOpenAPIError(f"cannot parse schema {schema_name!r}")

    resolved = _resolve(target, schemas, (schema_name,))
    if resolved is None:
        resolved = {}

    fields = describe_schema(resolved, schemas, stack=(schema_name,))
    json_schema = build_json_schema(fields, opts)
    if resolved.get("title"):
        json_schema.title = str(resolved["title"])
    if resolved.get("description"):
        json_schema.description = str(resolved["description"])
    return json_schema, synthesize(fields, opts)


def _load(data: str | bytes | dict) -> dict:
    if isinstance(data, dict):
        return data
    if not isinstance(data, (str, bytes, bytearray)):
        raise InvalidOpenAPIError("document must be an object")
    try:
        doc = json.loads(data)
    except ValueError as e:
        raise InvalidOpenAPIError(str(e)) from e
    if not isinstance(doc, dict):
        raise InvalidOpenAPIError("document must be an object")
    return doc


def resolve_ref(ref: str, schemas: dict) -> dict | None:
    """Resolve ``#/components/schemas/Name``; None when unknown."""
    if not ref.startswith(REF_PREFIX) or len(ref) <= len(REF_PREFIX):
        return None
    target = schemas.get(ref[len(REF_PREFIX):])
    return target if isinstance(target, dict) else None


def _ref_name(ref: str) -> str:
    return ref[len(REF_PREFIX):] if ref.startswith(REF_PREFIX) else ref


def _resolve(node: dict, schemas: dict, stack: tuple) -> dict | None:
    """Follow ``$ref`` chains. None on an unknown ref or a cycle."""
    seen = set(stack)
    while "$ref" in node:
        ref = str(node["$ref"])
        name = _ref_name(ref)
        target = resolve_ref(ref, schemas)
        if target is None or name in seen:
            return None
        seen.add(name)
        node = target
    return node


def describe_schema(node: dict, schemas: dict, stack: tuple = ()) -> list[FieldDescriptor]:
    """Describe the properties of an object schema, in document order."""
    properties = node.get("properties") or {}
    if not isinstance(properties, dict):
        raise InvalidOpenAPIError("properties must be an object")
    required = _required_names(node)

    result: list[FieldDescriptor] = []
    for name, prop in properties.items():
        if not isinstance(prop, dict):
            continue
        child_stack = stack
        if "$ref" in prop:
            child_stack = stack + (_ref_name(str(prop["$ref"])),)
        resolved = _resolve(prop, schemas, stack)

        tags = _tags_for(prop, resolved or {})
        if name in required:
            tags["required"] = "true"

        result.append(
            FieldDescriptor(name=str(name), type=_field_type(resolved, schemas, child_stack), tags=tags)
        )
    return result


def _required_names(node: dict) -> set[str]:
    required = node.get("required")
    if required is None:
        return set()
    if not isinstance(required, list) or not all(isinstance(n, str) for n in required):
        raise InvalidOpenAPIError("required must be an array of property names")
    return set(required)


def _tags_for(prop: dict, resolved: dict) -> dict[str, Any]:
    tags: dict[str, Any] = {}
    # Keywords next to a $ref override the referenced schema's
    for source in (resolved, prop):
        for keyword, tag in _TAG_KEYWORDS.items():
            if keyword in source:
                tags[tag] = source[keyword]
        for key, value in source.items():
            if key.startswith("x-") and len(key) > 2:
                tags[key[2:]] = value
    return tags


def _field_type(node: dict | None, schemas: dict, stack: tuple) -> FieldType:
    if node is None:
        # unknown or cyclic $ref
        return FieldType(ft.MAP, string_keys=False)

    kind = node.get("type")
    fmt = str(node.get("format") or "")

    if kind == "object" or (kind is None and "properties" in node):
        if node.get("properties"):
            return FieldType(ft.RECORD, fields=describe_schema(node, schemas, stack))
        additional = node.get("additionalProperties")
        if additional is not None and not isinstance(additional, (dict, bool)):
            raise InvalidOpenAPIError("additionalProperties must be an object or a boolean")
        if isinstance(additional, dict):
            value_stack = stack
            if "$ref" in additional:
                value_stack = stack + (_ref_name(str(additional["$ref"])),)
            return FieldType(
                ft.MAP,
                items=_field_type(_resolve(additional, schemas, stack), schemas, value_stack),
            )
        return FieldType(ft.MAP, string_keys=False)

    if kind == "array":
        items = node.get("items")
        if items is None:
            return FieldType(ft.ARRAY, items=FieldType(ft.ANY))
        if not isinstance(items, dict):
            raise InvalidOpenAPIError("items must be an object")
        item_stack = stack
        if "$ref" in items:
            item_stack = stack + (_ref_name(str(items["$ref"])),)
        return FieldType(ft.ARRAY, items=_field_type(_resolve(items, schemas, stack), schemas, item_stack))

    if kind in (ft.STRING, ft.BOOLEAN, ft.INTEGER, ft.NUMBER, ft.NULL):
        return FieldType(kind, format=fmt)

    return FieldType(ft.ANY)
