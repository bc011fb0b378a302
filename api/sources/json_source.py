"""Schemas inferred from a raw JSON object.

Every property is optional (no ``required``). Nested objects become Groups,
arrays take their item type from the first element.
"""
from __future__ import annotations

import json
from typing import Any

from forms.builder import synthesize
from forms.elements import UISchemaElement
from forms.json_schema import JSONSchema, build_json_schema
from forms.options import Options, default_options

from . import fields as ft
from .errors import InvalidJSONError, NotJSONObjectError
from .fields import FieldDescriptor, FieldType


def generate_from_json(
    data: str | bytes | dict, opts: Options | None = None
) -> tuple[JSONSchema, UISchemaElement]:
    """Generate both schemas from JSON text (or an already decoded object).

    Raises:
        InvalidJSONError: ``data`` is not valid JSON.
        NotJSONObjectError: the top-level value is not an object.
    """
    opts = opts or default_options()

    if isinstance(data, (str, bytes, bytearray)):
        try:
            raw = json.loads(data)
        except ValueError as e:
            raise InvalidJSONError(str(e)) from e
    else:
        raw = data

    if not isinstance(raw, dict):
        raise NotJSONObjectError()

    fields = describe_object(raw)
    return build_json_schema(fields, opts), synthesize(fields, opts)


def describe_object(obj: dict) -> list[FieldDescriptor]:
    return [
        FieldDescriptor(name=str(key), type=infer_type(val))
        for key, val in obj.items()
    ]


def infer_type(val: Any) -> FieldType:
    """Infer a field type from an arbitrary JSON value."""
    if val is None:
        return FieldType(ft.NULL)
    if isinstance(val, bool):
        return FieldType(ft.BOOLEAN)
    if isinstance(val, int):
        return FieldType(ft.INTEGER)
    if isinstance(val, float):
        if val.is_integer():
            return FieldType(ft.INTEGER)
        return FieldType(ft.NUMBER)
    if isinstance(val, str):
        return FieldType(ft.STRING)
    if isinstance(val, list):
        if not val:
            return FieldType(ft.ARRAY, items=FieldType(ft.ANY))
        return FieldType(ft.ARRAY, items=infer_type(val[0]))
    if isinstance(val, dict):
        return FieldType(ft.RECORD, fields=describe_object(val))
    return FieldType(ft.STRING)
