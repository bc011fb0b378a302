"""Dataclass records → field descriptors → JSON Schema + UI schema.

Dataclasses are the typed records. Field metadata plays the role of tags:

    @dataclass
    class Address:
        city: str = field(default="", metadata={"form": "layoutGroup=place"})
        zip: str = field(default="", metadata={"json": "zip_code", "form": "layoutGroup=place"})

    @dataclass
    class Customer:
        name: str = field(metadata={"required": "true", "form": "category=Personal"})
        address: Address | None = None
        _cache: dict = field(default_factory=dict)   # skipped, private
"""
from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import types
import typing
from collections.abc import Mapping, Sequence, Set
from typing import Any

from forms.builder import synthesize
from forms.elements import UISchemaElement
from forms.json_schema import JSONSchema, build_json_schema
from forms.options import Options, default_options
from forms.tags import parse_field_tags

from . import fields as ft
from .errors import NotARecordError
from .fields import FieldDescriptor, FieldType

_NONE_TYPE = type(None)


def is_record(obj: Any) -> bool:
    return dataclasses.is_dataclass(obj)


def generate_json_schema(record: Any, opts: Options | None = None) -> JSONSchema:
    """Generate a JSON Schema from a dataclass type or instance."""
    opts = opts or default_options()
    return build_json_schema(describe_record(record, opts), opts)


def generate_ui_schema(record: Any, opts: Options | None = None) -> UISchemaElement:
    """Generate a JSON Forms UI schema from a dataclass type or instance."""
    opts = opts or default_options()
    return synthesize(describe_record(record, opts), opts)


def describe_record(record: Any, opts: Options | None = None) -> list[FieldDescriptor]:
    """Describe the fields of a dataclass type or instance, in declaration order.

    Raises:
        NotARecordError: ``record`` is not a dataclass.
    """
    if not is_record(record):
        raise NotARecordError(record)

    cls = record if isinstance(record, type) else type(record)
    instance = None if isinstance(record, type) else record
    return _describe(cls, instance, opts, stack=(cls,))


def _describe(cls: type, instance: Any, opts: Options | None, stack: tuple) -> list[FieldDescriptor]:
    hints = typing.get_type_hints(cls)
    omit_empty = opts is not None and opts.omit_empty

    result: list[FieldDescriptor] = []
    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue

        tags = dict(f.metadata)
        name = str(tags.get("json") or f.name)
        if name == "-":
            continue

        value = getattr(instance, f.name, None) if instance is not None else None
        if omit_empty and instance is not None and parse_field_tags(tags).omitempty:
            if _is_empty(value):
                continue

        field_type = _type_to_field_type(hints.get(f.name, Any), value, opts, stack)
        result.append(FieldDescriptor(name=name, type=field_type, tags=tags))
    return result


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if isinstance(value, (bool, int, float, decimal.Decimal)):
        return not value
    return False


def _unwrap_optional(tp: Any) -> Any:
    origin = typing.get_origin(tp)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(tp) if a is not _NONE_TYPE]
        if len(args) == 1:
            return args[0]
        return Any
    return tp


def _type_to_field_type(tp: Any, value: Any, opts: Options | None, stack: tuple) -> FieldType:
    tp = _unwrap_optional(tp)
    origin = typing.get_origin(tp) or tp
    args = typing.get_args(tp)

    if tp is Any:
        return FieldType(ft.ANY)

    if isinstance(origin, type):
        # datetime is a subclass of date, check it first
        if issubclass(origin, datetime.datetime):
            return FieldType(ft.TIMESTAMP, format="date-time")
        if issubclass(origin, datetime.date):
            return FieldType(ft.TIMESTAMP, format="date")
        if issubclass(origin, datetime.time):
            return FieldType(ft.TIMESTAMP, format="time")
        if issubclass(origin, bool):
            return FieldType(ft.BOOLEAN)
        if issubclass(origin, enum.Enum):
            return FieldType(ft.STRING)
        if issubclass(origin, int):
            return FieldType(ft.INTEGER)
        if issubclass(origin, (float, decimal.Decimal)):
            return FieldType(ft.NUMBER)
        if issubclass(origin, (str, bytes)):
            return FieldType(ft.STRING)
        if dataclasses.is_dataclass(origin):
            if origin in stack:
                # self-referencing record, cut the cycle
                return FieldType(ft.RECORD)
            nested = value if dataclasses.is_dataclass(value) else None
            return FieldType(ft.RECORD, fields=_describe(origin, nested, opts, stack + (origin,)))
        if issubclass(origin, Mapping):
            key_type = _unwrap_optional(args[0]) if args else str
            value_type = args[1] if len(args) > 1 else Any
            return FieldType(
                ft.MAP,
                items=_type_to_field_type(value_type, None, opts, stack),
                string_keys=key_type is str or key_type is Any,
            )
        if issubclass(origin, (Sequence, Set)):
            elem = args[0] if args else Any
            return FieldType(ft.ARRAY, items=_type_to_field_type(elem, None, opts, stack))

    return FieldType(ft.STRING)
