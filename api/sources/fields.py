"""Typed record description shared by every schema source.

A record is an ordered list of FieldDescriptor. Dataclasses, raw JSON objects
and OpenAPI components are all reduced to this shape before generation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

STRING = "string"
BOOLEAN = "boolean"
INTEGER = "integer"
NUMBER = "number"
ARRAY = "array"
MAP = "map"
RECORD = "record"
TIMESTAMP = "timestamp"
NULL = "null"
ANY = "any"


@dataclass
class FieldType:
    """Type of a field.

    ``items`` is the element type for arrays and the value type for maps.
    ``fields`` is the ordered field list for records. ``string_keys`` is False
    for maps keyed by anything other than strings.
    """

    kind: str
    items: FieldType | None = None
    fields: list[FieldDescriptor] = field(default_factory=list)
    format: str = ""
    string_keys: bool = True

    @property
    def is_record(self) -> bool:
        return self.kind == RECORD

    def element_record(self) -> FieldType | None:
        """Return the element record type of an array of records."""
        if self.kind == ARRAY and self.items is not None and self.items.is_record:
            return self.items
        return None


@dataclass
class FieldDescriptor:
    """One field of a record.

    ``tags`` holds the raw metadata (``form``, ``required``, ``i18n``...).
    """

    name: str
    type: FieldType
    tags: dict[str, Any] = field(default_factory=dict)
