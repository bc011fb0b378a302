"""Generation options shared by the JSON Schema and UI schema generators."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .i18n import Translator

DRAFT_07 = "draft-07"
DRAFT_2019_09 = "2019-09"

DRAFT_07_URL = "http://json-schema.org/draft-07/schema#"
DRAFT_2019_09_URL = "https://json-schema.org/draft/2019-09/schema"


class AccessLevel(enum.IntEnum):
    """Per-role access override for a single field."""

    FULL = 0
    READ_ONLY = 1
    HIDDEN = 2

    @classmethod
    def parse(cls, raw: str | int | AccessLevel) -> AccessLevel:
        """Accept enum members, ints, or names like 'readonly' / 'read-only'."""
        if isinstance(raw, AccessLevel):
            return raw
        if isinstance(raw, int):
            return cls(raw)
        key = raw.strip().lower().replace("-", "").replace("_", "")
        aliases = {
            "full": cls.FULL,
            "readwrite": cls.FULL,
            "rw": cls.FULL,
            "readonly": cls.READ_ONLY,
            "ro": cls.READ_ONLY,
            "hidden": cls.HIDDEN,
        }
        if key not in aliases:
            raise ValueError(f"Unknown access level: {raw!r}")
        return aliases[key]


# role name → field name or fnmatch pattern → access level
RolePermissions = dict[str, dict[str, AccessLevel]]


@dataclass
class Options:
    """Configures schema generation.

    Attributes:
        translator: Localizes labels. None means no translation.
        locale: Locale passed to the translator (e.g. "uk", "en").
        draft: JSON Schema draft, "draft-07" (default) or "2019-09".
        renderers: Maps a property scope to a custom renderer name.
        role_permissions: Maps role names to field access overrides.
        role: Active role for role_permissions.
        omit_empty: Skip ``omitempty`` fields whose instance value is empty.
    """

    translator: Translator | None = None
    locale: str = ""
    draft: str = DRAFT_07
    renderers: dict[str, str] = field(default_factory=dict)
    role_permissions: RolePermissions = field(default_factory=dict)
    role: str = ""
    omit_empty: bool = False

    def draft_url(self) -> str:
        if self.draft == DRAFT_2019_09:
            return DRAFT_2019_09_URL
        return DRAFT_07_URL


def default_options() -> Options:
    return Options(draft=DRAFT_07)
