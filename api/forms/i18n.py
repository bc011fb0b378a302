"""Label translation.

Catalogues are nested maps: locale → key → translated text. They can be
loaded from YAML (or JSON, which YAML parses as well):

    uk:
      user.name: Ім'я
      user.email: Електронна пошта
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import yaml

if TYPE_CHECKING:
    from .options import Options


class Translator(Protocol):
    def translate(self, key: str, locale: str) -> str:
        """Return the localized text, or ``key`` unchanged when unknown."""
        ...


class MapTranslator:
    """In-memory translator backed by a locale → key → text map."""

    __slots__ = ("_translations",)

    def __init__(self, translations: dict[str, dict[str, str]] | None = None) -> None:
        self._translations = translations or {}

    def translate(self, key: str, locale: str) -> str:
        msgs = self._translations.get(locale)
        if msgs and key in msgs:
            return msgs[key]
        return key

    def locales(self) -> list[str]:
        return sorted(self._translations)


def load_translations(path: str) -> MapTranslator:
    """Load a translation catalogue from a YAML/JSON file.

    Raises:
        OSError: file cannot be read.
        ValueError: top level is not a mapping of locale → mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid translation catalogue {path}: {e}") from e

    if raw is None:
        return MapTranslator()
    if not isinstance(raw, dict):
        raise ValueError(f"Translation catalogue {path} must be a mapping of locales")

    translations: dict[str, dict[str, str]] = {}
    for locale, msgs in raw.items():
        if not isinstance(msgs, dict):
            raise ValueError(f"Locale {locale!r} in {path} must map keys to strings")
        translations[str(locale)] = {str(k): str(v) for k, v in msgs.items()}
    return MapTranslator(translations)


def translate_label(label: str, i18n_key: str, opts: Options | None) -> str:
    """Resolve the display label for an element.

    Without a translator (or locale) the label is returned as-is, falling back
    to the i18n key when no label exists. With one, the i18n key (or, failing
    that, the label itself) is looked up.
    """
    if opts is None or opts.translator is None or not opts.locale:
        if i18n_key and not label:
            return i18n_key
        return label

    key = i18n_key or label
    if not key:
        return ""
    return opts.translator.translate(key, opts.locale)
