"""Tests for environment-driven option building."""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import config
from forms.options import DRAFT_07, DRAFT_2019_09


def test_build_options_defaults(monkeypatch):
    for var in ("UISCHEMA_TRANSLATIONS", "UISCHEMA_PERMISSIONS", "UISCHEMA_DEFAULT_LOCALE", "UISCHEMA_DRAFT"):
        monkeypatch.delenv(var, raising=False)
    opts = config.build_options()
    assert opts.translator is None
    assert opts.locale == ""
    assert opts.draft == DRAFT_07
    assert opts.role_permissions == {}
    assert opts.role == ""


def test_request_values_override_environment(monkeypatch):
    monkeypatch.setenv("UISCHEMA_DEFAULT_LOCALE", "uk")
    monkeypatch.setenv("UISCHEMA_DRAFT", DRAFT_2019_09)
    assert config.build_options().locale == "uk"
    assert config.build_options().draft == DRAFT_2019_09
    opts = config.build_options(locale="en", role="viewer", draft=DRAFT_07)
    assert opts.locale == "en"
    assert opts.role == "viewer"
    assert opts.draft == DRAFT_07


def test_unknown_draft_falls_back(monkeypatch):
    monkeypatch.setenv("UISCHEMA_DRAFT", "draft-04")
    assert config.default_draft() == DRAFT_07


def test_missing_translation_file_is_not_fatal(monkeypatch, tmp_path):
    monkeypatch.setenv("UISCHEMA_TRANSLATIONS", str(tmp_path / "missing.yaml"))
    assert config.get_translator() is None


def test_bad_permission_file_is_not_fatal(monkeypatch, tmp_path):
    path = tmp_path / "perms.yaml"
    path.write_text("viewer:\n  name: sometimes\n")
    monkeypatch.setenv("UISCHEMA_PERMISSIONS", str(path))
    assert config.get_role_permissions() == {}


def test_translator_is_cached(monkeypatch, tmp_path):
    path = tmp_path / "messages.yaml"
    path.write_text("en:\n  a: A\n")
    monkeypatch.setenv("UISCHEMA_TRANSLATIONS", str(path))
    first = config.get_translator()
    assert first.translate("a", "en") == "A"
    assert config.get_translator() is first
