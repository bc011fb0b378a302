"""Tests for field-level RBAC resolution and permission loading."""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import rbac
from forms.options import AccessLevel


TABLE = {
    "support": {
        "salary": AccessLevel.HIDDEN,
        "internal_*": AccessLevel.HIDDEN,
        "*_id": AccessLevel.READ_ONLY,
    },
    "viewer": {"*": AccessLevel.READ_ONLY},
    "admin": {},
}


def test_no_role_or_table_is_full_access():
    assert rbac.resolve_access("salary", "", TABLE) == AccessLevel.FULL
    assert rbac.resolve_access("salary", "support", None) == AccessLevel.FULL
    assert rbac.resolve_access("salary", "support", {}) == AccessLevel.FULL


def test_unknown_role_is_full_access():
    assert rbac.resolve_access("salary", "guest", TABLE) == AccessLevel.FULL


def test_exact_entry():
    assert rbac.resolve_access("salary", "support", TABLE) == AccessLevel.HIDDEN


def test_wildcards():
    assert rbac.resolve_access("internal_notes", "support", TABLE) == AccessLevel.HIDDEN
    assert rbac.resolve_access("customer_id", "support", TABLE) == AccessLevel.READ_ONLY
    assert rbac.resolve_access("anything", "viewer", TABLE) == AccessLevel.READ_ONLY


def test_no_match_is_full_access():
    assert rbac.resolve_access("name", "support", TABLE) == AccessLevel.FULL
    assert rbac.resolve_access("name", "admin", TABLE) == AccessLevel.FULL


def test_exact_entry_beats_earlier_pattern():
    table = {"r": {"*": AccessLevel.HIDDEN, "name": AccessLevel.READ_ONLY}}
    assert rbac.resolve_access("name", "r", table) == AccessLevel.READ_ONLY


def test_wildcards_are_case_sensitive():
    table = {"r": {"Internal_*": AccessLevel.HIDDEN}}
    assert rbac.resolve_access("internal_x", "r", table) == AccessLevel.FULL


def test_access_level_parse_aliases():
    assert AccessLevel.parse("readonly") == AccessLevel.READ_ONLY
    assert AccessLevel.parse("read-only") == AccessLevel.READ_ONLY
    assert AccessLevel.parse("RO") == AccessLevel.READ_ONLY
    assert AccessLevel.parse("hidden") == AccessLevel.HIDDEN
    assert AccessLevel.parse("full") == AccessLevel.FULL
    assert AccessLevel.parse(2) == AccessLevel.HIDDEN
    with pytest.raises(ValueError):
        AccessLevel.parse("sometimes")


def test_parse_role_permissions():
    table = rbac.parse_role_permissions({"viewer": {"*": "readonly", "ssn": "hidden"}})
    assert table == {"viewer": {"*": AccessLevel.READ_ONLY, "ssn": AccessLevel.HIDDEN}}


def test_parse_role_permissions_rejects_non_mapping():
    with pytest.raises(ValueError):
        rbac.parse_role_permissions({"viewer": ["*"]})


def test_load_role_permissions_from_yaml(tmp_path):
    path = tmp_path / "perms.yaml"
    path.write_text('support:\n  salary: hidden\n  "internal_*": readonly\n')
    table = rbac.load_role_permissions(str(path))
    assert table["support"]["salary"] == AccessLevel.HIDDEN
    assert table["support"]["internal_*"] == AccessLevel.READ_ONLY


def test_load_role_permissions_is_cached(tmp_path):
    path = tmp_path / "perms.yaml"
    path.write_text("viewer:\n  '*': readonly\n")
    first = rbac.load_role_permissions(str(path))
    assert rbac.load_role_permissions(str(path)) is first


def test_load_role_permissions_bad_yaml(tmp_path):
    path = tmp_path / "perms.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        rbac.load_role_permissions(str(path))
