"""Field-level RBAC for generated forms.

Permission resolution for (field, role):
1. No role or no permission table → full access (RBAC not enforced)
2. Role not in table → full access
3. Exact field entry in the role's permissions wins
4. Wildcard patterns: 'internal_*', '*_id', '*' (first match in table order)
5. No matching rule → full access

Tables are loaded from YAML:

    viewer:
      "*": readonly
    support:
      salary: hidden
      "internal_*": hidden
"""
import fnmatch
import logging
import os

import yaml

from forms.options import AccessLevel, RolePermissions

logger = logging.getLogger(__name__)

# path → (mtime, parsed table)
_cache: dict[str, tuple[float, RolePermissions]] = {}


def resolve_access(
    field_name: str, role: str, permissions: RolePermissions | None
) -> AccessLevel:
    """Return the access level the active role has on a field."""
    if not role or not permissions:
        return AccessLevel.FULL

    perms = permissions.get(role)
    if not perms:
        return AccessLevel.FULL

    if field_name in perms:
        return perms[field_name]

    for pattern, level in perms.items():
        if fnmatch.fnmatchcase(field_name, pattern):
            return level

    return AccessLevel.FULL


def parse_role_permissions(raw: dict) -> RolePermissions:
    """Convert a role → field → level-name mapping into AccessLevel values."""
    table: RolePermissions = {}
    for role, fields in (raw or {}).items():
        if not isinstance(fields, dict):
            raise ValueError(f"Permissions for role {role!r} must be a mapping")
        table[str(role)] = {
            str(name): AccessLevel.parse(level) for name, level in fields.items()
        }
    return table


def load_role_permissions(path: str) -> RolePermissions:
    """Load a role permission table from YAML with mtime-based caching."""
    mtime = os.path.getmtime(path)
    cached = _cache.get(path)
    if cached and cached[0] == mtime:
        return cached[1]

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid permission table {path}: {e}") from e

    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Permission table {path} must be a mapping of roles")

    table = parse_role_permissions(raw or {})
    _cache[path] = (mtime, table)
    logger.debug("Loaded permissions for %d roles from %s", len(table), path)
    return table
