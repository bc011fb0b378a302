"""Process configuration from environment variables.

UISCHEMA_ENV              "development" relaxes CORS (default: production)
UISCHEMA_CORS_ORIGIN      allowed origin in production
UISCHEMA_HOST / _PORT     bind address for `python main.py`
UISCHEMA_TRANSLATIONS     YAML/JSON translation catalogue (locale → key → text)
UISCHEMA_PERMISSIONS      YAML role permission table (role → field → level)
UISCHEMA_DEFAULT_LOCALE   locale used when a request names none
UISCHEMA_DRAFT            "draft-07" (default) or "2019-09"
UISCHEMA_LOG_LEVEL        logging level name (default: INFO)
"""
import logging
import os

from forms.i18n import MapTranslator, load_translations
from forms.options import DRAFT_07, DRAFT_2019_09, Options, RolePermissions
import rbac

logger = logging.getLogger(__name__)

# Defaults to production for safety
IS_DEV = os.environ.get("UISCHEMA_ENV", "production").lower() == "development"
CORS_ORIGIN = os.environ.get("UISCHEMA_CORS_ORIGIN", "http://localhost:3000")
HOST = os.environ.get("UISCHEMA_HOST", "127.0.0.1")
PORT = int(os.environ.get("UISCHEMA_PORT", "8080"))
LOG_LEVEL = os.environ.get("UISCHEMA_LOG_LEVEL", "INFO").upper()

MAX_BODY_SIZE = 2 * 1024 * 1024  # 2 MB

# path → (mtime, translator)
_translator_cache: dict[str, tuple[float, MapTranslator]] = {}


def default_locale() -> str:
    return os.environ.get("UISCHEMA_DEFAULT_LOCALE", "")


def default_draft() -> str:
    draft = os.environ.get("UISCHEMA_DRAFT", DRAFT_07)
    if draft not in (DRAFT_07, DRAFT_2019_09):
        logger.warning("Unknown UISCHEMA_DRAFT %r, using %s", draft, DRAFT_07)
        return DRAFT_07
    return draft


def get_translator() -> MapTranslator | None:
    """Translator from UISCHEMA_TRANSLATIONS, or None when unset/unreadable."""
    path = os.environ.get("UISCHEMA_TRANSLATIONS")
    if not path:
        return None

    try:
        mtime = os.path.getmtime(path)
        cached = _translator_cache.get(path)
        if cached and cached[0] == mtime:
            return cached[1]
        translator = load_translations(path)
    except (OSError, ValueError) as e:
        logger.warning("Translations unavailable (%s): %s", path, e)
        return None

    _translator_cache[path] = (mtime, translator)
    return translator


def get_role_permissions() -> RolePermissions:
    """Role table from UISCHEMA_PERMISSIONS, or empty when unset/unreadable."""
    path = os.environ.get("UISCHEMA_PERMISSIONS")
    if not path:
        return {}
    try:
        return rbac.load_role_permissions(path)
    except (OSError, ValueError) as e:
        logger.warning("Role permissions unavailable (%s): %s", path, e)
        return {}


def build_options(
    locale: str | None = None, role: str | None = None, draft: str | None = None
) -> Options:
    """Options for one request: environment defaults overridden by the caller."""
    return Options(
        translator=get_translator(),
        locale=locale if locale is not None else default_locale(),
        draft=draft or default_draft(),
        role_permissions=get_role_permissions(),
        role=role or "",
    )
