# composed_of_django/settings.py
"""
Package-level configuration helpers & defaults for `composed_of_django`.

This is **not** your project's Django `settings.py`. It provides internal
accessors with defaults that can be overridden by the Django project's
`django.conf.settings`.

Keys:
- COMPOSED_OF_ALLOW_NIL_DEFAULT: bool
    Default for the `allow_nil` declaration option. Defaults to False.
- COMPOSED_OF_AUTOSAVE_DEFAULT: bool
    Default for the `autosave` declaration option. Defaults to False.
- COMPOSED_OF_CHECKS_STRICT: bool
    Report declaration problems found by the system checks as errors (True)
    or as warnings (False). Defaults to True.

Notes:
- Values are read when asked, never cached at import time; declarations run
  while models are imported, after Django settings are configured.
"""

from typing import Any

from django.conf import settings as dj_settings

# ----------------------------
# Internal defaults
# ----------------------------
DEFAULTS = {
    "COMPOSED_OF_ALLOW_NIL_DEFAULT": False,
    "COMPOSED_OF_AUTOSAVE_DEFAULT": False,
    "COMPOSED_OF_CHECKS_STRICT": True,
}


# ----------------------------
# Accessors
# ----------------------------

def get_setting(key: str, default: Any | None = None) -> Any:
    """Return a setting from the Django project or fallback to defaults.

    The lookup order is: project settings -> provided default -> internal DEFAULTS.
    """
    if dj_settings.configured and hasattr(dj_settings, key):
        return getattr(dj_settings, key)
    if default is not None:
        return default
    return DEFAULTS.get(key)


def get_bool(key: str, default: bool | None = None) -> bool:
    """Coerce a setting to boolean with a sensible fallback."""
    val = get_setting(key, default if default is not None else DEFAULTS.get(key, False))
    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        return val.strip().lower() in {"1", "true", "yes", "on"}
    return bool(val)


__all__ = [
    "DEFAULTS",
    "get_setting",
    "get_bool",
]
