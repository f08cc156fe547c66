"""
Site configuration helpers.

This module turns a mapping of environment-style values into the explicit
configuration record used to build page data. Callers pass the mapping in
(normally ``os.environ`` at an entry point); nothing here reads the process
environment on its own.
"""

USER_ENV_KEYS = ("USER_NAME", "USER_ID", "USER_KEY")
BASE_PATH_ENV_VAR = "SITE_BASE_PATH"

DEFAULT_USER_CONFIG = {
    "name": "Joe Bloggs",
    "id": "239482",
    "hobbies": ("reading", "gaming", "hiking"),
}


def _split_hobbies(value: str) -> tuple:
    """
    Split a comma-separated hobby list.

    :param value: Raw ``USER_KEY`` value such as ``"reading, gaming"``.
    :returns: Tuple of stripped, non-empty hobby names.
    """

    return tuple(item.strip() for item in value.split(",") if item.strip())


def load_user_config(environ=None, defaults=None) -> dict:
    """
    Build the user configuration record.

    Resolution order per key:
    1) ``USER_NAME`` / ``USER_ID`` / ``USER_KEY`` from ``environ`` when set
       and not blank.
    2) The matching entry of ``defaults``.

    :param environ: Mapping of raw values, or None for defaults only.
    :param defaults: Optional override of :data:`DEFAULT_USER_CONFIG`.
    :returns: Dict with ``name``, ``id`` and ``hobbies`` keys.
    """

    environ = environ or {}
    defaults = DEFAULT_USER_CONFIG if defaults is None else defaults

    name = (environ.get("USER_NAME") or "").strip() or defaults["name"]
    user_id = (environ.get("USER_ID") or "").strip() or defaults["id"]
    hobbies = _split_hobbies(environ.get("USER_KEY") or "")
    if not hobbies:
        hobbies = tuple(defaults["hobbies"])

    return {"name": name, "id": user_id, "hobbies": hobbies}


def normalize_base_path(value) -> str:
    """
    Normalize a URL prefix for sub-path deployments.

    ``"node.it/"`` becomes ``"/node.it"``; ``None``, ``""`` and ``"/"``
    become ``""`` (site served from the domain root).

    :param value: Raw base path.
    :returns: Empty string or a path starting with ``/`` and no trailing slash.
    """

    cleaned = (value or "").strip().strip("/")
    if not cleaned:
        return ""
    return "/" + cleaned


def get_base_path(environ=None) -> str:
    """
    Read the base path from ``SITE_BASE_PATH`` in ``environ``.

    :param environ: Mapping of raw values, or None.
    :returns: Normalized base path.
    """

    environ = environ or {}
    return normalize_base_path(environ.get(BASE_PATH_ENV_VAR))
