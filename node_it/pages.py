"""
Page manifest for the personal site.

The manifest lists which template is rendered into which output folder and
with what data. The Flask development server and the static build share
these helpers so both render identical pages.
"""

from .config import DEFAULT_USER_CONFIG, normalize_base_path

HOME_TITLE = "Home"
ABOUT_TITLE = "About"
CONTACT_TITLE = "Contact"


def page_context(title: str, base_path: str = "", **extra) -> dict:
    """
    Build the data record shared by every page.

    :param title: Page title shown in ``<title>`` and the heading.
    :param base_path: URL prefix applied to every internal link.
    :param extra: Additional template values.
    :returns: Template data dict.
    """

    data = {"title": title, "base_path": normalize_base_path(base_path)}
    data.update(extra)
    return data


def profile_user(user_config=None) -> dict:
    """
    Convert a user configuration record into the profile template's ``user``.

    :param user_config: Dict from :func:`node_it.config.load_user_config`.
    :returns: Dict with ``name``, ``firstname``, ``id`` and ``key``.
    """

    user_config = user_config or DEFAULT_USER_CONFIG
    name = user_config["name"]
    words = name.split()
    return {
        "name": name,
        "firstname": words[0] if words else name,
        "id": str(user_config["id"]),
        "key": list(user_config["hobbies"]),
    }


def profile_title(user: dict) -> str:
    return f"{user['name']}'s Profile"


def build_manifest(user_config=None, base_path: str = "") -> list:
    """
    Build the ordered page manifest.

    :param user_config: User configuration record, defaults when None.
    :param base_path: URL prefix for sub-path hosting (``""`` locally).
    :raises ValueError: If two entries share an output folder.
    :returns: List of ``{"output_folder", "template_name", "data"}`` dicts.
    """

    user = profile_user(user_config)
    manifest = [
        {
            "output_folder": "",
            "template_name": "index.html",
            "data": page_context(HOME_TITLE, base_path),
        },
        {
            "output_folder": "about",
            "template_name": "about.html",
            "data": page_context(ABOUT_TITLE, base_path),
        },
        {
            "output_folder": "contact",
            "template_name": "contact.html",
            "data": page_context(CONTACT_TITLE, base_path),
        },
        {
            "output_folder": "profile",
            "template_name": "profile.html",
            "data": page_context(profile_title(user), base_path, user=user),
        },
    ]
    check_unique_folders(manifest)
    return manifest


def check_unique_folders(manifest) -> None:
    """
    Reject manifests that would write two pages to the same folder.

    :param manifest: Sequence of manifest entries.
    :raises ValueError: On the first duplicated ``output_folder``.
    """

    seen = set()
    for entry in manifest:
        folder = entry["output_folder"].strip("/")
        if folder in seen:
            raise ValueError(f"Duplicate output folder in manifest: {folder!r}")
        seen.add(folder)
