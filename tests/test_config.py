"""Unit tests for configuration helpers."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from node_it import config

pytestmark = pytest.mark.config


def test_load_user_config_defaults_when_empty():
    """No values yields the explicit defaults."""
    assert config.load_user_config({}) == {
        "name": "Joe Bloggs",
        "id": "239482",
        "hobbies": ("reading", "gaming", "hiking"),
    }
    assert config.load_user_config(None) == config.load_user_config({})


def test_load_user_config_reads_recognized_keys():
    """USER_NAME, USER_ID and USER_KEY override the defaults."""
    environ = {
        "USER_NAME": "Ada Lovelace",
        "USER_ID": "1815",
        "USER_KEY": "maths, engines ,, poetry",
        "HOME": "/ignored",
    }
    assert config.load_user_config(environ) == {
        "name": "Ada Lovelace",
        "id": "1815",
        "hobbies": ("maths", "engines", "poetry"),
    }


def test_load_user_config_blank_values_fall_back():
    """Blank strings and comma-only lists use the defaults."""
    environ = {"USER_NAME": "  ", "USER_ID": "", "USER_KEY": " , ,"}
    assert config.load_user_config(environ) == config.DEFAULT_USER_CONFIG


def test_load_user_config_custom_defaults():
    """Defaults can be supplied by the caller."""
    defaults = {"name": "Grace", "id": "7", "hobbies": ["sailing"]}
    result = config.load_user_config({"USER_ID": "9"}, defaults=defaults)
    assert result == {"name": "Grace", "id": "9", "hobbies": ("sailing",)}


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, ""),
        ("", ""),
        ("/", ""),
        ("node.it", "/node.it"),
        ("/node.it/", "/node.it"),
        (" /sites/node.it ", "/sites/node.it"),
    ],
)
def test_normalize_base_path(raw, expected):
    """Base paths gain a leading slash and lose the trailing one."""
    assert config.normalize_base_path(raw) == expected


def test_get_base_path_reads_site_base_path():
    """SITE_BASE_PATH is read from the given mapping only."""
    assert config.get_base_path({"SITE_BASE_PATH": "node.it"}) == "/node.it"
    assert config.get_base_path({}) == ""
