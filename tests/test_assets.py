"""Tests for mirroring the assets directory."""

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from node_it import assets
from node_it.errors import AssetCopyError

pytestmark = pytest.mark.assets


def _make_tree(base: Path) -> Path:
    """Create a small assets tree with nested folders and binary data."""
    src = base / "public"
    (src / "css").mkdir(parents=True)
    (src / "icons" / "extra").mkdir(parents=True)
    (src / "css" / "style.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    (src / "icons" / "logo.bin").write_bytes(bytes(range(256)))
    (src / "icons" / "extra" / "note.txt").write_text("nested", encoding="utf-8")
    (src / "empty").mkdir()
    return src


def _relative_files(root: Path) -> set:
    return {path.relative_to(root) for path in root.rglob("*") if path.is_file()}


def test_copy_tree_mirrors_files_byte_for_byte(tmp_path):
    """Every source file exists at the same relative path with the same bytes."""
    src = _make_tree(tmp_path)
    dest = tmp_path / "dist" / "public"

    copied = assets.copy_tree(src, dest)

    assert _relative_files(dest) == _relative_files(src)
    for relative in _relative_files(src):
        assert (dest / relative).read_bytes() == (src / relative).read_bytes()
    assert (dest / "empty").is_dir()
    assert len(copied) == 3


def test_copy_tree_overwrites_existing_files(tmp_path):
    """Existing destination files are replaced unconditionally."""
    src = _make_tree(tmp_path)
    dest = tmp_path / "out"
    (dest / "css").mkdir(parents=True)
    (dest / "css" / "style.css").write_text("stale", encoding="utf-8")

    assets.copy_tree(src, dest)

    assert (dest / "css" / "style.css").read_text(encoding="utf-8") == "body { margin: 0; }\n"


def test_copy_tree_missing_source_raises(tmp_path):
    """A missing source directory raises AssetCopyError with its path."""
    missing = tmp_path / "nope"
    with pytest.raises(AssetCopyError) as exc_info:
        assets.copy_tree(missing, tmp_path / "out")
    assert exc_info.value.path == str(missing)


def test_copy_tree_wraps_os_errors(monkeypatch, tmp_path):
    """Filesystem failures during the copy surface as AssetCopyError."""
    src = _make_tree(tmp_path)

    def fake_copyfile(source, target):
        raise PermissionError(13, "Permission denied", str(target))

    monkeypatch.setattr(assets.shutil, "copyfile", fake_copyfile)
    with pytest.raises(AssetCopyError) as exc_info:
        assets.copy_tree(src, tmp_path / "out")
    assert "Permission denied" in str(exc_info.value)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_copy_tree_does_not_follow_symlinks_out_of_source(tmp_path):
    """Links escaping the source tree and linked directories are skipped."""
    src = _make_tree(tmp_path)
    outside = tmp_path / "secret.txt"
    outside.write_text("do not publish", encoding="utf-8")
    try:
        (src / "leak.txt").symlink_to(outside)
        (src / "loop").symlink_to(src, target_is_directory=True)
        (src / "alias.css").symlink_to(src / "css" / "style.css")
    except OSError:
        pytest.skip("cannot create symlinks here")
    dest = tmp_path / "out"

    assets.copy_tree(src, dest)

    assert not (dest / "leak.txt").exists()
    assert not (dest / "loop").exists()
    assert (dest / "alias.css").read_bytes() == (src / "css" / "style.css").read_bytes()
    assert not (dest / "alias.css").is_symlink()


def test_copy_tree_rejects_destination_inside_source(tmp_path):
    """Copying into a folder of the source tree is refused before any write."""
    src = _make_tree(tmp_path)
    dest = src / "mirror"

    with pytest.raises(AssetCopyError) as exc_info:
        assets.copy_tree(src, dest)
    assert "inside the source" in str(exc_info.value)
    assert not dest.exists()


def test_copy_tree_rejects_source_as_destination(tmp_path):
    """The source directory itself is not a valid destination."""
    src = _make_tree(tmp_path)
    with pytest.raises(AssetCopyError):
        assets.copy_tree(src, src)
