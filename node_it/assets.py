"""
Mirror the shared assets directory into the build output.

Files are copied byte for byte and existing destination files are
overwritten. Symbolic links are never followed out of the source tree:
linked files that resolve inside it are copied as regular files, while
linked directories and links pointing elsewhere are skipped.
"""

import logging
import shutil
from pathlib import Path

from .errors import AssetCopyError

LOGGER = logging.getLogger(__name__)


def _is_within(path: Path, root: Path) -> bool:
    """Return True when ``path`` is ``root`` or lies below it."""

    try:
        path.relative_to(root)
    except ValueError:
        return False
    return True


def _copy_dir(src: Path, dest: Path, root: Path, copied: list):
    """Copy one directory level and recurse into its subdirectories."""

    dest.mkdir(parents=True, exist_ok=True)
    for entry in sorted(src.iterdir(), key=lambda item: item.name):
        target = dest / entry.name
        if entry.is_symlink():
            resolved = entry.resolve()
            if entry.is_dir():
                LOGGER.warning("Skipping symlinked directory %s", entry)
                continue
            if not _is_within(resolved, root) or not resolved.is_file():
                LOGGER.warning("Skipping symlink %s -> %s outside assets", entry, resolved)
                continue
            shutil.copyfile(resolved, target)
            copied.append(target)
        elif entry.is_dir():
            _copy_dir(entry, target, root, copied)
        elif entry.is_file():
            shutil.copyfile(entry, target)
            copied.append(target)


def copy_tree(src_dir, dest_dir) -> list:
    """
    Recursively copy ``src_dir`` into ``dest_dir``.

    :param src_dir: Source assets directory.
    :param dest_dir: Destination directory, created if missing.
    :raises AssetCopyError: If the source is not a directory, the
        destination lies inside it, or any filesystem operation fails.
    :returns: List of destination file paths in copy order.
    """

    src = Path(src_dir)
    dest = Path(dest_dir)
    if not src.is_dir():
        raise AssetCopyError(src, "source is not a directory")
    if _is_within(dest.resolve(), src.resolve()):
        raise AssetCopyError(dest, "destination lies inside the source directory")

    copied = []
    try:
        _copy_dir(src, dest, src.resolve(), copied)
    except OSError as exc:
        raise AssetCopyError(exc.filename or src, exc.strerror or str(exc)) from exc

    LOGGER.info("Copied %d asset file(s) from %s to %s", len(copied), src, dest)
    return copied
