"""
Pre-render the site into a static tree for GitHub Pages style hosting.

Each manifest entry is written to ``<output>/<folder>/index.html`` so that
clean URLs such as ``/about/`` resolve without server rewrite rules. After
all pages are written the shared assets directory is mirrored into
``<output>/public`` and the PNG favicons are rasterized into
``<output>/public/icons``.

Run as ``node-it-build`` or ``python -m node_it.static_build``.
"""

import argparse
import logging
import os
from pathlib import Path

from . import assets, icons, renderer
from .config import get_base_path, load_user_config, normalize_base_path
from .errors import AssetCopyError, BuildError, PageWriteError, TemplateError
from .pages import build_manifest, check_unique_folders

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
TEMPLATE_DIR = renderer.TEMPLATE_DIR
STATIC_DIR = os.path.abspath(os.path.join(BASE_DIR, "public"))
DEFAULT_OUTPUT_DIR = "dist"
ASSETS_OUTPUT_FOLDER = "public"
ICONS_OUTPUT_FOLDER = "icons"
INDEX_FILE = "index.html"
LOGGER = logging.getLogger(__name__)


def page_output_path(output_root, output_folder: str) -> Path:
    """
    Resolve where one page is written.

    :param output_root: Build output directory.
    :param output_folder: Manifest folder, ``""`` for the site root.
    :raises ValueError: If the folder would escape ``output_root``.
    :returns: Path of the page's ``index.html``.
    """

    root = Path(output_root)
    folder = output_folder.strip("/")
    if ".." in Path(folder).parts:
        raise ValueError(f"Output folder escapes the build directory: {output_folder!r}")
    target_dir = root / folder if folder else root
    return target_dir / INDEX_FILE


def write_page(path: Path, html: str) -> None:
    """Write rendered HTML, creating parent folders as needed."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(html)


def build(manifest, output_root, *, template_dir=TEMPLATE_DIR, assets_dir=STATIC_DIR) -> dict:
    """
    Render every manifest entry and copy the shared assets.

    Pages are processed strictly in manifest order. A template or write
    failure stops the build at that page; pages already written are left in
    place and listed in the error log.

    :param manifest: Sequence of ``{"output_folder", "template_name", "data"}``.
    :param output_root: Directory receiving the static site.
    :param template_dir: Directory holding the page templates.
    :param assets_dir: Directory mirrored into ``<output_root>/public``.
    :raises TemplateError: If a template cannot be loaded or rendered.
    :raises PageWriteError: If the output tree or a page cannot be written.
    :raises AssetCopyError: If the assets directory cannot be copied.
    :returns: Dict with ``output_root``, ``pages`` and ``assets_dir`` paths.
    """

    check_unique_folders(manifest)
    root = Path(output_root)
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        LOGGER.error("Cannot create output directory %s", root)
        raise PageWriteError(None, root, exc.strerror or str(exc)) from exc

    written = []
    for entry in manifest:
        template_name = entry["template_name"]
        try:
            html = renderer.render_template_file(template_name, entry["data"], template_dir)
        except TemplateError:
            _log_aborted("render", template_name, root, written)
            raise

        output_path = page_output_path(root, entry["output_folder"])
        try:
            write_page(output_path, html)
        except OSError as exc:
            _log_aborted("write", template_name, root, written)
            raise PageWriteError(template_name, output_path, exc.strerror or str(exc)) from exc
        written.append(output_path)
        LOGGER.info("Generated %s", output_path.relative_to(root).as_posix())

    assets_output = root / ASSETS_OUTPUT_FOLDER
    try:
        assets.copy_tree(assets_dir, assets_output)
    except AssetCopyError:
        LOGGER.error(
            "Asset copy failed after %d page(s) were written; pages are not rolled back",
            len(written),
        )
        raise

    return {"output_root": root, "pages": written, "assets_dir": assets_output}


def _log_aborted(step, template_name, root, written):
    LOGGER.error(
        "Build aborted at %s of template %s; pages written before failure: %s",
        step,
        template_name,
        [path.relative_to(root).as_posix() for path in written] or "none",
    )


def build_site(
    output_root=DEFAULT_OUTPUT_DIR,
    *,
    user_config=None,
    base_path="",
    with_icons=True,
    rasterize_fn=None,
) -> dict:
    """
    Build the default site manifest into ``output_root``.

    Unless ``with_icons`` is False the PNG favicons linked from every page are
    rasterized into ``<output_root>/public/icons`` after the asset copy.

    :param rasterize_fn: Optional replacement for :func:`icons.rasterize_svg`.
    :raises BuildError: On any template, write, asset or icon failure.
    :returns: Dict from :func:`build`, plus ``icons`` (list of paths).
    """

    manifest = build_manifest(user_config, base_path)
    output = build(manifest, output_root)
    output["icons"] = []
    if with_icons:
        output["icons"] = icons.generate_icons(
            icons.default_icon_job(),
            output["assets_dir"] / ICONS_OUTPUT_FOLDER,
            rasterize_fn=rasterize_fn,
        )
    return output


def configure_logging(environ=None) -> None:
    """Configure root logging for command-line use."""

    environ = os.environ if environ is None else environ
    logging.basicConfig(
        level=environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Render the site templates into a static directory tree.",
    )
    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT_DIR,
        help="Output directory (default: %(default)s).",
    )
    parser.add_argument(
        "--base-path",
        default=None,
        help="URL prefix for sub-path hosting, e.g. /node.it (default: $SITE_BASE_PATH).",
    )
    parser.add_argument(
        "--no-icons",
        action="store_true",
        help="Skip rasterizing the PNG favicons.",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Command-line entry point.

    :param argv: Optional argument list (defaults to ``sys.argv[1:]``).
    :returns: Process exit code, 0 on success and 1 on a build failure.
    """

    args = parse_args(argv)
    configure_logging()

    if args.base_path is None:
        base_path = get_base_path(os.environ)
    else:
        base_path = normalize_base_path(args.base_path)
    user_config = load_user_config(os.environ)

    try:
        output = build_site(
            args.output,
            user_config=user_config,
            base_path=base_path,
            with_icons=not args.no_icons,
        )
    except BuildError as exc:
        LOGGER.error("Static build failed: %s", exc)
        return 1

    LOGGER.info(
        "Built %d page(s) into %s (base path %r)",
        len(output["pages"]),
        output["output_root"],
        base_path,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
