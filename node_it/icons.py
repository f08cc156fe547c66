"""
Generate PNG favicons from the site's SVG logo.

One vector source is rasterized at each target size in order. Only plain
PNG files are produced; browsers accept them directly, so no multi-size
``.ico`` container is written.

Run as ``node-it-icons`` or ``python -m node_it.icons``.
"""

import argparse
import logging
import os
from pathlib import Path

from PIL import Image

from .errors import IconGenerationError

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
ICONS_DIR = os.path.join(BASE_DIR, "public", "icons")
DEFAULT_SOURCE = os.path.join(ICONS_DIR, "favicon.svg")
ICON_TARGETS = (
    (32, "favicon-32.png"),
    (180, "apple-touch-icon.png"),
    (192, "icon-192.png"),
)
LOGGER = logging.getLogger(__name__)


def default_icon_job(source_image_path=DEFAULT_SOURCE) -> dict:
    """
    Build the icon job for the standard favicon set.

    :param source_image_path: SVG file to rasterize.
    :returns: Dict with ``source_image_path`` and ordered ``targets``.
    """

    return {
        "source_image_path": source_image_path,
        "targets": [
            {"size": size, "output_file_name": name} for size, name in ICON_TARGETS
        ],
    }


def rasterize_svg(source_image_path, size: int, output_path) -> None:
    """
    Render an SVG file to a ``size`` x ``size`` PNG with CairoSVG.

    :param source_image_path: SVG file path.
    :param size: Output width and height in pixels.
    :param output_path: PNG file to write.
    """

    import cairosvg  # loads the native Cairo library

    cairosvg.svg2png(
        url=str(source_image_path),
        write_to=str(output_path),
        output_width=size,
        output_height=size,
    )


def verify_icon(output_path, size: int) -> None:
    """
    Check that a written icon is a square PNG of the requested size.

    :raises ValueError: If the file is not a PNG or has other dimensions.
    """

    with Image.open(output_path) as image:
        if image.format != "PNG":
            raise ValueError(f"expected PNG output, got {image.format}")
        if image.size != (size, size):
            width, height = image.size
            raise ValueError(f"expected {size}x{size} pixels, got {width}x{height}")


def _validate_size(size):
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ValueError(f"size must be a positive integer, got {size!r}")


def generate_icons(job: dict, output_dir, *, rasterize_fn=None) -> list:
    """
    Rasterize every target of an icon job into ``output_dir``.

    Targets are processed in order and the first failure stops the run.

    :param job: Icon job from :func:`default_icon_job` or an equivalent dict.
    :param output_dir: Directory receiving the PNG files.
    :param rasterize_fn: Optional replacement for :func:`rasterize_svg`.
    :raises IconGenerationError: With the failing target's size and name.
    :returns: List of written icon paths.
    """

    rasterize_fn = rasterize_fn or rasterize_svg
    source = Path(job["source_image_path"])
    out_dir = Path(output_dir)

    written = []
    for target in job["targets"]:
        size = target["size"]
        name = target["output_file_name"]
        output_path = out_dir / name
        LOGGER.info("Processing %s (%sx%s)", name, size, size)
        try:
            _validate_size(size)
            out_dir.mkdir(parents=True, exist_ok=True)
            if not source.is_file():
                raise FileNotFoundError(f"source image not found: {source}")
            rasterize_fn(source, size, output_path)
            verify_icon(output_path, size)
        except Exception as exc:
            raise IconGenerationError(size, name, str(exc)) from exc
        written.append(output_path)
        LOGGER.info("Generated %s", name)

    return written


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Rasterize the site SVG logo into PNG favicons.",
    )
    parser.add_argument(
        "--source",
        default=DEFAULT_SOURCE,
        help="SVG source image (default: %(default)s).",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the PNG files (default: the source's directory).",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Command-line entry point.

    :returns: Process exit code, 0 on success and 1 on failure.
    """

    args = parse_args(argv)
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    output_dir = args.output_dir or os.path.dirname(os.path.abspath(args.source))
    LOGGER.info("SVG path: %s", args.source)
    LOGGER.info("Output dir: %s", output_dir)

    try:
        generate_icons(default_icon_job(args.source), output_dir)
    except IconGenerationError as exc:
        LOGGER.error("Icon generation failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
