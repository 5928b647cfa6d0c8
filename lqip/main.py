#!/usr/bin/env python3
"""Command line entry point for the LQIP generator.

Prints height, width, aspect ratio, color palette and the two base64
previews of an image as a table, or writes them to a JSON file.

Examples:
    lqip -i photo.jpg
    lqip -i photo.jpg -json            # writes photo.json
    lqip -i photo.jpg -o out/lqip.json
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from . import __version__
from .config import settings
from .errors import LQIPError
from .schemas import ImageData
from .services.lqip import Image, collect_image_data
from .utils import hard_wrap, json_output_path

logger = logging.getLogger("lqip")

USAGE = """
lqip %s
A cli tool to generate Low Quality Image Placeholder(LQIP) and
it outputs aspect-ratio, image size and encoded base64 lqip images.

lqip [options...]
Options:
  -version, -v      print version and exit
  -i                input path of the image file
  -json             write the result to a json file instead of printing a table
  -o                output path of the json file (if empty it uses input file name)
"""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="lqip",
        usage=USAGE % __version__,
        add_help=True,
    )
    ap.add_argument("-i", dest="input", default=None, help="Filepath of the input file")
    ap.add_argument("-json", "--json", dest="json", action="store_true", help="Output JSON file")
    ap.add_argument("-o", dest="output", default=None, help="Filepath of the JSON output (implies -json)")
    ap.add_argument(
        "-v", "-version", "--version", dest="version", action="store_true",
        help="Show version and exit",
    )
    return ap


def setup_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="[%(name)s] %(message)s",
    )


def write_json(path: Path, data: ImageData) -> Path:
    """Write ``data`` as indented camelCase JSON, creating parent folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data.to_json(), encoding="utf-8")
    return path


def render_table(source: str, data: ImageData) -> str:
    """Render ``data`` as a grid table headed by the source path."""
    colors = "\n".join(
        f"{name} - {color}" for name, color in sorted(data.color_palette.items())
    )
    wrap = settings.WRAP_WIDTH
    rows = [
        ["Height", str(data.height)],
        ["Width", str(data.width)],
        ["Aspect ratio", "%f" % data.aspect_ratio],
        ["Color Palette", colors],
        ["Preview src", hard_wrap(data.preview_src, wrap)],
        ["Preview enhanced src", hard_wrap(data.preview_enhanced_src, wrap)],
    ]
    table = tabulate(rows, tablefmt="grid", disable_numparse=True)
    return f"File ::: {source}\n{table}"


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    setup_logging(settings.LOG_LEVEL)

    if not args.input:
        build_parser().error("input path is required (-i)")

    try:
        image = Image(args.input).load()
        data = collect_image_data(image)
    except LQIPError as exc:
        logger.error("%s", exc)
        return 1

    if args.json or args.output:
        out_path = Path(args.output) if args.output else json_output_path(args.input)
        try:
            write_json(out_path, data)
        except OSError as exc:
            logger.error("Cannot write JSON file %s: %s", out_path, exc)
            return 1
        logger.info("wrote %s", out_path)
        return 0

    print(render_table(args.input, data))
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
