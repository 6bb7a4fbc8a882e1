"""Headless command line front end for atlas generation.

Runs the same session workflow as the window: select, fit the grid to the
selection, generate and save.

Example
-------
logo-atlas-cli icons/*.png --columns 4 --padding 8 --size 2048 -o atlas.png
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from utils.image_loader import ImageLoadError

from . import config
from .controllers import AtlasSession, NoImagesSelectedError
from .geometry import GeometryError, GridSettings
from .logs import configure_logging

logger = logging.getLogger("logo_atlas.cli")


def _bounded_int(name: str, low: int, high: int):
    def parse(value: str) -> int:
        try:
            number = int(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"{name} must be an integer") from exc
        if not low <= number <= high:
            raise argparse.ArgumentTypeError(f"{name} must be between {low} and {high}")
        return number

    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logo-atlas-cli",
        description="Arrange PNG images into a fixed-grid square atlas.",
    )
    parser.add_argument("images", nargs="+", type=Path, help="PNG files in placement order")
    parser.add_argument(
        "-o", "--output", type=Path, default=Path(config.DEFAULT_OUTPUT_NAME),
        help=f"output PNG path (default: {config.DEFAULT_OUTPUT_NAME})",
    )
    parser.add_argument(
        "--columns", type=_bounded_int("columns", config.MIN_COLUMNS, config.MAX_COLUMNS),
        default=config.DEFAULT_COLUMNS,
    )
    parser.add_argument(
        "--rows", type=_bounded_int("rows", config.MIN_ROWS, config.MAX_ROWS),
        default=config.DEFAULT_ROWS,
    )
    parser.add_argument(
        "--padding", type=_bounded_int("padding", config.MIN_PADDING, config.MAX_PADDING),
        default=config.DEFAULT_PADDING,
    )
    parser.add_argument(
        "--size", type=int, choices=config.ATLAS_SIZES, default=config.DEFAULT_ATLAS_SIZE,
        help="atlas side length in pixels",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="also write logs here")
    return parser


def run(args: argparse.Namespace) -> int:
    session = AtlasSession(
        GridSettings(
            columns=args.columns,
            rows=args.rows,
            padding=args.padding,
            atlas_size=args.size,
        )
    )
    try:
        adjustment = session.select_images(args.images)
        if adjustment.changed:
            logger.warning("%s", adjustment.message)

        result = session.generate()
        if result.truncated:
            logger.warning("%s", result.truncation_message)
        saved = session.save(result.atlas, args.output)
    except (NoImagesSelectedError, GeometryError, ImageLoadError) as exc:
        logger.error("%s", exc)
        return 1
    except (ValueError, OSError) as exc:
        logger.error("Could not save atlas: %s", exc)
        return 1
    finally:
        session.close()

    print(f"{result.summary}\nSaved atlas to {saved}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
