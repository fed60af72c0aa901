# txt2zx81.py
# Converts a text (or png) sprite into ZX81 block graphics DB lines
#
# 2026-10-18

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from PIL import Image, ImageDraw

from zx81blocks import (
    DEFAULT_LABEL,
    ShapeError,
    describe_grid,
    encode_grid,
    format_listing,
)

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 8
DEFAULT_THRESHOLD = 127

PAPER = (255, 255, 255)
INK = (0, 0, 0)
UNKNOWN = (255, 0, 0)
COLOURS = {"-": PAPER, "o": INK}
GREYS = "*@"


def read_image_grid(path: Path, threshold: int = DEFAULT_THRESHOLD) -> list[str]:
    # dark pixels are ink
    with Image.open(path) as src:
        img = src.convert("L")

    rows = []
    width, height = img.size
    for y in range(height):
        row = ""
        for x in range(width):
            row += "o" if img.getpixel((x, y)) <= threshold else "-"
        rows.append(row)
    return rows


def read_grid(path: Path, threshold: int = DEFAULT_THRESHOLD) -> list[str]:
    if path.suffix.lower() == ".png":
        return read_image_grid(path, threshold)
    return path.read_text(encoding="utf-8-sig").splitlines()


def render_preview(grid: Sequence[str], scale: int = DEFAULT_SCALE) -> Image.Image:
    """
    Draw the grid as the ZX81 would show it, scale pixels per low res pixel.

    Grey and inverse grey are drawn as chequers, anything outside the
    sprite alphabet in red.
    """
    img = Image.new("RGB", (len(grid[0]) * scale, len(grid) * scale), PAPER)
    draw = ImageDraw.Draw(img)
    half = max(scale // 2, 1)

    for y, line in enumerate(grid):
        for x, ch in enumerate(line):
            left, top = x * scale, y * scale
            if ch not in GREYS:
                draw.rectangle(
                    (left, top, left + scale - 1, top + scale - 1),
                    fill=COLOURS.get(ch, UNKNOWN),
                )
                continue

            for dy in range(0, scale, half):
                for dx in range(0, scale, half):
                    ink = ((dx + dy) // half) % 2 == 0
                    if ch == "@":
                        ink = not ink
                    draw.rectangle(
                        (
                            left + dx,
                            top + dy,
                            min(left + dx + half, left + scale) - 1,
                            min(top + dy + half, top + scale) - 1,
                        ),
                        fill=INK if ink else PAPER,
                    )

    return img


def write_listing(listing: str, output: str) -> None:
    if output == "-":
        sys.stdout.write(listing)
    else:
        Path(output).write_text(listing, encoding="utf-8")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="txt2zx81",
        description="Text based ZX81 sprite editor: converts a grid of "
        "'-', 'o', '*' and '@' into low res block graphics DB lines.",
    )
    parser.add_argument("input", type=Path, help="sprite text file (or .png)")
    parser.add_argument("output", help="assembler output file, '-' for stdout")
    parser.add_argument(
        "--label", default=DEFAULT_LABEL, help="label written above the DB lines"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="exit with an error if any cell is not a ZX81 block graphic",
    )
    parser.add_argument("--preview", type=Path, help="also render the grid to a png")
    parser.add_argument("--scale", type=int, default=DEFAULT_SCALE)
    parser.add_argument(
        "--threshold",
        type=int,
        default=DEFAULT_THRESHOLD,
        help="png input: pixels at or below this luminance are ink",
    )
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)
    if args.scale < 1:
        parser.error("--scale must be at least 1")
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    logger.info("Text based ZX81 Sprite Editor")
    logger.info("Using input file=%s outputting to %s", args.input, args.output)

    try:
        lines = read_grid(args.input, args.threshold)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Could not read %s: %s", args.input, exc)
        return 1

    try:
        encoding = encode_grid(lines)
    except ShapeError as exc:
        logger.error("Bad sprite shape (%s): %s", exc.reason, exc)
        return 1

    logger.debug("\n%s", describe_grid(lines))

    for problem in encoding.problems:
        logger.warning(
            "No block graphic for %r at row %d, column %d; using blank",
            problem.signature,
            problem.row,
            problem.column,
        )

    try:
        write_listing(format_listing(encoding, args.label), args.output)
    except OSError as exc:
        logger.error("Could not write %s: %s", args.output, exc)
        return 1

    if args.preview is not None:
        try:
            render_preview(lines, args.scale).save(args.preview)
        except OSError as exc:
            logger.error("Could not write preview %s: %s", args.preview, exc)
            return 1
        logger.info("Preview saved to %s", args.preview)

    logger.info("%d x %d blocks written", encoding.height, encoding.width)

    if args.strict and not encoding.ok:
        logger.error("%d unknown pattern(s)", len(encoding.problems))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
