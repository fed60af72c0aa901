# zx81blocks.py
# Encodes a text pixel grid into ZX81 low res block graphics codes
#
# 2026-10-18

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

DEFAULT_LABEL = "spriteData"

# ZX81 block graphics, 2x2 low res pixels per character.
# Signature is top-left, top-right, bottom-left, bottom-right.
# '-' paper, 'o' ink, '*' grey, '@' inverse grey
PATTERNS: Mapping[str, int] = MappingProxyType({
    "----": 0x00,
    "o---": 0x01,
    "-o--": 0x02,
    "oo--": 0x03,
    "--o-": 0x04,
    "o-o-": 0x05,
    "-oo-": 0x06,
    "ooo-": 0x07,
    "****": 0x08,
    "--**": 0x09,
    "**--": 0x0A,
    # inverse video
    "oooo": 0x80,
    "-ooo": 0x81,
    "o-oo": 0x82,
    "--oo": 0x83,
    "oo-o": 0x84,
    "-o-o": 0x85,
    "o--o": 0x86,
    "---o": 0x87,
    "@@@@": 0x88,
    "oo@@": 0x89,
    "@@oo": 0x90,
})

BACKGROUND = PATTERNS["----"]

Grid = tuple[str, ...]


class ShapeError(ValueError):
    """The grid can't be cut into 2x2 cells."""

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class UnknownPatternError(LookupError):
    """A 2x2 cell whose signature isn't a ZX81 block graphic."""

    def __init__(self, row: int, column: int, signature: str) -> None:
        super().__init__(
            f"unknown pattern {signature!r} at row {row}, column {column}"
        )
        self.row = row
        self.column = column
        self.signature = signature


@dataclass(frozen=True)
class Encoding:
    """
    Codes for a whole grid, one inner tuple per pair of input rows.

    problems holds the cells that fell back to BACKGROUND, in reading order.
    """

    rows: tuple[tuple[int, ...], ...]
    problems: tuple[UnknownPatternError, ...] = ()

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def ok(self) -> bool:
        return not self.problems


def validate_grid(lines: Sequence[str]) -> Grid:
    if not lines:
        raise ShapeError("empty", "grid has no rows")

    width = len(lines[0])
    for y, line in enumerate(lines):
        if len(line) != width:
            raise ShapeError(
                "ragged",
                f"row {y} is {len(line)} wide, expected {width}",
            )

    if width == 0:
        raise ShapeError("empty", "grid rows are empty")
    if width % 2:
        raise ShapeError("odd_width", f"row width {width} is odd")
    if len(lines) % 2:
        raise ShapeError("odd_height", f"row count {len(lines)} is odd")

    return tuple(lines)


def signature_of(grid: Sequence[str], row: int, column: int) -> str:
    return grid[row][column:column + 2] + grid[row + 1][column:column + 2]


def classify_cell(top: str, bottom: str, row: int = 0, column: int = 0) -> int:
    """
    Look up the block code for one cell.

    top and bottom are the two pixel pairs of the cell; row and column only
    go into the error raised when the signature is unknown.
    """
    signature = top + bottom
    try:
        return PATTERNS[signature]
    except KeyError:
        raise UnknownPatternError(row, column, signature) from None


def encode_grid(lines: Sequence[str]) -> Encoding:
    grid = validate_grid(lines)

    rows = []
    problems = []
    for y in range(0, len(grid), 2):
        codes = []
        for x in range(0, len(grid[0]), 2):
            signature = signature_of(grid, y, x)
            try:
                code = classify_cell(
                    signature[:2], signature[2:], row=y, column=x
                )
            except UnknownPatternError as exc:
                problems.append(exc)
                code = BACKGROUND
            codes.append(code)
        rows.append(tuple(codes))

    return Encoding(tuple(rows), tuple(problems))


def format_code(code: int) -> str:
    return f"${code:02X}"


def format_listing(encoding: Encoding, label: str = DEFAULT_LABEL) -> str:
    out = [label]
    for codes in encoding.rows:
        out.append("   DB " + ",".join(map(format_code, codes)))
    return "\n".join(out) + "\n"


def describe_grid(grid: Sequence[str]) -> str:
    words = {"o": "PIXEL", "-": "BLANK"}
    return "\n".join(
        " ".join(words.get(ch, "OTHER") for ch in line) for line in grid
    )
