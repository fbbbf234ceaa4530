"""Square type alias and coordinate helpers.

Board layout (row-major, GOTE's back row first):
    x=0  x=1  x=2  x=3  x=4
    y=0   0    1    2    3    4     <- GOTE home row, SENTE promotion row
    y=1   5    6    7    8    9
    y=2  10   11   12   13   14
    y=3  15   16   17   18   19
    y=4  20   21   22   23   24     <- SENTE home row, GOTE promotion row

SENTE moves toward y=0, GOTE toward y=4.
"""

from __future__ import annotations

from typing import TypeAlias

BOARD_SIZE = 5
SQUARE_COUNT = BOARD_SIZE * BOARD_SIZE

Square: TypeAlias = int  # 0–24


def column_of(sq: Square) -> int:
    """Column index x, 0–4."""
    return sq % BOARD_SIZE


def row_of(sq: Square) -> int:
    """Row index y, 0–4."""
    return sq // BOARD_SIZE


def make_square(x: int, y: int) -> Square:
    """Create square from column *x* and row *y*."""
    return y * BOARD_SIZE + x


def is_on_board(x: int, y: int) -> bool:
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def is_valid_square(sq: int) -> bool:
    """Check whether integer is a valid square index."""
    return 0 <= sq < SQUARE_COUNT


def square_name(sq: Square) -> str:
    """USI-style name: files 5..1 from left to right, ranks a..e top-down.

    0 → '5a', 24 → '1e'.
    """
    return f"{BOARD_SIZE - column_of(sq)}{chr(ord('a') + row_of(sq))}"


# ── Named square constants (column letter A–E = x 0–4, digit = y + 1) ──────

A1, B1, C1, D1, E1 = range(0, 5)
A2, B2, C2, D2, E2 = range(5, 10)
A3, B3, C3, D3, E3 = range(10, 15)
A4, B4, C4, D4, E4 = range(15, 20)
A5, B5, C5, D5, E5 = range(20, 25)
