from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

BOARD_SIZE = 9
COLUMN_LETTERS = "abcdefghi"
# (dcol, drow) for north, east, south, west
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


@dataclass(frozen=True)
class Square:
    col: int
    row: int

    @property
    def index(self) -> int:
        return self.row * BOARD_SIZE + self.col

    @property
    def is_edge(self) -> bool:
        return self.col in (0, BOARD_SIZE - 1) or self.row in (0, BOARD_SIZE - 1)

    def rook_move(self, direction: int, distance: int) -> Optional["Square"]:
        """Return the square DISTANCE steps away in DIRECTION, or None off the board."""
        dc, dr = DIRECTIONS[direction]
        col = self.col + dc * distance
        row = self.row + dr * distance
        if not _in_bounds(col, row):
            return None
        return SQUARES[row * BOARD_SIZE + col]

    def is_rook_move(self, other: "Square") -> bool:
        if self == other:
            return False
        return self.col == other.col or self.row == other.row

    def direction_to(self, other: "Square") -> int:
        if not self.is_rook_move(other):
            raise ValueError(f"{self}-{other} is not a rook move.")
        dc = (other.col > self.col) - (other.col < self.col)
        dr = (other.row > self.row) - (other.row < self.row)
        return DIRECTIONS.index((dc, dr))

    def between(self, other: "Square") -> "Square":
        """Return the square strictly between two squares two steps apart on a line."""
        if not self.is_rook_move(other) or abs(self.col - other.col) + abs(self.row - other.row) != 2:
            raise ValueError(f"No single square lies between {self} and {other}.")
        return SQUARES[((self.row + other.row) // 2) * BOARD_SIZE + (self.col + other.col) // 2]

    def __str__(self) -> str:
        return f"{COLUMN_LETTERS[self.col]}{self.row + 1}"


SQUARES: Tuple[Square, ...] = tuple(
    Square(col, row) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)
)


def sq(col: int, row: int) -> Square:
    if not _in_bounds(col, row):
        raise ValueError(f"Square ({col}, {row}) is off the board.")
    return SQUARES[row * BOARD_SIZE + col]


def parse_square(text: str) -> Square:
    text = text.strip().lower()
    if len(text) != 2 or text[0] not in COLUMN_LETTERS or not text[1].isdigit():
        raise ValueError(f"Malformed square: {text!r}")
    row = int(text[1]) - 1
    if not 0 <= row < BOARD_SIZE:
        raise ValueError(f"Malformed square: {text!r}")
    return sq(COLUMN_LETTERS.index(text[0]), row)


def _in_bounds(col: int, row: int) -> bool:
    return 0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE


THRONE = sq(4, 4)
THRONE_NEIGHBORS: Tuple[Square, ...] = tuple(THRONE.rook_move(d, 1) for d in range(4))
