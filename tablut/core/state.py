from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Tuple

from .square import Square, parse_square


class Side(Enum):
    ATTACKER = "attacker"
    DEFENDER = "defender"

    def opponent(self) -> "Side":
        return Side.DEFENDER if self is Side.ATTACKER else Side.ATTACKER

    @property
    def symbol(self) -> str:
        return "A" if self is Side.ATTACKER else "D"


class Piece(IntEnum):
    EMPTY = 0
    ATTACKER = 1
    DEFENDER = 2
    KING = 3

    @property
    def side(self) -> Optional[Side]:
        if self is Piece.EMPTY:
            return None
        return Side.ATTACKER if self is Piece.ATTACKER else Side.DEFENDER

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def letter(self) -> str:
        return self.name[0]


_SYMBOLS = {Piece.EMPTY: "-", Piece.ATTACKER: "A", Piece.DEFENDER: "D", Piece.KING: "K"}


class GameResult(Enum):
    ONGOING = "ongoing"
    ATTACKER_WIN = "attacker_win"
    DEFENDER_WIN = "defender_win"


_MOVE_PATTERN = re.compile(r"^([a-i][1-9])-([a-i][1-9])$")


@dataclass(frozen=True)
class Move:
    from_sq: Square
    to_sq: Square

    @staticmethod
    def parse(text: str) -> "Move":
        match = _MOVE_PATTERN.match(text.strip().lower())
        if match is None:
            raise ValueError(f"Malformed move: {text!r}")
        return Move(parse_square(match.group(1)), parse_square(match.group(2)))

    def __str__(self) -> str:
        return f"{self.from_sq}-{self.to_sq}"


@dataclass(frozen=True)
class MoveRecord:
    move: Move
    piece: Piece
    captured: Tuple[Tuple[Square, Piece], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MoveResult:
    applied: bool
    reason: Optional[str] = None
    record: Optional[MoveRecord] = None

    def __bool__(self) -> bool:
        return self.applied
