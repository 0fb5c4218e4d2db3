"""The Tablut board state machine.

A ``Board`` owns the 9x9 grid, the side to move, the move counter and limit,
the cached winner, and a reversible history of applied moves.  It is mutated
only through :meth:`Board.make_move` and :meth:`Board.undo`.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterator, List, Mapping, Optional

import numpy as np

from . import rules
from .errors import BoardInvariantError, MoveLimitError
from .square import BOARD_SIZE, COLUMN_LETTERS, DIRECTIONS, SQUARES, THRONE, Square
from .state import GameResult, Move, MoveRecord, MoveResult, Piece, Side

logger = logging.getLogger(__name__)


class Board:
    """State of one Tablut game."""

    def __init__(self, *, move_limit: int = 0) -> None:
        self._grid = rules.initial_grid()
        self._turn = Side.ATTACKER
        self._winner: Optional[Side] = None
        self._repeated = False
        self._move_count = 0
        self._move_limit = 0
        self._history: List[MoveRecord] = []
        self._positions: List[bytes] = []
        self._seen: Counter = Counter()
        if move_limit:
            self.set_move_limit(move_limit)

    @classmethod
    def empty(cls, turn: Side = Side.ATTACKER) -> "Board":
        board = cls()
        board._grid[:, :] = Piece.EMPTY
        board._turn = turn
        return board

    @classmethod
    def from_pieces(cls, pieces: Mapping[Square, Piece], turn: Side = Side.ATTACKER) -> "Board":
        if sum(1 for piece in pieces.values() if piece is Piece.KING) > 1:
            raise BoardInvariantError("A board holds at most one king.")
        board = cls.empty(turn)
        for square, piece in pieces.items():
            board.put(piece, square)
        return board

    def copy(self) -> "Board":
        other = Board.__new__(Board)
        other._grid = self._grid.copy()
        other._turn = self._turn
        other._winner = self._winner
        other._repeated = self._repeated
        other._move_count = self._move_count
        other._move_limit = self._move_limit
        other._history = list(self._history)
        other._positions = list(self._positions)
        other._seen = Counter(self._seen)
        return other

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def turn(self) -> Side:
        return self._turn

    @property
    def winner(self) -> Optional[Side]:
        return self._winner

    @property
    def result(self) -> GameResult:
        if self._winner is Side.ATTACKER:
            return GameResult.ATTACKER_WIN
        if self._winner is Side.DEFENDER:
            return GameResult.DEFENDER_WIN
        return GameResult.ONGOING

    @property
    def is_terminal(self) -> bool:
        return self._winner is not None

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def move_limit(self) -> int:
        return self._move_limit

    @property
    def repeated_position(self) -> bool:
        return self._repeated

    @property
    def history(self) -> List[MoveRecord]:
        return list(self._history)

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the grid, shape (9, 9) indexed [row, col]."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    def get(self, square: Square) -> Piece:
        return rules.piece_at(self._grid, square)

    __getitem__ = get

    def king_square(self) -> Optional[Square]:
        found = np.argwhere(self._grid == Piece.KING)
        if len(found) == 0:
            return None
        row, col = found[0]
        return SQUARES[int(row) * BOARD_SIZE + int(col)]

    def throne_surrounded(self) -> bool:
        return rules.throne_surrounded(self._grid)

    def piece_locations(self, side: Side) -> Iterator[Square]:
        for square in SQUARES:
            if self.get(square).side is side:
                yield square

    def piece_count(self, side: Side) -> int:
        if side is Side.ATTACKER:
            return int(np.count_nonzero(self._grid == Piece.ATTACKER))
        return int(np.count_nonzero((self._grid == Piece.DEFENDER) | (self._grid == Piece.KING)))

    def encoded(self) -> str:
        """Side to move followed by one letter per square in index order."""
        return self._turn.symbol + "".join(self.get(square).letter for square in SQUARES)

    # ------------------------------------------------------------------
    # Legality
    # ------------------------------------------------------------------
    def is_legal_origin(self, square: Square) -> bool:
        return self.get(square).side is self._turn

    def check_move(self, from_sq: Square, to_sq: Square) -> Optional[str]:
        """Return why FROM_SQ-TO_SQ is illegal for the side to move, or None."""
        if not self.is_legal_origin(from_sq):
            return f"{from_sq} holds no {self._turn.value} piece"
        return self._check_path(from_sq, to_sq)

    def is_legal_move(self, from_sq: Square, to_sq: Square) -> bool:
        return self.check_move(from_sq, to_sq) is None

    def legal_moves(self, side: Side) -> List[Move]:
        """All legal moves for SIDE, ignoring whose turn it is."""
        moves: List[Move] = []
        for origin in self.piece_locations(side):
            is_king = self.get(origin) is Piece.KING
            for direction in range(len(DIRECTIONS)):
                distance = 1
                target = origin.rook_move(direction, distance)
                while target is not None and self._grid[target.row, target.col] == Piece.EMPTY:
                    if target != THRONE or is_king:
                        moves.append(Move(origin, target))
                    distance += 1
                    target = origin.rook_move(direction, distance)
        return moves

    def has_move(self, side: Side) -> bool:
        for origin in self.piece_locations(side):
            is_king = self.get(origin) is Piece.KING
            for direction in range(len(DIRECTIONS)):
                target = origin.rook_move(direction, 1)
                if target is None or self._grid[target.row, target.col] != Piece.EMPTY:
                    continue
                if target != THRONE or is_king:
                    return True
                # A non-king may pass over the empty throne.
                beyond = origin.rook_move(direction, 2)
                if beyond is not None and self._grid[beyond.row, beyond.col] == Piece.EMPTY:
                    return True
        return False

    def _check_path(self, from_sq: Square, to_sq: Square) -> Optional[str]:
        if not rules.is_unblocked_move(self._grid, from_sq, to_sq):
            return f"{from_sq}-{to_sq} is not an unobstructed rook move"
        if to_sq == THRONE and self.get(from_sq) is not Piece.KING:
            return "only the king may enter the throne"
        return None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def set_move_limit(self, limit: int) -> None:
        """Force a decision once 2 * LIMIT moves are made.

        LIMIT <= 0 turns the limit off instead of being rejected, even though
        2 * LIMIT <= move_count holds for it. A positive LIMIT that leaves no
        moves to play raises MoveLimitError.
        """
        if limit <= 0:
            self._move_limit = 0
            return
        if 2 * limit <= self._move_count:
            raise MoveLimitError(
                f"Move limit {limit} allows {2 * limit} moves but {self._move_count} are already made."
            )
        self._move_limit = limit

    def put(self, piece: Piece, square: Square) -> None:
        """Place PIECE on SQUARE while setting up a position."""
        if self._history:
            raise BoardInvariantError("Cannot edit a board that has move history.")
        if piece is Piece.KING:
            king = self.king_square()
            if king is not None and king != square:
                raise BoardInvariantError(f"The king already stands on {king}.")
        self._grid[square.row, square.col] = piece

    def make_move(self, move: Move) -> MoveResult:
        if self._winner is not None:
            return MoveResult(applied=False, reason="the game is over")
        reason = self.check_move(move.from_sq, move.to_sq)
        if reason is not None:
            return MoveResult(applied=False, reason=reason)

        mover = self._turn
        piece = self.get(move.from_sq)
        self._positions.append(self._position_key(mover))
        self._seen[self._positions[-1]] += 1

        self._grid[move.to_sq.row, move.to_sq.col] = piece
        self._grid[move.from_sq.row, move.from_sq.col] = Piece.EMPTY

        king = self.king_square()
        if king is None:
            self._declare(Side.ATTACKER, "king is missing from the board")
        elif king.is_edge:
            self._declare(Side.DEFENDER, f"king escaped to {king}")

        if self._seen[self._position_key(mover.opponent())]:
            self._repeated = True
            self._declare(mover.opponent(), "repeated position")

        captured = []
        for square in rules.collect_captures(self._grid, move.to_sq):
            taken = self.get(square)
            captured.append((square, taken))
            self._grid[square.row, square.col] = Piece.EMPTY
            logger.debug("%s captured %s on %s", move, taken.name, square)
            if taken is Piece.KING:
                self._declare(Side.ATTACKER, f"king captured on {square}")

        record = MoveRecord(move=move, piece=piece, captured=tuple(captured))
        self._history.append(record)

        self._turn = mover.opponent()
        if not self.has_move(self._turn):
            self._declare(mover, f"{self._turn.value} has no legal move")
        self._move_count += 1
        if self._move_limit > 0 and self._move_count >= 2 * self._move_limit:
            self._declare(self._turn, "move limit reached")
        return MoveResult(applied=True, record=record)

    def undo(self) -> Optional[MoveRecord]:
        """Take back the last move; no effect on a board without history."""
        if not self._history:
            return None
        record = self._history.pop()
        key = self._positions.pop()
        self._seen[key] -= 1
        if not self._seen[key]:
            del self._seen[key]

        for square, piece in record.captured:
            self._grid[square.row, square.col] = piece
        self._grid[record.move.to_sq.row, record.move.to_sq.col] = Piece.EMPTY
        self._grid[record.move.from_sq.row, record.move.from_sq.col] = record.piece

        self._move_count -= 1
        self._turn = self._turn.opponent()
        self._winner = None
        self._repeated = False
        return record

    def _declare(self, side: Side, reason: str) -> None:
        logger.debug("%s wins: %s", side.value, reason)
        self._winner = side

    def _position_key(self, turn: Side) -> bytes:
        return turn.symbol.encode("ascii") + self._grid.tobytes()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, coordinates: bool = True) -> str:
        lines = []
        for row in range(BOARD_SIZE - 1, -1, -1):
            label = f"{row + 1:2d}" if coordinates else "  "
            cells = " ".join(Piece(int(value)).symbol for value in self._grid[row])
            lines.append(f"{label} {cells}")
        if coordinates:
            lines.append("   " + " ".join(COLUMN_LETTERS))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"Board(turn={self._turn.value}, result={self.result.value}, moves={self._move_count})\n"
            f"{self.render()}"
        )
