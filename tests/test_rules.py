import numpy as np
import pytest

from tablut.core import (
    SQUARES,
    THRONE,
    Board,
    BoardInvariantError,
    GameResult,
    Move,
    Piece,
    Side,
    parse_square,
)

A, D, K = Piece.ATTACKER, Piece.DEFENDER, Piece.KING


def board_from(layout, turn=Side.ATTACKER) -> Board:
    return Board.from_pieces({parse_square(name): piece for name, piece in layout.items()}, turn)


def play(board: Board, text: str) -> None:
    result = board.make_move(Move.parse(text))
    assert result.applied, result.reason


def test_initial_layout() -> None:
    board = Board()
    assert board.turn is Side.ATTACKER
    assert board.result == GameResult.ONGOING
    assert board.get(THRONE) is K
    assert board.piece_count(Side.ATTACKER) == 16
    assert board.piece_count(Side.DEFENDER) == 9
    assert board.king_square() == THRONE


def test_sideways_step_without_capture() -> None:
    board = Board()
    play(board, "d1-c1")
    assert board.get(parse_square("c1")) is A
    assert board.get(parse_square("d1")) is Piece.EMPTY
    assert board.turn is Side.DEFENDER
    assert board.move_count == 1
    assert board.piece_count(Side.ATTACKER) == 16
    assert board.piece_count(Side.DEFENDER) == 9


def test_legality_checks() -> None:
    board = Board()
    assert board.is_legal_origin(parse_square("d1"))
    assert not board.is_legal_origin(parse_square("e6"))
    assert not board.is_legal_origin(parse_square("c3"))
    assert not board.is_legal_move(parse_square("d1"), parse_square("d1"))
    assert not board.is_legal_move(parse_square("d1"), parse_square("e2"))
    # e1 is blocked by e2
    assert not board.is_legal_move(parse_square("e1"), parse_square("e3"))
    assert board.is_legal_move(parse_square("d1"), parse_square("d4"))
    assert not board.is_legal_move(parse_square("e6"), parse_square("f6"))


def test_legal_moves_agree_with_predicate() -> None:
    board = Board()
    rng = np.random.default_rng(3)
    for _ in range(8):
        listed = set(board.legal_moves(board.turn))
        expected = {
            Move(origin, target)
            for origin in board.piece_locations(board.turn)
            for target in SQUARES
            if board.is_legal_move(origin, target)
        }
        assert listed == expected
        assert board.has_move(board.turn) == bool(listed)
        moves = sorted(listed, key=str)
        board.make_move(moves[int(rng.integers(len(moves)))])
        if board.is_terminal:
            break


def test_legal_moves_ignore_turn() -> None:
    board = Board()
    defender_moves = board.legal_moves(Side.DEFENDER)
    assert defender_moves
    assert all(board.get(move.from_sq).side is Side.DEFENDER for move in defender_moves)
    # king is walled in at the start
    assert all(move.from_sq != THRONE for move in defender_moves)


def test_only_king_may_enter_throne() -> None:
    board = board_from({"e3": A, "c7": K, "h8": D})
    assert not board.is_legal_move(parse_square("e3"), THRONE)
    assert board.check_move(parse_square("e3"), THRONE) == "only the king may enter the throne"
    # passing over the empty throne is allowed
    assert board.is_legal_move(parse_square("e3"), parse_square("e7"))
    assert Move(parse_square("e3"), THRONE) not in board.legal_moves(Side.ATTACKER)

    board = board_from({"e3": K, "h8": A, "b2": D}, turn=Side.DEFENDER)
    assert board.is_legal_move(parse_square("e3"), THRONE)
    assert Move(parse_square("e3"), THRONE) in board.legal_moves(Side.DEFENDER)


def test_random_play_never_puts_a_soldier_on_the_throne() -> None:
    board = Board()
    rng = np.random.default_rng(11)
    for _ in range(40):
        if board.is_terminal:
            break
        moves = board.legal_moves(board.turn)
        for move in moves:
            if move.to_sq == THRONE:
                assert board.get(move.from_sq) is K
        board.make_move(moves[int(rng.integers(len(moves)))])
        occupant = board.get(THRONE)
        assert occupant in (Piece.EMPTY, K)


def test_flanking_capture_removes_defender() -> None:
    board = board_from({"b7": A, "c7": D, "d9": A, "h2": K})
    play(board, "d9-d7")
    assert board.get(parse_square("c7")) is Piece.EMPTY
    assert board.piece_count(Side.ATTACKER) == 2
    assert board.piece_count(Side.DEFENDER) == 1
    assert board.history[-1].captured == ((parse_square("c7"), D),)
    assert board.winner is None


def test_moving_between_two_enemies_is_safe() -> None:
    board = board_from({"c7": D, "e7": D, "d9": A, "h2": K})
    play(board, "d9-d7")
    assert board.get(parse_square("d7")) is A
    assert board.piece_count(Side.DEFENDER) == 3


def test_king_takes_part_in_captures() -> None:
    board = board_from({"b4": K, "c6": D, "c5": A, "h8": A}, turn=Side.DEFENDER)
    play(board, "b4-c4")
    assert board.get(parse_square("c5")) is Piece.EMPTY


def test_one_move_can_capture_in_several_directions() -> None:
    board = board_from({"c4": D, "b5": D, "c3": A, "a5": A, "c9": A, "h2": K})
    play(board, "c9-c5")
    assert board.get(parse_square("c4")) is Piece.EMPTY
    assert board.get(parse_square("b5")) is Piece.EMPTY
    assert len(board.history[-1].captured) == 2


def test_king_escape_wins_for_defenders() -> None:
    board = board_from({"b5": K, "h8": A}, turn=Side.DEFENDER)
    play(board, "b5-a5")
    assert board.winner is Side.DEFENDER
    assert board.result == GameResult.DEFENDER_WIN
    result = board.make_move(Move.parse("h8-h7"))
    assert not result
    assert result.reason == "the game is over"


def test_king_on_ordinary_square_falls_to_two_attackers() -> None:
    board = board_from({"c3": K, "b3": A, "d1": A, "h8": D})
    play(board, "d1-d3")
    assert board.king_square() is None
    assert board.winner is Side.ATTACKER


def test_king_on_throne_needs_four_attackers() -> None:
    board = board_from({"e5": K, "e6": A, "f5": A, "e4": A, "a5": A, "h8": D})
    assert board.throne_surrounded()
    play(board, "a5-d5")
    assert board.get(THRONE) is Piece.EMPTY
    assert board.winner is Side.ATTACKER


def test_king_on_throne_survives_three_attackers_and_a_defender() -> None:
    board = board_from({"e5": K, "e6": A, "f5": A, "d5": D, "e1": A, "h8": D})
    play(board, "e1-e4")
    assert board.get(THRONE) is K
    assert board.winner is None


def test_king_beside_throne_uses_throne_as_hostile() -> None:
    board = board_from({"e6": K, "d6": A, "f6": A, "e9": A, "h2": D})
    play(board, "e9-e7")
    assert board.get(parse_square("e6")) is Piece.EMPTY
    assert board.winner is Side.ATTACKER


def test_king_beside_throne_survives_two_attackers() -> None:
    board = board_from({"e6": K, "d6": A, "h6": A, "e9": A, "h2": D})
    play(board, "e9-e7")
    assert board.get(parse_square("e6")) is K
    assert board.winner is None


def test_side_without_moves_loses() -> None:
    board = board_from(
        {"a1": D, "a2": D, "b1": D, "b2": K, "a3": A, "b3": A, "c2": A, "f1": A}
    )
    play(board, "f1-c1")
    assert board.get(parse_square("b1")) is D
    assert not board.has_move(Side.DEFENDER)
    assert board.winner is Side.ATTACKER


def test_attacker_without_moves_loses() -> None:
    board = board_from({"a1": A, "a2": D, "c1": D, "h8": K}, turn=Side.DEFENDER)
    play(board, "c1-b1")
    assert board.get(parse_square("a1")) is A
    assert not board.has_move(Side.ATTACKER)
    assert board.winner is Side.DEFENDER
    assert board.result == GameResult.DEFENDER_WIN


def test_from_pieces_rejects_two_kings() -> None:
    with pytest.raises(BoardInvariantError):
        board_from({"c3": K, "g7": K})


def test_put_after_moves_is_rejected() -> None:
    board = Board()
    play(board, "d1-c1")
    with pytest.raises(BoardInvariantError):
        board.put(A, parse_square("c3"))


def test_king_square_lookup_does_not_mutate() -> None:
    board = board_from({"c3": A, "g7": D})
    assert board.king_square() is None
    assert board.winner is None
