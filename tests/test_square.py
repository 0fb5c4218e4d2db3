import pytest

from tablut.core import SQUARES, THRONE, THRONE_NEIGHBORS, Move, decode_move, encode_move, parse_square, sq


def test_squares_are_precomputed_in_index_order() -> None:
    assert len(SQUARES) == 81
    for index, square in enumerate(SQUARES):
        assert square.index == index
    assert sq(4, 4) is SQUARES[40]
    assert str(sq(0, 0)) == "a1"
    assert str(sq(8, 8)) == "i9"


def test_edge_flag() -> None:
    assert sq(0, 4).is_edge
    assert sq(4, 8).is_edge
    assert not sq(1, 1).is_edge
    assert not THRONE.is_edge


def test_rook_move_and_between() -> None:
    e5 = parse_square("e5")
    assert e5.rook_move(0, 2) == parse_square("e7")
    assert e5.rook_move(1, 1) == parse_square("f5")
    assert e5.rook_move(3, 4) == parse_square("a5")
    assert e5.rook_move(3, 5) is None
    assert parse_square("c5").between(parse_square("e5")) == parse_square("d5")
    with pytest.raises(ValueError):
        parse_square("c5").between(parse_square("f5"))
    with pytest.raises(ValueError):
        parse_square("c5").between(parse_square("d6"))


def test_throne_neighbours() -> None:
    assert [str(s) for s in THRONE_NEIGHBORS] == ["e6", "f5", "e4", "d5"]


def test_parse_square_rejects_garbage() -> None:
    for text in ("", "j1", "a0", "a10", "55"):
        with pytest.raises(ValueError):
            parse_square(text)
    with pytest.raises(ValueError):
        sq(9, 0)


def test_move_notation() -> None:
    move = Move.parse(" E2-e4 ")
    assert move.from_sq == sq(4, 1)
    assert move.to_sq == sq(4, 3)
    assert str(move) == "e2-e4"
    for text in ("e2e4", "e2-e10", "z1-a1", "e2-"):
        with pytest.raises(ValueError):
            Move.parse(text)


def test_move_index_encoding() -> None:
    move = Move.parse("i9-a1")
    assert encode_move(move) == 80 * 81
    assert decode_move(encode_move(move)) == move
    with pytest.raises(ValueError):
        decode_move(81 * 81)
