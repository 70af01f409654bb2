from __future__ import annotations

import pytest

from knightfall.engine.attacks import is_attacked
from knightfall.engine.board import Board
from knightfall.engine.piece import Color
from knightfall.engine.square import Square


COVERAGE_FEN = "rbrQkb1n/R1p1p2p/2ppp1p1/p4K2/8/PNP5/RBPPP1P1/PN4B1 w - - 0 1"

# Squares covered by white, one string per rank starting at rank 1, a-file first
WHITE_COVERAGE = [
    "10100000",
    "01010101",
    "11111101",
    "01011110",
    "10100010",
    "11011000",
    "11111000",
    "10101000",
]


def test_corner_covered_by_rook() -> None:
    b = Board.from_fen(COVERAGE_FEN)
    assert is_attacked(b, Square(0, 0), Color.WHITE)


@pytest.mark.parametrize("rank", range(8))
def test_white_coverage_grid(rank: int) -> None:
    b = Board.from_fen(COVERAGE_FEN)
    got = "".join(
        "1" if is_attacked(b, Square(rank, file), Color.WHITE) else "0" for file in range(8)
    )
    assert got == WHITE_COVERAGE[rank]


def test_pawn_attacks_depend_on_color() -> None:
    b = Board.from_fen("4k3/8/8/3p4/8/3P4/8/4K3 w - - 0 1")
    # white pawn d3 covers c4/e4, black pawn d5 covers c4/e4 from above
    assert is_attacked(b, Square.parse("e4"), Color.WHITE)
    assert is_attacked(b, Square.parse("e4"), Color.BLACK)
    assert not is_attacked(b, Square.parse("h5"), Color.WHITE)
    assert not is_attacked(b, Square.parse("e6"), Color.WHITE)
    assert is_attacked(b, Square.parse("c6"), Color.BLACK) is False


def test_slider_ray_stops_at_first_piece() -> None:
    b = Board.from_fen("4k3/8/8/8/R2n3p/8/8/4K3 w - - 0 1")
    assert is_attacked(b, Square.parse("c4"), Color.WHITE)
    assert is_attacked(b, Square.parse("d4"), Color.WHITE)
    assert not is_attacked(b, Square.parse("f4"), Color.WHITE)


def test_vacated_square_lets_rays_through() -> None:
    b = Board.from_fen("4k3/8/8/8/r3K3/8/8/8 w - - 0 1")
    f4 = Square.parse("f4")
    assert not is_attacked(b, f4, Color.BLACK)
    assert is_attacked(b, f4, Color.BLACK, vacated=Square.parse("e4"))


def test_king_covers_square_only_if_undefended() -> None:
    # d5 is next to the white king but defended by the black pawn on e6
    b = Board.from_fen("4k3/8/4p3/8/4K3/8/8/8 w - - 0 1")
    assert not is_attacked(b, Square.parse("d5"), Color.WHITE)
    assert is_attacked(b, Square.parse("d4"), Color.WHITE)


def test_square_between_two_kings_terminates() -> None:
    b = Board.from_fen("8/8/8/2k1K3/8/8/8/8 w - - 0 1")
    d5 = Square.parse("d5")
    assert is_attacked(b, d5, Color.WHITE)
    assert is_attacked(b, d5, Color.BLACK)
    assert not is_attacked(b, d5, Color.WHITE, count_kings=False)


def test_is_attacked_does_not_modify_board() -> None:
    b = Board.from_fen(COVERAGE_FEN)
    before = b.copy()
    for rank in range(8):
        for file in range(8):
            is_attacked(b, Square(rank, file), Color.BLACK)
    assert b == before
