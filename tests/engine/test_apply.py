from __future__ import annotations

import pytest

from knightfall.engine.board import STARTPOS_FEN, Board
from knightfall.engine.errors import IllegalMoveError
from knightfall.engine.move import parse_uci
from knightfall.engine.piece import Color, Piece, PieceKind
from knightfall.engine.square import Square


def test_apply_returns_new_board_and_does_not_mutate() -> None:
    b = Board.from_fen(STARTPOS_FEN)
    b2 = b.apply(parse_uci("e2e4"))

    # Source board unchanged
    assert b.to_fen() == STARTPOS_FEN
    # halfmove reset, ep square set, side toggled
    assert b2.to_fen() == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"


def test_apply_from_empty_square_raises() -> None:
    b = Board.from_fen(STARTPOS_FEN)
    with pytest.raises(IllegalMoveError):
        b.apply(parse_uci("e4e5"))


def test_fullmove_increments_after_black() -> None:
    b = Board.from_fen(STARTPOS_FEN).apply(parse_uci("g1f3")).apply(parse_uci("g8f6"))
    assert b.fullmove_number == 2
    assert b.halfmove_clock == 2
    assert b.side_to_move is Color.WHITE


def test_en_passant_capture_removes_passed_pawn() -> None:
    b = Board.from_fen("4k3/8/8/3Pp3/8/8/8/4K3 w - e6 0 1")
    b2 = b.apply(parse_uci("d5e6"))
    assert b2[Square.parse("e5")] is None
    assert b2[Square.parse("e6")] == Piece(PieceKind.PAWN, Color.WHITE)
    assert b2.ep_square is None


def test_castling_moves_rook_and_clears_rights() -> None:
    b = Board.from_fen("r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1")
    b2 = b.apply(parse_uci("e1g1"))
    assert b2[Square.parse("f1")] == Piece(PieceKind.ROOK, Color.WHITE)
    assert b2[Square.parse("h1")] is None
    assert b2[Square.parse("g1")] == Piece(PieceKind.KING, Color.WHITE)
    assert not b2.white_kingside and not b2.white_queenside
    assert b2.black_kingside and b2.black_queenside

    b3 = b.apply(parse_uci("e1c1"))
    assert b3[Square.parse("d1")] == Piece(PieceKind.ROOK, Color.WHITE)
    assert b3[Square.parse("a1")] is None


def test_rook_move_and_corner_capture_clear_rights() -> None:
    b = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    b2 = b.apply(parse_uci("a1a8"))
    assert not b2.white_queenside
    assert not b2.black_queenside
    assert b2.white_kingside and b2.black_kingside


def test_promotion_replaces_pawn() -> None:
    b = Board.from_fen("4k3/2P5/8/8/8/8/8/4K3 w - - 3 40")
    b2 = b.apply(parse_uci("c7c8q"))
    assert b2[Square.parse("c8")] == Piece(PieceKind.QUEEN, Color.WHITE)
    assert b2[Square.parse("c7")] is None
    assert b2.halfmove_clock == 0
