from __future__ import annotations

from knightfall.engine.board import Board
from knightfall.engine.movegen import legal_moves
from knightfall.engine.piece import PieceKind
from knightfall.engine.square import Square


def _uci_set(b: Board, square: str) -> set[str]:
    return {m.to_uci() for m in legal_moves(b, Square.parse(square))}


def test_white_en_passant() -> None:
    # Black just played e7e5 → ep target e6; white pawn on d5 can capture e6 ep
    b = Board.from_fen("4k3/8/8/3Pp3/8/8/8/4K3 w - e6 0 1")
    assert _uci_set(b, "d5") == {"d5d6", "d5e6"}


def test_black_en_passant() -> None:
    # White just played e2e4 → ep target e3; black pawn on d4 can capture e3 ep
    b = Board.from_fen("4k3/8/8/8/3pP3/8/8/4K3 b - e3 0 1")
    assert _uci_set(b, "d4") == {"d4d3", "d4e3"}


def test_en_passant_needs_adjacent_file() -> None:
    b = Board.from_fen("4k3/8/8/2P1p3/8/8/8/4K3 w - e6 0 1")
    assert _uci_set(b, "c5") == {"c5c6"}


def test_double_push_blocked_by_piece_in_front() -> None:
    b = Board.from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
    assert _uci_set(b, "e2") == set()


def test_double_push_blocked_on_landing_square() -> None:
    b = Board.from_fen("4k3/8/8/8/4n3/8/4P3/4K3 w - - 0 1")
    assert _uci_set(b, "e2") == {"e2e3"}


def test_no_double_push_off_start_rank() -> None:
    b = Board.from_fen("4k3/8/8/8/8/4P3/8/4K3 w - - 0 1")
    assert _uci_set(b, "e3") == {"e3e4"}


def test_pawn_does_not_capture_forward_or_own_pieces() -> None:
    b = Board.from_fen("4k3/8/8/8/3PpN2/4P3/8/4K3 w - - 0 1")
    assert _uci_set(b, "e3") == set()


def test_black_push_and_capture_promotions() -> None:
    b = Board.from_fen("4k3/8/8/8/8/8/3p4/2N4K b - - 0 1")
    moves = legal_moves(b, Square.parse("d2"))
    assert {m.to_uci() for m in moves} == {"d2d1q", "d2c1q"}
    assert all(m.promotion is PieceKind.QUEEN for m in moves)


def test_no_promotion_tag_before_last_rank() -> None:
    b = Board.from_fen("4k3/8/2P5/8/8/8/8/4K3 w - - 0 1")
    moves = legal_moves(b, Square.parse("c6"))
    assert [m.to_uci() for m in moves] == ["c6c7"]
    assert moves[0].promotion is None


def test_en_passant_from_the_other_side() -> None:
    b = Board.from_fen("4k3/8/8/4pP2/8/8/8/4K3 w - e6 0 1")
    assert _uci_set(b, "f5") == {"f5f6", "f5e6"}
