"""Evaluation heuristics used by the search provider.

Pure functions; boards are only read.
"""

from __future__ import annotations

from typing import Dict, Final

from knightfall.engine.board import Board
from knightfall.engine.piece import Color, PieceKind
from knightfall.engine.square import Square


# Material values in centipawns
P_VAL: Final = 100
N_VAL: Final = 320
B_VAL: Final = 330
R_VAL: Final = 500
Q_VAL: Final = 900

PIECE_VALUES: Final[Dict[PieceKind, int]] = {
    PieceKind.PAWN: P_VAL,
    PieceKind.KNIGHT: N_VAL,
    PieceKind.BISHOP: B_VAL,
    PieceKind.ROOK: R_VAL,
    PieceKind.QUEEN: Q_VAL,
    PieceKind.KING: 0,
}

# Heuristic weights (centipawns)
PAWN_ADVANCE_BONUS: Final = 5  # per rank beyond the starting rank
CENTER_BONUS: Final = 10  # knights and bishops on the four central squares
BISHOP_PAIR_BONUS: Final = 30

_CENTER = {Square(3, 3), Square(3, 4), Square(4, 3), Square(4, 4)}


def material(board: Board, color: Color) -> int:
    return sum(PIECE_VALUES[p.kind] for _, p in board.pieces(color))


def _positional(board: Board, color: Color) -> int:
    score = 0
    bishops = 0
    start_rank = color.back_rank + color.pawn_direction
    for sq, piece in board.pieces(color):
        if piece.kind is PieceKind.PAWN:
            score += abs(sq.rank - start_rank) * PAWN_ADVANCE_BONUS
        elif piece.kind in (PieceKind.KNIGHT, PieceKind.BISHOP) and sq in _CENTER:
            score += CENTER_BONUS
        if piece.kind is PieceKind.BISHOP:
            bishops += 1
    if bishops >= 2:
        score += BISHOP_PAIR_BONUS
    return score


def evaluate(board: Board) -> int:
    """Return a material + positional evaluation in centipawns.

    Positive means advantage for White. Side-to-move adjustment is done by
    the search (negamax) so this function is side-agnostic.
    """
    white = material(board, Color.WHITE) + _positional(board, Color.WHITE)
    black = material(board, Color.BLACK) + _positional(board, Color.BLACK)
    return white - black
