"""Board model, attack detection and move generation.

Pure and deterministic. Nothing here mutates a board it
is given except the explicit ``Board`` setters.
"""

from __future__ import annotations

from .attacks import is_attacked
from .board import STARTPOS_FEN, Board
from .errors import IllegalMoveError, InvalidPositionError
from .move import Move, parse_uci
from .movegen import legal_moves
from .piece import Color, Piece, PieceKind
from .square import Square

__all__ = [
    "STARTPOS_FEN",
    "Board",
    "Color",
    "IllegalMoveError",
    "InvalidPositionError",
    "Move",
    "Piece",
    "PieceKind",
    "Square",
    "is_attacked",
    "legal_moves",
    "parse_uci",
]
