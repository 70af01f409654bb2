from __future__ import annotations

from typing import Optional

from .piece import Piece
from .square import Square


class InvalidPositionError(ValueError):
    """Move generation was asked about a square it cannot handle.

    Raised for an empty square or a piece kind the generator does not know.
    """

    def __init__(self, square: Square, piece: Optional[Piece]) -> None:
        self.square = square
        self.piece = piece
        super().__init__(f"couldn't read square {square} with piece {piece}")


class IllegalMoveError(ValueError):
    """A move cannot be applied to the board it was given."""
