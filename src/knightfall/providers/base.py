from __future__ import annotations

from typing import List, Protocol

from knightfall.config import EngineOptions
from knightfall.engine.board import Board
from knightfall.engine.move import Move


class MoveProvider(Protocol):
    """Source of candidate moves for the side to move.

    Implementations return their candidates best-first; an empty list means
    the provider has nothing to say about the position and the next one in
    the chain is asked.
    """

    name: str

    def recommended_moves(self, board: Board, options: EngineOptions) -> List[Move]: ...
