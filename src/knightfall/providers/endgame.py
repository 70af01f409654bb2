from __future__ import annotations

import logging
from typing import List

from knightfall.config import EngineOptions
from knightfall.engine.board import Board
from knightfall.engine.move import Move
from knightfall.engine.piece import Color, PieceKind
from knightfall.engine.square import Square
from knightfall.eval import evaluate, material

from .search import SearchProvider


logger = logging.getLogger(__name__)

# Pieces besides the king that keep a position in endgame territory
ENDGAME_PIECES = (PieceKind.ROOK, PieceKind.QUEEN)
MAX_ENDGAME_DEPTH = 4

# Mop-up weights (centipawns)
EDGE_WEIGHT = 10  # per step the losing king stands away from the centre
KING_PROXIMITY_WEIGHT = 4  # per step the kings are closer than 14 apart


def is_endgame(board: Board) -> bool:
    """Return True when each side has at most one rook or queen beside its king.

    Bare kings on both sides do not count: there is nothing to convert.
    """
    heavy = 0
    for color in Color:
        extras = [p for _, p in board.pieces(color) if p.kind is not PieceKind.KING]
        if len(extras) > 1 or any(p.kind not in ENDGAME_PIECES for p in extras):
            return False
        heavy += len(extras)
    return heavy > 0


def center_distance(sq: Square) -> int:
    """Manhattan distance to the nearest of the four central squares."""
    return max(3 - sq.file, sq.file - 4) + max(3 - sq.rank, sq.rank - 4)


def mop_up_evaluate(board: Board) -> int:
    """Material plus a bonus for driving the weaker king to the edge.

    The stronger side also gains for bringing its own king closer, which is
    what lets rook and queen mates be found at shallow depth. Positive means
    advantage for White.
    """
    score = evaluate(board)
    white = material(board, Color.WHITE)
    black = material(board, Color.BLACK)
    if white == black:
        return score
    strong = Color.WHITE if white > black else Color.BLACK
    strong_king = board.find_king(strong)
    weak_king = board.find_king(strong.opponent)
    if strong_king is None or weak_king is None:
        return score

    kings_apart = abs(strong_king.rank - weak_king.rank) + abs(strong_king.file - weak_king.file)
    bonus = EDGE_WEIGHT * center_distance(weak_king) + KING_PROXIMITY_WEIGHT * (14 - kings_apart)
    return score + bonus if strong is Color.WHITE else score - bonus


class EndgameProvider:
    """Rook and queen endings searched one ply deeper with a mop-up evaluation.

    Returns an empty list outside those endings so the next provider in the
    chain answers instead.
    """

    name = "endgame"

    def __init__(self, max_depth: int = MAX_ENDGAME_DEPTH) -> None:
        self.max_depth = max_depth
        self._search = SearchProvider(evaluator=mop_up_evaluate)

    def recommended_moves(self, board: Board, options: EngineOptions) -> List[Move]:
        if not is_endgame(board):
            logger.debug("Position is not a rook or queen ending")
            return []
        depth = min(options.search_depth + 1, self.max_depth)
        return self._search.rank(board, depth)
