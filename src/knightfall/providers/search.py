from __future__ import annotations

import logging
from typing import Callable, List, Tuple

from knightfall.config import EngineOptions
from knightfall.engine.board import Board
from knightfall.engine.move import Move
from knightfall.engine.piece import Color
from knightfall.engine.rules import is_in_check, legal_moves_for
from knightfall.eval import PIECE_VALUES, evaluate


logger = logging.getLogger(__name__)

INF = 10_000_000
MATE_SCORE = 1_000_000  # mate scores are within +/- MATE_SCORE window


class SearchProvider:
    """Fixed-depth negamax with alpha-beta pruning.

    Every root move is searched with a full window so that the returned list
    is a real ranking, best first. The provider never comes back empty
    unless the side to move has no legal move.
    """

    name = "search"

    def __init__(self, evaluator: Callable[[Board], int] = evaluate) -> None:
        self.evaluator = evaluator
        self.nodes = 0

    def recommended_moves(self, board: Board, options: EngineOptions) -> List[Move]:
        return self.rank(board, options.search_depth)

    def rank(self, board: Board, depth: int) -> List[Move]:
        """Search every legal root move to ``depth`` plies and return them best first."""
        self.nodes = 0
        scored: List[Tuple[int, Move]] = []
        for m in _ordered(board, legal_moves_for(board)):
            score = -self._negamax(board.apply(m), depth - 1, -INF, INF, 1)
            scored.append((score, m))
        scored.sort(key=lambda x: (-x[0], x[1].to_uci()))
        if scored:
            logger.debug(
                "search depth=%d nodes=%d best=%s score=%d",
                depth,
                self.nodes,
                scored[0][1].to_uci(),
                scored[0][0],
            )
        return [m for _, m in scored]

    def _negamax(self, board: Board, depth: int, alpha: int, beta: int, ply: int) -> int:
        self.nodes += 1
        if depth <= 0:
            sign = 1 if board.side_to_move is Color.WHITE else -1
            return sign * self.evaluator(board)

        moves = legal_moves_for(board)
        if not moves:
            # Checkmated sides prefer the longest mate, stalemate is a draw
            return -MATE_SCORE + ply if is_in_check(board) else 0

        best = -INF
        for m in _ordered(board, moves):
            score = -self._negamax(board.apply(m), depth - 1, -beta, -alpha, ply + 1)
            if score > best:
                best = score
            if best > alpha:
                alpha = best
            if alpha >= beta:
                break
        return best


def _ordered(board: Board, moves: List[Move]) -> List[Move]:
    """Captures first, most valuable victim first."""

    def victim_value(m: Move) -> int:
        victim = board[m.to_sq]
        return PIECE_VALUES[victim.kind] if victim is not None else 0

    return sorted(moves, key=victim_value, reverse=True)
