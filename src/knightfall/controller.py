"""Move selection across a prioritized chain of providers."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .config import EngineOptions
from .engine.board import Board
from .engine.move import Move
from .providers import MoveProvider


logger = logging.getLogger(__name__)


@dataclass
class Decision:
    move: Move
    provider: str


def pick_index(r: float, difficulty: int, count: int) -> int:
    """Map a uniform draw in ``[0, 1)`` to a candidate index.

    Raising the draw to ``difficulty`` pushes it towards 0, i.e. towards the
    front of the list where the better moves are. The modulo keeps the value
    below 1 for difficulties below zero.
    """
    return int(math.floor(math.pow(r, difficulty) % 1 * count))


class Controller:
    """Asks each provider in order and picks from the first non-empty answer."""

    def __init__(self, providers: Sequence[MoveProvider], rng: Optional[random.Random] = None) -> None:
        self.providers: List[MoveProvider] = list(providers)
        self.rng = rng or random.Random()

    def decide(self, board: Board, options: EngineOptions) -> Optional[Decision]:
        for provider in self.providers:
            logger.info("Requesting moves from: [%s]", provider.name)
            moves = provider.recommended_moves(board, options)
            if not moves:
                continue
            logger.info("Received: [%d moves]", len(moves))
            idx = pick_index(self.rng.random(), int(options.difficulty), len(moves))
            best = moves[idx]
            logger.info("Best move is [%s] by [%s]", best.to_uci(), provider.name)
            return Decision(move=best, provider=provider.name)
        logger.warning("No possible moves were found.")
        return None

    def give_move(self, board: Board, options: EngineOptions) -> Optional[Move]:
        decision = self.decide(board, options)
        return decision.move if decision is not None else None
