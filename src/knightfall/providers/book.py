from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List

from knightfall.config import EngineOptions
from knightfall.engine.board import Board
from knightfall.engine.move import Move, parse_uci
from knightfall.engine.rules import legal_moves_for


logger = logging.getLogger(__name__)


def book_key(fen: str) -> str:
    """Placement, side to move, castling and en passant; move counters are ignored."""
    return " ".join(fen.split()[:4])


class OpeningBookProvider:
    """Simple JSON-based opening book.

    Format examples:
    - Object mapping FEN -> list of {"uci": "e2e4", "weight": 10}
    - Or {"positions": [{"fen": "...", "moves": [{"uci": "...", "weight": 1}]}]}

    Notes:
    - Entries that are not legal in the position are dropped.
    - Candidates come back highest weight first, ties broken by UCI text so
      the order is stable.
    """

    name = "book"

    def __init__(self, path: str) -> None:
        self.path = path
        self._index: Dict[str, List[Dict[str, Any]]] = {}
        self._load()

    def _load(self) -> None:
        if not os.path.exists(self.path):
            raise FileNotFoundError(self.path)
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict) and "positions" in data:
            for ent in data["positions"]:
                fen = str(ent.get("fen", "")).strip()
                moves = ent.get("moves", [])
                if fen and isinstance(moves, list):
                    self._index[book_key(fen)] = [dict(m) for m in moves]
        elif isinstance(data, dict):
            # Assume direct mapping of FEN -> list[moves]
            for fen, moves in data.items():
                if isinstance(moves, list):
                    self._index[book_key(str(fen).strip())] = [dict(m) for m in moves]
        else:
            raise ValueError("invalid book format")
        logger.debug("Loaded opening book %s with %d positions", self.path, len(self._index))

    def __len__(self) -> int:
        return len(self._index)

    def recommended_moves(self, board: Board, options: EngineOptions) -> List[Move]:
        entries = self._index.get(book_key(board.to_fen()))
        if not entries:
            logger.debug("No book entry for position")
            return []
        legal = {m.to_uci(): m for m in legal_moves_for(board)}

        candidates: List[Dict[str, Any]] = []
        for e in entries:
            u = e.get("uci")
            if not isinstance(u, str):
                continue
            try:
                uci = parse_uci(u).to_uci()
            except ValueError:
                continue
            if uci in legal:
                w = int(e.get("weight", 1))
                candidates.append({"move": legal[uci], "weight": max(1, w)})

        candidates.sort(key=lambda x: (-x["weight"], x["move"].to_uci()))
        return [c["move"] for c in candidates]
