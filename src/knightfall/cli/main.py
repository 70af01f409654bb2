from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from ..config import Difficulty, EngineOptions
from ..controller import Controller
from ..engine.attacks import is_attacked
from ..engine.board import Board
from ..engine.movegen import legal_moves
from ..engine.piece import Color
from ..engine.square import Square
from ..providers import default_providers


logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="knightfall", description="Chess move engine")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    moves = sub.add_parser("moves", help="List the moves of the piece on a square")
    moves.add_argument("fen", help="FEN string (quote it)")
    moves.add_argument("square", help="Square of the piece, e.g. e2")

    attacked = sub.add_parser("attacked", help="Is a square attacked by a side")
    attacked.add_argument("fen", help="FEN string (quote it)")
    attacked.add_argument("square", help="Square to probe, e.g. f7")
    attacked.add_argument("color", choices=["white", "black"])

    best = sub.add_parser("bestmove", help="Pick a move for the side to move")
    best.add_argument("fen", help="FEN string (quote it)")
    best.add_argument(
        "--difficulty",
        choices=[d.name.lower() for d in Difficulty],
        default="medium",
    )
    best.add_argument("--book", default=None, help="JSON opening book")
    best.add_argument("--depth", type=int, default=2, help="Search depth (default: 2)")
    return parser


def _run(args: argparse.Namespace) -> None:
    if args.command == "serve":
        uvicorn.run(
            "knightfall.protocol.http.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            log_level=args.log_level.lower(),
        )
    elif args.command == "moves":
        board = Board.from_fen(args.fen)
        for m in legal_moves(board, Square.parse(args.square)):
            print(m.to_uci())
    elif args.command == "attacked":
        board = Board.from_fen(args.fen)
        hit = is_attacked(board, Square.parse(args.square), Color[args.color.upper()])
        print("true" if hit else "false")
    elif args.command == "bestmove":
        options = EngineOptions(
            difficulty=Difficulty[args.difficulty.upper()],
            book_path=args.book,
            search_depth=args.depth,
        )
        move = Controller(default_providers(options)).give_move(Board.from_fen(args.fen), options)
        print(move.to_uci() if move is not None else "(none)")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level)
    try:
        _run(args)
    except (ValueError, OSError) as e:
        # pydantic's ValidationError is a ValueError too
        logger.debug("command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
