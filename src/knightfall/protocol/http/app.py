from __future__ import annotations

import logging
from typing import Dict, Literal, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
    value_error_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from ...config import Difficulty, EngineOptions
from ...controller import Controller
from ...engine import rules
from ...engine.attacks import is_attacked
from ...engine.board import Board
from ...engine.errors import IllegalMoveError
from ...engine.move import parse_uci
from ...engine.movegen import legal_moves
from ...engine.piece import Color
from ...engine.square import Square
from ...providers import default_providers


logger = logging.getLogger(__name__)


class PositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class PieceMovesRequest(PositionRequest):
    square: str = Field(..., description="Square of the piece, e.g. e2")


class PieceMovesResponse(BaseModel):
    square: str
    piece: str
    moves: list[str]


class AttackedRequest(PositionRequest):
    square: str = Field(..., description="Square to probe, e.g. f7")
    color: Literal["white", "black"] = Field(..., description="Attacking side")


class AttackedResponse(BaseModel):
    square: str
    color: str
    attacked: bool


class PositionState(BaseModel):
    fen: str
    side_to_move: str
    legal_moves: list[str]
    in_check: bool
    checkmate: bool
    stalemate: bool


class ApplyRequest(PositionRequest):
    move: str = Field(..., description="UCI move string, e.g., e2e4")


class ApplyResponse(BaseModel):
    fen: str


class BestMoveRequest(PositionRequest):
    difficulty: Optional[Difficulty] = Field(default=None)
    depth: Optional[int] = Field(default=None, ge=1, le=4)


class BestMoveResponse(BaseModel):
    move: Optional[str]
    provider: Optional[str]


def create_app(options: Optional[EngineOptions] = None) -> FastAPI:
    app = FastAPI(title="knightfall", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=logging.INFO)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, exception_handler)

    base_options = options or EngineOptions()
    controller = Controller(default_providers(base_options))
    app.state.controller = controller

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/moves", response_model=PieceMovesResponse)
    async def piece_moves(req: PieceMovesRequest) -> PieceMovesResponse:
        board = Board.from_fen(req.fen)
        square = Square.parse(req.square)
        moves = legal_moves(board, square)
        return PieceMovesResponse(
            square=str(square),
            piece=str(board[square]),
            moves=[m.to_uci() for m in moves],
        )

    @app.post("/api/attacked", response_model=AttackedResponse)
    async def attacked(req: AttackedRequest) -> AttackedResponse:
        board = Board.from_fen(req.fen)
        square = Square.parse(req.square)
        return AttackedResponse(
            square=str(square),
            color=req.color,
            attacked=is_attacked(board, square, Color[req.color.upper()]),
        )

    @app.post("/api/legal", response_model=PositionState)
    async def legal(req: PositionRequest) -> PositionState:
        board = Board.from_fen(req.fen)
        return _state(board)

    @app.post("/api/apply", response_model=ApplyResponse)
    async def apply(req: ApplyRequest) -> ApplyResponse:
        board = Board.from_fen(req.fen)
        move = parse_uci(req.move)
        if move not in rules.legal_moves_for(board):
            raise IllegalMoveError(f"illegal move: {req.move}")
        return ApplyResponse(fen=board.apply(move).to_fen())

    @app.post("/api/best-move", response_model=BestMoveResponse)
    async def best_move(req: BestMoveRequest) -> BestMoveResponse:
        board = Board.from_fen(req.fen)
        update: Dict[str, object] = {}
        if req.difficulty is not None:
            update["difficulty"] = req.difficulty
        if req.depth is not None:
            update["search_depth"] = req.depth
        decision = controller.decide(board, base_options.model_copy(update=update))
        if decision is None:
            return BestMoveResponse(move=None, provider=None)
        return BestMoveResponse(move=decision.move.to_uci(), provider=decision.provider)

    return app


def _state(board: Board) -> PositionState:
    return PositionState(
        fen=board.to_fen(),
        side_to_move=board.side_to_move.name.lower(),
        legal_moves=[m.to_uci() for m in rules.legal_moves_for(board)],
        in_check=rules.is_in_check(board),
        checkmate=rules.is_checkmate(board),
        stalemate=rules.is_stalemate(board),
    )
