"""Whole-side move lists and check detection built on the per-piece generator."""

from __future__ import annotations

from typing import List, Optional

from .attacks import is_attacked
from .board import Board
from .movegen import legal_moves
from .move import Move
from .piece import Color


def pseudo_legal_moves_for(board: Board, color: Color) -> List[Move]:
    """All generator moves of every piece of ``color``, a1 first."""
    moves: List[Move] = []
    for sq, _piece in board.pieces(color):
        moves.extend(legal_moves(board, sq))
    return moves


def is_in_check(board: Board, color: Optional[Color] = None) -> bool:
    """Return True if ``color``'s king (default: side to move) is attacked.

    A board without a king of that color is never in check.
    """
    color = color or board.side_to_move
    king_sq = board.find_king(color)
    if king_sq is None:
        return False
    return is_attacked(board, king_sq, color.opponent)


def legal_moves_for(board: Board, color: Optional[Color] = None) -> List[Move]:
    """Moves of ``color`` that do not leave its own king attacked."""
    color = color or board.side_to_move
    return [
        m
        for m in pseudo_legal_moves_for(board, color)
        if not is_in_check(board.apply(m), color)
    ]


def has_legal_moves(board: Board) -> bool:
    color = board.side_to_move
    for sq, _piece in board.pieces(color):
        for m in legal_moves(board, sq):
            if not is_in_check(board.apply(m), color):
                return True
    return False


def is_checkmate(board: Board) -> bool:
    return is_in_check(board) and not has_legal_moves(board)


def is_stalemate(board: Board) -> bool:
    return not is_in_check(board) and not has_legal_moves(board)
