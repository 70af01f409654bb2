"""Per-piece move generation.

Moves are pseudo-legal except for the king: king steps and castling are
filtered for king safety, everything else may leave the mover in check.
Use :mod:`knightfall.engine.rules` for fully legal move lists.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from .attacks import (
    BISHOP_DIRECTIONS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    ROOK_DIRECTIONS,
    Offsets,
    is_attacked,
    is_king_in_range,
)
from .board import Board
from .errors import InvalidPositionError
from .move import Move
from .piece import Color, Piece, PieceKind
from .square import Square


Generator = Callable[[Board, Square, Color], List[Move]]

# (kingside, rook file, files that must be empty, files the king crosses, king destination file)
_CASTLING_LAYOUTS: Tuple[Tuple[bool, int, Tuple[int, ...], Tuple[int, ...], int], ...] = (
    (False, 0, (1, 2, 3), (3, 2), 2),
    (True, 7, (5, 6), (5, 6), 6),
)


def legal_moves(board: Board, square: Square) -> List[Move]:
    """Return every move available to the piece on ``square``.

    Args:
        board (Board): Current position. It is read, never modified.
        square (Square): Square holding the piece to move.

    Returns:
        List[Move]: Possibly empty list of moves.

    Raises:
        InvalidPositionError: If ``square`` is empty or holds a piece kind the
            generator does not handle.
    """
    piece = board[square]
    if piece is None:
        raise InvalidPositionError(square, None)
    generator = _GENERATORS.get(piece.kind)
    if generator is None:
        raise InvalidPositionError(square, piece)
    return generator(board, square, piece.color)


def pawn_moves(board: Board, sq: Square, color: Color) -> List[Move]:
    moves: List[Move] = []
    direction = color.pawn_direction
    last_rank = color.opponent.back_rank
    start_rank = color.back_rank + direction
    ep_rank = color.opponent.back_rank - 3 * direction

    def add(to: Square) -> None:
        # only queen promotions are generated
        promo = PieceKind.QUEEN if to.rank == last_rank else None
        moves.append(Move(sq, to, promo))

    ahead = sq.offset(direction, 0)
    ahead_free = ahead is not None and board[ahead] is None
    if ahead_free:
        add(ahead)

    for d_file in (-1, 1):
        target = sq.offset(direction, d_file)
        if target is None:
            continue
        occupant = board[target]
        if occupant is not None and occupant.color is not color:
            add(target)

    if sq.rank == start_rank and ahead_free:
        two = sq.offset(2 * direction, 0)
        if two is not None and board[two] is None:
            add(two)

    ep = board.ep_square
    if (
        ep is not None
        and sq.rank == ep_rank
        and ep.rank == ep_rank + direction
        and abs(ep.file - sq.file) == 1
    ):
        add(ep)
    return moves


def _ray_moves(board: Board, sq: Square, color: Color, directions: Offsets) -> List[Move]:
    moves: List[Move] = []
    for d_rank, d_file in directions:
        to = sq.offset(d_rank, d_file)
        while to is not None:
            occupant = board[to]
            if occupant is None:
                moves.append(Move(sq, to))
            else:
                if occupant.color is not color:
                    moves.append(Move(sq, to))
                break
            to = to.offset(d_rank, d_file)
    return moves


def rook_moves(board: Board, sq: Square, color: Color) -> List[Move]:
    return _ray_moves(board, sq, color, ROOK_DIRECTIONS)


def bishop_moves(board: Board, sq: Square, color: Color) -> List[Move]:
    return _ray_moves(board, sq, color, BISHOP_DIRECTIONS)


def queen_moves(board: Board, sq: Square, color: Color) -> List[Move]:
    return bishop_moves(board, sq, color) + rook_moves(board, sq, color)


def knight_moves(board: Board, sq: Square, color: Color) -> List[Move]:
    moves: List[Move] = []
    for d_rank, d_file in KNIGHT_OFFSETS:
        to = sq.offset(d_rank, d_file)
        if to is None:
            continue
        occupant = board[to]
        if occupant is None or occupant.color is not color:
            moves.append(Move(sq, to))
    return moves


def king_moves(board: Board, sq: Square, color: Color) -> List[Move]:
    """King steps that are not covered by the opponent, castling first.

    The king's own square is passed to the attack detector as vacated, so a
    king cannot step back along the line of a slider that is checking it.
    """
    opponent = color.opponent
    moves = castling_moves(board, sq, color)
    for d_rank, d_file in KING_OFFSETS:
        to = sq.offset(d_rank, d_file)
        if to is None:
            continue
        occupant = board[to]
        if occupant is not None and occupant.color is color:
            continue
        if is_attacked(board, to, opponent, vacated=sq):
            continue
        # two kings may never stand next to each other
        if is_king_in_range(board, to, opponent, vacated=sq):
            continue
        moves.append(Move(sq, to))
    return moves


def castling_moves(board: Board, king_sq: Square, color: Color) -> List[Move]:
    """Return 0 to 2 castling moves for the king on ``king_sq``.

    A side may castle only if:
    - its castling right is still set and the king stands on its home square,
    - the king is not in check,
    - its own rook is on the corner and that corner is not attacked,
    - the squares between king and rook are empty and none of the squares
      the king crosses or lands on is attacked.
    """
    moves: List[Move] = []
    rank = color.back_rank
    opponent = color.opponent
    if king_sq != Square(rank, 4):
        return moves
    if not (board.can_castle(color, False) or board.can_castle(color, True)):
        return moves
    if is_attacked(board, king_sq, opponent):
        return moves

    rook = Piece(PieceKind.ROOK, color)
    for kingside, rook_file, between, path, dest_file in _CASTLING_LAYOUTS:
        if not board.can_castle(color, kingside):
            continue
        rook_sq = Square(rank, rook_file)
        if board[rook_sq] != rook or is_attacked(board, rook_sq, opponent):
            continue
        if any(board[Square(rank, f)] is not None for f in between):
            continue
        if any(is_attacked(board, Square(rank, f), opponent) for f in path):
            continue
        moves.append(Move(king_sq, Square(rank, dest_file)))
    return moves


_GENERATORS: Dict[PieceKind, Generator] = {
    PieceKind.PAWN: pawn_moves,
    PieceKind.ROOK: rook_moves,
    PieceKind.KNIGHT: knight_moves,
    PieceKind.BISHOP: bishop_moves,
    PieceKind.QUEEN: queen_moves,
    PieceKind.KING: king_moves,
}
