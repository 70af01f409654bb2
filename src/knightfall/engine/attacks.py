"""Square attack detection.

Stateless structural queries: every call re-walks the board from scratch,
nothing is cached between calls.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .board import Board
from .piece import Color, Piece, PieceKind
from .square import Square


Offsets = Tuple[Tuple[int, int], ...]

ROOK_DIRECTIONS: Offsets = ((0, 1), (0, -1), (1, 0), (-1, 0))
BISHOP_DIRECTIONS: Offsets = ((1, 1), (-1, -1), (1, -1), (-1, 1))
KNIGHT_OFFSETS: Offsets = (
    (-2, -1),
    (-2, 1),
    (2, -1),
    (2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
)
KING_OFFSETS: Offsets = tuple(
    (dr, df) for dr in (-1, 0, 1) for df in (-1, 0, 1) if dr or df
)


def piece_at(board: Board, sq: Square, vacated: Optional[Square] = None) -> Optional[Piece]:
    """Board lookup that reports ``vacated`` as empty."""
    if sq == vacated:
        return None
    return board[sq]


def first_piece_on_ray(
    board: Board,
    origin: Square,
    direction: Tuple[int, int],
    vacated: Optional[Square] = None,
) -> Optional[Piece]:
    """Walk from ``origin`` (exclusive) and return the first piece met, if any."""
    d_rank, d_file = direction
    sq = origin.offset(d_rank, d_file)
    while sq is not None:
        piece = piece_at(board, sq, vacated)
        if piece is not None:
            return piece
        sq = sq.offset(d_rank, d_file)
    return None


def is_king_in_range(
    board: Board, square: Square, color: Color, vacated: Optional[Square] = None
) -> bool:
    """Return True if a king of ``color`` stands on a square adjacent to ``square``."""
    king = Piece(PieceKind.KING, color)
    for d_rank, d_file in KING_OFFSETS:
        sq = square.offset(d_rank, d_file)
        if sq is not None and piece_at(board, sq, vacated) == king:
            return True
    return False


def is_attacked(
    board: Board,
    square: Square,
    by_color: Color,
    *,
    vacated: Optional[Square] = None,
    count_kings: bool = True,
) -> bool:
    """Return True if any piece of ``by_color`` attacks ``square``.

    Args:
        board (Board): Position to inspect. It is never modified.
        square (Square): Target square; its own occupant is irrelevant.
        by_color (Color): Side whose attackers are looked for.
        vacated (Optional[Square]): Square to treat as empty, e.g. the origin
            of a king whose moves are being generated, so that slider rays
            pass through it.
        count_kings (bool): Whether an adjacent king counts as an attacker.
            A king covers ``square`` only when the other side does not also
            cover it; that check is made with ``count_kings=False``, which
            bounds the recursion to a single nested call.

    Returns:
        bool: Whether ``square`` is covered by ``by_color``.
    """
    # Pawns: the squares a pawn of by_color would capture from
    back = -by_color.pawn_direction
    pawn = Piece(PieceKind.PAWN, by_color)
    for d_file in (-1, 1):
        sq = square.offset(back, d_file)
        if sq is not None and piece_at(board, sq, vacated) == pawn:
            return True

    knight = Piece(PieceKind.KNIGHT, by_color)
    for d_rank, d_file in KNIGHT_OFFSETS:
        sq = square.offset(d_rank, d_file)
        if sq is not None and piece_at(board, sq, vacated) == knight:
            return True

    for direction in ROOK_DIRECTIONS:
        piece = first_piece_on_ray(board, square, direction, vacated)
        if (
            piece is not None
            and piece.color is by_color
            and piece.kind in (PieceKind.ROOK, PieceKind.QUEEN)
        ):
            return True

    for direction in BISHOP_DIRECTIONS:
        piece = first_piece_on_ray(board, square, direction, vacated)
        if (
            piece is not None
            and piece.color is by_color
            and piece.kind in (PieceKind.BISHOP, PieceKind.QUEEN)
        ):
            return True

    if count_kings and is_king_in_range(board, square, by_color, vacated):
        return not is_attacked(
            board, square, by_color.opponent, vacated=vacated, count_kings=False
        )
    return False
