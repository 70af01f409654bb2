from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import IllegalMoveError
from .move import Move
from .piece import Color, Piece, PieceKind
from .square import Square


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Corner square -> castling flag lost when that square is vacated or captured on
_CORNER_RIGHTS: Dict[Square, str] = {
    Square(0, 0): "white_queenside",
    Square(0, 7): "white_kingside",
    Square(7, 0): "black_queenside",
    Square(7, 7): "black_kingside",
}


def _empty_squares() -> List[Optional[Piece]]:
    return [None] * 64


@dataclass
class Board:
    """Piece placement plus the state the move rules depend on.

    Notes:
    - Squares are stored rank-major from white's perspective (a1 first).
    - The board is plain mutable data; move generation only reads it.
    """

    squares: List[Optional[Piece]] = field(default_factory=_empty_squares)
    side_to_move: Color = Color.WHITE
    white_kingside: bool = False
    white_queenside: bool = False
    black_kingside: bool = False
    black_queenside: bool = False
    ep_square: Optional[Square] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    # ---- Element access ----
    def __getitem__(self, sq: Square) -> Optional[Piece]:
        return self.squares[sq.rank * 8 + sq.file]

    def __setitem__(self, sq: Square, piece: Optional[Piece]) -> None:
        self.squares[sq.rank * 8 + sq.file] = piece

    def pieces(self, color: Color) -> Iterator[Tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every piece of ``color``, a1 first."""
        for idx, piece in enumerate(self.squares):
            if piece is not None and piece.color is color:
                yield Square(idx // 8, idx % 8), piece

    def find_king(self, color: Color) -> Optional[Square]:
        king = Piece(PieceKind.KING, color)
        for idx, piece in enumerate(self.squares):
            if piece == king:
                return Square(idx // 8, idx % 8)
        return None

    def can_castle(self, color: Color, kingside: bool) -> bool:
        if color is Color.WHITE:
            return self.white_kingside if kingside else self.white_queenside
        return self.black_kingside if kingside else self.black_queenside

    def copy(self) -> "Board":
        return Board(
            squares=list(self.squares),
            side_to_move=self.side_to_move,
            white_kingside=self.white_kingside,
            white_queenside=self.white_queenside,
            black_kingside=self.black_kingside,
            black_queenside=self.black_queenside,
            ep_square=self.ep_square,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    # ---- FEN I/O ----
    @classmethod
    def startpos(cls) -> "Board":
        """Create a board initialized to the standard chess starting position."""
        return cls.from_fen(STARTPOS_FEN)

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        """Create a board from a Forsyth–Edwards Notation (FEN) string.

        Args:
            fen (str): FEN string describing the position to load.

        Returns:
            Board: Board instance initialized with state encoded in ``fen``.

        Raises:
            ValueError: If ``fen`` is empty, has the wrong number of fields, or
                contains invalid piece placement, castling rights, en passant
                square, or move counters.
        """
        if not fen or not isinstance(fen, str):
            raise ValueError("FEN must be a non-empty string")
        parts = fen.strip().split()
        if len(parts) != 6:
            raise ValueError("FEN must have 6 fields")
        placement, stm, castling, ep, halfmove, fullmove = parts

        ranks = placement.split("/")
        if len(ranks) != 8:
            raise ValueError("FEN board must have 8 ranks")
        board = cls()
        for rank_idx, rank in enumerate(ranks[::-1]):  # start from rank 1 (bottom)
            file_idx = 0
            for ch in rank:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in FEN rank")
                    file_idx += n
                else:
                    if file_idx >= 8:
                        raise ValueError("too many squares in FEN rank")
                    board[Square(rank_idx, file_idx)] = Piece.from_char(ch)
                    file_idx += 1
            if file_idx != 8:
                raise ValueError("rank does not sum to 8 squares in FEN")

        if stm not in ("w", "b"):
            raise ValueError("side to move must be 'w' or 'b'")
        board.side_to_move = Color(stm)

        if castling != "-":
            for ch in castling:
                if ch not in "KQkq":
                    raise ValueError("invalid castling rights")
            board.white_kingside = "K" in castling
            board.white_queenside = "Q" in castling
            board.black_kingside = "k" in castling
            board.black_queenside = "q" in castling

        if ep != "-":
            try:
                ep_square = Square.parse(ep)
            except ValueError as e:
                raise ValueError("invalid en passant square") from e
            # ep target must be on rank 3 or rank 6
            if ep_square.rank not in (2, 5):
                raise ValueError("invalid en passant square rank")
            board.ep_square = ep_square

        try:
            board.halfmove_clock = int(halfmove)
            board.fullmove_number = int(fullmove)
        except ValueError as e:
            raise ValueError("invalid move counters in FEN") from e
        if board.halfmove_clock < 0 or board.fullmove_number <= 0:
            raise ValueError("invalid move counters in FEN")
        return board

    def to_fen(self) -> str:
        """Serialize the current position into a normalized FEN string."""
        ranks_str: List[str] = []
        for rank_idx in range(7, -1, -1):  # 7..0 maps to ranks 8..1
            run = 0
            row = []
            for file_idx in range(8):
                piece = self[Square(rank_idx, file_idx)]
                if piece is None:
                    run += 1
                else:
                    if run > 0:
                        row.append(str(run))
                        run = 0
                    row.append(piece.to_char())
            if run > 0:
                row.append(str(run))
            ranks_str.append("".join(row))

        castling = "".join(
            ch
            for ch, flag in (
                ("K", self.white_kingside),
                ("Q", self.white_queenside),
                ("k", self.black_kingside),
                ("q", self.black_queenside),
            )
            if flag
        )
        ep = str(self.ep_square) if self.ep_square is not None else "-"
        return " ".join(
            [
                "/".join(ranks_str),
                self.side_to_move.value,
                castling or "-",
                ep,
                str(self.halfmove_clock),
                str(self.fullmove_number),
            ]
        )

    # ---- Move application ----
    def apply(self, move: Move) -> "Board":
        """Return a new board with ``move`` played.

        The move is not checked against the rules; callers pass moves taken
        from the generator. Castling is recognised as a two-file king step and
        relocates the rook; a pawn landing diagonally on the en-passant
        target removes the passed pawn.

        Raises:
            IllegalMoveError: If the origin square is empty.
        """
        piece = self[move.from_sq]
        if piece is None:
            raise IllegalMoveError(f"no piece on {move.from_sq}")

        b = self.copy()
        is_pawn = piece.kind is PieceKind.PAWN
        is_capture = self[move.to_sq] is not None

        b[move.from_sq] = None
        if (
            is_pawn
            and move.to_sq == self.ep_square
            and not is_capture
            and move.from_sq.file != move.to_sq.file
        ):
            b[Square(move.from_sq.rank, move.to_sq.file)] = None
            is_capture = True
        b[move.to_sq] = Piece(move.promotion, piece.color) if move.promotion else piece

        if piece.kind is PieceKind.KING:
            if abs(move.to_sq.file - move.from_sq.file) == 2:
                rank = move.from_sq.rank
                if move.to_sq.file == 6:
                    rook_from, rook_to = Square(rank, 7), Square(rank, 5)
                else:
                    rook_from, rook_to = Square(rank, 0), Square(rank, 3)
                b[rook_to] = b[rook_from]
                b[rook_from] = None
            if piece.color is Color.WHITE:
                b.white_kingside = b.white_queenside = False
            else:
                b.black_kingside = b.black_queenside = False
        for sq in (move.from_sq, move.to_sq):
            flag = _CORNER_RIGHTS.get(sq)
            if flag is not None:
                setattr(b, flag, False)

        b.ep_square = None
        if is_pawn and abs(move.to_sq.rank - move.from_sq.rank) == 2:
            b.ep_square = Square((move.from_sq.rank + move.to_sq.rank) // 2, move.from_sq.file)

        b.halfmove_clock = 0 if is_pawn or is_capture else self.halfmove_clock + 1
        if piece.color is Color.BLACK:
            b.fullmove_number = self.fullmove_number + 1
        b.side_to_move = piece.color.opponent
        return b
