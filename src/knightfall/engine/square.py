from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional


FILES = "abcdefgh"


@dataclass(frozen=True, order=True)
class Square:
    """A board coordinate.

    Attributes:
        rank (int): Zero-based rank, 0 is white's back rank.
        file (int): Zero-based file, 0 is the a-file.

    Raises:
        ValueError: If either coordinate lies outside ``0..7``.
    """

    rank: int
    file: int

    def __post_init__(self) -> None:
        if not (0 <= self.rank < 8 and 0 <= self.file < 8):
            raise ValueError(f"square out of range: rank={self.rank}, file={self.file}")

    def __str__(self) -> str:
        return FILES[self.file] + str(self.rank + 1)

    def offset(self, d_rank: int, d_file: int) -> Optional["Square"]:
        """Return the square shifted by the given deltas, or None off the board."""
        r = self.rank + d_rank
        f = self.file + d_file
        if 0 <= r < 8 and 0 <= f < 8:
            return Square(r, f)
        return None

    @classmethod
    def parse(cls, s: str) -> "Square":
        """Convert algebraic notation into a square.

        Args:
            s (str): Square name such as ``"e4"``.

        Returns:
            Square: Parsed square.

        Raises:
            ValueError: If ``s`` is not a valid square.
        """
        if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
            raise ValueError(f"invalid square: {s!r}")
        return cls(int(s[1]) - 1, ord(s[0]) - ord("a"))


def all_squares() -> Iterator[Square]:
    for rank in range(8):
        for file in range(8):
            yield Square(rank, file)
