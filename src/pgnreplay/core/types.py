"""Square and file coordinate types.

A square is a ``(rank, file)`` pair, both in 0–7:

    rank 0 is White's back rank, rank 7 is Black's
    file 0 is the a-file, file 7 is the h-file

Symbolic names (``"e4"``) are only used at the boundaries; everything inside
the board and the rules works on the pair.
"""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple

_FILE_LETTERS = "abcdefgh"
_RANK_DIGITS = "12345678"


class File(IntEnum):
    """Board file, a–h."""

    A = 0
    B = 1
    C = 2
    D = 3
    E = 4
    F = 5
    G = 6
    H = 7

    @classmethod
    def from_char(cls, char: str) -> File:
        """Parse a lowercase file letter, e.g. 'e' → File.E."""
        if len(char) != 1 or char not in _FILE_LETTERS:
            raise ValueError(f"Invalid file letter: {char!r}")
        return cls(_FILE_LETTERS.index(char))

    @property
    def letter(self) -> str:
        return _FILE_LETTERS[self.value]


class Square(NamedTuple):
    """Board coordinate as a ``(rank, file)`` pair."""

    rank: int
    file: int

    @property
    def name(self) -> str:
        return square_name(self)

    def __str__(self) -> str:
        return square_name(self)


def rank_from_char(char: str) -> int:
    """Parse a rank digit, e.g. '4' → 3."""
    if len(char) != 1 or char not in _RANK_DIGITS:
        raise ValueError(f"Invalid rank digit: {char!r}")
    return int(char) - 1


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (0, 0) → 'a1', (7, 7) → 'h8'."""
    return _FILE_LETTERS[sq.file] + str(sq.rank + 1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(rank=3, file=4)."""
    if len(name) != 2 or name[0] not in _FILE_LETTERS or name[1] not in _RANK_DIGITS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(rank_from_char(name[1]), File.from_char(name[0]))


def all_squares() -> list[Square]:
    """Every square in rank-major, file-minor order, a1 first."""
    return [Square(rank, file) for rank in range(8) for file in range(8)]


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Square(0, f) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(1, f) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(2, f) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(3, f) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(4, f) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(5, f) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(6, f) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Square(7, f) for f in range(8))
