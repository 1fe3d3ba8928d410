"""Move descriptors produced by the notation resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from pgnreplay.core.enums import PieceType
from pgnreplay.core.types import File, Square

SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


@dataclass(frozen=True, slots=True)
class NormalMove:
    """A non-castling move: piece kind, destination and optional origin hints.

    ``from_rank`` / ``from_file`` are only set when the notation names them.
    Without them the acting piece can only be found by scanning a board.
    """

    piece_type: PieceType
    dest_rank: int
    dest_file: File
    from_rank: int | None = None
    from_file: int | None = None

    @property
    def destination(self) -> Square:
        return Square(self.dest_rank, int(self.dest_file))

    def matches_origin(self, origin: Square) -> bool:
        """Whether *origin* satisfies the disambiguators that are present."""
        if self.from_rank is not None and origin.rank != self.from_rank:
            return False
        if self.from_file is not None and origin.file != self.from_file:
            return False
        return True

    def __str__(self) -> str:
        text = ""
        if self.piece_type == PieceType.PAWN:
            if self.from_file is not None and self.from_file != self.dest_file:
                text += File(self.from_file).letter + "x"
        else:
            text += SAN_PIECE[self.piece_type]
            if self.from_file is not None:
                text += File(self.from_file).letter
            if self.from_rank is not None:
                text += str(self.from_rank + 1)
        return text + File(self.dest_file).letter + str(self.dest_rank + 1)


@dataclass(frozen=True, slots=True)
class CastleMove:
    """King and rook relocation to either wing."""

    kingside: bool

    def __str__(self) -> str:
        return "O-O" if self.kingside else "O-O-O"


KINGSIDE_CASTLE = CastleMove(kingside=True)
QUEENSIDE_CASTLE = CastleMove(kingside=False)

MoveDescriptor: TypeAlias = NormalMove | CastleMove
