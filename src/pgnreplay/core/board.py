"""Board - piece placement plus the move-dependent game state."""

from __future__ import annotations

import logging

from pgnreplay.core.enums import CastlingRights, Color, PieceType
from pgnreplay.core.errors import NoLegalCandidateError
from pgnreplay.core.move import CastleMove, MoveDescriptor, NormalMove
from pgnreplay.core.piece import Piece
from pgnreplay.core.rules import MoveEffect, check_move
from pgnreplay.core.types import Square, all_squares

_LOGGER = logging.getLogger(__name__)

_BACK_RANK = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

_KING_FILE = 4


def _index(sq: Square) -> int:
    return sq.rank * 8 + sq.file


class Board:
    """Mutable 64-square board with clock, en-passant and castling state.

    The board does not know whose turn it is; every mutation is told which
    side is moving. Snapshots are taken with :meth:`copy`.
    """

    __slots__ = ("_squares", "half_move_clock", "en_passant_target", "castling")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        self.half_move_clock = 0
        self.en_passant_target: Square | None = None
        self.castling = CastlingRights.NONE

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[_index(sq)]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._squares[_index(sq)] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Mutation -----------------------------------------------------------

    def apply(self, origin: Square, destination: Square) -> None:
        """Move whatever stands on *origin* to *destination*, clobbering it."""
        self[destination] = self[origin]
        self[origin] = None

    def make_move(self, move: MoveDescriptor, color: Color) -> Square:
        """Resolve *move* for *color* against this board and play it.

        Returns the origin square of the piece that moved (the king's, for
        castling). Raises :class:`NoLegalCandidateError` and leaves the board
        untouched when no piece of *color* can play the move.
        """
        if isinstance(move, CastleMove):
            return self._castle(move, color)

        origin, effect = self._find_mover(move, color)
        destination = move.destination

        is_capture = self[destination] is not None or effect.captured_square is not None
        if is_capture or move.piece_type == PieceType.PAWN:
            self.half_move_clock = 0
        else:
            self.half_move_clock += 1

        self.apply(origin, destination)
        if effect.captured_square is not None:
            self[effect.captured_square] = None
        self.castling &= ~effect.clear_castling
        self.en_passant_target = effect.en_passant_target

        _LOGGER.debug("%s %s: %s -> %s", color, move, origin, destination)
        return origin

    def _find_mover(self, move: NormalMove, color: Color) -> tuple[Square, MoveEffect]:
        wanted = Piece(color, move.piece_type)
        destination = move.destination
        for origin in all_squares():
            if self[origin] != wanted or not move.matches_origin(origin):
                continue
            effect = check_move(wanted, self, origin, destination)
            if effect is not None:
                return origin, effect
        raise NoLegalCandidateError(move, color)

    def _castle(self, move: CastleMove, color: Color) -> Square:
        rank = color.back_rank
        if move.kingside:
            right = CastlingRights.kingside(color)
            rook_file, king_to, rook_to = 7, 6, 5
        else:
            right = CastlingRights.queenside(color)
            rook_file, king_to, rook_to = 0, 2, 3

        king_from = Square(rank, _KING_FILE)
        rook_from = Square(rank, rook_file)
        low, high = sorted((_KING_FILE, rook_file))
        between = [Square(rank, f) for f in range(low + 1, high)]
        if (
            not (self.castling & right)
            or self[king_from] != Piece(color, PieceType.KING)
            or self[rook_from] != Piece(color, PieceType.ROOK)
            or any(self[sq] is not None for sq in between)
        ):
            raise NoLegalCandidateError(move, color)

        self.apply(king_from, Square(rank, king_to))
        self.apply(rook_from, Square(rank, rook_to))
        self.castling &= ~CastlingRights.both(color)
        self.half_move_clock += 1
        self.en_passant_target = None

        _LOGGER.debug("%s %s", color, move)
        return king_from

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b.half_move_clock = self.half_move_clock
        b.en_passant_target = self.en_passant_target
        b.castling = self.castling
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position with every castling right available."""
        b = cls()
        for f, pt in enumerate(_BACK_RANK):
            b[Square(0, f)] = Piece(Color.WHITE, pt)
            b[Square(1, f)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Square(6, f)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(7, f)] = Piece(Color.BLACK, pt)
        b.castling = CastlingRights.ALL
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._squares == other._squares
            and self.half_move_clock == other.half_move_clock
            and self.en_passant_target == other.en_passant_target
            and self.castling == other.castling
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[Square(rank, file)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
