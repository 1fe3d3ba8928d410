"""Per-piece movement rules.

:func:`check_move` answers whether a piece may travel from one square to
another and, when it may, describes the bookkeeping the move causes
(castling rights lost, en-passant target created, en-passant victim removed).
It never touches the board; :meth:`Board.make_move` applies the effect once
the acting piece is confirmed.

Check safety is not verified: a king may step into check and a pinned piece
may move.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pgnreplay.core.enums import CastlingRights, Color, PieceType
from pgnreplay.core.types import Square

if TYPE_CHECKING:
    from pgnreplay.core.board import Board
    from pgnreplay.core.piece import Piece


@dataclass(frozen=True, slots=True)
class MoveEffect:
    """Side effects of a legal move, applied by the board after the move."""

    clear_castling: CastlingRights = CastlingRights.NONE
    en_passant_target: Square | None = None
    captured_square: Square | None = None


_QUIET = MoveEffect()

_ROOK_HOMES: dict[tuple[Color, Square], CastlingRights] = {
    (Color.WHITE, Square(0, 0)): CastlingRights.WHITE_QUEENSIDE,
    (Color.WHITE, Square(0, 7)): CastlingRights.WHITE_KINGSIDE,
    (Color.BLACK, Square(7, 0)): CastlingRights.BLACK_QUEENSIDE,
    (Color.BLACK, Square(7, 7)): CastlingRights.BLACK_KINGSIDE,
}

_MoveCheck = Callable[[Color, "Board", Square, Square], "MoveEffect | None"]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _path_is_clear(board: Board, origin: Square, destination: Square) -> bool:
    """Whether every square strictly between two aligned squares is empty."""
    step_rank = _sign(destination.rank - origin.rank)
    step_file = _sign(destination.file - origin.file)
    rank = origin.rank + step_rank
    file = origin.file + step_file
    while (rank, file) != (destination.rank, destination.file):
        if board[Square(rank, file)] is not None:
            return False
        rank += step_rank
        file += step_file
    return True


def _king(color: Color, board: Board, origin: Square, destination: Square) -> MoveEffect | None:
    if abs(destination.rank - origin.rank) > 1 or abs(destination.file - origin.file) > 1:
        return None
    return MoveEffect(clear_castling=CastlingRights.both(color))


def _knight(color: Color, board: Board, origin: Square, destination: Square) -> MoveEffect | None:
    deltas = {abs(destination.rank - origin.rank), abs(destination.file - origin.file)}
    return _QUIET if deltas == {1, 2} else None


def _rook(color: Color, board: Board, origin: Square, destination: Square) -> MoveEffect | None:
    if origin.rank != destination.rank and origin.file != destination.file:
        return None
    if not _path_is_clear(board, origin, destination):
        return None
    lost = _ROOK_HOMES.get((color, origin), CastlingRights.NONE)
    return MoveEffect(clear_castling=lost) if lost else _QUIET


def _bishop(color: Color, board: Board, origin: Square, destination: Square) -> MoveEffect | None:
    if abs(destination.rank - origin.rank) != abs(destination.file - origin.file):
        return None
    if not _path_is_clear(board, origin, destination):
        return None
    return _QUIET


def _queen(color: Color, board: Board, origin: Square, destination: Square) -> MoveEffect | None:
    effect = _rook(color, board, origin, destination)
    if effect is not None:
        return effect
    return _bishop(color, board, origin, destination)


def _pawn(color: Color, board: Board, origin: Square, destination: Square) -> MoveEffect | None:
    d_rank = destination.rank - origin.rank
    d_file = destination.file - origin.file

    if d_file == 0:
        if d_rank == color.forward:
            return _QUIET
        if d_rank == 2 * color.forward and origin.rank == color.pawn_rank:
            passed = Square(origin.rank + color.forward, origin.file)
            if board[passed] is not None:
                return None
            return MoveEffect(en_passant_target=passed)
        return None

    # Diagonal step. Whether something is actually captured is left to the
    # notation; only the en-passant victim needs locating here.
    if abs(d_file) == 1 and d_rank == color.forward:
        if destination == board.en_passant_target and board[destination] is None:
            return MoveEffect(captured_square=Square(origin.rank, destination.file))
        return _QUIET
    return None


_CHECKS: dict[PieceType, _MoveCheck] = {
    PieceType.KING: _king,
    PieceType.QUEEN: _queen,
    PieceType.ROOK: _rook,
    PieceType.BISHOP: _bishop,
    PieceType.KNIGHT: _knight,
    PieceType.PAWN: _pawn,
}


def check_move(
    piece: Piece, board: Board, origin: Square, destination: Square
) -> MoveEffect | None:
    """Return the effect of moving *piece* from *origin* to *destination*.

    ``None`` means the move breaks the piece's movement rule, is a null move,
    or lands on a piece of the mover's own side.
    """
    if origin == destination:
        return None
    occupant = board[destination]
    if occupant is not None and occupant.color == piece.color:
        return None
    return _CHECKS[piece.piece_type](piece.color, board, origin, destination)


def can_move(piece: Piece, board: Board, origin: Square, destination: Square) -> bool:
    """Boolean view of :func:`check_move`."""
    return check_move(piece, board, origin, destination) is not None
