"""SAN (Standard Algebraic Notation) parsing into move descriptors.

Tokens are dispatched on their shape rather than parsed by a grammar: the
disambiguation forms of SAN are a small closed set tied to token length and
the presence of the capture marker ``x``.
"""

from __future__ import annotations

from pgnreplay.core.enums import PieceType
from pgnreplay.core.errors import NotationError
from pgnreplay.core.move import (
    KINGSIDE_CASTLE,
    QUEENSIDE_CASTLE,
    SAN_PIECE,
    MoveDescriptor,
    NormalMove,
)
from pgnreplay.core.types import File, parse_square, rank_from_char

_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in SAN_PIECE.items()}
_KINGSIDE_TOKENS = ("O-O", "0-0")
_QUEENSIDE_TOKENS = ("O-O-O", "0-0-0")
_DECORATIONS = "+#!?"


def parse_move(token: str) -> MoveDescriptor:
    """Parse a single SAN token such as ``e4``, ``Nbd7``, ``exf4`` or ``O-O``.

    Raises :class:`NotationError` naming the token when its shape is not one
    of the supported forms. Promotions are not supported.
    """
    clean = token.rstrip(_DECORATIONS)
    if clean in _KINGSIDE_TOKENS:
        return KINGSIDE_CASTLE
    if clean in _QUEENSIDE_TOKENS:
        return QUEENSIDE_CASTLE
    if not clean:
        raise NotationError(token, "empty token")

    try:
        if clean[0].isupper():
            piece_type = _SAN_PIECE_REV.get(clean[0])
            if piece_type is None:
                raise NotationError(token, f"unknown piece letter {clean[0]!r}")
            return _piece_move(token, piece_type, clean[1:])
        return _pawn_move(token, clean)
    except NotationError:
        raise
    except ValueError as exc:
        raise NotationError(token, str(exc)) from exc


def _destination(chars: str) -> tuple[int, File]:
    sq = parse_square(chars)
    return sq.rank, File(sq.file)


def _pawn_move(token: str, chars: str) -> NormalMove:
    if len(chars) == 2:
        # A push never leaves its file, so the file is implied.
        dest_rank, dest_file = _destination(chars)
        return NormalMove(
            PieceType.PAWN, dest_rank, dest_file, from_file=int(dest_file)
        )

    if len(chars) == 4 and "x" in chars:
        # 'exf4' -> 'e' and 'f4'
        origin, _, target = chars.partition("x")
        if len(origin) != 1 or len(target) != 2:
            raise NotationError(token, "malformed pawn capture")
        dest_rank, dest_file = _destination(target)
        return NormalMove(
            PieceType.PAWN,
            dest_rank,
            dest_file,
            from_file=int(File.from_char(origin)),
        )

    raise NotationError(token, "unsupported pawn move")


def _piece_move(token: str, piece_type: PieceType, rest: str) -> NormalMove:
    if "x" in rest:
        hint, _, target = rest.partition("x")
        if len(target) != 2:
            raise NotationError(token, "malformed capture")
        rest = hint + target

    if len(rest) == 2:
        # Nf3
        dest_rank, dest_file = _destination(rest)
        return NormalMove(piece_type, dest_rank, dest_file)

    if len(rest) == 3:
        dest_rank, dest_file = _destination(rest[1:])
        hint = rest[0]
        if hint.isdigit():
            # N2f4
            return NormalMove(
                piece_type, dest_rank, dest_file, from_rank=rank_from_char(hint)
            )
        # Nbd7
        return NormalMove(
            piece_type, dest_rank, dest_file, from_file=int(File.from_char(hint))
        )

    if len(rest) == 4:
        # Ng6f4
        origin = parse_square(rest[:2])
        dest_rank, dest_file = _destination(rest[2:])
        return NormalMove(
            piece_type,
            dest_rank,
            dest_file,
            from_rank=origin.rank,
            from_file=origin.file,
        )

    raise NotationError(token, f"unsupported length {len(rest) + 1}")
