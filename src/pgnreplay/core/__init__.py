"""Core domain layer: board, movement rules and notation, stdlib only.

Quick start::

    from pgnreplay.core import Board, Color, board_to_fen, parse_move

    board = Board.initial()
    board.make_move(parse_move("e4"), Color.WHITE)
    print(board_to_fen(board, 1))
"""

from pgnreplay.core.board import Board
from pgnreplay.core.enums import CastlingRights, Color, PieceType
from pgnreplay.core.errors import NoLegalCandidateError, NotationError
from pgnreplay.core.move import (
    KINGSIDE_CASTLE,
    QUEENSIDE_CASTLE,
    CastleMove,
    MoveDescriptor,
    NormalMove,
)
from pgnreplay.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    parse_move,
)
from pgnreplay.core.piece import Piece
from pgnreplay.core.rules import MoveEffect, can_move, check_move
from pgnreplay.core.types import (
    File,
    Square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "PieceType",
    # Types / helpers
    "File",
    "Square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "CastleMove",
    "KINGSIDE_CASTLE",
    "MoveDescriptor",
    "MoveEffect",
    "NormalMove",
    "Piece",
    "QUEENSIDE_CASTLE",
    # Rules
    "can_move",
    "check_move",
    # Errors
    "NoLegalCandidateError",
    "NotationError",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "parse_move",
]
