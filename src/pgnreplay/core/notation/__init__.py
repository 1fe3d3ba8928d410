"""Notation package: SAN parsing, FEN and PGN."""

from pgnreplay.core.notation.fen import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    fullmove_number,
    side_letter,
)
from pgnreplay.core.notation.models import ParsedPgn, PgnMove
from pgnreplay.core.notation.pgn import (
    parse_pgn_archive,
    parse_pgn_game,
    split_pgn_games,
)
from pgnreplay.core.notation.san import parse_move

__all__ = [
    "STARTING_FEN",
    "PgnMove",
    "ParsedPgn",
    "board_from_fen",
    "board_to_fen",
    "fullmove_number",
    "side_letter",
    "parse_move",
    "parse_pgn_game",
    "parse_pgn_archive",
    "split_pgn_games",
]
