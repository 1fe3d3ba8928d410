"""FEN parsing and serialization."""

from __future__ import annotations

from pgnreplay.core.board import Board
from pgnreplay.core.enums import CastlingRights
from pgnreplay.core.piece import Piece
from pgnreplay.core.types import Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_LETTERS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def side_letter(ply_index: int) -> str:
    """'w' on even plies, 'b' on odd ones."""
    return "w" if ply_index % 2 == 0 else "b"


def fullmove_number(ply_index: int) -> int:
    return ply_index // 2 + 1


def board_to_fen(board: Board, ply_index: int) -> str:
    """Serialise *board* to FEN as it stands before ply *ply_index*."""
    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[Square(rank, file)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Castling
    castling_str = "".join(
        letter for letter, right in _CASTLING_LETTERS if board.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 3. En passant
    ep = board.en_passant_target
    ep_str = square_name(ep) if ep is not None else "-"

    return (
        f"{board_str} {side_letter(ply_index)} {castling_str} {ep_str} "
        f"{board.half_move_clock} {fullmove_number(ply_index)}"
    )


def board_from_fen(fen: str) -> tuple[Board, int]:
    """Parse a FEN string into a :class:`Board` and the ply index it stands at."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[Square(rank, file)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part not in ("w", "b"):
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")
    black_to_move = side_part == "b"

    # 3. Castling
    if castling_part != "-":
        rights = dict(_CASTLING_LETTERS)
        seen: set[str] = set()
        for ch in castling_part:
            right = rights.get(ch)
            if right is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            board.castling |= right

    # 4. En passant
    if ep_part != "-":
        ep = parse_square(ep_part)
        expected_rank = 2 if black_to_move else 5
        if ep.rank != expected_rank:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        board.en_passant_target = ep

    # 5–6. Clocks (optional)
    if len(parts) > 4:
        board.half_move_clock = int(parts[4])
        if board.half_move_clock < 0:
            raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")

    fullmove = 1
    if len(parts) > 5:
        fullmove = int(parts[5])
        if fullmove < 1:
            raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    ply_index = (fullmove - 1) * 2 + (1 if black_to_move else 0)
    return board, ply_index
