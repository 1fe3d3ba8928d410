"""Replay a game's move list, keeping a board snapshot after every ply."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pgnreplay.core.board import Board
from pgnreplay.core.enums import Color
from pgnreplay.core.errors import NoLegalCandidateError, NotationError
from pgnreplay.core.notation.fen import board_to_fen
from pgnreplay.core.notation.san import parse_move

_LOGGER = logging.getLogger(__name__)


class ReplayError(ValueError):
    """A move of the game could not be parsed or played."""

    def __init__(self, ply: int, token: str, cause: Exception) -> None:
        super().__init__(f"Ply {ply} ({token!r}): {cause}")
        self.ply = ply
        self.token = token


class GameReplay:
    """Snapshots of a replayed game plus a cursor for stepping through them.

    ``snapshots[0]`` is the start position; ``snapshots[n]`` is the board
    after *n* plies. A move that cannot be parsed or played raises
    :class:`ReplayError`; no later position is computed.
    """

    __slots__ = ("_snapshots", "_tokens", "_start_ply", "_cursor")

    def __init__(
        self,
        tokens: Iterable[str],
        board: Board | None = None,
        start_ply: int = 0,
    ) -> None:
        start = board.copy() if board is not None else Board.initial()
        self._snapshots: list[Board] = [start]
        self._tokens: list[str] = []
        self._start_ply = start_ply
        for token in tokens:
            self._play(token)
        self._cursor = len(self._snapshots) - 1

    def _play(self, token: str) -> None:
        ply = self._start_ply + len(self._tokens)
        board = self._snapshots[-1].copy()
        try:
            board.make_move(parse_move(token), self.side_to_move_at(len(self._tokens)))
        except (NotationError, NoLegalCandidateError) as exc:
            raise ReplayError(ply, token, exc) from exc
        self._tokens.append(token)
        self._snapshots.append(board)
        _LOGGER.debug("ply %d %s -> %s", ply, token, board_to_fen(board, ply + 1))

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def tokens(self) -> list[str]:
        return list(self._tokens)

    @property
    def ply_count(self) -> int:
        return len(self._tokens)

    def side_to_move_at(self, ply: int) -> Color:
        """Side to move after *ply* plies of this game."""
        return Color.WHITE if (self._start_ply + ply) % 2 == 0 else Color.BLACK

    def board_at(self, ply: int) -> Board:
        """Independent copy of the board after *ply* plies."""
        if not 0 <= ply <= self.ply_count:
            raise IndexError(f"Ply {ply} out of range 0..{self.ply_count}")
        return self._snapshots[ply].copy()

    def fen_at(self, ply: int) -> str:
        if not 0 <= ply <= self.ply_count:
            raise IndexError(f"Ply {ply} out of range 0..{self.ply_count}")
        return board_to_fen(self._snapshots[ply], self._start_ply + ply)

    def fens(self) -> list[str]:
        """FEN after every ply, the start position first."""
        return [self.fen_at(ply) for ply in range(self.ply_count + 1)]

    # ── Cursor ───────────────────────────────────────────────────────────

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> Board:
        return self.board_at(self._cursor)

    def step_forward(self) -> bool:
        if self._cursor >= self.ply_count:
            return False
        self._cursor += 1
        return True

    def step_back(self) -> bool:
        if self._cursor <= 0:
            return False
        self._cursor -= 1
        return True

    def jump(self, ply: int) -> None:
        if not 0 <= ply <= self.ply_count:
            raise IndexError(f"Ply {ply} out of range 0..{self.ply_count}")
        self._cursor = ply
