"""Tests for GameReplay."""

from __future__ import annotations

import pytest

from pgnreplay.core.enums import Color
from pgnreplay.core.errors import NoLegalCandidateError, NotationError
from pgnreplay.core.notation import STARTING_FEN, board_from_fen
from pgnreplay.game import GameReplay, ReplayError

_OPENING_FENS = [
    STARTING_FEN,
    "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
    "rnbqkbnr/pp1ppppp/8/2p5/4P3/8/PPPP1PPP/RNBQKBNR w KQkq c6 0 2",
    "rnbqkbnr/pp1ppppp/8/2p5/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2",
]


class TestReplay:
    def test_fens_after_every_ply(self) -> None:
        replay = GameReplay(["e4", "c5", "Nf3"])
        assert replay.ply_count == 3
        assert replay.fens() == _OPENING_FENS

    def test_snapshots_are_independent(self) -> None:
        replay = GameReplay(["e4", "c5"])
        board = replay.board_at(0)
        board.half_move_clock = 99
        assert replay.fen_at(0) == STARTING_FEN

    def test_side_to_move(self) -> None:
        replay = GameReplay(["e4"])
        assert replay.side_to_move_at(0) == Color.WHITE
        assert replay.side_to_move_at(1) == Color.BLACK

    def test_start_from_fen(self) -> None:
        board, ply = board_from_fen(_OPENING_FENS[2])
        replay = GameReplay(["Nf3"], board=board, start_ply=ply)
        assert replay.fen_at(1) == _OPENING_FENS[3]

    def test_black_to_move_start(self) -> None:
        board, ply = board_from_fen(_OPENING_FENS[1])
        replay = GameReplay(["c5"], board=board, start_ply=ply)
        assert replay.side_to_move_at(0) == Color.BLACK
        assert replay.fen_at(1) == _OPENING_FENS[2]

    def test_ply_out_of_range(self) -> None:
        replay = GameReplay(["e4"])
        with pytest.raises(IndexError):
            replay.fen_at(2)


class TestReplayErrors:
    def test_bad_notation_reports_ply(self) -> None:
        with pytest.raises(ReplayError) as info:
            GameReplay(["e4", "c5", "Nf9"])
        assert info.value.ply == 2
        assert info.value.token == "Nf9"
        assert isinstance(info.value.__cause__, NotationError)

    def test_illegal_move_reports_ply(self) -> None:
        with pytest.raises(ReplayError) as info:
            GameReplay(["e4", "e5", "Ke2", "Ke7", "Ke4"])
        assert info.value.ply == 4
        assert isinstance(info.value.__cause__, NoLegalCandidateError)


class TestCursor:
    def test_starts_at_last_ply(self) -> None:
        replay = GameReplay(["e4", "c5", "Nf3"])
        assert replay.cursor == 3

    def test_step_back_and_forward(self) -> None:
        replay = GameReplay(["e4", "c5", "Nf3"])
        assert replay.step_back()
        assert replay.cursor == 2
        assert replay.step_forward()
        assert not replay.step_forward()
        replay.jump(0)
        assert not replay.step_back()
        assert replay.current == replay.board_at(0)

    def test_jump_out_of_range(self) -> None:
        replay = GameReplay([])
        with pytest.raises(IndexError):
            replay.jump(1)
