"""Tests for the command-line entry point."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from pgnreplay.app import main, replay_archive
from pgnreplay.core.notation import split_pgn_games

_ARCHIVE = """[White "Alice"]
[Black "Bob"]

1. e4 c5 2. Nf3 *

[White "Carol"]
[Black "Dan"]

1. e4 e5 2. Ke3 1-0

[White "Eve"]
[Black "Frank"]
[SetUp "1"]
[FEN "rnbqkbnr/pp1ppppp/8/2p5/4P3/8/PPPP1PPP/RNBQKBNR w KQkq c6 0 2"]

2. Nf3 *
"""

_AFTER_NF3 = "rnbqkbnr/pp1ppppp/8/2p5/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2"

_BROKEN_TAGS = """[White "Alice"]
[Black "Bob"]

1. e4 *

[Event Casual]

1. d4 *

[White "Carol"]
[Black "Dan"]

1. e4 c5 2. Nf3 *
"""

_WRAPPED_CLOCK = """[White "Eve"]
[Black "Frank"]

1. e4 {
[%clk 0:03:00] } e5 *
"""


class _FixedEvaluator:
    def evaluate(self, fen: str, color: object) -> float:
        return 0.5


class TestReplayArchive:
    def test_prints_fens_and_skips_bad_game(self) -> None:
        out = io.StringIO()
        failures = replay_archive(list(split_pgn_games(_ARCHIVE)), out)

        lines = out.getvalue().splitlines()
        assert failures == 1
        assert lines[0] == "# Game 1: Alice vs Bob *"
        assert lines[3] == f"3 {_AFTER_NF3}"
        assert lines[4] == "# Game 2: Carol vs Dan 1-0"
        assert lines[5].startswith("# error: Ply 2 ('Ke3')")
        assert lines[-1] == f"1 {_AFTER_NF3}"

    def test_scores_with_evaluator(self) -> None:
        out = io.StringIO()
        games = list(split_pgn_games(_ARCHIVE))[:1]
        assert replay_archive(games, out, _FixedEvaluator()) == 0
        assert out.getvalue().splitlines()[3] == f"3 {_AFTER_NF3} +0.50"


class TestMain:
    def test_no_eval_single_game(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        pgn = tmp_path / "games.pgn"
        pgn.write_text(_ARCHIVE, encoding="utf-8")

        assert main([str(pgn), "--no-eval", "--game", "1"]) == 0
        assert capsys.readouterr().out.splitlines()[-1] == f"3 {_AFTER_NF3}"

    def test_failed_game_sets_exit_status(self, tmp_path: Path) -> None:
        pgn = tmp_path / "games.pgn"
        pgn.write_text(_ARCHIVE, encoding="utf-8")
        assert main([str(pgn), "--no-eval"]) == 1

    def test_with_fake_engine(
        self,
        tmp_path: Path,
        fake_engine_command: str,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        pgn = tmp_path / "games.pgn"
        pgn.write_text(_ARCHIVE, encoding="utf-8")

        status = main([str(pgn), "--game", "1", "--engine", fake_engine_command, "--depth", "3"])

        assert status == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[1].endswith(" -0.35")
        assert lines[2].endswith(" +0.35")

    def test_missing_file(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "missing.pgn"), "--no-eval"]) == 2

    def test_game_out_of_range(self, tmp_path: Path) -> None:
        pgn = tmp_path / "games.pgn"
        pgn.write_text(_ARCHIVE, encoding="utf-8")
        assert main([str(pgn), "--no-eval", "--game", "9"]) == 2

    def test_malformed_tags_skip_only_that_game(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        pgn = tmp_path / "games.pgn"
        pgn.write_text(_BROKEN_TAGS, encoding="utf-8")

        assert main([str(pgn), "--no-eval"]) == 1
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "# Game 1: Alice vs Bob *"
        assert lines[2] == "# Game 2: unreadable"
        assert lines[3].startswith("# error: Invalid PGN header line")
        assert lines[4] == "# Game 3: Carol vs Dan *"
        assert lines[-1] == f"3 {_AFTER_NF3}"

    def test_tag_like_line_inside_comment_stays_in_game(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        pgn = tmp_path / "games.pgn"
        pgn.write_text(_WRAPPED_CLOCK, encoding="utf-8")

        assert main([str(pgn), "--no-eval"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 3
        assert lines[0] == "# Game 1: Eve vs Frank *"
        assert lines[1].endswith("{[%clk 0:03:00]}")
        assert lines[2].startswith("2 rnbqkbnr/pppp1ppp/")
