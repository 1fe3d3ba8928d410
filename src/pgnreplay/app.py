"""Command-line entry point: replay PGN games and print one FEN per ply."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import TextIO

from pgnreplay.analysis import Evaluator, evaluate_game
from pgnreplay.core.notation import (
    ParsedPgn,
    board_from_fen,
    parse_pgn_game,
    split_pgn_games,
)
from pgnreplay.engine import EngineError, EngineSettings, UciEvaluator
from pgnreplay.game import GameReplay

_LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pgnreplay",
        description="Replay PGN games, printing the FEN (and score) after every ply.",
    )
    parser.add_argument("pgn", type=Path, help="PGN file with one or more games")
    parser.add_argument(
        "--game",
        type=int,
        default=None,
        help="Only replay the K-th game of the archive (1-based)",
    )
    parser.add_argument(
        "--no-eval",
        action="store_true",
        help="Do not start the evaluator; print FENs only",
    )
    parser.add_argument(
        "--engine", default=None, help="Evaluator command (default: stockfish)"
    )
    parser.add_argument("--depth", type=int, default=None, help="Search depth per ply")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity",
    )
    return parser


def _settings_from_args(args: argparse.Namespace) -> EngineSettings:
    settings = EngineSettings.from_env()
    if args.engine:
        settings = replace(settings, command=args.engine)
    if args.depth is not None:
        settings = replace(settings, depth=args.depth)
    return settings


def _replay(game: ParsedPgn) -> GameReplay:
    """Replay *game*, honouring a ``SetUp``/``FEN`` start position."""
    if game.headers.get("SetUp") == "1" and "FEN" in game.headers:
        board, start_ply = board_from_fen(game.headers["FEN"])
        return GameReplay(game.sans, board=board, start_ply=start_ply)
    return GameReplay(game.sans)


def _with_comment(line: str, game: ParsedPgn, ply: int) -> str:
    comment = game.moves[ply - 1].comment
    return f"{line} {{{comment}}}" if comment else line


def replay_archive(
    games: list[str],
    out: TextIO,
    evaluator: Evaluator | None = None,
) -> int:
    """Parse and replay every game text in *games*, writing results to *out*.

    Returns the number of games that could not be read or replayed. A bad
    game is reported and skipped; the others are still processed.
    """
    failures = 0
    for number, text in enumerate(games, start=1):
        try:
            game = parse_pgn_game(text)
        except ValueError as exc:
            failures += 1
            _LOGGER.warning("Skipping game %d: %s", number, exc)
            out.write(f"# Game {number}: unreadable\n# error: {exc}\n")
            continue

        white, black = game.players
        out.write(f"# Game {number}: {white} vs {black} {game.result_token}\n")
        try:
            replay = _replay(game)
        except ValueError as exc:  # ReplayError or a bad FEN tag
            failures += 1
            _LOGGER.warning("Skipping game %d: %s", number, exc)
            out.write(f"# error: {exc}\n")
            continue

        if evaluator is None:
            for ply in range(1, replay.ply_count + 1):
                line = f"{ply} {replay.fen_at(ply)}"
                out.write(_with_comment(line, game, ply) + "\n")
            continue

        for result in evaluate_game(replay, evaluator):
            line = f"{result.ply} {result.fen} {result.score:+.2f}"
            out.write(_with_comment(line, game, result.ply) + "\n")
    return failures


def main(argv: list[str] | None = None) -> int:
    """Run the ``pgnreplay`` command."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        text = args.pgn.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _LOGGER.error("Cannot load %s: %s", args.pgn, exc)
        return 2
    games = list(split_pgn_games(text))

    if args.game is not None:
        if not 1 <= args.game <= len(games):
            _LOGGER.error("Game %d not found (archive has %d)", args.game, len(games))
            return 2
        games = [games[args.game - 1]]

    if args.no_eval:
        failures = replay_archive(games, sys.stdout)
    else:
        try:
            with UciEvaluator(_settings_from_args(args)) as evaluator:
                failures = replay_archive(games, sys.stdout, evaluator)
        except (EngineError, ValueError) as exc:
            _LOGGER.error("Evaluator failed: %s", exc)
            return 2

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
