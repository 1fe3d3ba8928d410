"""Per-ply evaluation of a replayed game."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from pgnreplay.core.enums import Color
from pgnreplay.game.replay import GameReplay

_LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class Evaluator(Protocol):
    """Anything that scores a FEN in pawns from White's point of view."""

    def evaluate(self, fen: str, color: Color) -> float: ...


@dataclass(slots=True, frozen=True)
class PlyEvaluation:
    """Position after a ply and the evaluator's verdict on it."""

    ply: int
    san: str | None
    fen: str
    score: float


def evaluate_game(
    replay: GameReplay,
    evaluator: Evaluator,
    *,
    include_start: bool = False,
    on_progress: ProgressCallback | None = None,
) -> list[PlyEvaluation]:
    """Score the position after every ply of *replay*."""
    tokens = replay.tokens
    first = 0 if include_start else 1
    total = replay.ply_count + 1 - first
    results: list[PlyEvaluation] = []
    for done, ply in enumerate(range(first, replay.ply_count + 1), start=1):
        fen = replay.fen_at(ply)
        score = evaluator.evaluate(fen, replay.side_to_move_at(ply))
        san = tokens[ply - 1] if ply > 0 else None
        _LOGGER.debug("ply %d %s: %+.2f", ply, san, score)
        results.append(PlyEvaluation(ply=ply, san=san, fen=fen, score=score))
        if on_progress is not None:
            on_progress(done, total)
    return results
