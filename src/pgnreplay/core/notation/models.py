"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass

_UNKNOWN_PLAYER = "NN"


@dataclass(slots=True)
class PgnMove:
    """A single mainline move extracted from PGN movetext."""

    san: str
    comment: str = ""


@dataclass(slots=True)
class ParsedPgn:
    """One game of a PGN archive: tag pairs, mainline moves and result."""

    headers: dict[str, str]
    moves: list[PgnMove]
    result_token: str

    @property
    def sans(self) -> list[str]:
        return [move.san for move in self.moves]

    @property
    def players(self) -> tuple[str, str]:
        """White and black player names, ``"NN"`` when a tag is missing."""
        return (
            self.headers.get("White", _UNKNOWN_PLAYER),
            self.headers.get("Black", _UNKNOWN_PLAYER),
        )
