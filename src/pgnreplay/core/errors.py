"""Errors raised by the core when a move cannot be read or played."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pgnreplay.core.enums import Color
    from pgnreplay.core.move import MoveDescriptor


class NotationError(ValueError):
    """A notation token could not be parsed."""

    def __init__(self, token: str, reason: str = "") -> None:
        message = f"Invalid move notation: {token!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.token = token


class NoLegalCandidateError(ValueError):
    """No piece on the board can play the described move."""

    def __init__(self, move: MoveDescriptor, color: Color) -> None:
        super().__init__(f"Illegal move for {color}: {move}")
        self.move = move
        self.color = color
