"""Replay chess games from algebraic notation and export FEN per ply."""

__version__ = "0.1.0"
