"""Game replay layer.

Quick start::

    from pgnreplay.game import GameReplay

    replay = GameReplay(["e4", "c5", "Nf3"])
    print(replay.fen_at(replay.ply_count))
"""

from pgnreplay.game.replay import GameReplay, ReplayError

__all__ = ["GameReplay", "ReplayError"]
