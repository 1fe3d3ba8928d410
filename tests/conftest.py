"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import shlex
import sys
import textwrap
from pathlib import Path

import pytest

_FAKE_ENGINE = textwrap.dedent(
    """
    import sys

    while True:
        line = sys.stdin.readline()
        if not line:
            break
        cmd = line.strip()
        if cmd == "uci":
            print("id name FakeFish")
            print("uciok", flush=True)
        elif cmd == "isready":
            print("readyok", flush=True)
        elif cmd.startswith("position fen "):
            fen = cmd[len("position fen "):]
        elif cmd.startswith("go"):
            print("info string NNUE evaluation using nn.nnue enabled")
            print("info depth 1 seldepth 1 score cp 12 nodes 20 pv e2e4")
            print("info depth 2 seldepth 2 score cp 35 nodes 80 pv e2e4")
            print("bestmove e2e4 ponder e7e5", flush=True)
        elif cmd == "crash":
            sys.exit(3)
        elif cmd == "quit":
            break
    """
)


@pytest.fixture
def fake_engine_command(tmp_path: Path) -> str:
    """Shell-style command line that runs a scripted UCI engine."""
    script = tmp_path / "fake_engine.py"
    script.write_text(_FAKE_ENGINE, encoding="utf-8")
    return shlex.join([sys.executable, str(script)])
