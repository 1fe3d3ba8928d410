"""Line-protocol client for an external UCI evaluator (e.g. Stockfish)."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from types import TracebackType

from pgnreplay.core.enums import Color

_LOGGER = logging.getLogger(__name__)

ENGINE_ENV = "PGNREPLAY_ENGINE"
DEPTH_ENV = "PGNREPLAY_DEPTH"


class EngineError(RuntimeError):
    """The evaluator process could not be started or stopped answering."""


@dataclass(slots=True, frozen=True)
class EngineSettings:
    """How to launch the evaluator and how deep to let it search."""

    command: str = "stockfish"
    depth: int = 20
    mate_score: float = 100.0
    quit_timeout_s: float = 2.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineSettings:
        """Defaults overridden by ``PGNREPLAY_ENGINE`` / ``PGNREPLAY_DEPTH``."""
        env = os.environ if environ is None else environ
        settings = cls()
        if env.get(ENGINE_ENV):
            settings = replace(settings, command=env[ENGINE_ENV])
        if env.get(DEPTH_ENV):
            depth = int(env[DEPTH_ENV])
            if depth < 1:
                raise ValueError(f"{DEPTH_ENV} must be positive, got {depth}")
            settings = replace(settings, depth=depth)
        return settings


def parse_score(lines: Iterable[str], color: Color, mate_score: float = 100.0) -> float:
    """Read the last ``info ... cp <n>`` score from engine output, in pawns.

    The engine scores from the side to move; the result is flipped to
    White's point of view when *color* is black. A forced mate counts as
    ``mate_score`` pawns.
    """
    score = 0.0
    for line in lines:
        if not line.startswith("info"):
            continue
        fields = line.split()
        # the NNUE banner line has no score at all
        if "cp" in fields:
            idx = fields.index("cp")
            if idx + 1 < len(fields):
                score = int(fields[idx + 1]) / 100.0
        elif "mate" in fields:
            idx = fields.index("mate")
            if idx + 1 < len(fields):
                moves = int(fields[idx + 1])
                score = mate_score if moves > 0 else -mate_score

    if color == Color.BLACK:
        score = -score
    return score


class UciEvaluator:
    """Owns one evaluator subprocess and talks to it line by line."""

    __slots__ = ("_settings", "_process")

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self._settings = settings or EngineSettings()
        self._process: subprocess.Popen[str] | None = None

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> None:
        """Spawn the evaluator and wait until it reports ready."""
        if self._process is not None:
            return
        argv = shlex.split(self._settings.command)
        try:
            self._process = subprocess.Popen(
                argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                bufsize=1,
            )
        except OSError as exc:
            raise EngineError(
                f"Failed to start engine {self._settings.command!r}: {exc}"
            ) from exc
        _LOGGER.info("Started engine %s (pid %d)", argv[0], self._process.pid)

        self.send("uci")
        self.receive("uciok")
        self.send("isready")
        self.receive("readyok")

    def close(self) -> None:
        """Ask the evaluator to quit, killing it if it does not."""
        process = self._process
        if process is None:
            return
        self._process = None
        try:
            if process.poll() is None:
                assert process.stdin is not None
                process.stdin.write("quit\n")
                process.stdin.flush()
                process.wait(timeout=self._settings.quit_timeout_s)
        except (OSError, subprocess.TimeoutExpired):
            _LOGGER.warning("Engine did not quit cleanly; killing it")
            process.kill()
            process.wait()
        finally:
            for stream in (process.stdin, process.stdout):
                if stream is not None:
                    stream.close()

    def __enter__(self) -> UciEvaluator:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ── Protocol ─────────────────────────────────────────────────────────

    def _require_process(self) -> subprocess.Popen[str]:
        if self._process is None:
            raise EngineError("Engine is not running")
        return self._process

    def send(self, command: str) -> None:
        """Write *command* as one line to the evaluator's stdin."""
        process = self._require_process()
        assert process.stdin is not None
        _LOGGER.debug(">> %s", command)
        try:
            process.stdin.write(command + "\n")
            process.stdin.flush()
        except OSError as exc:
            raise EngineError(f"Failed to send {command!r}: {exc}") from exc

    def receive(self, until: str) -> list[str]:
        """Read output lines up to and including the first starting with *until*."""
        process = self._require_process()
        assert process.stdout is not None
        lines: list[str] = []
        while True:
            line = process.stdout.readline()
            if not line:
                status = process.wait()
                raise EngineError(
                    f"Engine exited with status {status} while waiting for {until!r}"
                )
            line = line.rstrip("\r\n")
            _LOGGER.debug("<< %s", line)
            lines.append(line)
            if line.startswith(until):
                return lines

    def set_position(self, fen: str) -> None:
        self.send(f"position fen {fen}")

    def evaluate(self, fen: str, color: Color) -> float:
        """Score *fen* (with *color* to move) in pawns from White's view."""
        self.set_position(fen)
        self.send(f"go depth {self._settings.depth}")
        output = self.receive("bestmove")
        return parse_score(output, color, self._settings.mate_score)
