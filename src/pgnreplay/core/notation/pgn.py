"""PGN archive reading: tag pairs, mainline movetext and game splitting."""

from __future__ import annotations

import re
from collections.abc import Iterator

from pgnreplay.core.notation.models import ParsedPgn, PgnMove

_PGN_HEADER_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]\s*$')
_PGN_RESULT_TOKENS = {"1-0", "0-1", "1/2-1/2", "*"}
_MOVE_NUMBER_RE = re.compile(r"^\d+\.(?:\.\.)?$")
_MOVE_NUMBER_PREFIX_RE = re.compile(r"^\d+\.+")


def _append_comment(move: PgnMove, comment: str) -> None:
    clean = " ".join(comment.split())
    if not clean:
        return
    if move.comment:
        move.comment = f"{move.comment} {clean}"
    else:
        move.comment = clean


def _parse_pgn_movetext_mainline(movetext: str) -> tuple[list[PgnMove], str]:
    """Parse movetext and return mainline moves/comments plus result token."""
    moves: list[PgnMove] = []
    result_token = "*"
    variation_depth = 0
    idx = 0
    total = len(movetext)

    while idx < total:
        ch = movetext[idx]

        if ch.isspace():
            idx += 1
            continue

        if ch == "{":
            end = movetext.find("}", idx + 1)
            if end < 0:
                comment = movetext[idx + 1 :]
                idx = total
            else:
                comment = movetext[idx + 1 : end]
                idx = end + 1
            if variation_depth == 0 and moves:
                _append_comment(moves[-1], comment)
            continue

        if ch == ";":
            end = movetext.find("\n", idx + 1)
            if end < 0:
                end = total
            comment = movetext[idx + 1 : end]
            if variation_depth == 0 and moves:
                _append_comment(moves[-1], comment)
            idx = end
            continue

        if ch == "(":
            variation_depth += 1
            idx += 1
            continue

        if ch == ")":
            variation_depth = max(0, variation_depth - 1)
            idx += 1
            continue

        token_end = idx
        while (
            token_end < total
            and not movetext[token_end].isspace()
            and movetext[token_end] not in "{}();"
        ):
            token_end += 1
        token = movetext[idx:token_end]
        idx = token_end

        if not token or variation_depth > 0:
            continue

        if token in _PGN_RESULT_TOKENS:
            result_token = token
            continue

        if _MOVE_NUMBER_RE.match(token):
            continue

        if token.startswith("$") and token[1:].isdigit():
            continue

        # '1.e4' and '12...Nf6' glue the number to the move
        token = _MOVE_NUMBER_PREFIX_RE.sub("", token).lstrip(".")
        if not token:
            continue

        moves.append(PgnMove(san=token))

    return moves, result_token


def parse_pgn_game(pgn_text: str) -> ParsedPgn:
    """Parse a single PGN game into structured headers/moves/result."""
    headers: dict[str, str] = {}
    move_lines: list[str] = []
    in_headers = True

    for raw_line in pgn_text.splitlines():
        line = raw_line.strip()
        if not line:
            if in_headers and not headers:
                continue
            in_headers = False
            continue

        if in_headers and line.startswith("["):
            match = _PGN_HEADER_RE.match(line)
            if match is None:
                raise ValueError(f"Invalid PGN header line: {line}")
            key, raw_value = match.groups()
            value = raw_value.replace('\\"', '"').replace("\\\\", "\\")
            headers[key] = value
            continue

        in_headers = False
        if line.startswith("%"):
            continue
        move_lines.append(line)

    moves, result_token = _parse_pgn_movetext_mainline("\n".join(move_lines))
    header_result = headers.get("Result")
    if result_token == "*" and header_result in _PGN_RESULT_TOKENS:
        result_token = header_result

    return ParsedPgn(headers=headers, moves=moves, result_token=result_token)


def _comment_open_after(line: str, in_comment: bool) -> bool:
    """Whether a ``{`` comment is still open at the end of *line*."""
    for ch in line:
        if in_comment:
            in_comment = ch != "}"
        elif ch == "{":
            in_comment = True
        elif ch == ";":
            break
    return in_comment


def split_pgn_games(pgn_text: str) -> Iterator[str]:
    """Yield the text of each game in a multi-game archive.

    A new game starts at the first tag line that follows movetext. Lines
    inside an open ``{...}`` comment never start a game, even when they
    begin with ``[`` (e.g. a wrapped ``[%clk ...]`` annotation). Games are
    only split here; headers are validated by :func:`parse_pgn_game`.
    """
    current: list[str] = []
    seen_movetext = False
    in_comment = False
    for raw_line in pgn_text.splitlines():
        line = raw_line.strip()
        if line.startswith("[") and seen_movetext and not in_comment:
            yield "\n".join(current)
            current = []
            seen_movetext = False
        if in_comment or (line and not line.startswith("[") and not line.startswith("%")):
            seen_movetext = True
            in_comment = _comment_open_after(line, in_comment)
        current.append(raw_line)
    if any(line.strip() for line in current):
        yield "\n".join(current)


def parse_pgn_archive(pgn_text: str) -> list[ParsedPgn]:
    """Parse every game of a PGN archive."""
    return [parse_pgn_game(text) for text in split_pgn_games(pgn_text)]
