"""JSON and JSON-with-comments loading.

OpenCode accepts ``opencode.jsonc``, which allows ``//`` line comments and
``/* */`` block comments. Comments are stripped with a small character
state machine that tracks string literals, so ``"http://host"`` and
``"a /* b */ c"`` inside strings are left intact.

The ``load_*`` helpers never raise: a missing, unreadable or malformed file
yields ``None``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from agentstudio.fsutil import read_text

logger = logging.getLogger(__name__)


def strip_json_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments that occur outside string literals.

    A line comment is removed up to but not including its newline. Backslash
    escapes inside strings are honoured, so ``"a\\"//b"`` is one string.
    An unterminated block comment swallows the rest of the input.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False

    while i < n:
        ch = text[i]

        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
            continue

        if ch == "/" and i + 1 < n:
            nxt = text[i + 1]
            if nxt == "/":
                i += 2
                while i < n and text[i] != "\n":
                    i += 1
                continue
            if nxt == "*":
                i += 2
                while i < n and not (text[i] == "*" and i + 1 < n and text[i + 1] == "/"):
                    i += 1
                i += 2
                continue

        out.append(ch)
        i += 1

    return "".join(out)


def loads_jsonc(text: str) -> Any:
    """Parse JSONC text. Raises ``ValueError`` on malformed input."""
    return json.loads(strip_json_comments(text))


def load_json(path: Path) -> Any | None:
    """Parse a JSON file, ``None`` if missing, unreadable or malformed."""
    text = read_text(path)
    if text is None:
        return None
    try:
        return json.loads(text)
    except ValueError as exc:
        logger.warning("Invalid JSON in %s: %s", path, exc)
        return None


def load_jsonc(path: Path) -> Any | None:
    """Parse a JSONC file, ``None`` if missing, unreadable or malformed."""
    text = read_text(path)
    if text is None:
        return None
    try:
        return loads_jsonc(text)
    except ValueError as exc:
        logger.warning("Invalid JSONC in %s: %s", path, exc)
        return None


def load_config(path: Path) -> Any | None:
    """Parse ``path`` as JSONC when its suffix is ``.jsonc``, else as JSON."""
    return load_jsonc(path) if path.suffix == ".jsonc" else load_json(path)
