"""YAML frontmatter splitting for Markdown entity files.

Agents, commands and skills are Markdown files that may start with a YAML
block delimited by ``---`` lines::

    ---
    name: reviewer
    description: Reviews pull requests
    ---

    You are a code reviewer.

The closing delimiter is the first ``---`` after the opening one, wherever
it occurs. Anything that does not fit this shape is treated as plain
Markdown with no frontmatter.
"""

from __future__ import annotations

from typing import Any

import yaml

DELIMITER = "---"


def split_frontmatter(text: str) -> tuple[dict[str, Any] | None, str]:
    """Split Markdown text into its frontmatter mapping and body.

    Args:
        text: Full file content.

    Returns:
        ``(frontmatter, body)``. ``body`` has leading whitespace stripped.
        When there is no opening or closing delimiter, the YAML does not
        parse, or it does not parse to a mapping, returns
        ``(None, text)`` unchanged. An empty block yields ``{}``.
    """
    if not text.startswith(DELIMITER):
        return None, text

    rest = text[len(DELIMITER):]
    end = rest.find(DELIMITER)
    if end == -1:
        return None, text

    block = rest[:end]
    body = rest[end + len(DELIMITER):].lstrip()

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError:
        return None, text

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        return None, text
    return data, body


def render_frontmatter(fields: dict[str, Any], body: str) -> str:
    """Serialise ``fields`` as a frontmatter block followed by ``body``.

    Uses ``yaml.safe_dump`` so values containing ``:`` or quotes survive a
    round trip through :func:`split_frontmatter`. Leading whitespace of
    ``body`` does not survive it: the splitter strips it, so an indented
    first line comes back unindented.
    """
    block = yaml.safe_dump(fields, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return f"{DELIMITER}\n{block}{DELIMITER}\n\n{body}"
