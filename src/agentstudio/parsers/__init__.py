"""Content parsers: YAML frontmatter and JSON with comments."""

from agentstudio.parsers.frontmatter import render_frontmatter, split_frontmatter
from agentstudio.parsers.jsonc import (
    load_config,
    load_json,
    load_jsonc,
    loads_jsonc,
    strip_json_comments,
)

__all__ = [
    "load_config",
    "load_json",
    "load_jsonc",
    "loads_jsonc",
    "render_frontmatter",
    "split_frontmatter",
    "strip_json_comments",
]
