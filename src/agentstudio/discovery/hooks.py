"""Hook extraction from Claude settings files.

A settings file's ``hooks`` object maps an event name to a list of matcher
blocks::

    "hooks": {
      "PreToolUse": [
        {"matcher": "Bash", "hooks": [{"type": "command", "command": "lint"}]}
      ]
    }

Each matcher block with at least one valid definition becomes one
``HookEntity``.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any

from agentstudio.models import HookDefinition, HookEntity, HookSource, Tool
from agentstudio.parsers.jsonc import load_json


def hook_id(settings_path: Path | str, event: str, index: int) -> str:
    """Derive a hook id from (path, event, index). The source label is excluded."""
    key = "\x00".join((str(settings_path), event, str(index)))
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:16]
    return f"hook_{event}_{index}_{digest}"


def _definition(raw: Any) -> HookDefinition | None:
    if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
        return None
    command = raw.get("command")
    prompt = raw.get("prompt")
    timeout = raw.get("timeout")
    once = raw.get("once")
    return HookDefinition(
        type=raw["type"],
        command=command if isinstance(command, str) else None,
        prompt=prompt if isinstance(prompt, str) else None,
        timeout=timeout if isinstance(timeout, int) and not isinstance(timeout, bool) else None,
        once=once if isinstance(once, bool) else None,
    )


def extract_hooks(
    settings_path: Path,
    source: HookSource = HookSource.GLOBAL,
    tool: Tool = Tool.CLAUDE,
) -> list[HookEntity]:
    """Extract hook blocks from a settings file.

    Args:
        settings_path: A ``settings.json`` / ``settings.local.json``.
        source: Which settings layer the file represents.
        tool: Tool tag for the produced entities.

    Returns:
        One entity per (event, matcher block) with a non-empty definition
        list. Missing or malformed files yield ``[]``.
    """
    settings = load_json(settings_path)
    if not isinstance(settings, dict):
        return []
    hooks_obj = settings.get("hooks")
    if not isinstance(hooks_obj, dict):
        return []

    hooks: list[HookEntity] = []
    for event, blocks in hooks_obj.items():
        if not isinstance(blocks, list):
            continue
        for index, block in enumerate(blocks):
            if not isinstance(block, dict):
                continue
            raw_defs = block.get("hooks")
            if not isinstance(raw_defs, list):
                continue
            definitions = [d for d in map(_definition, raw_defs) if d is not None]
            if not definitions:
                continue
            matcher = block.get("matcher")
            hooks.append(
                HookEntity(
                    id=hook_id(settings_path, event, index),
                    event=event,
                    matcher=matcher if isinstance(matcher, str) else None,
                    hooks=definitions,
                    source=source,
                    source_path=str(settings_path),
                    tool=tool,
                )
            )
    return hooks
