"""Settings file discovery for Claude and OpenCode.

Claude keeps ``settings.json`` in ``~/.claude`` (global) and
``settings.json`` / ``settings.local.json`` in a project's ``.claude``.
OpenCode keeps ``opencode.json`` and/or ``opencode.jsonc`` in its config
directory; both may exist side by side and both are reported.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from agentstudio.discovery.base import base_fields
from agentstudio.fsutil import is_file
from agentstudio.models import Scope, SettingsEntity, SettingsVariant, Tool
from agentstudio.parsers.jsonc import loads_jsonc

logger = logging.getLogger(__name__)


def _parse(text: str | None, jsonc: bool) -> object:
    if text is None:
        return None
    try:
        return loads_jsonc(text) if jsonc else json.loads(text)
    except ValueError:
        logger.debug("Settings content is not valid JSON; keeping raw text only")
        return None


def _settings_entity(
    path: Path,
    variant: SettingsVariant,
    scope: Scope,
    project_path: str | None,
    tool: Tool,
) -> SettingsEntity:
    fields = base_fields(path, "settings", path.name, scope, project_path, tool)
    parsed = _parse(fields["content"], jsonc=path.suffix == ".jsonc")
    return SettingsEntity(**fields, variant=variant, parsed=parsed)


def discover_settings(
    claude_dir: Path,
    scope: Scope,
    project_path: str | None = None,
    tool: Tool = Tool.CLAUDE,
) -> list[SettingsEntity]:
    """Find Claude settings files in a ``.claude`` directory.

    Args:
        claude_dir: ``~/.claude`` or ``<project>/.claude``.
        scope: GLOBAL reads ``settings.json`` only; PROJECT also reads
            ``settings.local.json``.
        project_path: Owning project for PROJECT scope.
        tool: Tool tag for the produced entities.

    Returns:
        Zero to two settings entities.
    """
    if scope is Scope.GLOBAL:
        candidates = [("settings.json", SettingsVariant.GLOBAL)]
    else:
        candidates = [
            ("settings.json", SettingsVariant.PROJECT),
            ("settings.local.json", SettingsVariant.LOCAL),
        ]

    found: list[SettingsEntity] = []
    for file_name, variant in candidates:
        path = claude_dir / file_name
        if is_file(path):
            found.append(_settings_entity(path, variant, scope, project_path, tool))
    return found


def discover_opencode_settings(
    opencode_dir: Path,
    scope: Scope,
    project_path: str | None = None,
) -> list[SettingsEntity]:
    """Find ``opencode.json`` and ``opencode.jsonc`` in an OpenCode config directory."""
    variant = SettingsVariant.GLOBAL if scope is Scope.GLOBAL else SettingsVariant.PROJECT
    found: list[SettingsEntity] = []
    for file_name in ("opencode.json", "opencode.jsonc"):
        path = opencode_dir / file_name
        if is_file(path):
            found.append(_settings_entity(path, variant, scope, project_path, Tool.OPENCODE))
    return found
