"""Memory file discovery (``CLAUDE.md`` / ``AGENTS.md``)."""

from __future__ import annotations

from pathlib import Path

from agentstudio.discovery.base import base_fields
from agentstudio.fsutil import is_file
from agentstudio.models import MemoryEntity, MemoryVariant, Scope, Tool


def _memory_entity(
    path: Path,
    variant: MemoryVariant,
    scope: Scope,
    project_path: str | None,
    tool: Tool,
) -> MemoryEntity:
    fields = base_fields(path, "memory", path.name, scope, project_path, tool)
    return MemoryEntity(**fields, variant=variant)


def discover_memory(
    claude_dir: Path,
    base_path: Path,
    scope: Scope,
    project_path: str | None = None,
    tool: Tool = Tool.CLAUDE,
) -> list[MemoryEntity]:
    """Find Claude memory files.

    ``<claude_dir>/CLAUDE.md`` is always checked. ``<base_path>/CLAUDE.md``
    is only checked for project scope; a ``CLAUDE.md`` directly in the home
    directory is not a Claude memory file.
    """
    found: list[MemoryEntity] = []
    dot_file = claude_dir / "CLAUDE.md"
    if is_file(dot_file):
        found.append(_memory_entity(dot_file, MemoryVariant.DOTCLAUDE, scope, project_path, tool))

    if scope is Scope.PROJECT:
        root_file = base_path / "CLAUDE.md"
        if is_file(root_file):
            found.append(_memory_entity(root_file, MemoryVariant.ROOT, scope, project_path, tool))
    return found


def discover_opencode_memory(
    opencode_dir: Path,
    base_path: Path,
    scope: Scope,
    project_path: str | None = None,
) -> list[MemoryEntity]:
    """Find OpenCode ``AGENTS.md`` files.

    Both ``<opencode_dir>/AGENTS.md`` and ``<base_path>/AGENTS.md`` are
    checked for either scope; the root file is skipped when it is the same
    path as the dot-directory one.
    """
    found: list[MemoryEntity] = []
    dot_file = opencode_dir / "AGENTS.md"
    if is_file(dot_file):
        found.append(
            _memory_entity(dot_file, MemoryVariant.DOTOPENCODE, scope, project_path, Tool.OPENCODE)
        )

    root_file = base_path / "AGENTS.md"
    if root_file != dot_file and is_file(root_file):
        found.append(_memory_entity(root_file, MemoryVariant.ROOT, scope, project_path, Tool.OPENCODE))
    return found
