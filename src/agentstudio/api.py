"""Entry-point facade over discovery, consistency and operations.

Each function here corresponds to one operation a host shell (the CLI, a
desktop front end, a script) invokes. They all accept an optional ``home``
override and default to Claude's global scope where the underlying
discoverer needs a scope.
"""

from __future__ import annotations

import os
from pathlib import Path

from agentstudio import consistency
from agentstudio.discovery import aggregator, project_scanner
from agentstudio.discovery.duplicates import find_duplicates_in
from agentstudio.discovery.hooks import extract_hooks as _extract_hooks
from agentstudio.discovery.markdown import (
    discover_agents as _discover_agents,
    discover_commands as _discover_commands,
    discover_skills as _discover_skills,
)
from agentstudio.discovery.mcp import discover_mcp_from_claude_json
from agentstudio.discovery.memory import discover_memory as _discover_memory
from agentstudio.discovery.plugins import discover_installed_plugins
from agentstudio.discovery.plugins import discover_plugins as _discover_plugins
from agentstudio.discovery.settings import discover_settings as _discover_settings
from agentstudio.exceptions import EntityOperationError
from agentstudio.fsutil import link_target_exists
from agentstudio.models import (
    AgentEntity,
    CommandEntity,
    ConfigState,
    DiscoveryResult,
    DuplicateGroup,
    EntityKind,
    HookEntity,
    HookSource,
    McpServerEntity,
    MemoryEntity,
    PluginEntity,
    ProjectInfo,
    Scope,
    SettingsEntity,
    SkillEntity,
    SymlinkInfo,
    Tool,
)
from agentstudio.paths import StudioPaths


def _paths(home: Path | str | None) -> StudioPaths:
    return StudioPaths.resolve(home)


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


def get_home_directory(home: Path | str | None = None) -> str:
    return str(_paths(home).home)


def get_config_directory(home: Path | str | None = None) -> str:
    return str(_paths(home).config_dir)


def get_global_claude_path(home: Path | str | None = None) -> str:
    return str(_paths(home).claude_dir)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def discover_all(
    project_paths: list[str] | None = None, home: Path | str | None = None
) -> DiscoveryResult:
    return aggregator.discover_all(project_paths, home=home)


def scan_projects(base_paths: list[str], home: Path | str | None = None) -> list[ProjectInfo]:
    return project_scanner.scan_projects(base_paths, home=home)


def discover_settings(home: Path | str | None = None) -> list[SettingsEntity]:
    return _discover_settings(_paths(home).claude_dir, Scope.GLOBAL)


def discover_memory(home: Path | str | None = None) -> list[MemoryEntity]:
    paths = _paths(home)
    return _discover_memory(paths.claude_dir, paths.home, Scope.GLOBAL)


def discover_agents(home: Path | str | None = None) -> list[AgentEntity]:
    return _discover_agents(_paths(home).entity_dir(Tool.CLAUDE, EntityKind.AGENT), Scope.GLOBAL)


def discover_skills(home: Path | str | None = None) -> list[SkillEntity]:
    return _discover_skills(_paths(home).entity_dir(Tool.CLAUDE, EntityKind.SKILL), Scope.GLOBAL)


def discover_commands(home: Path | str | None = None) -> list[CommandEntity]:
    return _discover_commands(
        _paths(home).entity_dir(Tool.CLAUDE, EntityKind.COMMAND), Scope.GLOBAL
    )


def discover_plugins(home: Path | str | None = None) -> list[PluginEntity]:
    """Local plugins plus marketplace-installed ones, deduplicated by id."""
    paths = _paths(home)
    plugins = _discover_plugins(paths.plugins_dir, Scope.GLOBAL)
    seen = {p.id for p in plugins}
    for plugin in discover_installed_plugins(paths.installed_plugins_file):
        if plugin.id not in seen:
            seen.add(plugin.id)
            plugins.append(plugin)
    return plugins


def discover_mcp_servers(home: Path | str | None = None) -> list[McpServerEntity]:
    return discover_mcp_from_claude_json(_paths(home).claude_json)


def extract_hooks(settings_path: Path | str) -> list[HookEntity]:
    return _extract_hooks(Path(settings_path), HookSource.GLOBAL, Tool.CLAUDE)


def find_duplicates(home: Path | str | None = None) -> list[DuplicateGroup]:
    """Duplicates among global Claude agents, skills and commands."""
    return find_duplicates_in(discover_agents(home), discover_skills(home), discover_commands(home))


def check_symlink(path: Path | str) -> SymlinkInfo | None:
    """Describe ``path`` if it is a symlink, else ``None``.

    An unreadable link target is reported as the empty string.
    """
    link = Path(path)
    if not link.is_symlink():
        return None
    try:
        target = os.readlink(link)
    except OSError:
        target = ""
    return SymlinkInfo(
        path=str(link),
        target=target,
        target_exists=bool(target) and link_target_exists(link, target),
    )


# ---------------------------------------------------------------------------
# Consistency
# ---------------------------------------------------------------------------


def get_project_config_state(project_path: Path | str) -> ConfigState:
    """Classify a project's AGENTS.md / CLAUDE.md pair.

    Raises:
        EntityOperationError: If ``project_path`` is not a directory.
    """
    if not Path(project_path).is_dir():
        raise EntityOperationError(f"Path is not a directory: {project_path}")
    return consistency.detect_config_state(project_path)


def fix_project_config(project_path: Path | str) -> str:
    return consistency.fix_project_config(project_path)
