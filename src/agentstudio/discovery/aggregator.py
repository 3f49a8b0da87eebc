"""Full discovery pass over the home directory and a set of projects.

``discover_all`` runs every discoverer for the global Claude and OpenCode
roots, then scans the given base paths for projects and runs the
project-scoped discoverers for each. All results flow through one
``_Collector`` that drops anything already seen (by path for file-backed
entities, by id for hooks, registry plugins and MCP servers), so an entity
reachable twice, e.g. through overlapping base paths, appears once.

The per-project ``EntityCounts`` only count entities newly contributed by
that project.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path
from typing import Any

from agentstudio.discovery.duplicates import find_duplicates_in
from agentstudio.discovery.hooks import extract_hooks
from agentstudio.discovery.markdown import discover_agents, discover_commands, discover_skills
from agentstudio.discovery.mcp import (
    discover_mcp_from_claude_json,
    discover_mcp_from_opencode,
    discover_mcp_from_project,
)
from agentstudio.discovery.memory import discover_memory, discover_opencode_memory
from agentstudio.discovery.plugins import discover_installed_plugins, discover_plugins
from agentstudio.discovery.project_scanner import scan_projects
from agentstudio.discovery.settings import discover_opencode_settings, discover_settings
from agentstudio.fsutil import link_target_exists
from agentstudio.models import (
    BaseEntity,
    DiscoveryResult,
    EntityCounts,
    EntityKind,
    HookSource,
    PluginEntity,
    ProjectInfo,
    Scope,
    SkillEntity,
    SymlinkInfo,
    Tool,
)
from agentstudio.paths import StudioPaths, entity_dir_name, project_config_dir

logger = logging.getLogger(__name__)

# Kinds whose entities are backed by one file and keyed by path.
FILE_BACKED_KINDS = (
    EntityKind.SETTINGS,
    EntityKind.MEMORY,
    EntityKind.AGENT,
    EntityKind.SKILL,
    EntityKind.COMMAND,
    EntityKind.PLUGIN,
)


class _Collector:
    """Accumulates entities per kind, first occurrence wins."""

    def __init__(self) -> None:
        self.items: dict[EntityKind, list[Any]] = {kind: [] for kind in EntityKind}
        self._seen: dict[EntityKind, set[str]] = {kind: set() for kind in EntityKind}

    def add(
        self,
        kind: EntityKind,
        entities: Iterable[Any],
        counts: EntityCounts | None = None,
        *,
        by_id: bool = False,
    ) -> None:
        """Insert unseen entities, bumping ``counts`` for each insertion.

        Args:
            kind: Collection to insert into.
            entities: Discovered entities.
            counts: Per-project tally to update, if any.
            by_id: Key by ``id`` instead of ``path``.
        """
        seen = self._seen[kind]
        bucket = self.items[kind]
        for entity in entities:
            key = entity.id if by_id or not isinstance(entity, BaseEntity) else entity.path
            if key in seen:
                continue
            seen.add(key)
            bucket.append(entity)
            if counts is not None:
                counts.increment(kind)


def _collect_global(paths: StudioPaths, collector: _Collector) -> None:
    claude = paths.claude_dir
    opencode = paths.opencode_dir
    g = Scope.GLOBAL

    collector.add(EntityKind.SETTINGS, discover_settings(claude, g))
    collector.add(EntityKind.MEMORY, discover_memory(claude, paths.home, g))
    collector.add(EntityKind.AGENT, discover_agents(paths.entity_dir(Tool.CLAUDE, EntityKind.AGENT), g))
    collector.add(EntityKind.SKILL, discover_skills(paths.entity_dir(Tool.CLAUDE, EntityKind.SKILL), g))
    collector.add(
        EntityKind.COMMAND, discover_commands(paths.entity_dir(Tool.CLAUDE, EntityKind.COMMAND), g)
    )
    collector.add(EntityKind.PLUGIN, discover_plugins(paths.plugins_dir, g))
    collector.add(
        EntityKind.PLUGIN, discover_installed_plugins(paths.installed_plugins_file), by_id=True
    )
    collector.add(EntityKind.HOOK, extract_hooks(claude / "settings.json", HookSource.GLOBAL))
    collector.add(EntityKind.MCP, discover_mcp_from_claude_json(paths.claude_json))

    oc = Tool.OPENCODE
    collector.add(EntityKind.SETTINGS, discover_opencode_settings(opencode, g))
    collector.add(EntityKind.MEMORY, discover_opencode_memory(opencode, paths.home, g))
    collector.add(EntityKind.AGENT, discover_agents(paths.entity_dir(oc, EntityKind.AGENT), g, tool=oc))
    collector.add(EntityKind.SKILL, discover_skills(paths.entity_dir(oc, EntityKind.SKILL), g, tool=oc))
    collector.add(
        EntityKind.COMMAND, discover_commands(paths.entity_dir(oc, EntityKind.COMMAND), g, tool=oc)
    )
    collector.add(EntityKind.MCP, discover_mcp_from_opencode(opencode, g))


def _collect_project(project: ProjectInfo, collector: _Collector) -> EntityCounts:
    root = Path(project.path)
    owner = project.path
    p = Scope.PROJECT
    counts = EntityCounts()

    claude = project_config_dir(root, Tool.CLAUDE)
    collector.add(EntityKind.SETTINGS, discover_settings(claude, p, owner), counts)
    collector.add(EntityKind.MEMORY, discover_memory(claude, root, p, owner), counts)
    for kind, discover in (
        (EntityKind.AGENT, discover_agents),
        (EntityKind.SKILL, discover_skills),
        (EntityKind.COMMAND, discover_commands),
    ):
        directory = claude / entity_dir_name(Tool.CLAUDE, kind)
        collector.add(kind, discover(directory, p, owner), counts)
    collector.add(EntityKind.PLUGIN, discover_plugins(claude / "plugins", p, owner), counts)
    collector.add(
        EntityKind.HOOK, extract_hooks(claude / "settings.json", HookSource.PROJECT), counts
    )
    collector.add(
        EntityKind.HOOK, extract_hooks(claude / "settings.local.json", HookSource.LOCAL), counts
    )
    collector.add(EntityKind.MCP, discover_mcp_from_project(root), counts)

    opencode = project_config_dir(root, Tool.OPENCODE)
    oc = Tool.OPENCODE
    collector.add(EntityKind.SETTINGS, discover_opencode_settings(opencode, p, owner), counts)
    collector.add(EntityKind.SETTINGS, discover_opencode_settings(root, p, owner), counts)
    collector.add(EntityKind.MEMORY, discover_opencode_memory(opencode, root, p, owner), counts)
    for kind, discover in (
        (EntityKind.AGENT, discover_agents),
        (EntityKind.SKILL, discover_skills),
        (EntityKind.COMMAND, discover_commands),
    ):
        directory = opencode / entity_dir_name(oc, kind)
        collector.add(kind, discover(directory, p, owner, tool=oc), counts)
    collector.add(EntityKind.MCP, discover_mcp_from_opencode(opencode, p, owner), counts)
    collector.add(EntityKind.MCP, discover_mcp_from_opencode(root, p, owner), counts)
    return counts


def collect_symlinks(entities: Iterable[BaseEntity]) -> list[SymlinkInfo]:
    """Build the symlink inventory for file-backed entities."""
    links: list[SymlinkInfo] = []
    for entity in entities:
        if not entity.is_symlink:
            continue
        target = entity.symlink_target or ""
        # The link may be the entity's directory rather than its file.
        link_path = Path(entity.path)
        if isinstance(entity, SkillEntity) and Path(entity.skill_dir).is_symlink():
            link_path = Path(entity.skill_dir)
        elif isinstance(entity, PluginEntity):
            link_path = Path(entity.plugin_dir)
        links.append(
            SymlinkInfo(
                path=entity.path,
                target=target,
                target_exists=bool(target) and link_target_exists(link_path, target),
                entity_type=type(entity).kind,
                entity_id=entity.id,
            )
        )
    return links


def discover_all(
    project_paths: list[str] | list[Path] | None = None,
    home: Path | str | None = None,
) -> DiscoveryResult:
    """Run a full discovery pass.

    Args:
        project_paths: Base paths to scan for projects. ``None`` discovers
            global configuration only.
        home: Home directory override.

    Returns:
        A freshly built ``DiscoveryResult``.

    Raises:
        HomeDirectoryError: If the home directory cannot be resolved.
    """
    paths = StudioPaths.resolve(home)
    collector = _Collector()
    _collect_global(paths, collector)

    projects: list[ProjectInfo] = []
    if project_paths:
        for project in scan_projects(project_paths, home=paths.home):
            counts = _collect_project(project, collector)
            projects.append(replace(project, entity_counts=counts))
            logger.debug("Project %s contributed %d entities", project.path, counts.total)

    items = collector.items
    symlinks = collect_symlinks(
        entity for kind in FILE_BACKED_KINDS for entity in items[kind]
    )
    duplicates = find_duplicates_in(
        items[EntityKind.AGENT], items[EntityKind.SKILL], items[EntityKind.COMMAND]
    )

    return DiscoveryResult(
        global_config_path=str(paths.claude_dir),
        projects=projects,
        settings=items[EntityKind.SETTINGS],
        memory=items[EntityKind.MEMORY],
        agents=items[EntityKind.AGENT],
        skills=items[EntityKind.SKILL],
        commands=items[EntityKind.COMMAND],
        hooks=items[EntityKind.HOOK],
        plugins=items[EntityKind.PLUGIN],
        mcp_servers=items[EntityKind.MCP],
        duplicates=duplicates,
        symlinks=symlinks,
        discovered_at=int(time.time() * 1000),
    )
