"""Claude plugin discovery.

Plugins come from two places:

1. Local plugin directories, immediate subdirectories of
   ``~/.claude/plugins`` (or a project's ``.claude/plugins``) that contain
   ``.claude-plugin/plugin.json``.
2. The installed-plugins registry ``~/.claude/plugins/installed_plugins.json``
   written by the plugin marketplace::

       {
         "plugins": {
           "frontend-design@claude-plugins-official": [
             {"scope": "user", "installPath": "...", "version": "1.2.0",
              "installedAt": "2025-01-01T00:00:00Z"}
           ]
         }
       }

Capability flags are inferred purely from conventional subpaths of the
plugin directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from agentstudio.discovery.base import base_fields
from agentstudio.fsutil import generate_id, is_dir, is_file, list_dir
from agentstudio.models import PluginEntity, Scope, Tool
from agentstudio.parsers.jsonc import load_json

logger = logging.getLogger(__name__)

MANIFEST_RELPATH = Path(".claude-plugin") / "plugin.json"


def _capabilities(plugin_dir: Path) -> dict[str, bool]:
    """Probe a plugin directory for conventional capability subpaths."""

    def exists(rel: str) -> bool:
        return os.path.exists(plugin_dir / rel)

    return {
        "has_commands": exists("commands"),
        "has_agents": exists("agents"),
        "has_skills": exists("skills"),
        "has_hooks": exists("hooks") or exists("hooks.json"),
        "has_mcp": exists(".mcp.json"),
        "has_lsp": exists(".lsp.json"),
    }


def discover_plugins(
    plugins_dir: Path,
    scope: Scope,
    project_path: str | None = None,
    tool: Tool = Tool.CLAUDE,
) -> list[PluginEntity]:
    """Find local plugin directories under ``plugins_dir``.

    The id is derived from the plugin directory, ``path`` is the manifest and
    the symlink flag describes the plugin directory itself.
    """
    plugins: list[PluginEntity] = []
    for plugin_dir in list_dir(plugins_dir):
        manifest_path = plugin_dir / MANIFEST_RELPATH
        if not is_dir(plugin_dir) or not is_file(manifest_path):
            continue
        fields = base_fields(
            manifest_path,
            "plugin",
            plugin_dir.name,
            scope,
            project_path,
            tool,
            id_key=plugin_dir,
            link_probe=plugin_dir,
        )
        plugins.append(
            PluginEntity(
                **fields,
                plugin_dir=str(plugin_dir),
                manifest=load_json(manifest_path),
                **_capabilities(plugin_dir),
            )
        )
    return plugins


def _registry_scope(record_scope: str, project_path: str | None) -> tuple[Scope, str | None]:
    """Map an installation record's scope onto (Scope, project_path).

    ``user`` is global; ``project`` and ``local`` are project-scoped, unless
    the record lacks a project path, in which case it is treated as global.
    """
    if record_scope in ("project", "local") and project_path:
        return Scope.PROJECT, project_path
    return Scope.GLOBAL, None


def _registry_entity(full_name: str, record: dict[str, Any]) -> PluginEntity:
    name, _, marketplace = full_name.partition("@")
    record_scope = record.get("scope")
    if not isinstance(record_scope, str):
        record_scope = "user"
    install_path = record.get("installPath")
    if not isinstance(install_path, str):
        install_path = ""
    version = record.get("version")
    project_path = record.get("projectPath")
    scope, project_path = _registry_scope(
        record_scope, project_path if isinstance(project_path, str) else None
    )

    install_dir = Path(install_path)
    manifest = None
    description = None
    if install_path:
        manifest_path = install_dir / MANIFEST_RELPATH
        if is_file(manifest_path):
            manifest = load_json(manifest_path)
        if isinstance(manifest, dict) and isinstance(manifest.get("description"), str):
            description = manifest["description"]
        capabilities = _capabilities(install_dir)
    else:
        capabilities = {}

    return PluginEntity(
        id=generate_id("plugin", f"{full_name}_{record_scope}"),
        name=name,
        path=install_path,
        scope=scope,
        project_path=project_path,
        is_symlink=False,
        symlink_target=None,
        content=description,
        last_modified=0,
        tool=Tool.CLAUDE,
        plugin_dir=install_path,
        manifest=manifest,
        marketplace=marketplace or None,
        version=version if isinstance(version, str) else None,
        **capabilities,
    )


def discover_installed_plugins(registry_path: Path) -> list[PluginEntity]:
    """Read plugins from the marketplace's installed-plugins registry.

    One entity is produced per installation record. Entries whose value is
    not a list, and records that are not objects, are skipped.
    """
    data = load_json(registry_path)
    if not isinstance(data, dict):
        return []
    entries = data.get("plugins")
    if not isinstance(entries, dict):
        logger.debug("No plugins map in %s", registry_path)
        return []

    plugins: list[PluginEntity] = []
    for full_name, records in entries.items():
        if not isinstance(records, list):
            continue
        for record in records:
            if isinstance(record, dict):
                plugins.append(_registry_entity(full_name, record))
    return plugins
