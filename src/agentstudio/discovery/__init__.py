"""Discovery of Claude and OpenCode configuration artifacts.

Public API::

    from agentstudio.discovery import discover_all

    result = discover_all(["~/code"])
    for agent in result.agents:
        print(agent.name, agent.scope.value, agent.path)
"""

from __future__ import annotations

from agentstudio.discovery.aggregator import collect_symlinks, discover_all
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

__all__ = [
    "collect_symlinks",
    "discover_agents",
    "discover_all",
    "discover_commands",
    "discover_installed_plugins",
    "discover_mcp_from_claude_json",
    "discover_mcp_from_opencode",
    "discover_mcp_from_project",
    "discover_memory",
    "discover_opencode_memory",
    "discover_opencode_settings",
    "discover_plugins",
    "discover_settings",
    "discover_skills",
    "extract_hooks",
    "find_duplicates_in",
    "scan_projects",
]
