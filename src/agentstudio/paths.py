"""Well-known locations of Claude Code and OpenCode configuration.

Agent Studio has no configuration file of its own. The only thing that
varies between runs is *where home is*; every tool root is derived from it.
``StudioPaths`` bundles those derivations so that discovery, the project
scanner and the entity operations all agree on the layout, and so tests can
point the whole engine at a temporary directory by passing ``home=``.

Layout::

    ~/.claude/                      Claude global config root
    ~/.claude/plugins/              local plugins (never scanned as projects)
    ~/.claude/plugins/installed_plugins.json
    ~/.claude.json                  Claude user-scope MCP servers
    ~/.config/opencode/             OpenCode global config root
    ~/.agents/.skill-lock.json      skills CLI lock file
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from pathlib import Path

from agentstudio.exceptions import HomeDirectoryError
from agentstudio.models import EntityKind, Tool

CLAUDE_DIR_NAME = ".claude"
OPENCODE_DIR_NAME = ".opencode"

# Entity subdirectory names per tool. OpenCode uses singular names.
_ENTITY_DIRS: dict[tuple[Tool, EntityKind], str] = {
    (Tool.CLAUDE, EntityKind.AGENT): "agents",
    (Tool.CLAUDE, EntityKind.SKILL): "skills",
    (Tool.CLAUDE, EntityKind.COMMAND): "commands",
    (Tool.OPENCODE, EntityKind.AGENT): "agent",
    (Tool.OPENCODE, EntityKind.SKILL): "skill",
    (Tool.OPENCODE, EntityKind.COMMAND): "command",
}


def entity_dir_name(tool: Tool, kind: EntityKind) -> str:
    """Return the subdirectory holding entities of ``kind`` for ``tool``.

    Raises:
        KeyError: For kinds that are not directory-backed (settings, hooks...).
    """
    return _ENTITY_DIRS[(tool, kind)]


def project_config_dir(project: Path, tool: Tool) -> Path:
    """Return the tool's dot-directory inside a project."""
    return project / (CLAUDE_DIR_NAME if tool is Tool.CLAUDE else OPENCODE_DIR_NAME)


def memory_file_name(tool: Tool) -> str:
    """Return the memory file name used by ``tool``."""
    return "CLAUDE.md" if tool is Tool.CLAUDE else "AGENTS.md"


@dataclass(frozen=True)
class StudioPaths:
    """Resolved configuration locations for one home directory.

    Attributes:
        home: The home directory all global roots hang off.
    """

    home: Path

    @classmethod
    def resolve(cls, home: Path | str | None = None) -> StudioPaths:
        """Build paths for an explicit home, or for the current user.

        Raises:
            HomeDirectoryError: If no home directory can be determined.
        """
        if home is not None:
            return cls(home=Path(home))
        try:
            return cls(home=Path.home())
        except (RuntimeError, KeyError) as exc:
            raise HomeDirectoryError("Could not find home directory") from exc

    @property
    def claude_dir(self) -> Path:
        return self.home / CLAUDE_DIR_NAME

    @property
    def claude_json(self) -> Path:
        return self.home / ".claude.json"

    @property
    def plugins_dir(self) -> Path:
        return self.claude_dir / "plugins"

    @property
    def installed_plugins_file(self) -> Path:
        return self.plugins_dir / "installed_plugins.json"

    @property
    def config_dir(self) -> Path:
        """Platform config directory.

        ``~/Library/Application Support`` on macOS, ``%APPDATA%`` on Windows,
        otherwise ``$XDG_CONFIG_HOME`` falling back to ``~/.config``.
        """
        system = platform.system().lower()
        if system == "darwin":
            return self.home / "Library" / "Application Support"
        if system == "windows":
            appdata = os.environ.get("APPDATA")
            return Path(appdata) if appdata else self.home / "AppData" / "Roaming"
        xdg = os.environ.get("XDG_CONFIG_HOME")
        if xdg:
            return Path(xdg)
        return self.home / ".config"

    @property
    def opencode_dir(self) -> Path:
        # OpenCode always uses ~/.config/opencode, even on macOS.
        return self.home / ".config" / "opencode"

    @property
    def skill_lock_file(self) -> Path:
        return self.home / ".agents" / ".skill-lock.json"

    def global_root(self, tool: Tool) -> Path:
        """Return the global configuration root for ``tool``."""
        return self.claude_dir if tool is Tool.CLAUDE else self.opencode_dir

    def entity_dir(
        self,
        tool: Tool,
        kind: EntityKind,
        project: Path | None = None,
    ) -> Path:
        """Return the directory holding ``kind`` entities for a tool and scope.

        Args:
            tool: Owning tool.
            kind: Agent, skill or command.
            project: Project root for project scope; ``None`` for global.
        """
        root = self.global_root(tool) if project is None else project_config_dir(project, tool)
        return root / entity_dir_name(tool, kind)
