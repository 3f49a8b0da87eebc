"""Unified entity model for discovered configuration artifacts.

Every artifact found on disk -- a settings file, a memory file, an agent,
skill or command definition, a plugin, a hook block or an MCP server
registration -- is normalised into one of the dataclasses below, regardless
of which tool convention (Claude or OpenCode) it came from.

All entities are immutable snapshots of on-disk state at scan time. They are
rebuilt from scratch on every discovery call; the only identity that
survives between calls is the path-derived ``id``.

Scope, tool and variant tags are closed enumerations. Their ``value`` is the
lower-case wire string used in ``to_dict()`` output.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar


class Scope(str, Enum):
    GLOBAL = "global"
    PROJECT = "project"


class Tool(str, Enum):
    CLAUDE = "claude"
    OPENCODE = "opencode"


class SettingsVariant(str, Enum):
    GLOBAL = "global"
    PROJECT = "project"
    LOCAL = "local"


class MemoryVariant(str, Enum):
    """Where a memory file lives relative to its owner.

    ``ROOT`` sits beside the project root (or in home for global scope);
    ``DOTCLAUDE`` / ``DOTOPENCODE`` live inside the tool's dot-directory.
    """

    ROOT = "root"
    DOTCLAUDE = "dotclaude"
    DOTOPENCODE = "dotopencode"


class HookSource(str, Enum):
    GLOBAL = "global"
    PROJECT = "project"
    LOCAL = "local"


class McpScope(str, Enum):
    """Scope of an MCP server registration.

    Claude distinguishes ``user`` (``~/.claude.json``) from ``project``
    (``.mcp.json``). OpenCode servers carry the discovery scope instead.
    """

    USER = "user"
    PROJECT = "project"
    GLOBAL = "global"


class Transport(str, Enum):
    STDIO = "stdio"
    HTTP = "http"
    SSE = "sse"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> Transport:
        """Map a free-form ``type`` string to a transport, UNKNOWN if unrecognised."""
        try:
            return cls(value.lower())
        except ValueError:
            return cls.UNKNOWN


class EntityKind(str, Enum):
    SETTINGS = "settings"
    MEMORY = "memory"
    AGENT = "agent"
    SKILL = "skill"
    COMMAND = "command"
    PLUGIN = "plugin"
    HOOK = "hook"
    MCP = "mcp"


class FileStatus(str, Enum):
    FILE = "file"
    SYMLINK = "symlink"
    MISSING = "missing"


class ConfigStateType(str, Enum):
    """Classification of a project's AGENTS.md / CLAUDE.md pairing."""

    CORRECT = "correct"
    MISSING_SYMLINK = "missing_symlink"
    NEEDS_MIGRATION = "needs_migration"
    CONFLICT = "conflict"
    EMPTY = "empty"


def _jsonable(value: Any) -> Any:
    """Convert enums and nested containers into plain JSON-serialisable values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


class SerializableMixin:
    """Mixin providing ``to_dict()`` for dataclasses."""

    def to_dict(self) -> dict[str, Any]:
        out = _jsonable(dataclasses.asdict(self))  # type: ignore[call-overload]
        kind = getattr(type(self), "kind", None)
        if isinstance(kind, EntityKind):
            out["type"] = kind.value
        return out


# ---------------------------------------------------------------------------
# File-backed entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BaseEntity(SerializableMixin):
    """Fields shared by every entity backed by a single file on disk.

    Attributes:
        id: Content address derived from the absolute path (see
            ``fsutil.generate_id``). Stable across runs, not across renames.
        name: Display name (file stem, skill directory name, ...).
        path: Absolute path of the backing file.
        scope: Global or project.
        project_path: Owning project root. Present iff scope is PROJECT.
        is_symlink: Whether ``path`` itself is a symbolic link.
        symlink_target: Raw link target when ``is_symlink`` and readable.
        content: Raw text, ``None`` if the file could not be read.
        last_modified: Modification time in epoch milliseconds, 0 if unknown.
        tool: Owning tool convention.
    """

    id: str
    name: str
    path: str
    scope: Scope
    project_path: str | None
    is_symlink: bool
    symlink_target: str | None
    content: str | None
    last_modified: int
    tool: Tool

    def __post_init__(self) -> None:
        if (self.project_path is not None) != (self.scope is Scope.PROJECT):
            raise ValueError(
                f"project_path must be set iff scope is project "
                f"(scope={self.scope.value}, project_path={self.project_path!r})"
            )


@dataclass(frozen=True)
class SettingsEntity(BaseEntity):
    kind: ClassVar[EntityKind] = EntityKind.SETTINGS

    variant: SettingsVariant
    parsed: Any = None


@dataclass(frozen=True)
class MemoryEntity(BaseEntity):
    kind: ClassVar[EntityKind] = EntityKind.MEMORY

    variant: MemoryVariant


@dataclass(frozen=True)
class AgentEntity(BaseEntity):
    kind: ClassVar[EntityKind] = EntityKind.AGENT

    frontmatter: dict[str, Any] | None = None


@dataclass(frozen=True)
class CommandEntity(BaseEntity):
    """A slash command. ``namespace`` is the immediate parent directory name."""

    kind: ClassVar[EntityKind] = EntityKind.COMMAND

    namespace: str | None = None
    frontmatter: dict[str, Any] | None = None


@dataclass(frozen=True)
class SkillEntity(BaseEntity):
    """A skill directory. ``path`` points at its ``SKILL.md`` manifest."""

    kind: ClassVar[EntityKind] = EntityKind.SKILL

    skill_dir: str
    frontmatter: dict[str, Any] | None = None
    supporting_files: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PluginEntity(BaseEntity):
    """A Claude plugin.

    Capability flags reflect conventional subpaths present in ``plugin_dir``;
    the manifest content is never consulted for them. ``marketplace`` and
    ``version`` are only known for plugins from the installed-plugins
    registry.
    """

    kind: ClassVar[EntityKind] = EntityKind.PLUGIN

    plugin_dir: str
    manifest: Any = None
    has_commands: bool = False
    has_agents: bool = False
    has_skills: bool = False
    has_hooks: bool = False
    has_mcp: bool = False
    has_lsp: bool = False
    marketplace: str | None = None
    version: str | None = None


# ---------------------------------------------------------------------------
# Standalone entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HookDefinition(SerializableMixin):
    type: str
    command: str | None = None
    prompt: str | None = None
    timeout: int | None = None
    once: bool | None = None


@dataclass(frozen=True)
class HookEntity(SerializableMixin):
    """One matcher block under one event of a settings file's ``hooks`` object.

    The ``id`` is derived from (source path, event, position) only, so the
    same block read twice under different ``source`` labels collapses.
    """

    kind: ClassVar[EntityKind] = EntityKind.HOOK

    id: str
    event: str
    matcher: str | None
    hooks: list[HookDefinition]
    source: HookSource
    source_path: str
    tool: Tool


@dataclass(frozen=True)
class McpServerConfig(SerializableMixin):
    type: str | None = None
    command: str | None = None
    args: list[str] | None = None
    url: str | None = None
    env: dict[str, str] | None = None
    headers: dict[str, str] | None = None


@dataclass(frozen=True)
class McpServerEntity(SerializableMixin):
    kind: ClassVar[EntityKind] = EntityKind.MCP

    id: str
    name: str
    scope: McpScope
    transport: Transport
    config: McpServerConfig
    source_path: str
    tool: Tool
    is_from_plugin: bool = False
    plugin_name: str | None = None


# ---------------------------------------------------------------------------
# Projects and aggregates
# ---------------------------------------------------------------------------


@dataclass
class EntityCounts(SerializableMixin):
    """Per-kind tally of entities discovered under one project."""

    settings: int = 0
    memory: int = 0
    agents: int = 0
    skills: int = 0
    commands: int = 0
    plugins: int = 0
    hooks: int = 0
    mcp: int = 0

    _FIELDS: ClassVar[dict[EntityKind, str]] = {
        EntityKind.SETTINGS: "settings",
        EntityKind.MEMORY: "memory",
        EntityKind.AGENT: "agents",
        EntityKind.SKILL: "skills",
        EntityKind.COMMAND: "commands",
        EntityKind.PLUGIN: "plugins",
        EntityKind.HOOK: "hooks",
        EntityKind.MCP: "mcp",
    }

    def increment(self, kind: EntityKind) -> None:
        attr = self._FIELDS[kind]
        setattr(self, attr, getattr(self, attr) + 1)

    @property
    def total(self) -> int:
        return sum(getattr(self, attr) for attr in self._FIELDS.values())


@dataclass(frozen=True)
class ConfigState(SerializableMixin):
    """AGENTS.md / CLAUDE.md consistency state of one project directory."""

    agents_md_status: FileStatus
    claude_md_status: FileStatus
    claude_md_symlink_target: str | None
    config_state: ConfigStateType
    can_auto_fix: bool


@dataclass(frozen=True)
class ProjectInfo(SerializableMixin):
    """A directory recognised as a project by the scanner.

    Attributes:
        path: Absolute project root.
        name: Directory name.
        has_claude_dir: ``.claude/`` exists.
        has_opencode_dir: ``.opencode/`` exists.
        has_mcp_json: ``.mcp.json`` exists.
        has_claude_md: ``.claude/CLAUDE.md`` exists.
        has_root_claude_md: ``CLAUDE.md`` exists at the root.
        has_agents_md: ``AGENTS.md`` at the root or in ``.opencode/``.
        has_opencode_json: ``opencode.json``/``.jsonc`` at the root or
            ``.opencode/opencode.json``.
        entity_counts: Filled in by the aggregator; zero from the scanner.
        config_state: AGENTS.md / CLAUDE.md state at scan time.
    """

    path: str
    name: str
    has_claude_dir: bool
    has_opencode_dir: bool
    has_mcp_json: bool
    has_claude_md: bool
    has_root_claude_md: bool
    has_agents_md: bool
    has_opencode_json: bool
    entity_counts: EntityCounts = field(default_factory=EntityCounts)
    config_state: ConfigState | None = None


@dataclass(frozen=True)
class DuplicateEntity(SerializableMixin):
    id: str
    path: str
    scope: Scope
    project_path: str | None
    precedence: int


@dataclass(frozen=True)
class DuplicateGroup(SerializableMixin):
    """Same-named entities of one kind. Lower ``precedence`` wins."""

    name: str
    entity_type: EntityKind
    entities: list[DuplicateEntity]


@dataclass(frozen=True)
class SymlinkInfo(SerializableMixin):
    path: str
    target: str
    target_exists: bool
    entity_type: EntityKind | None = None
    entity_id: str | None = None


@dataclass(frozen=True)
class DiscoveryResult(SerializableMixin):
    """Root aggregate of one discovery pass."""

    global_config_path: str
    projects: list[ProjectInfo]
    settings: list[SettingsEntity]
    memory: list[MemoryEntity]
    agents: list[AgentEntity]
    skills: list[SkillEntity]
    commands: list[CommandEntity]
    hooks: list[HookEntity]
    plugins: list[PluginEntity]
    mcp_servers: list[McpServerEntity]
    duplicates: list[DuplicateGroup]
    symlinks: list[SymlinkInfo]
    discovered_at: int

    def to_dict(self) -> dict[str, Any]:
        # asdict() drops the per-entity "type" tag; rebuild collections so
        # every entity carries it.
        out = super().to_dict()
        for name in (
            "settings", "memory", "agents", "skills", "commands",
            "hooks", "plugins", "mcp_servers",
        ):
            out[name] = [entity.to_dict() for entity in getattr(self, name)]
        return out
