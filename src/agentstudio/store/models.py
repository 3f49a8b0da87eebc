"""Data models for the skill store: remote listings, lock file entries, targets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from agentstudio.models import SerializableMixin


class InstallScope(str, Enum):
    GLOBAL = "global"
    PROJECT = "project"


@dataclass(frozen=True)
class AgentTarget(SerializableMixin):
    """An agent the skills CLI can install into.

    Attributes:
        id: Stable identifier (same as ``cli_name``).
        cli_name: Value passed to ``--agent``.
        display_name: Human-readable name.
        project_path: Skills directory relative to a project root.
        global_path: Absolute skills directory under the home directory.
    """

    id: str
    cli_name: str
    display_name: str
    project_path: str
    global_path: str


@dataclass(frozen=True)
class SkillSearchResult(SerializableMixin):
    id: str
    name: str
    installs: int = 0
    description: str | None = None
    top_source: str | None = None
    author: str | None = None
    tags: list[str] | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> SkillSearchResult:
        """Build from a skills API object (camelCase ``topSource``)."""
        tags = data.get("tags")
        installs = data.get("installs")
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            installs=installs if isinstance(installs, int) else 0,
            description=data.get("description"),
            top_source=data.get("topSource"),
            author=data.get("author"),
            tags=[str(t) for t in tags] if isinstance(tags, list) else None,
        )


@dataclass(frozen=True)
class PaginatedSkills(SerializableMixin):
    skills: list[SkillSearchResult] = field(default_factory=list)
    has_more: bool = False


@dataclass(frozen=True)
class InstalledSkill(SerializableMixin):
    """A skill recorded in ``~/.agents/.skill-lock.json``."""

    name: str
    source: str
    source_type: str
    installed_at: str
    source_url: str | None = None
    skill_path: str | None = None
    skill_folder_hash: str | None = None
    updated_at: str | None = None
    has_update: bool = False


@dataclass(frozen=True)
class InstallResult(SerializableMixin):
    """Outcome of one skills CLI invocation.

    ``error`` carries the CLI's stderr, or its stdout when stderr is empty.
    """

    success: bool
    skill_name: str
    installed_path: str | None = None
    error: str | None = None
