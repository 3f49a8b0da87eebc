"""Discovery of Markdown-defined entities: agents, commands and skills.

Layouts (Claude names shown; OpenCode uses ``agent/``, ``command/`` and
``skill/``)::

    agents/<name>.md                 one agent per file, flat
    commands/<name>.md               root command, no namespace
    commands/<ns>/<name>.md          namespaced command (any depth; the
                                     namespace is the immediate parent)
    skills/<name>/SKILL.md           one skill per directory; every other
                                     entry of the directory is a
                                     supporting file
"""

from __future__ import annotations

import logging
from pathlib import Path

from agentstudio.discovery.base import base_fields
from agentstudio.fsutil import is_dir, is_file, list_dir
from agentstudio.models import AgentEntity, CommandEntity, Scope, SkillEntity, Tool
from agentstudio.parsers.frontmatter import split_frontmatter

logger = logging.getLogger(__name__)

SKILL_MANIFEST = "SKILL.md"


def _frontmatter(content: str | None) -> dict | None:
    if content is None:
        return None
    frontmatter, _body = split_frontmatter(content)
    return frontmatter


def discover_agents(
    agents_dir: Path,
    scope: Scope,
    project_path: str | None = None,
    tool: Tool = Tool.CLAUDE,
) -> list[AgentEntity]:
    """Find ``*.md`` agent definitions directly inside ``agents_dir``."""
    agents: list[AgentEntity] = []
    for path in list_dir(agents_dir):
        if path.suffix != ".md" or not is_file(path):
            continue
        fields = base_fields(path, "agent", path.stem, scope, project_path, tool)
        agents.append(AgentEntity(**fields, frontmatter=_frontmatter(fields["content"])))
    return agents


def discover_commands(
    commands_dir: Path,
    scope: Scope,
    project_path: str | None = None,
    tool: Tool = Tool.CLAUDE,
) -> list[CommandEntity]:
    """Find slash commands under ``commands_dir``, recursing into subdirectories.

    ``commands/git/commit.md`` yields name ``commit`` in namespace ``git``;
    ``commands/a/b/x.md`` yields namespace ``b``. Symlinked subdirectories are
    followed; a directory already walked (by real path) is not walked again.
    """
    commands: list[CommandEntity] = []
    _walk_commands(commands_dir, None, scope, project_path, tool, commands, set())
    return commands


def _walk_commands(
    directory: Path,
    namespace: str | None,
    scope: Scope,
    project_path: str | None,
    tool: Tool,
    out: list[CommandEntity],
    visited: set[Path],
) -> None:
    try:
        real = directory.resolve()
    except (OSError, RuntimeError):
        return
    if real in visited:
        logger.debug("Skipping already visited command directory %s", directory)
        return
    visited.add(real)
    for path in list_dir(directory):
        if is_dir(path):
            _walk_commands(path, path.name, scope, project_path, tool, out, visited)
        elif path.suffix == ".md" and is_file(path):
            fields = base_fields(path, "command", path.stem, scope, project_path, tool)
            out.append(
                CommandEntity(
                    **fields,
                    namespace=namespace,
                    frontmatter=_frontmatter(fields["content"]),
                )
            )


def discover_skills(
    skills_dir: Path,
    scope: Scope,
    project_path: str | None = None,
    tool: Tool = Tool.CLAUDE,
) -> list[SkillEntity]:
    """Find skill directories (those containing ``SKILL.md``) in ``skills_dir``.

    A skill installed as a symlinked directory is reported with
    ``is_symlink`` set and the directory's link target, since the manifest
    inside it is a regular file.
    """
    skills: list[SkillEntity] = []
    for skill_dir in list_dir(skills_dir):
        manifest = skill_dir / SKILL_MANIFEST
        if not is_dir(skill_dir) or not is_file(manifest):
            continue
        probe = skill_dir if skill_dir.is_symlink() else manifest
        fields = base_fields(
            manifest, "skill", skill_dir.name, scope, project_path, tool, link_probe=probe
        )
        supporting = [str(p) for p in list_dir(skill_dir) if p.name != SKILL_MANIFEST]
        skills.append(
            SkillEntity(
                **fields,
                skill_dir=str(skill_dir),
                frontmatter=_frontmatter(fields["content"]),
                supporting_files=supporting,
            )
        )
    return skills
