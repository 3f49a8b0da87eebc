"""Mutations of agents, skills, commands and memory files.

Every operation takes and returns plain filesystem paths. Skills are
addressed by their ``SKILL.md`` manifest path but operated on as whole
directories. Failures raise ``EntityOperationError`` whose message is meant
for the user; multi-step operations are not rolled back on failure.

Target directories per tool::

    claude    ~/.claude/{agents,skills,commands}
              <project>/.claude/{agents,skills,commands}
    opencode  ~/.config/opencode/{agent,skill,command}
              <project>/.opencode/{agent,skill,command}
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from agentstudio.exceptions import EntityOperationError
from agentstudio.models import EntityKind, Scope, Tool
from agentstudio.operations import templates
from agentstudio.operations.files import write_file
from agentstudio.parsers.frontmatter import render_frontmatter
from agentstudio.paths import StudioPaths, memory_file_name

logger = logging.getLogger(__name__)

SKILL_MANIFEST = "SKILL.md"
MAX_DUPLICATE_ATTEMPTS = 100

_DIRECTORY_KINDS = (EntityKind.AGENT, EntityKind.SKILL, EntityKind.COMMAND)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _coerce_kind(entity_type: EntityKind | str) -> EntityKind | None:
    try:
        return EntityKind(entity_type)
    except ValueError:
        return None


def _coerce_scope(scope: Scope | str) -> Scope:
    try:
        return Scope(scope)
    except ValueError as exc:
        raise EntityOperationError(f"Unknown scope: {scope}") from exc


def _coerce_tool(tool: Tool | str) -> Tool:
    try:
        return Tool(tool)
    except ValueError as exc:
        raise EntityOperationError(f"Unknown tool: {tool}") from exc


def _target_dir(
    entity_type: EntityKind | str,
    target_scope: Scope | str,
    target_project_path: str | None,
    tool: Tool | str,
    home: Path | str | None,
) -> tuple[EntityKind, Path]:
    """Resolve and create the directory that receives a copied or linked entity."""
    kind = _coerce_kind(entity_type)
    tool_value = tool.value if isinstance(tool, Tool) else tool
    type_value = entity_type.value if isinstance(entity_type, EntityKind) else entity_type
    if kind not in _DIRECTORY_KINDS or tool_value not in (t.value for t in Tool):
        raise EntityOperationError(f"Unknown tool/entity combination: {tool_value}/{type_value}")

    scope = _coerce_scope(target_scope)
    paths = StudioPaths.resolve(home)
    if scope is Scope.GLOBAL:
        target = paths.entity_dir(Tool(tool_value), kind)
    else:
        if not target_project_path:
            raise EntityOperationError("Project path required for project-scoped entities")
        target = paths.entity_dir(Tool(tool_value), kind, Path(target_project_path))

    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise EntityOperationError(f"Failed to create directory: {exc}") from exc
    return kind, target


def _require_source(source: Path) -> None:
    if not source.exists():
        raise EntityOperationError("Source file does not exist")


def _md_name(name: str) -> str:
    return name if name.endswith(".md") else f"{name}.md"


def _copy_tree(source_dir: Path, target_dir: Path) -> None:
    if not source_dir.is_dir():
        raise EntityOperationError("Source is not a directory")
    try:
        shutil.copytree(source_dir, target_dir, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        raise EntityOperationError(f"Failed to copy file: {exc}") from exc


def _copy_file(source: Path, target: Path) -> None:
    try:
        content = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise EntityOperationError(f"Failed to read source: {exc}") from exc
    try:
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise EntityOperationError(f"Failed to write target: {exc}") from exc


# ---------------------------------------------------------------------------
# Copy / link / rename / delete / duplicate
# ---------------------------------------------------------------------------


def copy_entity(
    source_path: Path | str,
    entity_type: EntityKind | str,
    target_scope: Scope | str,
    target_project_path: str | None = None,
    new_name: str | None = None,
    tool: Tool | str = Tool.CLAUDE,
    home: Path | str | None = None,
) -> str:
    """Copy an entity into another scope (or another tool's layout).

    Args:
        source_path: Entity file; for skills, the ``SKILL.md`` manifest.
        entity_type: ``agent``, ``skill`` or ``command``.
        target_scope: ``global`` or ``project``.
        target_project_path: Project root, required for project scope.
        new_name: Optional new file or skill directory name.
        tool: Layout of the destination.
        home: Home directory override.

    Returns:
        Path of the copy (the new ``SKILL.md`` for skills). An existing file
        of the same name is overwritten; an existing skill directory is
        merged into.

    Raises:
        EntityOperationError: On missing source, unknown kind, missing
            project path or any filesystem failure.
    """
    source = Path(source_path)
    _require_source(source)
    kind, target_dir = _target_dir(entity_type, target_scope, target_project_path, tool, home)

    if kind is EntityKind.SKILL:
        target_skill = target_dir / (new_name or source.parent.name)
        _copy_tree(source.parent, target_skill)
        logger.info("Copied skill %s to %s", source.parent, target_skill)
        return str(target_skill / SKILL_MANIFEST)

    target = target_dir / (_md_name(new_name) if new_name else source.name)
    _copy_file(source, target)
    logger.info("Copied %s to %s", source, target)
    return str(target)


def create_entity_symlink(
    source_path: Path | str,
    entity_type: EntityKind | str,
    target_scope: Scope | str,
    target_project_path: str | None = None,
    tool: Tool | str = Tool.CLAUDE,
    home: Path | str | None = None,
) -> str:
    """Expose an entity in another scope through a symbolic link.

    Skills are linked as directories. The link stores the source path as
    given.

    Returns:
        Path of the new link.

    Raises:
        EntityOperationError: If the source is missing, the link path is
            already taken (even by a dangling link), or linking fails.
    """
    source = Path(source_path)
    _require_source(source)
    kind, target_dir = _target_dir(entity_type, target_scope, target_project_path, tool, home)

    link_source = source.parent if kind is EntityKind.SKILL else source
    link_path = target_dir / link_source.name
    if os.path.lexists(link_path):
        raise EntityOperationError(f"Target already exists: {link_path}")

    try:
        os.symlink(link_source, link_path, target_is_directory=link_source.is_dir())
    except OSError as exc:
        raise EntityOperationError(f"Failed to create symlink: {exc}") from exc
    logger.info("Linked %s -> %s", link_path, link_source)
    return str(link_path)


def rename_entity(
    source_path: Path | str,
    new_name: str,
    entity_type: EntityKind | str,
) -> str:
    """Rename an entity in place.

    Skills rename their directory; other entities get ``.md`` appended to
    ``new_name`` when it is missing.

    Returns:
        The new path (the ``SKILL.md`` inside the renamed directory for skills).

    Raises:
        EntityOperationError: If the source is missing, the target exists,
            or the rename fails.
    """
    source = Path(source_path)
    _require_source(source)

    if _coerce_kind(entity_type) is EntityKind.SKILL:
        skill_dir = source.parent
        target_dir = skill_dir.parent / new_name
        if os.path.lexists(target_dir):
            raise EntityOperationError(f"Target already exists: {target_dir}")
        try:
            os.rename(skill_dir, target_dir)
        except OSError as exc:
            raise EntityOperationError(f"Failed to rename skill: {exc}") from exc
        return str(target_dir / SKILL_MANIFEST)

    target = source.parent / _md_name(new_name)
    if os.path.lexists(target):
        raise EntityOperationError(f"Target already exists: {target}")
    try:
        os.rename(source, target)
    except OSError as exc:
        raise EntityOperationError(f"Failed to rename: {exc}") from exc
    return str(target)


def delete_entity(path: Path | str, entity_type: EntityKind | str) -> None:
    """Delete an entity.

    A symlink is unlinked and its target left alone. A skill removes its
    whole directory (or just the directory link, when the skill directory
    itself is a symlink). Anything else removes the single file.

    Raises:
        EntityOperationError: If nothing exists at ``path`` or removal fails.
    """
    target = Path(path)
    if not os.path.lexists(target):
        raise EntityOperationError("Entity does not exist")

    try:
        if target.is_symlink():
            target.unlink()
            logger.info("Removed symlink %s", target)
            return
        if _coerce_kind(entity_type) is EntityKind.SKILL:
            skill_dir = target.parent
            if skill_dir.is_symlink():
                skill_dir.unlink()
            else:
                shutil.rmtree(skill_dir)
            logger.info("Removed skill %s", skill_dir)
            return
        target.unlink()
    except OSError as exc:
        raise EntityOperationError(f"Failed to delete: {exc}") from exc
    logger.info("Removed %s", target)


def duplicate_entity(source_path: Path | str, entity_type: EntityKind | str) -> str:
    """Copy an entity next to itself under a fresh ``-copy`` name.

    Names tried are ``<base>-copy``, ``<base>-copy2``, ``<base>-copy3`` and
    so on, up to ``MAX_DUPLICATE_ATTEMPTS`` candidates.

    Returns:
        Path of the duplicate (its ``SKILL.md`` for skills).

    Raises:
        EntityOperationError: If the source is missing, no free name is
            found, or copying fails.
    """
    source = Path(source_path)
    _require_source(source)
    is_skill = _coerce_kind(entity_type) is EntityKind.SKILL
    base = source.parent.name if is_skill else source.stem
    container = source.parent.parent if is_skill else source.parent

    target: Path | None = None
    for attempt in range(1, MAX_DUPLICATE_ATTEMPTS + 1):
        suffix = "" if attempt == 1 else str(attempt)
        candidate_name = f"{base}-copy{suffix}"
        candidate = container / (candidate_name if is_skill else f"{candidate_name}.md")
        if not os.path.lexists(candidate):
            target = candidate
            break
    if target is None:
        raise EntityOperationError("Could not generate unique name")

    if is_skill:
        _copy_tree(source.parent, target)
        return str(target / SKILL_MANIFEST)
    _copy_file(source, target)
    return str(target)


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


def create_entity(
    entity_type: EntityKind | str,
    name: str,
    scope: Scope | str,
    project_path: str | None = None,
    content: str | None = None,
    tool: Tool | str = Tool.CLAUDE,
    home: Path | str | None = None,
) -> str:
    """Create a new agent, skill, command or memory file.

    Args:
        entity_type: ``agent``, ``skill``, ``command`` or ``memory``.
        name: Entity name (ignored for memory files).
        scope: ``global`` or ``project``.
        project_path: Project root, required for project scope.
        content: File content; a default template is used when omitted.
        tool: Tool layout to create the entity in.
        home: Home directory override.

    Returns:
        Path of the written file. An existing file is overwritten.

    Raises:
        EntityOperationError: On unknown kind, missing project path or
            write failure.
    """
    kind = _coerce_kind(entity_type)
    tool = _coerce_tool(tool)
    scope = _coerce_scope(scope)
    if kind not in (*_DIRECTORY_KINDS, EntityKind.MEMORY):
        raise EntityOperationError(f"Unknown entity type: {entity_type}")
    if scope is Scope.PROJECT and not project_path:
        raise EntityOperationError("Project path required for project-scoped entities")

    paths = StudioPaths.resolve(home)
    project = Path(project_path) if scope is Scope.PROJECT and project_path else None

    if kind is EntityKind.MEMORY:
        root = project if project is not None else paths.global_root(tool)
        file_path = root / memory_file_name(tool)
        text = content if content is not None else templates.memory_template(tool)
    elif kind is EntityKind.SKILL:
        file_path = paths.entity_dir(tool, kind, project) / name / SKILL_MANIFEST
        text = content if content is not None else templates.skill_template(name)
    elif kind is EntityKind.AGENT:
        file_path = paths.entity_dir(tool, kind, project) / f"{name}.md"
        text = content if content is not None else templates.agent_template(name)
    else:
        file_path = paths.entity_dir(tool, kind, project) / f"{name}.md"
        text = content if content is not None else templates.command_template(name)

    write_file(file_path, text)
    logger.info("Created %s %s at %s", tool.value, kind.value, file_path)
    return str(file_path)


# ---------------------------------------------------------------------------
# Explicit-field creation helpers
# ---------------------------------------------------------------------------


def create_agent(
    path: Path | str,
    name: str,
    description: str,
    tools: list[str],
    model: str,
    prompt: str,
) -> None:
    """Write an agent file at ``path`` from explicit frontmatter fields."""
    fields = {
        "name": name,
        "description": description,
        "tools": ", ".join(tools),
        "model": model,
    }
    write_file(path, render_frontmatter(fields, prompt))


def create_skill(base_path: Path | str, name: str, description: str, content: str) -> str:
    """Create ``<base_path>/<name>/SKILL.md`` and return its path."""
    skill_file = Path(base_path) / name / SKILL_MANIFEST
    write_file(skill_file, render_frontmatter({"name": name, "description": description}, content))
    return str(skill_file)


def delete_skill(path: Path | str) -> None:
    """Delete a skill given its directory or its ``SKILL.md``.

    Missing skills are ignored.

    Raises:
        EntityOperationError: If removal fails.
    """
    target = Path(path)
    skill_dir = target.parent if target.name == SKILL_MANIFEST else target
    try:
        if skill_dir.is_symlink():
            skill_dir.unlink()
        elif skill_dir.is_dir():
            shutil.rmtree(skill_dir)
        elif target.exists():
            target.unlink()
    except OSError as exc:
        raise EntityOperationError(str(exc)) from exc
