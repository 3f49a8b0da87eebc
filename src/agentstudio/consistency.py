"""AGENTS.md / CLAUDE.md consistency engine.

The canonical layout for a project shared between Claude and OpenCode is a
real ``AGENTS.md`` with ``CLAUDE.md`` as a relative symlink to it, so both
tools read one memory file. ``detect_config_state`` classifies a project
directory against that layout and ``fix_project_config`` repairs the cases
that can be repaired without losing content.

State table (AGENTS.md, CLAUDE.md):

    =========  ==========================  ================
    AGENTS.md  CLAUDE.md                   state
    =========  ==========================  ================
    file       symlink -> AGENTS.md        CORRECT
    file       symlink -> elsewhere        CONFLICT
    file       missing                     MISSING_SYMLINK
    missing    file                        NEEDS_MIGRATION
    file       file                        CONFLICT
    missing    missing                     EMPTY
    (other)                                CONFLICT
    =========  ==========================  ================

Repairs are multi-step and not transactional: if the symlink step fails
after a migration rename, the rename is not undone.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from agentstudio.exceptions import ConfigConflictError, EntityOperationError
from agentstudio.models import ConfigState, ConfigStateType, FileStatus

logger = logging.getLogger(__name__)

AGENTS_MD = "AGENTS.md"
CLAUDE_MD = "CLAUDE.md"

AUTO_FIXABLE = frozenset(
    {ConfigStateType.MISSING_SYMLINK, ConfigStateType.NEEDS_MIGRATION, ConfigStateType.EMPTY}
)

MSG_ALREADY_CORRECT = "Configuration is already correct"
MSG_CREATED_SYMLINK = "Created CLAUDE.md → AGENTS.md symlink"
MSG_MIGRATED = "Migrated CLAUDE.md content to AGENTS.md and created symlink"
MSG_CREATED_EMPTY = "Created empty AGENTS.md and CLAUDE.md symlink"
MSG_CONFLICT = (
    "Cannot auto-fix: both AGENTS.md and CLAUDE.md have content. Please resolve manually."
)


def file_status(path: Path) -> FileStatus:
    """Classify ``path``. A dangling symlink counts as SYMLINK, not MISSING."""
    if path.is_symlink():
        return FileStatus.SYMLINK
    if os.path.lexists(path):
        return FileStatus.FILE
    return FileStatus.MISSING


def _points_at_agents_md(target: str, agents_md: Path) -> bool:
    return target == AGENTS_MD or target.endswith("/" + AGENTS_MD) or target == str(agents_md)


def classify(
    agents_status: FileStatus,
    claude_status: FileStatus,
    claude_target: str | None,
    agents_md: Path,
) -> ConfigStateType:
    """Map a pair of file statuses onto a config state. Total over all inputs."""
    if agents_status is FileStatus.FILE and claude_status is FileStatus.SYMLINK:
        if claude_target is not None and _points_at_agents_md(claude_target, agents_md):
            return ConfigStateType.CORRECT
        return ConfigStateType.CONFLICT
    if agents_status is FileStatus.FILE and claude_status is FileStatus.MISSING:
        return ConfigStateType.MISSING_SYMLINK
    if agents_status is FileStatus.MISSING and claude_status is FileStatus.FILE:
        return ConfigStateType.NEEDS_MIGRATION
    if agents_status is FileStatus.MISSING and claude_status is FileStatus.MISSING:
        return ConfigStateType.EMPTY
    return ConfigStateType.CONFLICT


def detect_config_state(project_dir: Path | str) -> ConfigState:
    """Classify the AGENTS.md / CLAUDE.md pairing of a project directory.

    Args:
        project_dir: Project root.

    Returns:
        The current ``ConfigState``. Never raises.
    """
    project = Path(project_dir)
    agents_md = project / AGENTS_MD
    claude_md = project / CLAUDE_MD

    agents_status = file_status(agents_md)
    claude_status = file_status(claude_md)
    claude_target: str | None = None
    if claude_status is FileStatus.SYMLINK:
        try:
            claude_target = os.readlink(claude_md)
        except OSError as exc:
            logger.warning("Cannot read symlink %s: %s", claude_md, exc)

    state = classify(agents_status, claude_status, claude_target, agents_md)
    return ConfigState(
        agents_md_status=agents_status,
        claude_md_status=claude_status,
        claude_md_symlink_target=claude_target,
        config_state=state,
        can_auto_fix=state in AUTO_FIXABLE,
    )


def _link_claude_md(claude_md: Path) -> None:
    try:
        os.symlink(AGENTS_MD, claude_md)
    except OSError as exc:
        raise EntityOperationError(f"Failed to create symlink: {exc}") from exc


def fix_project_config(project_dir: Path | str) -> str:
    """Bring a project to the canonical AGENTS.md + CLAUDE.md symlink layout.

    Args:
        project_dir: Project root.

    Returns:
        A human-readable description of what was done.

    Raises:
        EntityOperationError: If ``project_dir`` is not a directory or a
            filesystem step fails.
        ConfigConflictError: If both files carry content (or the layout is
            otherwise ambiguous).
    """
    project = Path(project_dir)
    if not project.is_dir():
        raise EntityOperationError(f"Path is not a directory: {project_dir}")

    state = detect_config_state(project).config_state
    agents_md = project / AGENTS_MD
    claude_md = project / CLAUDE_MD

    if state is ConfigStateType.CORRECT:
        return MSG_ALREADY_CORRECT

    if state is ConfigStateType.CONFLICT:
        raise ConfigConflictError(MSG_CONFLICT)

    if state is ConfigStateType.MISSING_SYMLINK:
        _link_claude_md(claude_md)
        logger.info("Linked %s -> %s", claude_md, AGENTS_MD)
        return MSG_CREATED_SYMLINK

    if state is ConfigStateType.NEEDS_MIGRATION:
        try:
            os.rename(claude_md, agents_md)
        except OSError as exc:
            raise EntityOperationError(f"Failed to move CLAUDE.md to AGENTS.md: {exc}") from exc
        _link_claude_md(claude_md)
        logger.info("Migrated %s to %s", claude_md, agents_md)
        return MSG_MIGRATED

    try:
        agents_md.write_text("", encoding="utf-8")
    except OSError as exc:
        raise EntityOperationError(f"Failed to create AGENTS.md: {exc}") from exc
    _link_claude_md(claude_md)
    logger.info("Created empty %s with CLAUDE.md symlink", agents_md)
    return MSG_CREATED_EMPTY
