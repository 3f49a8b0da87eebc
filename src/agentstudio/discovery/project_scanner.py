"""Bounded filesystem walk that finds project directories.

A directory is a project when it carries any Claude marker (``.claude/``,
``CLAUDE.md``, ``.mcp.json``) or any OpenCode marker (``.opencode/``,
``AGENTS.md``, ``opencode.json``, ``opencode.jsonc``).

Walk rules:
    * explicit stack of ``(path, depth)``, no recursion;
    * depth is capped at ``MAX_DEPTH`` below each base path;
    * hidden directories are skipped below the base, except ``.claude``
      and ``.opencode``;
    * build, cache and media directories in ``SKIP_DIRS`` are skipped;
    * anything under ``~/.claude/plugins`` is skipped, since plugins are
      not projects even though they may carry a ``.claude`` directory;
    * symlinked subdirectories are not followed, so link cycles cannot
      make the walk revisit a tree.

The walk still descends into a project's subdirectories, so nested
projects are found too.
"""

from __future__ import annotations

import logging
from pathlib import Path

from agentstudio.consistency import detect_config_state
from agentstudio.fsutil import is_dir, list_dir
from agentstudio.models import ProjectInfo
from agentstudio.paths import CLAUDE_DIR_NAME, OPENCODE_DIR_NAME, StudioPaths

logger = logging.getLogger(__name__)

MAX_DEPTH = 5

SKIP_DIRS: frozenset[str] = frozenset({
    # Build and dependency output
    "node_modules", "target", "build", "dist", ".git", "vendor",
    "__pycache__", ".venv", "venv", "env", ".env",
    "Pods", "DerivedData", ".build", "Packages",
    # System and cache directories
    "Library", "Applications", ".Trash", ".cache", ".npm", ".cargo",
    ".rustup", ".local", ".config", "Caches", "Cache",
    # Media
    "Movies", "Music", "Pictures", "Photos", "Downloads",
    ".docker", ".gradle", ".m2", ".pub-cache",
    # Editors
    ".idea", ".vscode", ".vs",
})

_ALLOWED_HIDDEN = frozenset({CLAUDE_DIR_NAME, OPENCODE_DIR_NAME})


def _exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError:
        return False


def _project_info(path: Path) -> ProjectInfo | None:
    """Build a ``ProjectInfo`` if ``path`` carries any project marker."""
    claude_dir = path / CLAUDE_DIR_NAME
    opencode_dir = path / OPENCODE_DIR_NAME

    has_claude_dir = _exists(claude_dir)
    has_opencode_dir = _exists(opencode_dir)
    has_mcp_json = _exists(path / ".mcp.json")
    has_root_claude_md = _exists(path / "CLAUDE.md")
    has_root_agents_md = _exists(path / "AGENTS.md")
    has_root_opencode_json = _exists(path / "opencode.json") or _exists(path / "opencode.jsonc")

    is_claude = has_claude_dir or has_root_claude_md or has_mcp_json
    is_opencode = has_opencode_dir or has_root_agents_md or has_root_opencode_json
    if not (is_claude or is_opencode):
        return None

    return ProjectInfo(
        path=str(path),
        name=path.name or str(path),
        has_claude_dir=has_claude_dir,
        has_opencode_dir=has_opencode_dir,
        has_mcp_json=has_mcp_json,
        has_claude_md=_exists(claude_dir / "CLAUDE.md"),
        has_root_claude_md=has_root_claude_md,
        has_agents_md=has_root_agents_md or _exists(opencode_dir / "AGENTS.md"),
        has_opencode_json=has_root_opencode_json or _exists(opencode_dir / "opencode.json"),
        config_state=detect_config_state(path),
    )


def _is_within(path: Path, parent: Path) -> bool:
    try:
        path.relative_to(parent)
    except ValueError:
        return False
    return True


def scan_projects(
    base_paths: list[str] | list[Path],
    home: Path | str | None = None,
) -> list[ProjectInfo]:
    """Find project directories beneath the given base paths.

    Args:
        base_paths: Roots to walk. Each is visited at depth 0, so a hidden
            or deny-listed name is still accepted as a base.
        home: Home directory override, used to locate the plugins directory.

    Returns:
        Projects in discovery order, deduplicated by absolute path, each
        with zero entity counts and a fresh ``ConfigState``.

    Raises:
        HomeDirectoryError: If ``home`` is not given and cannot be resolved.
    """
    plugins_dir = StudioPaths.resolve(home).plugins_dir
    projects: list[ProjectInfo] = []
    seen: set[str] = set()

    # Reverse order so the first base path is popped first.
    stack: list[tuple[Path, int]] = [(Path(p), 0) for p in reversed(list(base_paths))]

    while stack:
        path, depth = stack.pop()
        if depth > MAX_DEPTH or not is_dir(path):
            continue

        name = path.name
        if depth > 0 and name.startswith(".") and name not in _ALLOWED_HIDDEN:
            continue
        if name in SKIP_DIRS:
            continue
        absolute = path.absolute()
        if _is_within(absolute, plugins_dir):
            logger.debug("Skipping plugin directory %s", path)
            continue

        info = _project_info(absolute)
        if info is not None:
            key = str(absolute)
            # An already recorded project was walked the first time round.
            if key in seen:
                continue
            seen.add(key)
            projects.append(info)

        children = [
            child for child in list_dir(path)
            if not child.is_symlink() and is_dir(child)
        ]
        for child in reversed(children):
            stack.append((child, depth + 1))

    return projects
