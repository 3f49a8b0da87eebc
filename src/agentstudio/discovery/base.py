"""Shared building blocks for the per-kind discoverers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from agentstudio.fsutil import generate_id, last_modified_ms, read_text, symlink_info
from agentstudio.models import Scope, Tool


def base_fields(
    path: Path,
    prefix: str,
    name: str,
    scope: Scope,
    project_path: str | None,
    tool: Tool,
    *,
    id_key: Path | None = None,
    link_probe: Path | None = None,
) -> dict[str, Any]:
    """Collect the ``BaseEntity`` fields for a file-backed entity.

    Args:
        path: The backing file.
        prefix: Id prefix for the entity kind.
        name: Display name.
        scope: Discovery scope.
        project_path: Owning project, ``None`` for global scope.
        tool: Owning tool.
        id_key: Path hashed into the id, defaults to ``path``.
        link_probe: Path probed for symlink status, defaults to ``path``.

    Returns:
        Keyword arguments accepted by every ``BaseEntity`` subclass.
    """
    is_link, target = symlink_info(link_probe if link_probe is not None else path)
    return {
        "id": generate_id(prefix, str(id_key if id_key is not None else path)),
        "name": name,
        "path": str(path),
        "scope": scope,
        "project_path": project_path,
        "is_symlink": is_link,
        "symlink_target": target,
        "content": read_text(path),
        "last_modified": last_modified_ms(path),
        "tool": tool,
    }
