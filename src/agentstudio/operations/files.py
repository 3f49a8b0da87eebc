"""Raw file passthroughs used by editors of entity content."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from agentstudio.exceptions import EntityOperationError

logger = logging.getLogger(__name__)


def read_file(path: Path | str) -> str:
    """Read a UTF-8 text file.

    Raises:
        EntityOperationError: If the file cannot be read.
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise EntityOperationError(str(exc)) from exc


def write_file(path: Path | str, content: str) -> None:
    """Write ``content`` to ``path``, creating parent directories as needed.

    Raises:
        EntityOperationError: If a directory or the file cannot be written.
    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise EntityOperationError(str(exc)) from exc
    logger.debug("Wrote %d characters to %s", len(content), target)


def file_exists(path: Path | str) -> bool:
    """Return whether ``path`` exists (following symlinks)."""
    return os.path.exists(path)


def delete_file(path: Path | str) -> None:
    """Delete a single file.

    Raises:
        EntityOperationError: If the file does not exist or cannot be removed.
    """
    target = Path(path)
    if not target.exists():
        raise EntityOperationError("File does not exist")
    try:
        target.unlink()
    except OSError as exc:
        raise EntityOperationError(str(exc)) from exc


def delete_directory(path: Path | str) -> None:
    """Delete a directory tree.

    Raises:
        EntityOperationError: If the directory does not exist or cannot be removed.
    """
    target = Path(path)
    if not target.exists():
        raise EntityOperationError("Directory does not exist")
    try:
        shutil.rmtree(target)
    except OSError as exc:
        raise EntityOperationError(str(exc)) from exc
