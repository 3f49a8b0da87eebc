"""Filesystem primitives shared by discovery, consistency and operations.

Everything here is total: OS failures degrade to a neutral value (``None``,
``False``, ``0``) instead of raising, because discovery must never abort on
a single unreadable file.
"""

from __future__ import annotations

import hashlib
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Number of hex characters of the SHA-256 digest kept in an entity id.
ID_HASH_LENGTH = 16


def generate_id(prefix: str, key: str | os.PathLike[str]) -> str:
    """Derive a stable entity id from a prefix and a key (usually a path).

    The hash is SHA-256, so ids are identical across runs and machines for
    the same key. The prefix keeps entity kinds apart.

    Args:
        prefix: Kind prefix, e.g. ``"agent"`` or ``"mcp"``.
        key: Value to hash.

    Returns:
        ``"<prefix>_<16 hex chars>"``.
    """
    digest = hashlib.sha256(os.fspath(key).encode("utf-8")).hexdigest()
    return f"{prefix}_{digest[:ID_HASH_LENGTH]}"


def symlink_info(path: Path) -> tuple[bool, str | None]:
    """Report whether ``path`` is a symbolic link and where it points.

    Returns:
        ``(is_symlink, raw_target)``. The target is the literal link text,
        not resolved. A link whose target cannot be read yields
        ``(True, None)``; a non-link yields ``(False, None)``.
    """
    if not path.is_symlink():
        return False, None
    try:
        return True, os.readlink(path)
    except OSError as exc:
        logger.warning("Cannot read symlink %s: %s", path, exc)
        return True, None


def last_modified_ms(path: Path) -> int:
    """Return the modification time of ``path`` in epoch milliseconds, or 0."""
    try:
        return int(path.stat().st_mtime * 1000)
    except (OSError, OverflowError, ValueError):
        return 0


def read_text(path: Path) -> str | None:
    """Read ``path`` as UTF-8, ``None`` if missing or unreadable."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return None


def is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


def is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def list_dir(path: Path) -> list[Path]:
    """Return the entries of a directory sorted by name.

    A missing directory yields ``[]`` silently; any other listing failure
    yields ``[]`` with a warning.
    """
    try:
        return sorted(path.iterdir(), key=lambda p: p.name)
    except FileNotFoundError:
        return []
    except NotADirectoryError:
        return []
    except OSError as exc:
        logger.warning("Cannot list %s: %s", path, exc)
        return []


def link_target_exists(link: Path, target: str) -> bool:
    """Check whether a symlink's raw target exists.

    Relative targets are resolved against the directory containing the link,
    which is how the OS itself interprets them.
    """
    target_path = Path(target)
    if not target_path.is_absolute():
        target_path = link.parent / target_path
    return os.path.exists(target_path)
