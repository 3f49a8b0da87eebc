"""Reader for the skills CLI lock file ``~/.agents/.skill-lock.json``.

Format::

    {
      "version": 3,
      "skills": {
        "find-bugs": {
          "source": "getsentry/skills",
          "sourceType": "github",
          "sourceUrl": "https://github.com/getsentry/skills",
          "skillPath": "skills/find-bugs",
          "skillFolderHash": "ab12...",
          "installedAt": "2025-01-01T00:00:00Z",
          "updatedAt": "2025-01-01T00:00:00Z"
        }
      }
    }

The file is owned by the skills CLI; this module only reads it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from agentstudio.exceptions import SkillStoreError
from agentstudio.paths import StudioPaths
from agentstudio.store.models import InstalledSkill

logger = logging.getLogger(__name__)

DEFAULT_LOCK_VERSION = 3


def _opt_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def read_lock_file(lock_path: Path) -> dict[str, Any]:
    """Load the lock file as a mapping.

    A missing file is an empty lock file.

    Raises:
        SkillStoreError: If the file cannot be read or is not a valid lock file.
    """
    if not lock_path.exists():
        return {"version": DEFAULT_LOCK_VERSION, "skills": {}}
    try:
        content = lock_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SkillStoreError(f"Failed to read lock file: {exc}") from exc
    try:
        data = json.loads(content)
    except ValueError as exc:
        raise SkillStoreError(f"Failed to parse lock file: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("skills", {}), dict):
        raise SkillStoreError("Failed to parse lock file: unexpected structure")
    data.setdefault("skills", {})
    return data


def _installed_skill(name: str, entry: Any) -> InstalledSkill:
    if not isinstance(entry, dict):
        raise SkillStoreError(f"Failed to parse lock file: entry {name!r} is not an object")
    return InstalledSkill(
        name=name,
        source=str(entry.get("source", "")),
        source_type=str(entry.get("sourceType", "")),
        source_url=_opt_str(entry.get("sourceUrl")),
        skill_path=_opt_str(entry.get("skillPath")),
        skill_folder_hash=_opt_str(entry.get("skillFolderHash")),
        installed_at=str(entry.get("installedAt", "")),
        updated_at=_opt_str(entry.get("updatedAt")),
    )


def get_installed_skills(home: Path | str | None = None) -> list[InstalledSkill]:
    """Return every skill recorded in the lock file, sorted by name."""
    lock_path = StudioPaths.resolve(home).skill_lock_file
    skills = read_lock_file(lock_path)["skills"]
    logger.debug("Lock file %s lists %d skills", lock_path, len(skills))
    return [_installed_skill(name, skills[name]) for name in sorted(skills)]


def is_skill_installed(skill_name: str, home: Path | str | None = None) -> bool:
    lock_path = StudioPaths.resolve(home).skill_lock_file
    return skill_name in read_lock_file(lock_path)["skills"]


def get_installed_skill(skill_name: str, home: Path | str | None = None) -> InstalledSkill | None:
    """Return the lock entry for ``skill_name``, or ``None`` if not installed."""
    lock_path = StudioPaths.resolve(home).skill_lock_file
    skills = read_lock_file(lock_path)["skills"]
    if skill_name not in skills:
        return None
    return _installed_skill(skill_name, skills[skill_name])
