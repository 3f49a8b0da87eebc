"""Skill store: remote directory search, lock file, agent targets and the skills CLI.

httpx is only needed for remote search (``pip install agent-studio[store]``);
everything else here works without it.
"""

from __future__ import annotations

from agentstudio.store.api import SkillStoreClient
from agentstudio.store.installer import (
    build_install_argv,
    build_remove_argv,
    build_update_argv,
    install_skill,
    parse_skill_source,
    remove_skill,
    run_skills_cli,
    update_skill,
)
from agentstudio.store.lock_file import (
    get_installed_skill,
    get_installed_skills,
    is_skill_installed,
)
from agentstudio.store.models import (
    AgentTarget,
    InstalledSkill,
    InstallResult,
    InstallScope,
    PaginatedSkills,
    SkillSearchResult,
)
from agentstudio.store.targets import get_agent_targets

__all__ = [
    "AgentTarget",
    "InstallResult",
    "InstallScope",
    "InstalledSkill",
    "PaginatedSkills",
    "SkillSearchResult",
    "SkillStoreClient",
    "build_install_argv",
    "build_remove_argv",
    "build_update_argv",
    "get_agent_targets",
    "get_installed_skill",
    "get_installed_skills",
    "install_skill",
    "is_skill_installed",
    "parse_skill_source",
    "remove_skill",
    "run_skills_cli",
    "update_skill",
]
