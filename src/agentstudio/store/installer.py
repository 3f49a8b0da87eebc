"""Skill lifecycle delegated to the external ``skills`` CLI via ``npx``.

Installing, removing and updating skills is the skills CLI's job; this
module only builds its argument vectors and reports the exit status. The
CLI's output format is not interpreted.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from agentstudio.exceptions import SkillStoreError
from agentstudio.store.models import InstallResult, InstallScope

logger = logging.getLogger(__name__)

NPX = "npx"


def parse_skill_source(source: str) -> tuple[str, str | None]:
    """Split a skill source into (repository, skill name).

    ``"sentry-cli"`` and ``"vercel-labs/skills"`` are passed through with
    no skill name; ``"obra/superpowers/brainstorming"`` becomes
    ``("obra/superpowers", "brainstorming")``, with any deeper path kept in
    the skill name.
    """
    parts = source.split("/")
    if len(parts) <= 2:
        return source, None
    return f"{parts[0]}/{parts[1]}", "/".join(parts[2:])


def build_install_argv(
    skill_source: str,
    scope: InstallScope | str,
    project_path: str | None = None,
    agents: Sequence[str] = (),
) -> list[str]:
    """Build the argv (after ``npx``) for installing a skill."""
    repo, skill = parse_skill_source(skill_source)
    argv = ["skills", "add", repo, "--yes"]
    if InstallScope(scope) is InstallScope.GLOBAL:
        argv.append("--global")
    elif project_path:
        argv.extend(["--cwd", project_path])
    if skill is not None:
        argv.extend(["--skill", skill])
    for agent in agents:
        argv.extend(["--agent", agent])
    return argv


def build_remove_argv(skill_name: str, global_: bool = False) -> list[str]:
    argv = ["skills", "remove", skill_name, "--yes"]
    if global_:
        argv.append("--global")
    return argv


def build_update_argv(skill_name: str, global_: bool = False) -> list[str]:
    argv = ["skills", "update", skill_name]
    if global_:
        argv.append("--global")
    return argv


def run_skills_cli(argv: Sequence[str]) -> subprocess.CompletedProcess[str]:
    """Run ``npx <argv>`` and capture its output.

    Raises:
        SkillStoreError: If ``npx`` cannot be launched.
    """
    command = [NPX, *argv]
    logger.info("Running: %s", " ".join(command))
    try:
        completed = subprocess.run(command, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise SkillStoreError(f"Failed to execute npx skills: {exc}") from exc
    logger.debug("Exit code: %s", completed.returncode)
    logger.debug("stdout: %s", completed.stdout)
    logger.debug("stderr: %s", completed.stderr)
    return completed


def _result(completed: subprocess.CompletedProcess[str], name: str) -> InstallResult:
    if completed.returncode == 0:
        return InstallResult(success=True, skill_name=name)
    error = completed.stderr if completed.stderr else completed.stdout
    return InstallResult(success=False, skill_name=name, error=error)


def install_skill(
    skill_source: str,
    scope: InstallScope | str = InstallScope.GLOBAL,
    project_path: str | None = None,
    agents: Sequence[str] = (),
) -> InstallResult:
    """Install a skill through the skills CLI.

    On success the reported name is the explicit skill name, else the last
    path segment of the repository. On failure it is the source as given.
    """
    completed = run_skills_cli(build_install_argv(skill_source, scope, project_path, agents))
    if completed.returncode != 0:
        return _result(completed, skill_source)
    repo, skill = parse_skill_source(skill_source)
    return _result(completed, skill if skill is not None else repo.split("/")[-1])


def remove_skill(skill_name: str, global_: bool = False) -> InstallResult:
    return _result(run_skills_cli(build_remove_argv(skill_name, global_)), skill_name)


def update_skill(skill_name: str, global_: bool = False) -> InstallResult:
    return _result(run_skills_cli(build_update_argv(skill_name, global_)), skill_name)
