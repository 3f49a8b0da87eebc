"""``agentstudio skills`` — Browse and manage skills from the skill store.

Remote search needs httpx (``pip install agent-studio[store]``); install,
remove and update delegate to ``npx skills`` and need Node.js on PATH.

Usage::

    agentstudio skills search sentry --limit 10
    agentstudio skills search                 # Most popular skills
    agentstudio skills installed
    agentstudio skills targets
    agentstudio skills install obra/superpowers/brainstorming --agent claude-code
    agentstudio skills install vercel-labs/skills --scope project --project ./app
    agentstudio skills remove brainstorming --global
    agentstudio skills update brainstorming --global
"""

from __future__ import annotations

import asyncio
import sys

import click

from agentstudio.cli.output import (
    emit_json,
    fail,
    print_agent_targets,
    print_install_result,
    print_installed_skills,
    print_skill_page,
)
from agentstudio.exceptions import AgentStudioError
from agentstudio.store import installer, lock_file, targets
from agentstudio.store.api import DEFAULT_LIMIT, SkillStoreClient
from agentstudio.store.models import InstallResult, InstallScope

_FORMAT_OPTION = click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)


def _run_async(coro: object) -> object:
    """Run an async coroutine in a synchronous context.

    Args:
        coro: Awaitable coroutine to execute.

    Returns:
        The coroutine's return value.
    """
    return asyncio.run(coro)  # type: ignore[arg-type]


def _require_httpx() -> None:
    try:
        import httpx  # noqa: F401
    except ImportError:
        click.echo(
            "Error: httpx is required for skill search.\n"
            "Install it with: pip install agent-studio[store]",
            err=True,
        )
        sys.exit(1)


def _report(action: str, result: InstallResult, output_format: str) -> None:
    if output_format == "json":
        emit_json(result)
    else:
        print_install_result(action, result)
    sys.exit(0 if result.success else 1)


@click.group("skills")
def skills_group() -> None:
    """Search, list and install skills from the skill store."""


@skills_group.command("search")
@click.argument("query", required=False, default=None)
@click.option("--limit", type=int, default=DEFAULT_LIMIT, show_default=True,
              help="Maximum number of results.")
@click.option("--offset", type=int, default=0, help="Skip this many results.")
@_FORMAT_OPTION
def search_command(query: str | None, limit: int, offset: int, output_format: str) -> None:
    """Search the skill directory for QUERY (popular skills when omitted)."""
    _require_httpx()
    client = SkillStoreClient()
    if query:
        coro = client.search_skills(query, limit=limit, offset=offset)
    else:
        coro = client.get_popular_skills(limit=limit, offset=offset)
    try:
        page = _run_async(coro)
    except AgentStudioError as exc:
        fail(exc)
        return

    if output_format == "json":
        emit_json(page)
    else:
        print_skill_page(page)  # type: ignore[arg-type]


@skills_group.command("installed")
@_FORMAT_OPTION
@click.pass_context
def installed_command(ctx: click.Context, output_format: str) -> None:
    """List skills recorded in the skills lock file."""
    try:
        skills = lock_file.get_installed_skills(home=ctx.obj.get("home"))
    except AgentStudioError as exc:
        fail(exc)
        return

    if output_format == "json":
        emit_json(skills)
    else:
        print_installed_skills(skills)


@skills_group.command("targets")
@_FORMAT_OPTION
@click.pass_context
def targets_command(ctx: click.Context, output_format: str) -> None:
    """List the agents skills can be installed into."""
    try:
        agent_targets = targets.get_agent_targets(home=ctx.obj.get("home"))
    except AgentStudioError as exc:
        fail(exc)
        return

    if output_format == "json":
        emit_json(agent_targets)
    else:
        print_agent_targets(agent_targets)


@skills_group.command("install")
@click.argument("source")
@click.option("--scope", type=click.Choice([s.value for s in InstallScope]),
              default=InstallScope.GLOBAL.value, help="Install scope (default: global).")
@click.option("--project", "project_path", type=click.Path(file_okay=False), default=None,
              help="Project root for --scope project.")
@click.option("--agent", "agents", multiple=True,
              type=click.Choice(sorted(targets.AGENT_IDS)),
              help="Install for this agent only (repeatable).")
@_FORMAT_OPTION
def install_command(
    source: str,
    scope: str,
    project_path: str | None,
    agents: tuple[str, ...],
    output_format: str,
) -> None:
    """Install SOURCE (owner/repo or owner/repo/skill)."""
    if scope == InstallScope.PROJECT.value and not project_path:
        raise click.UsageError("--project is required with --scope project")
    try:
        result = installer.install_skill(source, scope, project_path, agents)
    except AgentStudioError as exc:
        fail(exc)
        return
    _report("Install", result, output_format)


@skills_group.command("remove")
@click.argument("name")
@click.option("--global", "global_", is_flag=True, default=False,
              help="Remove the globally installed copy.")
@_FORMAT_OPTION
def remove_command(name: str, global_: bool, output_format: str) -> None:
    """Remove the installed skill NAME."""
    try:
        result = installer.remove_skill(name, global_)
    except AgentStudioError as exc:
        fail(exc)
        return
    _report("Remove", result, output_format)


@skills_group.command("update")
@click.argument("name")
@click.option("--global", "global_", is_flag=True, default=False,
              help="Update the globally installed copy.")
@_FORMAT_OPTION
def update_command(name: str, global_: bool, output_format: str) -> None:
    """Update the installed skill NAME to its latest version."""
    try:
        result = installer.update_skill(name, global_)
    except AgentStudioError as exc:
        fail(exc)
        return
    _report("Update", result, output_format)
