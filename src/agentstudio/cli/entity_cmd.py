"""Entity file commands: ``create``, ``copy``, ``link``, ``rename``, ``delete``, ``duplicate``.

Each command prints the resulting path on success. Skills are addressed by
their ``SKILL.md`` path; the operation applies to the whole skill directory.

Usage::

    agentstudio create agent reviewer
    agentstudio create skill pdf-tools --scope project --project ./app
    agentstudio create memory --tool opencode --scope project --project ./app
    agentstudio copy ~/.claude/agents/reviewer.md agent --scope project --project ./app
    agentstudio link ~/.claude/skills/pdf/SKILL.md skill --scope project --project ./app
    agentstudio rename ./app/.claude/agents/reviewer.md critic agent
    agentstudio duplicate ./app/.claude/commands/deploy.md command
    agentstudio delete ./app/.claude/commands/deploy-copy.md command
"""

from __future__ import annotations

from typing import IO

import click

from agentstudio.cli.output import fail
from agentstudio.exceptions import AgentStudioError
from agentstudio.models import EntityKind, Scope, Tool
from agentstudio.operations import entities

_MOVABLE_KINDS = [EntityKind.AGENT.value, EntityKind.SKILL.value, EntityKind.COMMAND.value]
_CREATABLE_KINDS = [*_MOVABLE_KINDS, EntityKind.MEMORY.value]


def _scope_options(func):
    """Attach the shared ``--scope`` / ``--project`` / ``--tool`` options."""
    func = click.option(
        "--tool", type=click.Choice([t.value for t in Tool]), default=Tool.CLAUDE.value,
        help="Tool layout of the destination (default: claude).",
    )(func)
    func = click.option(
        "--project", "project_path", type=click.Path(file_okay=False), default=None,
        help="Project root (required with --scope project).",
    )(func)
    func = click.option(
        "--scope", type=click.Choice([s.value for s in Scope]), default=Scope.GLOBAL.value,
        help="Destination scope (default: global).",
    )(func)
    return func


@click.command("create")
@click.argument("entity_type", type=click.Choice(_CREATABLE_KINDS))
@click.argument("name", required=False, default="")
@_scope_options
@click.option("--content-file", type=click.File("r"), default=None,
              help="Use this file's content instead of the default template.")
@click.pass_context
def create_command(
    ctx: click.Context,
    entity_type: str,
    name: str,
    scope: str,
    project_path: str | None,
    tool: str,
    content_file: IO[str] | None,
) -> None:
    """Create a new ENTITY_TYPE called NAME from the default template."""
    if entity_type != EntityKind.MEMORY.value and not name:
        raise click.UsageError(f"NAME is required for {entity_type}")
    content = content_file.read() if content_file is not None else None
    try:
        path = entities.create_entity(
            entity_type, name, scope, project_path, content, tool, home=ctx.obj.get("home")
        )
    except AgentStudioError as exc:
        fail(exc)
        return
    click.echo(path)


@click.command("copy")
@click.argument("source", type=click.Path())
@click.argument("entity_type", type=click.Choice(_MOVABLE_KINDS))
@_scope_options
@click.option("--name", "new_name", default=None, help="Name of the copy.")
@click.pass_context
def copy_command(
    ctx: click.Context,
    source: str,
    entity_type: str,
    scope: str,
    project_path: str | None,
    tool: str,
    new_name: str | None,
) -> None:
    """Copy SOURCE into another scope or tool layout."""
    try:
        path = entities.copy_entity(
            source, entity_type, scope, project_path, new_name, tool, home=ctx.obj.get("home")
        )
    except AgentStudioError as exc:
        fail(exc)
        return
    click.echo(path)


@click.command("link")
@click.argument("source", type=click.Path())
@click.argument("entity_type", type=click.Choice(_MOVABLE_KINDS))
@_scope_options
@click.pass_context
def link_command(
    ctx: click.Context,
    source: str,
    entity_type: str,
    scope: str,
    project_path: str | None,
    tool: str,
) -> None:
    """Expose SOURCE in another scope through a symlink."""
    try:
        path = entities.create_entity_symlink(
            source, entity_type, scope, project_path, tool, home=ctx.obj.get("home")
        )
    except AgentStudioError as exc:
        fail(exc)
        return
    click.echo(path)


@click.command("rename")
@click.argument("source", type=click.Path())
@click.argument("new_name")
@click.argument("entity_type", type=click.Choice(_MOVABLE_KINDS))
def rename_command(source: str, new_name: str, entity_type: str) -> None:
    """Rename SOURCE to NEW_NAME in place."""
    try:
        path = entities.rename_entity(source, new_name, entity_type)
    except AgentStudioError as exc:
        fail(exc)
        return
    click.echo(path)


@click.command("delete")
@click.argument("path", type=click.Path())
@click.argument("entity_type", type=click.Choice(_MOVABLE_KINDS))
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation.")
def delete_command(path: str, entity_type: str, yes: bool) -> None:
    """Delete the entity at PATH (a symlink is removed, its target kept)."""
    if not yes:
        click.confirm(f"Delete {entity_type} {path}?", abort=True)
    try:
        entities.delete_entity(path, entity_type)
    except AgentStudioError as exc:
        fail(exc)
        return
    click.echo(f"Deleted {path}")


@click.command("duplicate")
@click.argument("source", type=click.Path())
@click.argument("entity_type", type=click.Choice(_MOVABLE_KINDS))
def duplicate_command(source: str, entity_type: str) -> None:
    """Copy SOURCE next to itself as <name>-copy, <name>-copy2, ..."""
    try:
        path = entities.duplicate_entity(source, entity_type)
    except AgentStudioError as exc:
        fail(exc)
        return
    click.echo(path)
