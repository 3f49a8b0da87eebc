"""Discovery commands: ``discover``, ``scan``, ``duplicates``, ``hooks``, ``symlink``.

Usage::

    agentstudio discover                         # Global scope only
    agentstudio discover ~/code/api ~/code/web   # Plus these projects
    agentstudio scan ~/code ~/work --format json
    agentstudio duplicates
    agentstudio hooks ~/.claude/settings.json
    agentstudio symlink ./CLAUDE.md
"""

from __future__ import annotations

import sys

import click

from agentstudio import api
from agentstudio.cli.output import (
    emit_json,
    fail,
    print_discovery,
    print_duplicates,
    print_hooks,
    print_projects,
    print_symlinks,
)
from agentstudio.exceptions import AgentStudioError

_FORMAT_OPTION = click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)


@click.command("discover")
@click.argument("projects", nargs=-1, type=click.Path(file_okay=False))
@_FORMAT_OPTION
@click.pass_context
def discover_command(ctx: click.Context, projects: tuple[str, ...], output_format: str) -> None:
    """Discover global configuration plus the given PROJECTS."""
    try:
        result = api.discover_all(list(projects) or None, home=ctx.obj.get("home"))
    except AgentStudioError as exc:
        fail(exc)
        return

    if output_format == "json":
        emit_json(result)
    else:
        print_discovery(result)


@click.command("scan")
@click.argument("base_paths", nargs=-1, required=True, type=click.Path(file_okay=False))
@_FORMAT_OPTION
@click.pass_context
def scan_command(ctx: click.Context, base_paths: tuple[str, ...], output_format: str) -> None:
    """Find projects under BASE_PATHS (up to five levels deep)."""
    try:
        projects = api.scan_projects(list(base_paths), home=ctx.obj.get("home"))
    except AgentStudioError as exc:
        fail(exc)
        return

    if output_format == "json":
        emit_json(projects)
    else:
        print_projects(projects)


@click.command("duplicates")
@_FORMAT_OPTION
@click.pass_context
def duplicates_command(ctx: click.Context, output_format: str) -> None:
    """List same-named global agents, skills and commands.

    Exits with code 1 when duplicates exist, 0 otherwise.
    """
    try:
        groups = api.find_duplicates(home=ctx.obj.get("home"))
    except AgentStudioError as exc:
        fail(exc, code=2)
        return

    if output_format == "json":
        emit_json(groups)
    else:
        print_duplicates(groups)
    sys.exit(1 if groups else 0)


@click.command("hooks")
@click.argument("settings_path", type=click.Path(dir_okay=False))
@_FORMAT_OPTION
def hooks_command(settings_path: str, output_format: str) -> None:
    """List the hooks declared in SETTINGS_PATH."""
    hooks = api.extract_hooks(settings_path)
    if output_format == "json":
        emit_json(hooks)
    else:
        print_hooks(hooks)


@click.command("symlink")
@click.argument("path", type=click.Path())
@_FORMAT_OPTION
def symlink_command(path: str, output_format: str) -> None:
    """Describe PATH if it is a symbolic link.

    Exits with code 1 when PATH is not a symlink.
    """
    info = api.check_symlink(path)
    if output_format == "json":
        emit_json(info)
    elif info is None:
        click.echo(f"{path} is not a symlink.")
    else:
        print_symlinks([info])
    if info is None:
        sys.exit(1)
