"""``agentstudio config-state`` / ``fix-config`` — AGENTS.md and CLAUDE.md consistency.

A project is consistent when AGENTS.md is the real file and CLAUDE.md is a
symlink to it. ``config-state`` reports the classification; ``fix-config``
applies the one repair each fixable state allows.

Usage::

    agentstudio config-state ./my-project
    agentstudio config-state ./my-project --format json
    agentstudio fix-config ./my-project
"""

from __future__ import annotations

import sys

import click

from agentstudio import api
from agentstudio.cli.output import emit_json, fail, print_config_state
from agentstudio.exceptions import AgentStudioError, ConfigConflictError
from agentstudio.models import ConfigStateType


@click.command("config-state")
@click.argument("project", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)
def config_state_command(project: str, output_format: str) -> None:
    """Classify the AGENTS.md / CLAUDE.md pair of PROJECT.

    Exits with code 1 when the project is not in the correct state.
    """
    try:
        state = api.get_project_config_state(project)
    except AgentStudioError as exc:
        fail(exc)
        return
    if output_format == "json":
        emit_json(state)
    else:
        print_config_state(project, state)
    sys.exit(0 if state.config_state is ConfigStateType.CORRECT else 1)


@click.command("fix-config")
@click.argument("project", type=click.Path(file_okay=False))
def fix_config_command(project: str) -> None:
    """Make CLAUDE.md a symlink to AGENTS.md in PROJECT.

    Exits with code 2 on a conflict (both files hold different content),
    1 on any other failure.
    """
    try:
        message = api.fix_project_config(project)
    except ConfigConflictError as exc:
        fail(exc, code=2)
        return
    except AgentStudioError as exc:
        fail(exc)
        return
    click.echo(message)
