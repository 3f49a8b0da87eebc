"""Agent Studio CLI — Inspect and manage AI coding assistant configuration.

Entry point for the ``agentstudio`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    discover      — Global and per-project discovery of every entity kind.
    scan          — Find project directories under one or more base paths.
    duplicates    — Same-named agents, skills and commands across scopes.
    hooks         — List the hooks declared in a settings file.
    symlink       — Describe a symbolic link.
    config-state  — Classify a project's AGENTS.md / CLAUDE.md pair.
    fix-config    — Repair a project's AGENTS.md / CLAUDE.md pair.
    create        — Create an agent, skill, command or memory file.
    copy, link, rename, delete, duplicate — Entity file operations.
    skills        — Search, list and install skills from the skill store.

Usage::

    agentstudio discover ~/code/api ~/code/web
    agentstudio scan ~/code --format json
    agentstudio config-state ./my-project
    agentstudio fix-config ./my-project
    agentstudio create agent reviewer --scope project --project ./my-project
    agentstudio skills search sentry
"""

from __future__ import annotations

import logging

import click

from agentstudio import __version__
from agentstudio.cli.config_cmd import config_state_command, fix_config_command
from agentstudio.cli.discover_cmd import (
    discover_command,
    duplicates_command,
    hooks_command,
    scan_command,
    symlink_command,
)
from agentstudio.cli.entity_cmd import (
    copy_command,
    create_command,
    delete_command,
    duplicate_command,
    link_command,
    rename_command,
)
from agentstudio.cli.skills_cmd import skills_group


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--home",
    type=click.Path(file_okay=False),
    envvar="AGENT_STUDIO_HOME",
    default=None,
    help="Home directory to inspect instead of the current user's.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log progress to stderr.")
@click.pass_context
def cli(ctx: click.Context, home: str | None, verbose: bool) -> None:
    """Agent Studio: one view over Claude Code and OpenCode configuration.

    Discover settings, memory files, agents, skills, commands, plugins,
    hooks and MCP servers across the global scope and your projects, keep
    AGENTS.md and CLAUDE.md consistent, and manage entity files.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
    ctx.ensure_object(dict)
    ctx.obj["home"] = home


# Register all subcommands
cli.add_command(discover_command)
cli.add_command(scan_command)
cli.add_command(duplicates_command)
cli.add_command(hooks_command)
cli.add_command(symlink_command)
cli.add_command(config_state_command)
cli.add_command(fix_config_command)
cli.add_command(create_command)
cli.add_command(copy_command)
cli.add_command(link_command)
cli.add_command(rename_command)
cli.add_command(delete_command)
cli.add_command(duplicate_command)
cli.add_command(skills_group)
