"""Rich output formatting helpers for the Agent Studio CLI.

Provides tables for discovery results, projects, duplicates, hooks and
skill store listings, plus the JSON emitter shared by every command's
``--format json`` mode.

Config state color mapping:
    correct = green, missing_symlink / needs_migration / empty = yellow,
    conflict = bold red
"""

from __future__ import annotations

import json
import sys
from typing import Any

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from agentstudio.models import (
    ConfigState,
    ConfigStateType,
    DiscoveryResult,
    DuplicateGroup,
    HookEntity,
    ProjectInfo,
    SymlinkInfo,
)
from agentstudio.store.models import AgentTarget, InstalledSkill, InstallResult, PaginatedSkills

_STATE_STYLES: dict[ConfigStateType, str] = {
    ConfigStateType.CORRECT: "green",
    ConfigStateType.MISSING_SYMLINK: "yellow",
    ConfigStateType.NEEDS_MIGRATION: "yellow",
    ConfigStateType.EMPTY: "yellow",
    ConfigStateType.CONFLICT: "bold red",
}

console = Console()


def state_style(state: ConfigStateType) -> str:
    """Return the Rich style string for a config state."""
    return _STATE_STYLES.get(state, "white")


def emit_json(payload: Any) -> None:
    """Print ``payload`` (a model, a list of models, or plain data) as JSON."""
    click.echo(json.dumps(_to_plain(payload), indent=2))


def _to_plain(payload: Any) -> Any:
    if hasattr(payload, "to_dict"):
        return payload.to_dict()
    if isinstance(payload, (list, tuple)):
        return [_to_plain(item) for item in payload]
    return payload


def _state_text(state: ConfigState | None) -> Text:
    if state is None:
        return Text("-", style="dim")
    return Text(state.config_state.value, style=state_style(state.config_state))


def print_discovery(result: DiscoveryResult) -> None:
    """Print a per-kind summary and the entity table of a discovery pass.

    Args:
        result: Result of ``discover_all``.
    """
    console.print(Panel(f"Global config: [bold]{result.global_config_path}[/bold]",
                        title="Agent Studio Discovery"))

    table = Table(title="Entities", show_header=True, header_style="bold")
    table.add_column("Kind", style="bold")
    table.add_column("Name")
    table.add_column("Tool", style="dim")
    table.add_column("Scope", justify="center")
    table.add_column("Path", style="dim")

    rows: list[tuple[str, str, str, str, str]] = []
    for group in (result.settings, result.memory, result.agents, result.skills,
                  result.commands, result.plugins):
        for entity in group:
            rows.append((type(entity).kind.value, entity.name, entity.tool.value,
                         entity.scope.value, entity.path))
    for hook in result.hooks:
        rows.append(("hook", hook.event, hook.tool.value, hook.source.value, hook.source_path))
    for server in result.mcp_servers:
        rows.append(("mcp", server.name, server.tool.value, server.scope.value, server.source_path))

    if not rows:
        console.print("[dim]No configuration found.[/dim]")
    else:
        for row in rows:
            table.add_row(*row)
        console.print(table)

    if result.projects:
        print_projects(result.projects)
    if result.duplicates:
        print_duplicates(result.duplicates)
    if result.symlinks:
        print_symlinks(result.symlinks)


def print_projects(projects: list[ProjectInfo]) -> None:
    """Print a table of discovered projects with their config state."""
    if not projects:
        console.print("[dim]No projects found.[/dim]")
        return

    table = Table(title="Projects", show_header=True, header_style="bold")
    table.add_column("Project", style="bold")
    table.add_column("Claude", justify="center")
    table.add_column("OpenCode", justify="center")
    table.add_column("Entities", justify="right")
    table.add_column("AGENTS.md / CLAUDE.md", justify="center")
    table.add_column("Path", style="dim")

    def mark(flag: bool) -> Text:
        return Text("yes", style="green") if flag else Text("-", style="dim")

    for project in projects:
        table.add_row(
            project.name,
            mark(project.has_claude_dir or project.has_root_claude_md or project.has_mcp_json),
            mark(project.has_opencode_dir or project.has_agents_md or project.has_opencode_json),
            str(project.entity_counts.total),
            _state_text(project.config_state),
            project.path,
        )
    console.print(table)


def print_duplicates(groups: list[DuplicateGroup]) -> None:
    """Print duplicate groups; the winning (lowest precedence) member is bold."""
    if not groups:
        console.print("[green]No duplicates found.[/green]")
        return

    table = Table(title="Duplicates", show_header=True, header_style="bold")
    table.add_column("Kind", style="bold")
    table.add_column("Name")
    table.add_column("Precedence", justify="right")
    table.add_column("Scope", justify="center")
    table.add_column("Path", style="dim")
    for group in groups:
        winner = min(member.precedence for member in group.entities)
        for member in group.entities:
            style = "bold" if member.precedence == winner else ""
            table.add_row(group.entity_type.value, Text(group.name, style=style),
                          str(member.precedence), member.scope.value, member.path)
    console.print(table)


def print_symlinks(links: list[SymlinkInfo]) -> None:
    table = Table(title="Symlinks", show_header=True, header_style="bold")
    table.add_column("Path", style="bold")
    table.add_column("Target")
    table.add_column("Status", justify="center")
    for link in links:
        status = Text("ok", style="green") if link.target_exists else Text("broken", style="bold red")
        table.add_row(link.path, link.target, status)
    console.print(table)


def print_hooks(hooks: list[HookEntity]) -> None:
    if not hooks:
        console.print("[dim]No hooks found.[/dim]")
        return
    table = Table(title="Hooks", show_header=True, header_style="bold")
    table.add_column("Event", style="bold")
    table.add_column("Matcher")
    table.add_column("Type", justify="center")
    table.add_column("Command / Prompt", style="dim")
    for hook in hooks:
        for definition in hook.hooks:
            table.add_row(hook.event, hook.matcher or "*", definition.type,
                          definition.command or definition.prompt or "")
    console.print(table)


def print_config_state(project_path: str, state: ConfigState) -> None:
    """Print the AGENTS.md / CLAUDE.md state of one project."""
    header = Text.assemble(
        ("Project: ", "bold"), (project_path, ""),
        ("  State: ", "bold"), _state_text(state),
    )
    console.print(Panel(header, title="Config State"))
    console.print(f"  AGENTS.md: [bold]{state.agents_md_status.value}[/bold]")
    target = f" -> {state.claude_md_symlink_target}" if state.claude_md_symlink_target else ""
    console.print(f"  CLAUDE.md: [bold]{state.claude_md_status.value}[/bold]{target}")
    fixable = "[green]yes[/green]" if state.can_auto_fix else "[dim]no[/dim]"
    console.print(f"  Auto-fix:  {fixable}")


def print_skill_page(page: PaginatedSkills) -> None:
    if not page.skills:
        console.print("[dim]No skills found.[/dim]")
        return
    table = Table(title="Skills", show_header=True, header_style="bold")
    table.add_column("Skill", style="bold")
    table.add_column("Source", style="dim")
    table.add_column("Installs", justify="right")
    table.add_column("Description")
    for skill in page.skills:
        table.add_row(skill.name, skill.top_source or "-", str(skill.installs),
                      (skill.description or "")[:80])
    console.print(table)
    if page.has_more:
        console.print("[dim]More results available (use --offset).[/dim]")


def print_installed_skills(skills: list[InstalledSkill]) -> None:
    if not skills:
        console.print("[dim]No skills installed.[/dim]")
        return
    table = Table(title="Installed Skills", show_header=True, header_style="bold")
    table.add_column("Skill", style="bold")
    table.add_column("Source")
    table.add_column("Type", style="dim")
    table.add_column("Installed", style="dim")
    for skill in skills:
        table.add_row(skill.name, skill.source, skill.source_type, skill.installed_at)
    console.print(table)


def print_agent_targets(targets: list[AgentTarget]) -> None:
    table = Table(title=f"Agent Targets ({len(targets)})", show_header=True, header_style="bold")
    table.add_column("Agent", style="bold")
    table.add_column("CLI Name", style="dim")
    table.add_column("Project Path")
    table.add_column("Global Path", style="dim")
    for target in targets:
        table.add_row(target.display_name, target.cli_name, target.project_path, target.global_path)
    console.print(table)


def print_install_result(action: str, result: InstallResult) -> None:
    if result.success:
        console.print(f"[bold green]{action} succeeded:[/bold green] {result.skill_name}")
    else:
        console.print(f"[bold red]{action} failed:[/bold red] {result.skill_name}")
        if result.error:
            console.print(result.error.rstrip(), style="dim")


def fail(exc: Exception, code: int = 1) -> None:
    """Report an operation failure on stderr and exit with ``code``."""
    click.echo(f"Error: {exc}", err=True)
    sys.exit(code)
