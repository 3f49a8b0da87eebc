"""Builders for fake Claude Code / OpenCode installations and projects.

Each helper writes a minimal but realistic layout. They are shared by the
discovery, operations and CLI tests.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def write(path: Path, text: str) -> Path:
    """Write ``text`` to ``path``, creating parents."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def write_json(path: Path, data: Any) -> Path:
    return write(path, json.dumps(data, indent=2))


def agent_md(name: str, description: str = "A test agent") -> str:
    return f"---\nname: {name}\ndescription: {description}\n---\n\nYou are {name}.\n"


def make_agent(directory: Path, name: str) -> Path:
    return write(directory / f"{name}.md", agent_md(name))


def make_command(directory: Path, name: str, namespace: str | None = None) -> Path:
    target = directory / namespace if namespace else directory
    return write(target / f"{name}.md", f"---\ndescription: Run {name}\n---\n\nDo {name}.\n")


def make_skill(directory: Path, name: str, extra_files: tuple[str, ...] = ()) -> Path:
    """Create ``<directory>/<name>/SKILL.md`` plus optional supporting files."""
    manifest = write(
        directory / name / "SKILL.md",
        f"---\nname: {name}\ndescription: Skill {name}\n---\n\n# {name}\n",
    )
    for extra in extra_files:
        write(directory / name / extra, "support\n")
    return manifest


def make_plugin(plugins_dir: Path, name: str, *capabilities: str) -> Path:
    """Create a local plugin directory with a manifest and capability paths."""
    plugin_dir = plugins_dir / name
    write_json(plugin_dir / ".claude-plugin" / "plugin.json", {"name": name, "version": "1.0.0"})
    for capability in capabilities:
        if capability.endswith(".json"):
            write_json(plugin_dir / capability, {})
        else:
            (plugin_dir / capability).mkdir(parents=True, exist_ok=True)
    return plugin_dir


def make_claude_home(home: Path) -> Path:
    """Populate ``~/.claude`` with one of everything."""
    claude = home / ".claude"
    write_json(
        claude / "settings.json",
        {
            "model": "sonnet",
            "hooks": {
                "PreToolUse": [
                    {"matcher": "Bash", "hooks": [{"type": "command", "command": "lint"}]}
                ]
            },
        },
    )
    write(claude / "CLAUDE.md", "# Global memory\n")
    make_agent(claude / "agents", "reviewer")
    make_skill(claude / "skills", "pdf", extra_files=("reference.md",))
    make_command(claude / "commands", "deploy")
    make_command(claude / "commands", "commit", namespace="git")
    make_plugin(claude / "plugins", "formatter", "commands", "hooks.json")
    write_json(
        home / ".claude.json",
        {"mcpServers": {"github": {"command": "npx", "args": ["-y", "server-github"]}}},
    )
    return claude


def make_opencode_home(home: Path) -> Path:
    """Populate ``~/.config/opencode`` with a JSONC config and an agent."""
    opencode = home / ".config" / "opencode"
    write(
        opencode / "opencode.jsonc",
        '{\n  // global\n  "mcp": {"docs": {"type": "remote", "url": "https://docs.example/mcp"}}\n}\n',
    )
    write(opencode / "AGENTS.md", "# OpenCode memory\n")
    make_agent(opencode / "agent", "planner")
    return opencode


def make_claude_project(root: Path) -> Path:
    """A project with a ``.claude`` directory, root CLAUDE.md and ``.mcp.json``."""
    claude = root / ".claude"
    write_json(claude / "settings.json", {"permissions": {}})
    write_json(
        claude / "settings.local.json",
        {"hooks": {"Stop": [{"hooks": [{"type": "prompt", "prompt": "Summarise"}]}]}},
    )
    make_agent(claude / "agents", "reviewer")
    make_command(claude / "commands", "test")
    write(root / "CLAUDE.md", "# Project memory\n")
    write_json(root / ".mcp.json", {"mcpServers": {"db": {"url": "http://localhost:9000"}}})
    return root
