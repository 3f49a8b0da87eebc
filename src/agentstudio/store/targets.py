"""Agent targets supported by the skills CLI.

Each target installs skills into ``<dot-dir>/skills`` inside a project and
under the home directory. Most dot-directories are ``.<cli-name>``; the
exceptions are listed in ``_DOT_DIR_OVERRIDES``. OpenCode is the only
target whose global directory differs from its project one.
"""

from __future__ import annotations

from pathlib import Path

from agentstudio.paths import StudioPaths
from agentstudio.store.models import AgentTarget

# (cli name, display name), in presentation order.
_AGENTS: tuple[tuple[str, str], ...] = (
    ("claude-code", "Claude Code"),
    ("opencode", "OpenCode"),
    ("cursor", "Cursor"),
    ("cline", "Cline"),
    ("windsurf", "Windsurf"),
    ("roo-code", "Roo Code"),
    ("codex", "Codex"),
    ("amp", "Amp"),
    ("zed", "Zed"),
    ("void", "Void"),
    ("aider", "Aider"),
    ("pear-ai", "Pear AI"),
    ("continue", "Continue"),
    ("copilot", "GitHub Copilot"),
    ("supermaven", "Supermaven"),
    ("tabnine", "Tabnine"),
    ("sourcegraph", "Sourcegraph"),
    ("replit", "Replit"),
    ("bolt", "Bolt"),
    ("v0", "v0"),
    ("lovable", "Lovable"),
    ("devin", "Devin"),
    ("goose", "Goose"),
    ("aide", "Aide"),
    ("trae", "Trae"),
    ("melty", "Melty"),
    ("cody-ai", "Cody AI"),
    ("blackbox", "Blackbox"),
    ("codeium", "Codeium"),
    ("qodo", "Qodo"),
    ("coderabbit", "CodeRabbit"),
    ("codium", "Codium"),
    ("sourcery", "Sourcery"),
    ("amazon-q", "Amazon Q"),
    ("gemini-code", "Gemini Code"),
    ("jetbrains-ai", "JetBrains AI"),
    ("xcode-ai", "Xcode AI"),
    ("pieces", "Pieces"),
    ("mintlify", "Mintlify"),
    ("swimm", "Swimm"),
    ("sweep", "Sweep"),
)

_DOT_DIR_OVERRIDES: dict[str, str] = {
    "claude-code": ".claude",
    "pear-ai": ".pearai",
    "cody-ai": ".cody",
    "amazon-q": ".amazonq",
    "gemini-code": ".gemini",
}

_GLOBAL_PATH_OVERRIDES: dict[str, str] = {
    "opencode": ".config/opencode/skills",
}

AGENT_IDS: tuple[str, ...] = tuple(cli for cli, _ in _AGENTS)


def project_skills_path(cli_name: str) -> str:
    """Return the project-relative skills directory for an agent."""
    return f"{_DOT_DIR_OVERRIDES.get(cli_name, '.' + cli_name)}/skills"


def global_skills_path(cli_name: str) -> str:
    """Return the home-relative skills directory for an agent."""
    return _GLOBAL_PATH_OVERRIDES.get(cli_name, project_skills_path(cli_name))


def get_agent_targets(home: Path | str | None = None) -> list[AgentTarget]:
    """List every supported agent with its skills directories resolved.

    Raises:
        HomeDirectoryError: If ``home`` is not given and cannot be resolved.
    """
    root = StudioPaths.resolve(home).home
    return [
        AgentTarget(
            id=cli,
            cli_name=cli,
            display_name=display,
            project_path=project_skills_path(cli),
            global_path=str(root / global_skills_path(cli)),
        )
        for cli, display in _AGENTS
    ]
