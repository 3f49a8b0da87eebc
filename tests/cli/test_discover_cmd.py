"""Tests for the discovery and config commands of the ``agentstudio`` CLI."""

from __future__ import annotations

import json
import os
from pathlib import Path

from click.testing import CliRunner

from agentstudio import __version__
from agentstudio.cli.main import cli

from tests.helpers import make_agent, make_claude_home, make_claude_project, write, write_json


class TestGroup:
    """Top-level group behaviour."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("discover", "scan", "config-state", "fix-config", "skills"):
            assert name in result.output

    def test_home_from_environment(self, runner: CliRunner, home: Path) -> None:
        make_claude_home(home)
        result = runner.invoke(
            cli, ["discover", "--format", "json"], env={"AGENT_STUDIO_HOME": str(home)}
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["global_config_path"] == str(home / ".claude")


class TestDiscoverCommand:
    """``agentstudio discover``."""

    def test_text_output(self, runner: CliRunner, home: Path) -> None:
        make_claude_home(home)
        result = runner.invoke(cli, ["--home", str(home), "discover"])
        assert result.exit_code == 0
        assert "reviewer" in result.output
        assert "github" in result.output

    def test_empty_home(self, runner: CliRunner, home: Path) -> None:
        result = runner.invoke(cli, ["--home", str(home), "discover"])
        assert result.exit_code == 0
        assert "No configuration found" in result.output

    def test_json_with_projects(
        self, runner: CliRunner, home: Path, workspace: Path, project: Path
    ) -> None:
        make_claude_project(project)
        result = runner.invoke(
            cli, ["--home", str(home), "discover", str(workspace), "--format", "json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [p["name"] for p in data["projects"]] == ["app"]
        assert data["agents"][0]["type"] == "agent"
        assert data["projects"][0]["config_state"]["config_state"] == "needs_migration"


class TestScanCommand:
    """``agentstudio scan``."""

    def test_requires_base_path(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["scan"])
        assert result.exit_code == 2

    def test_json(self, runner: CliRunner, home: Path, workspace: Path, project: Path) -> None:
        write(project / "AGENTS.md", "x")
        result = runner.invoke(cli, ["--home", str(home), "scan", str(workspace), "--format", "json"])
        assert result.exit_code == 0
        (info,) = json.loads(result.output)
        assert info["path"] == str(project)
        assert info["has_agents_md"] is True

    def test_no_projects(self, runner: CliRunner, home: Path, workspace: Path) -> None:
        result = runner.invoke(cli, ["--home", str(home), "scan", str(workspace)])
        assert result.exit_code == 0
        assert "No projects found" in result.output


class TestDuplicatesCommand:
    """``agentstudio duplicates`` exit codes."""

    def test_none(self, runner: CliRunner, home: Path) -> None:
        result = runner.invoke(cli, ["--home", str(home), "duplicates"])
        assert result.exit_code == 0
        assert "No duplicates found" in result.output

    def test_found(self, runner: CliRunner, home: Path) -> None:
        make_agent(home / ".claude" / "agents", "reviewer")
        make_agent(home / ".claude" / "commands", "reviewer")
        make_agent(home / ".claude" / "commands" / "ns", "reviewer")
        result = runner.invoke(cli, ["--home", str(home), "duplicates", "--format", "json"])
        assert result.exit_code == 1
        (group,) = json.loads(result.output)
        assert group["entity_type"] == "command"
        assert [e["precedence"] for e in group["entities"]] == [100, 101]


class TestHooksAndSymlink:
    """``agentstudio hooks`` and ``agentstudio symlink``."""

    def test_hooks_json(self, runner: CliRunner, tmp_path: Path) -> None:
        settings = write_json(
            tmp_path / "settings.json",
            {"hooks": {"Stop": [{"hooks": [{"type": "command", "command": "notify"}]}]}},
        )
        result = runner.invoke(cli, ["hooks", str(settings), "--format", "json"])
        assert result.exit_code == 0
        (hook,) = json.loads(result.output)
        assert hook["event"] == "Stop"
        assert hook["source"] == "global"
        assert hook["type"] == "hook"

    def test_hooks_text_empty(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["hooks", str(tmp_path / "missing.json")])
        assert result.exit_code == 0
        assert "No hooks found" in result.output

    def test_symlink(self, runner: CliRunner, tmp_path: Path) -> None:
        os.symlink("gone.md", tmp_path / "link.md")
        result = runner.invoke(cli, ["symlink", str(tmp_path / "link.md"), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["target"] == "gone.md"
        assert data["target_exists"] is False

    def test_not_a_symlink(self, runner: CliRunner, tmp_path: Path) -> None:
        path = write(tmp_path / "plain.md", "x")
        result = runner.invoke(cli, ["symlink", str(path)])
        assert result.exit_code == 1
        assert "is not a symlink" in result.output


class TestConfigCommands:
    """``agentstudio config-state`` and ``fix-config``."""

    def test_config_state_needs_migration(self, runner: CliRunner, project: Path) -> None:
        write(project / "CLAUDE.md", "x")
        result = runner.invoke(cli, ["config-state", str(project), "--format", "json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["config_state"] == "needs_migration"
        assert data["can_auto_fix"] is True

    def test_fix_then_correct(self, runner: CliRunner, project: Path) -> None:
        write(project / "CLAUDE.md", "x")
        fixed = runner.invoke(cli, ["fix-config", str(project)])
        assert fixed.exit_code == 0
        assert "Migrated CLAUDE.md content to AGENTS.md" in fixed.output
        state = runner.invoke(cli, ["config-state", str(project)])
        assert state.exit_code == 0
        assert "correct" in state.output

    def test_fix_conflict_exit_code(self, runner: CliRunner, project: Path) -> None:
        write(project / "CLAUDE.md", "c")
        write(project / "AGENTS.md", "a")
        result = runner.invoke(cli, ["fix-config", str(project)])
        assert result.exit_code == 2
        assert "Cannot auto-fix" in result.output

    def test_fix_not_a_directory(self, runner: CliRunner, tmp_path: Path) -> None:
        path = write(tmp_path / "file.txt", "x")
        result = runner.invoke(cli, ["fix-config", str(path)])
        assert result.exit_code != 0
