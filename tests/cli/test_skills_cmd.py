"""Tests for ``agentstudio skills`` — network and subprocess mocked."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from agentstudio.cli.main import cli
from agentstudio.exceptions import SkillStoreError

from tests.helpers import write, write_json


def _patch_fetch_json(**kwargs: Any) -> Any:
    return patch("agentstudio.store.api.fetch_json", new_callable=AsyncMock, **kwargs)


def _completed(returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr=stderr)


class TestSearch:
    """``skills search``."""

    def test_search_text(self, runner: CliRunner) -> None:
        payload = {"skills": [{"id": "s/x", "name": "find-bugs", "installs": 9}], "hasMore": True}
        with _patch_fetch_json(return_value=payload) as mock:
            result = runner.invoke(cli, ["skills", "search", "bugs", "--limit", "5"])
        assert result.exit_code == 0
        assert "find-bugs" in result.output
        assert "More results available" in result.output
        assert mock.call_args.kwargs["params"] == {"q": "bugs", "limit": 5, "offset": 0}

    def test_popular_when_no_query(self, runner: CliRunner) -> None:
        with _patch_fetch_json(return_value={"skills": []}) as mock:
            result = runner.invoke(cli, ["skills", "search", "--format", "json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"skills": [], "has_more": False}
        assert mock.call_args.args[0].endswith("/skills")

    def test_api_error(self, runner: CliRunner) -> None:
        with _patch_fetch_json(side_effect=SkillStoreError("Skills API returned status: 500")):
            result = runner.invoke(cli, ["skills", "search", "x"])
        assert result.exit_code == 1
        assert "Skills API returned status: 500" in result.output


class TestLocalListings:
    """``skills installed`` and ``skills targets``."""

    def test_installed(self, runner: CliRunner, home: Path) -> None:
        write_json(
            home / ".agents" / ".skill-lock.json",
            {"version": 3, "skills": {"pdf": {"source": "anthropics/skills",
                                              "sourceType": "github", "installedAt": "t"}}},
        )
        result = runner.invoke(cli, ["--home", str(home), "skills", "installed", "--format", "json"])
        assert result.exit_code == 0
        (skill,) = json.loads(result.output)
        assert skill["name"] == "pdf"
        assert skill["source_type"] == "github"

    def test_installed_empty(self, runner: CliRunner, home: Path) -> None:
        result = runner.invoke(cli, ["--home", str(home), "skills", "installed"])
        assert result.exit_code == 0
        assert "No skills installed" in result.output

    def test_installed_corrupt_lock(self, runner: CliRunner, home: Path) -> None:
        write(home / ".agents" / ".skill-lock.json", "not json")
        result = runner.invoke(cli, ["--home", str(home), "skills", "installed"])
        assert result.exit_code == 1
        assert "Failed to parse lock file" in result.output

    def test_targets_json(self, runner: CliRunner, home: Path) -> None:
        result = runner.invoke(cli, ["--home", str(home), "skills", "targets", "--format", "json"])
        assert result.exit_code == 0
        targets = json.loads(result.output)
        assert len(targets) == 41
        assert targets[0]["cli_name"] == "claude-code"


class TestLifecycle:
    """``skills install`` / ``remove`` / ``update`` delegate to npx."""

    def test_install(self, runner: CliRunner) -> None:
        with patch("subprocess.run", return_value=_completed()) as mock_run:
            result = runner.invoke(
                cli, ["skills", "install", "obra/superpowers/brainstorming", "--agent", "cursor"]
            )
        assert result.exit_code == 0
        assert "Install succeeded" in result.output
        argv = mock_run.call_args.args[0]
        assert argv[:4] == ["npx", "skills", "add", "obra/superpowers"]
        assert argv[-2:] == ["--agent", "cursor"]

    def test_install_project_requires_path(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["skills", "install", "a/b", "--scope", "project"])
        assert result.exit_code == 2

    def test_unknown_agent_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["skills", "install", "a/b", "--agent", "not-an-agent"])
        assert result.exit_code == 2

    def test_remove_failure(self, runner: CliRunner) -> None:
        with patch("subprocess.run", return_value=_completed(1, stderr="no such skill")):
            result = runner.invoke(cli, ["skills", "remove", "ghost", "--format", "json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["success"] is False
        assert data["error"] == "no such skill"

    def test_update_global(self, runner: CliRunner) -> None:
        with patch("subprocess.run", return_value=_completed()) as mock_run:
            result = runner.invoke(cli, ["skills", "update", "pdf", "--global"])
        assert result.exit_code == 0
        assert mock_run.call_args.args[0] == ["npx", "skills", "update", "pdf", "--global"]

    def test_npx_missing(self, runner: CliRunner) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError("npx")):
            result = runner.invoke(cli, ["skills", "update", "pdf"])
        assert result.exit_code == 1
        assert "Failed to execute npx skills" in result.output
