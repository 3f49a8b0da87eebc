"""Tests for the full discovery pass and duplicate resolution."""

from __future__ import annotations

import json
import os
from dataclasses import replace
from pathlib import Path

import pytest

from agentstudio.discovery.aggregator import collect_symlinks, discover_all
from agentstudio.discovery.duplicates import GLOBAL_PRECEDENCE_OFFSET, find_duplicates_in
from agentstudio.discovery.markdown import discover_agents, discover_skills
from agentstudio.models import EntityKind, HookSource, Scope, Tool

from tests.helpers import (
    make_agent,
    make_claude_home,
    make_claude_project,
    make_opencode_home,
    make_skill,
    write,
)


class TestDiscoverAllGlobal:
    """Global-only discovery."""

    def test_empty_home(self, home: Path) -> None:
        result = discover_all(home=home)
        assert result.global_config_path == str(home / ".claude")
        assert result.projects == []
        assert result.agents == [] and result.mcp_servers == []
        assert result.discovered_at > 0

    def test_claude_home(self, home: Path) -> None:
        make_claude_home(home)
        result = discover_all(home=home)
        assert [s.name for s in result.settings] == ["settings.json"]
        assert [m.name for m in result.memory] == ["CLAUDE.md"]
        assert [a.name for a in result.agents] == ["reviewer"]
        assert [s.name for s in result.skills] == ["pdf"]
        assert sorted(c.name for c in result.commands) == ["commit", "deploy"]
        assert [p.name for p in result.plugins] == ["formatter"]
        assert [h.event for h in result.hooks] == ["PreToolUse"]
        assert [m.name for m in result.mcp_servers] == ["github"]
        assert all(e.scope is Scope.GLOBAL for e in result.agents + result.skills)

    def test_plugin_hooks_only_flagged(self, home: Path) -> None:
        make_claude_home(home)
        hooks_file = home / ".claude" / "plugins" / "formatter" / "hooks.json"
        hooks_file.write_text(
            json.dumps({"hooks": {"Stop": [{"hooks": [{"type": "command", "command": "fmt"}]}]}})
        )
        result = discover_all(home=home)
        (plugin,) = result.plugins
        assert plugin.has_hooks
        assert [h.event for h in result.hooks] == ["PreToolUse"]
        assert not any(m.is_from_plugin for m in result.mcp_servers)

    def test_opencode_home(self, home: Path) -> None:
        make_opencode_home(home)
        result = discover_all(home=home)
        assert [(a.name, a.tool) for a in result.agents] == [("planner", Tool.OPENCODE)]
        assert [s.name for s in result.settings] == ["opencode.jsonc"]
        assert [m.name for m in result.mcp_servers] == ["docs"]
        assert [m.name for m in result.memory] == ["AGENTS.md"]


class TestDiscoverAllProjects:
    """Discovery across projects."""

    def test_project_entities_and_counts(self, home: Path, workspace: Path, project: Path) -> None:
        make_claude_project(project)
        result = discover_all([str(workspace)], home=home)
        (info,) = [p for p in result.projects if p.path == str(project)]
        counts = info.entity_counts
        assert counts.settings == 2
        assert counts.memory == 1
        assert counts.agents == 1
        assert counts.commands == 1
        assert counts.hooks == 1
        assert counts.mcp == 1
        (hook,) = result.hooks
        assert hook.source is HookSource.LOCAL
        assert all(a.project_path == str(project) for a in result.agents)

    def test_overlapping_paths_do_not_duplicate(self, home: Path, workspace: Path, project: Path) -> None:
        make_claude_project(project)
        result = discover_all([str(workspace), str(project)], home=home)
        paths = [a.path for a in result.agents]
        assert len(paths) == len(set(paths)) == 1
        ids = [m.id for m in result.mcp_servers]
        assert len(ids) == len(set(ids))

    def test_project_shadows_global_duplicate(self, home: Path, workspace: Path, project: Path) -> None:
        make_claude_home(home)
        make_claude_project(project)
        result = discover_all([str(workspace)], home=home)
        (group,) = [g for g in result.duplicates if g.entity_type is EntityKind.AGENT]
        assert group.name == "reviewer"
        winner = min(group.entities, key=lambda e: e.precedence)
        assert winner.scope is Scope.PROJECT

    def test_symlink_inventory(self, home: Path, workspace: Path, project: Path) -> None:
        write(project / "AGENTS.md", "shared")
        os.symlink("AGENTS.md", project / "CLAUDE.md")
        result = discover_all([str(workspace)], home=home)
        links = {Path(link.path).name: link for link in result.symlinks}
        assert links["CLAUDE.md"].target == "AGENTS.md"
        assert links["CLAUDE.md"].target_exists
        assert links["CLAUDE.md"].entity_type is EntityKind.MEMORY

    def test_to_dict_tags_entity_types(self, home: Path) -> None:
        make_claude_home(home)
        data = discover_all(home=home).to_dict()
        json.dumps(data)
        assert data["agents"][0]["type"] == "agent"
        assert data["mcp_servers"][0]["type"] == "mcp"
        assert data["agents"][0]["scope"] == "global"


class TestCollectSymlinks:
    """Symlink inventory for entities."""

    def test_relative_skill_directory_link(self, tmp_path: Path) -> None:
        source = tmp_path / "src"
        make_skill(source, "gone")
        skills_dir = tmp_path / "skills"
        skills_dir.mkdir()
        os.symlink(Path("..") / "src" / "gone", skills_dir / "gone")
        (skill,) = discover_skills(skills_dir, Scope.GLOBAL)
        (link,) = collect_symlinks([skill])
        assert link.target_exists
        assert link.entity_type is EntityKind.SKILL

    def test_regular_files_skipped(self, tmp_path: Path) -> None:
        make_agent(tmp_path, "plain")
        assert collect_symlinks(discover_agents(tmp_path, Scope.GLOBAL)) == []


class TestFindDuplicates:
    """Grouping and precedence ranks."""

    def _agents(self, base: Path, scope: Scope, project_path: str | None, *names: str):
        directory = base / "agents"
        for name in names:
            make_agent(directory, name)
        return discover_agents(directory, scope, project_path)

    def test_singletons_not_reported(self, tmp_path: Path) -> None:
        agents = self._agents(tmp_path / "g", Scope.GLOBAL, None, "a", "b")
        assert find_duplicates_in(agents, [], []) == []

    def test_project_members_rank_first(self, tmp_path: Path) -> None:
        global_ = self._agents(tmp_path / "g", Scope.GLOBAL, None, "x")
        p1 = self._agents(tmp_path / "p1", Scope.PROJECT, "/p1", "x")
        p2 = self._agents(tmp_path / "p2", Scope.PROJECT, "/p2", "x")
        (group,) = find_duplicates_in(global_ + p1 + p2, [], [])
        ranks = [(e.scope, e.precedence) for e in group.entities]
        assert ranks == [
            (Scope.PROJECT, 0),
            (Scope.PROJECT, 1),
            (Scope.GLOBAL, GLOBAL_PRECEDENCE_OFFSET),
        ]

    def test_many_project_members_still_outrank_global(self, tmp_path: Path) -> None:
        (global_,) = self._agents(tmp_path / "g", Scope.GLOBAL, None, "x")
        (template,) = self._agents(tmp_path / "p", Scope.PROJECT, "/p", "x")
        count = GLOBAL_PRECEDENCE_OFFSET + 1
        projects = [
            replace(template, id=f"agent_{i}", project_path=f"/p{i}") for i in range(count)
        ]
        (group,) = find_duplicates_in(projects + [global_], [], [])
        project_ranks = [e.precedence for e in group.entities if e.scope is Scope.PROJECT]
        global_ranks = [e.precedence for e in group.entities if e.scope is Scope.GLOBAL]
        assert max(project_ranks) == count - 1
        assert global_ranks == [count]

    @pytest.mark.parametrize("kind_index", [0, 1, 2])
    def test_kinds_grouped_separately(self, tmp_path: Path, kind_index: int) -> None:
        agents = self._agents(tmp_path / "g", Scope.GLOBAL, None, "same")
        more = self._agents(tmp_path / "h", Scope.GLOBAL, None, "same")
        buckets: list[list] = [[], [], []]
        buckets[kind_index] = agents + more
        (group,) = find_duplicates_in(*buckets)
        assert group.entity_type is (EntityKind.AGENT, EntityKind.SKILL, EntityKind.COMMAND)[kind_index]
