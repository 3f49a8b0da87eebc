"""Tests for entity copy, link, rename, delete, duplicate and create."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from agentstudio.exceptions import EntityOperationError
from agentstudio.operations.entities import (
    MAX_DUPLICATE_ATTEMPTS,
    copy_entity,
    create_agent,
    create_entity,
    create_entity_symlink,
    create_skill,
    delete_entity,
    delete_skill,
    duplicate_entity,
    rename_entity,
)
from agentstudio.parsers.frontmatter import split_frontmatter

from tests.helpers import make_agent, make_command, make_skill


# ---------------------------------------------------------------------------
# Copy
# ---------------------------------------------------------------------------


class TestCopyEntity:
    """Copying into another scope or tool layout."""

    def test_agent_to_project(self, home: Path, project: Path) -> None:
        source = make_agent(home / ".claude" / "agents", "reviewer")
        copied = copy_entity(source, "agent", "project", str(project), home=home)
        assert copied == str(project / ".claude" / "agents" / "reviewer.md")
        assert Path(copied).read_text() == source.read_text()

    def test_new_name_gets_md_suffix(self, home: Path, project: Path) -> None:
        source = make_agent(home / ".claude" / "agents", "reviewer")
        copied = copy_entity(source, "agent", "project", str(project), new_name="critic", home=home)
        assert Path(copied).name == "critic.md"

    def test_skill_copies_directory(self, home: Path, project: Path) -> None:
        manifest = make_skill(project / ".claude" / "skills", "pdf", extra_files=("ref.md",))
        copied = copy_entity(manifest, "skill", "global", home=home)
        assert copied == str(home / ".claude" / "skills" / "pdf" / "SKILL.md")
        assert (home / ".claude" / "skills" / "pdf" / "ref.md").exists()

    def test_opencode_global_layout(self, home: Path, project: Path) -> None:
        source = make_command(project / ".claude" / "commands", "deploy")
        copied = copy_entity(source, "command", "global", tool="opencode", home=home)
        assert copied == str(home / ".config" / "opencode" / "command" / "deploy.md")

    def test_missing_source(self, home: Path) -> None:
        with pytest.raises(EntityOperationError, match="Source file does not exist"):
            copy_entity(home / "nope.md", "agent", "global", home=home)

    def test_project_scope_requires_path(self, home: Path) -> None:
        source = make_agent(home / "src", "a")
        with pytest.raises(EntityOperationError, match="Project path required"):
            copy_entity(source, "agent", "project", home=home)

    def test_unknown_combination(self, home: Path) -> None:
        source = make_agent(home / "src", "a")
        with pytest.raises(EntityOperationError, match="Unknown tool/entity combination: claude/hook"):
            copy_entity(source, "hook", "global", home=home)


# ---------------------------------------------------------------------------
# Symlink
# ---------------------------------------------------------------------------


class TestCreateEntitySymlink:
    """Exposing an entity elsewhere by link."""

    def test_agent_link(self, home: Path, project: Path) -> None:
        source = make_agent(home / ".claude" / "agents", "reviewer")
        link = create_entity_symlink(source, "agent", "project", str(project), home=home)
        assert Path(link).is_symlink()
        assert os.readlink(link) == str(source)

    def test_skill_links_directory(self, home: Path, project: Path) -> None:
        manifest = make_skill(home / ".claude" / "skills", "pdf")
        link = create_entity_symlink(manifest, "skill", "project", str(project), home=home)
        assert link == str(project / ".claude" / "skills" / "pdf")
        assert (Path(link) / "SKILL.md").exists()

    def test_existing_dangling_link_rejected(self, home: Path, project: Path) -> None:
        source = make_agent(home / ".claude" / "agents", "reviewer")
        target_dir = project / ".claude" / "agents"
        target_dir.mkdir(parents=True)
        os.symlink("gone.md", target_dir / "reviewer.md")
        with pytest.raises(EntityOperationError, match="Target already exists"):
            create_entity_symlink(source, "agent", "project", str(project), home=home)


# ---------------------------------------------------------------------------
# Rename / delete / duplicate
# ---------------------------------------------------------------------------


class TestRenameEntity:
    """In-place renames."""

    def test_rename_file(self, tmp_path: Path) -> None:
        source = make_agent(tmp_path, "old")
        renamed = rename_entity(source, "new", "agent")
        assert renamed == str(tmp_path / "new.md")
        assert not source.exists()

    def test_rename_skill_directory(self, tmp_path: Path) -> None:
        manifest = make_skill(tmp_path, "old")
        renamed = rename_entity(manifest, "new", "skill")
        assert renamed == str(tmp_path / "new" / "SKILL.md")
        assert not (tmp_path / "old").exists()

    def test_rename_onto_existing(self, tmp_path: Path) -> None:
        source = make_agent(tmp_path, "a")
        make_agent(tmp_path, "b")
        with pytest.raises(EntityOperationError, match="Target already exists"):
            rename_entity(source, "b.md", "agent")


class TestDeleteEntity:
    """Deletion semantics."""

    def test_symlink_removed_target_kept(self, tmp_path: Path) -> None:
        source = make_agent(tmp_path / "src", "a")
        link = tmp_path / "a.md"
        os.symlink(source, link)
        delete_entity(link, "agent")
        assert not os.path.lexists(link)
        assert source.exists()

    def test_skill_removes_directory(self, tmp_path: Path) -> None:
        manifest = make_skill(tmp_path, "pdf", extra_files=("x.md",))
        delete_entity(manifest, "skill")
        assert not (tmp_path / "pdf").exists()

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(EntityOperationError, match="Entity does not exist"):
            delete_entity(tmp_path / "nope.md", "agent")


class TestDuplicateEntity:
    """``-copy`` naming."""

    def test_successive_copies(self, tmp_path: Path) -> None:
        source = make_agent(tmp_path, "reviewer")
        first = duplicate_entity(source, "agent")
        second = duplicate_entity(source, "agent")
        assert Path(first).name == "reviewer-copy.md"
        assert Path(second).name == "reviewer-copy2.md"

    def test_skill_copy(self, tmp_path: Path) -> None:
        manifest = make_skill(tmp_path, "pdf")
        assert duplicate_entity(manifest, "skill") == str(tmp_path / "pdf-copy" / "SKILL.md")

    def test_exhausted_names(self, tmp_path: Path) -> None:
        source = make_agent(tmp_path, "x")
        (tmp_path / "x-copy.md").write_text("")
        for attempt in range(2, MAX_DUPLICATE_ATTEMPTS + 1):
            (tmp_path / f"x-copy{attempt}.md").write_text("")
        with pytest.raises(EntityOperationError, match="Could not generate unique name"):
            duplicate_entity(source, "agent")


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


class TestCreateEntity:
    """Template-based creation."""

    @pytest.mark.parametrize("kind", ["agent", "skill", "command"])
    def test_template_frontmatter_round_trips(self, home: Path, kind: str) -> None:
        path = create_entity(kind, "helper", "global", home=home)
        frontmatter, _body = split_frontmatter(Path(path).read_text())
        assert frontmatter is not None
        assert "description" in frontmatter
        if kind != "command":
            assert frontmatter["name"] == "helper"

    def test_skill_layout(self, home: Path) -> None:
        path = create_entity("skill", "pdf", "global", home=home)
        assert path == str(home / ".claude" / "skills" / "pdf" / "SKILL.md")

    def test_opencode_project_agent(self, home: Path, project: Path) -> None:
        path = create_entity("agent", "planner", "project", str(project), tool="opencode", home=home)
        assert path == str(project / ".opencode" / "agent" / "planner.md")

    def test_memory_file_names(self, home: Path, project: Path) -> None:
        claude = create_entity("memory", "", "global", home=home)
        opencode = create_entity("memory", "", "project", str(project), tool="opencode", home=home)
        assert claude == str(home / ".claude" / "CLAUDE.md")
        assert opencode == str(project / "AGENTS.md")
        assert "OpenCode" in Path(opencode).read_text()

    def test_explicit_content(self, home: Path) -> None:
        path = create_entity("command", "x", "global", content="custom", home=home)
        assert Path(path).read_text() == "custom"

    def test_unknown_type(self, home: Path) -> None:
        with pytest.raises(EntityOperationError, match="Unknown entity type: plugin"):
            create_entity("plugin", "x", "global", home=home)

    def test_project_scope_requires_path(self, home: Path) -> None:
        with pytest.raises(EntityOperationError, match="Project path required"):
            create_entity("agent", "x", "project", home=home)


class TestExplicitFieldHelpers:
    """create_agent / create_skill / delete_skill."""

    def test_create_agent_fields(self, tmp_path: Path) -> None:
        path = tmp_path / "agents" / "critic.md"
        create_agent(path, "critic", "Finds: problems", ["Read", "Grep"], "opus", "Be critical.")
        frontmatter, body = split_frontmatter(path.read_text())
        assert frontmatter == {
            "name": "critic",
            "description": "Finds: problems",
            "tools": "Read, Grep",
            "model": "opus",
        }
        assert body == "Be critical."

    def test_create_and_delete_skill(self, tmp_path: Path) -> None:
        path = create_skill(tmp_path, "notes", "Take notes", "Write it down.")
        assert path == str(tmp_path / "notes" / "SKILL.md")
        delete_skill(path)
        assert not (tmp_path / "notes").exists()
        delete_skill(tmp_path / "notes")
