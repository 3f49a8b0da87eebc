"""Property-based tests for duplicate grouping and precedence.

- Every group has at least two members, all sharing the group name.
- Within a group every project member outranks every global member.
- Ranks are unique within a group.
- No name appears in two groups of the same kind.
"""
from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from agentstudio.discovery.duplicates import find_duplicates_in
from agentstudio.models import AgentEntity, Scope, Tool

names = st.sampled_from(["reviewer", "planner", "tester", "writer"])


@st.composite
def agents(draw: st.DrawFn) -> list[AgentEntity]:
    """Generate 0-12 agents with colliding names across both scopes."""
    count = draw(st.integers(min_value=0, max_value=12))
    result = []
    for i in range(count):
        name = draw(names)
        is_project = draw(st.booleans())
        project = f"/work/p{i}" if is_project else None
        root = f"{project}/.claude" if project else "/home/u/.claude"
        result.append(
            AgentEntity(
                id=f"agent_{i}",
                name=name,
                path=f"{root}/agents/{name}.md",
                scope=Scope.PROJECT if is_project else Scope.GLOBAL,
                project_path=project,
                is_symlink=False,
                symlink_target=None,
                content="",
                last_modified=0,
                tool=Tool.CLAUDE,
            )
        )
    return result


class TestPrecedenceProperties:
    """Invariants of ``find_duplicates_in``."""

    @given(agents())
    @settings(max_examples=200)
    def test_groups_have_two_or_more_members(self, entities: list[AgentEntity]) -> None:
        for group in find_duplicates_in(entities, [], []):
            assert len(group.entities) >= 2
            ids = {m.id for m in group.entities}
            assert all(e.name == group.name for e in entities if e.id in ids)

    @given(agents())
    @settings(max_examples=200)
    def test_project_members_outrank_global(self, entities: list[AgentEntity]) -> None:
        for group in find_duplicates_in(entities, [], []):
            project = [m.precedence for m in group.entities if m.scope is Scope.PROJECT]
            global_ = [m.precedence for m in group.entities if m.scope is Scope.GLOBAL]
            if project and global_:
                assert max(project) < min(global_)

    @given(agents())
    def test_ranks_unique(self, entities: list[AgentEntity]) -> None:
        for group in find_duplicates_in(entities, [], []):
            ranks = [m.precedence for m in group.entities]
            assert len(ranks) == len(set(ranks))

    @given(agents())
    def test_names_not_repeated_across_groups(self, entities: list[AgentEntity]) -> None:
        groups = find_duplicates_in(entities, [], [])
        group_names = [g.name for g in groups]
        assert len(group_names) == len(set(group_names))
        collisions = {e.name for e in entities if sum(x.name == e.name for x in entities) > 1}
        assert set(group_names) == collisions
