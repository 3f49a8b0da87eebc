"""Duplicate detection and precedence for same-named entities.

When an agent, skill or command of the same name exists in more than one
place, the tool picks one by precedence: project-scoped definitions shadow
global ones. Each member of a group gets a ``precedence`` rank where lower
wins; project members are ranked ``0, 1, ...`` in discovery order and
global members ``100, 101, ...`` after them (or right after the last
project rank when a group has more than 100 project members), so every
project member outranks every global one.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from agentstudio.models import (
    BaseEntity,
    DuplicateEntity,
    DuplicateGroup,
    EntityKind,
    Scope,
)

GLOBAL_PRECEDENCE_OFFSET = 100


def _group_by_name(entities: Iterable[BaseEntity]) -> dict[str, list[BaseEntity]]:
    groups: dict[str, list[BaseEntity]] = {}
    for entity in entities:
        groups.setdefault(entity.name, []).append(entity)
    return groups


def _ranked(members: list[BaseEntity]) -> list[DuplicateEntity]:
    project = [e for e in members if e.scope is Scope.PROJECT]
    global_ = [e for e in members if e.scope is not Scope.PROJECT]
    # Global ranks start after the last project rank.
    offset = max(GLOBAL_PRECEDENCE_OFFSET, len(project))
    ranked = [
        DuplicateEntity(e.id, e.path, e.scope, e.project_path, precedence=i)
        for i, e in enumerate(project)
    ]
    ranked.extend(
        DuplicateEntity(e.id, e.path, e.scope, e.project_path, precedence=offset + i)
        for i, e in enumerate(global_)
    )
    return ranked


def find_duplicates_in(
    agents: Sequence[BaseEntity],
    skills: Sequence[BaseEntity],
    commands: Sequence[BaseEntity],
) -> list[DuplicateGroup]:
    """Group same-named entities per kind and rank each group.

    Args:
        agents: Discovered agents.
        skills: Discovered skills.
        commands: Discovered commands.

    Returns:
        Groups with at least two members, ordered by kind (agent, skill,
        command) and then by name.
    """
    result: list[DuplicateGroup] = []
    for kind, entities in (
        (EntityKind.AGENT, agents),
        (EntityKind.SKILL, skills),
        (EntityKind.COMMAND, commands),
    ):
        groups = _group_by_name(entities)
        for name in sorted(groups):
            members = groups[name]
            if len(members) < 2:
                continue
            result.append(DuplicateGroup(name=name, entity_type=kind, entities=_ranked(members)))
    return result
