"""Default content for newly created entities.

The frontmatter blocks are plain ``key: value`` lines that
``split_frontmatter`` parses back into the same mapping.
"""

from __future__ import annotations

from agentstudio.models import Tool

AGENT_TEMPLATE = """\
---
name: {name}
description: A custom agent
tools: Read, Grep, Glob
model: sonnet
---

You are a specialized agent.

When invoked:
1. Analyze the task
2. Execute appropriate actions
3. Report results
"""

SKILL_TEMPLATE = """\
---
name: {name}
description: A custom skill
---

# {name} Skill

## When to use this skill

Use this skill when...

## Instructions

Follow these steps...
"""

COMMAND_TEMPLATE = """\
---
description: A custom command
---

# {name} Command

$ARGUMENTS
"""

MEMORY_TEMPLATE = """\
# Project Memory

## Overview

This file contains project-specific context and instructions for {tool_name}.

## Guidelines

- ...
"""

_TOOL_NAMES = {Tool.CLAUDE: "Claude", Tool.OPENCODE: "OpenCode"}


def agent_template(name: str) -> str:
    return AGENT_TEMPLATE.format(name=name)


def skill_template(name: str) -> str:
    return SKILL_TEMPLATE.format(name=name)


def command_template(name: str) -> str:
    return COMMAND_TEMPLATE.format(name=name)


def memory_template(tool: Tool) -> str:
    return MEMORY_TEMPLATE.format(tool_name=_TOOL_NAMES[tool])
