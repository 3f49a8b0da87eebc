"""Agent Studio exception hierarchy.

All public exceptions inherit from AgentStudioError, giving callers a single
base class to catch when they want to handle any Agent Studio failure without
swallowing unrelated errors. The message of every exception is meant to be
shown to a user as-is.
"""


class AgentStudioError(Exception):
    """Base exception for all Agent Studio errors."""


class HomeDirectoryError(AgentStudioError):
    """Raised when the home or config directory cannot be resolved.

    This is the only failure allowed to abort a whole discovery call;
    every other discovery problem degrades to "contributes nothing".
    """


class EntityOperationError(AgentStudioError):
    """Raised when a filesystem mutation fails.

    Covers copy, symlink, rename, delete and create operations on entities
    as well as the raw file passthroughs. The underlying OS error message is
    part of the exception message. Multi-step operations stop at the failed
    step; nothing is rolled back.
    """


class ConfigConflictError(EntityOperationError):
    """Raised when an AGENTS.md / CLAUDE.md pairing cannot be fixed automatically.

    Both files carry independent content (or CLAUDE.md links somewhere
    else), so the engine refuses to pick a winner.
    """


class SkillStoreError(AgentStudioError):
    """Raised for skill store failures.

    Covers remote search errors, unreadable or malformed skill lock files,
    and failures to launch the external skills CLI.
    """
