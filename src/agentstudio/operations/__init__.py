"""Entity mutations and raw file operations."""

from agentstudio.operations.entities import (
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
from agentstudio.operations.files import (
    delete_directory,
    delete_file,
    file_exists,
    read_file,
    write_file,
)

__all__ = [
    "copy_entity",
    "create_agent",
    "create_entity",
    "create_entity_symlink",
    "create_skill",
    "delete_directory",
    "delete_entity",
    "delete_file",
    "delete_skill",
    "duplicate_entity",
    "file_exists",
    "read_file",
    "rename_entity",
    "write_file",
]
