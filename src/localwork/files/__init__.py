"""Filesystem access layer gated by user grants.

This module provides:
- GrantRegistry: the set of user-authorized roots
- Access-checked file operations (list/read/write/create/delete/move)
- Typed file operation errors
"""

from localwork.files.errors import (
    AccessDeniedError,
    AlreadyExistsError,
    FileIOError,
    FileOperationError,
    NotFoundError,
)
from localwork.files.operations import (
    create_file,
    delete_file,
    list_directory,
    move_file,
    read_file,
    write_file,
)
from localwork.files.permissions import GrantRegistry
from localwork.files.types import FileInfo, Grant

__all__ = [
    "GrantRegistry",
    "Grant",
    "FileInfo",
    # Operations
    "list_directory",
    "read_file",
    "write_file",
    "create_file",
    "delete_file",
    "move_file",
    # Errors
    "FileOperationError",
    "AccessDeniedError",
    "NotFoundError",
    "AlreadyExistsError",
    "FileIOError",
]
