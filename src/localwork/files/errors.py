"""Typed failures raised by access-checked file operations.

These never cross the tool dispatcher: it converts them into result text.
"""


class FileOperationError(Exception):
    """Base exception for all file operation failures."""

    pass


class AccessDeniedError(FileOperationError):
    """Raised when a path is not covered by any grant."""

    pass


class NotFoundError(FileOperationError):
    """Raised when the target file or directory does not exist."""

    pass


class AlreadyExistsError(FileOperationError):
    """Raised when create_file targets an existing path."""

    pass


class FileIOError(FileOperationError):
    """Raised when the underlying filesystem operation fails."""

    pass
