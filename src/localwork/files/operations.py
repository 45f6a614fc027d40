"""Access-checked filesystem operations.

Every operation verifies that each path argument is covered by a grant in
the registry before touching the filesystem. Failures are raised as
FileOperationError subclasses; the tool dispatcher turns them into text.
"""

import errno
import os
import shutil

from localwork.files.errors import (
    AccessDeniedError,
    AlreadyExistsError,
    FileIOError,
    NotFoundError,
)
from localwork.files.permissions import GrantRegistry
from localwork.files.types import FileInfo
from localwork.telemetry import ACCESS_DENIED, get_logger

log = get_logger(__name__)


def _require_authorized(registry: GrantRegistry, operation: str, *paths: str) -> None:
    """Raise AccessDeniedError unless every path is granted (one registry snapshot)."""
    if registry.is_authorized_all(*paths):
        return

    log.warning(ACCESS_DENIED, operation=operation, paths=list(paths))
    if len(paths) > 1:
        raise AccessDeniedError("Access denied: source or destination not in granted folder")
    raise AccessDeniedError(f"Access denied: {paths[0]} is not in a granted folder")


def _entry_info(entry: os.DirEntry[str]) -> FileInfo:
    try:
        is_directory = entry.is_dir()
    except OSError:
        is_directory = False

    try:
        stat = entry.stat()
        size, modified = stat.st_size, int(stat.st_mtime)
    except OSError:
        size, modified = 0, 0

    return FileInfo(
        name=entry.name,
        path=entry.path,
        is_directory=is_directory,
        size=max(size, 0),
        modified=max(modified, 0),
    )


def list_directory(registry: GrantRegistry, path: str) -> list[FileInfo]:
    """List a directory in filesystem iteration order.

    Args:
        registry: Grant registry to authorize against.
        path: Directory to list.

    Returns:
        One FileInfo per entry. Unreadable metadata resolves to 0.

    Raises:
        AccessDeniedError: If path is not granted.
        NotFoundError: If the directory does not exist.
        FileIOError: If the directory cannot be enumerated.
    """
    _require_authorized(registry, "list_directory", path)

    try:
        with os.scandir(path) as entries:
            return [_entry_info(entry) for entry in entries]
    except FileNotFoundError:
        raise NotFoundError(f"Directory not found: {path}") from None
    except OSError as e:
        raise FileIOError(f"Failed to read directory: {e}") from e


def read_file(registry: GrantRegistry, path: str) -> str:
    """Read a whole file as UTF-8 text.

    Raises:
        AccessDeniedError: If path is not granted.
        NotFoundError: If the file does not exist.
        FileIOError: If the file is unreadable or not valid UTF-8.
    """
    _require_authorized(registry, "read_file", path)

    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        raise NotFoundError(f"File not found: {path}") from None
    except UnicodeDecodeError as e:
        raise FileIOError(f"Failed to read file: {path} is not valid UTF-8 text") from e
    except OSError as e:
        raise FileIOError(f"Failed to read file: {e}") from e


def write_file(registry: GrantRegistry, path: str, content: str) -> None:
    """Write content to a file, creating it or truncating existing content.

    Raises:
        AccessDeniedError: If path is not granted.
        FileIOError: If the write fails.
    """
    _require_authorized(registry, "write_file", path)

    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise FileIOError(f"Failed to write file: {e}") from e


def create_file(registry: GrantRegistry, path: str, content: str) -> None:
    """Create a new file; never overwrites.

    Exclusive-create mode makes the existence check and the write one step.

    Raises:
        AccessDeniedError: If path is not granted.
        AlreadyExistsError: If something already exists at path.
        FileIOError: If the write fails.
    """
    _require_authorized(registry, "create_file", path)

    try:
        with open(path, "x", encoding="utf-8", newline="") as f:
            f.write(content)
    except FileExistsError:
        raise AlreadyExistsError(f"File already exists: {path}") from None
    except OSError as e:
        raise FileIOError(f"Failed to create file: {e}") from e


def delete_file(registry: GrantRegistry, path: str) -> None:
    """Delete a file.

    Raises:
        AccessDeniedError: If path is not granted.
        NotFoundError: If the file does not exist.
        FileIOError: If removal is refused (e.g. path is a directory).
    """
    _require_authorized(registry, "delete_file", path)

    try:
        os.remove(path)
    except FileNotFoundError:
        raise NotFoundError(f"File not found: {path}") from None
    except OSError as e:
        raise FileIOError(f"Failed to delete file: {e}") from e


def move_file(registry: GrantRegistry, src: str, dest: str) -> None:
    """Move or rename a file; both endpoints must be granted.

    Uses an atomic rename (replacing dest if it exists). When src and dest
    are on different filesystems the move degrades to copy-then-delete,
    which is NOT atomic: a failure between the two steps can leave both
    copies in place.

    Raises:
        AccessDeniedError: If src or dest is not granted.
        NotFoundError: If src does not exist.
        FileIOError: If the move fails.
    """
    _require_authorized(registry, "move_file", src, dest)

    try:
        os.replace(src, dest)
        return
    except FileNotFoundError:
        if not os.path.lexists(src):
            raise NotFoundError(f"File not found: {src}") from None
        raise FileIOError(f"Failed to move file: no such directory for {dest}") from None
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise FileIOError(f"Failed to move file: {e}") from e

    log.debug("move_file_cross_device_fallback", src=src, dest=dest)
    try:
        shutil.copy2(src, dest)
        os.remove(src)
    except OSError as e:
        raise FileIOError(f"Failed to move file: {e}") from e
