"""Filesystem tools exposed to the agent.

Each tool pairs a ToolDefinition with an executor. Executors take the grant
registry plus the call's arguments as keyword arguments and return the
result text; they let FileOperationError propagate to the dispatcher.
"""

from localwork.files import GrantRegistry, operations
from localwork.tools.types import ToolDefinition, ToolParameter


def list_files_executor(registry: GrantRegistry, path: str) -> str:
    """List a directory as one "[DIR]"/"[FILE]" line per entry."""
    files = operations.list_directory(registry, path)
    if not files:
        return "Directory is empty"
    return "\n".join(
        f"{'[DIR]' if f.is_directory else '[FILE]'} {f.name} ({f.path})" for f in files
    )


def read_file_executor(registry: GrantRegistry, path: str) -> str:
    """Return the file contents verbatim."""
    return operations.read_file(registry, path)


def write_file_executor(registry: GrantRegistry, path: str, content: str) -> str:
    operations.write_file(registry, path, content)
    return f"Successfully wrote to {path}"


def create_file_executor(registry: GrantRegistry, path: str, content: str) -> str:
    operations.create_file(registry, path, content)
    return f"Successfully created {path}"


def delete_file_executor(registry: GrantRegistry, path: str) -> str:
    operations.delete_file(registry, path)
    return f"Successfully deleted {path}"


def move_file_executor(registry: GrantRegistry, src: str, dest: str) -> str:
    operations.move_file(registry, src, dest)
    return f"Successfully moved {src} to {dest}"


list_files_tool = ToolDefinition(
    name="list_files",
    description="List files and directories in a given path",
    category="read_only",
    parameters=(
        ToolParameter(
            name="path",
            type="string",
            description="Absolute path to the directory to list",
        ),
    ),
)

read_file_tool = ToolDefinition(
    name="read_file",
    description="Read the contents of a text file",
    category="read_only",
    parameters=(
        ToolParameter(
            name="path",
            type="string",
            description="Absolute path to the file to read",
        ),
    ),
)

write_file_tool = ToolDefinition(
    name="write_file",
    description="Write content to an existing file (overwrites)",
    category="read_write",
    parameters=(
        ToolParameter(
            name="path",
            type="string",
            description="Absolute path to the file to write",
        ),
        ToolParameter(
            name="content",
            type="string",
            description="Content to write to the file",
        ),
    ),
)

create_file_tool = ToolDefinition(
    name="create_file",
    description="Create a new file with content (fails if file already exists)",
    category="read_write",
    parameters=(
        ToolParameter(
            name="path",
            type="string",
            description="Absolute path for the new file",
        ),
        ToolParameter(
            name="content",
            type="string",
            description="Content for the new file",
        ),
    ),
)

delete_file_tool = ToolDefinition(
    name="delete_file",
    description="Delete a file",
    category="read_write",
    parameters=(
        ToolParameter(
            name="path",
            type="string",
            description="Absolute path to the file to delete",
        ),
    ),
)

move_file_tool = ToolDefinition(
    name="move_file",
    description="Move or rename a file",
    category="read_write",
    parameters=(
        ToolParameter(
            name="src",
            type="string",
            description="Absolute path to the source file",
        ),
        ToolParameter(
            name="dest",
            type="string",
            description="Absolute path for the destination",
        ),
    ),
)
