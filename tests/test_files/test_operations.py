"""Tests for access-checked file operations."""

import errno
import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from localwork.files import (
    AccessDeniedError,
    AlreadyExistsError,
    FileIOError,
    GrantRegistry,
    NotFoundError,
    create_file,
    delete_file,
    list_directory,
    move_file,
    read_file,
    write_file,
)


class TestListDirectory:
    """Test list_directory."""

    def test_lists_entries_with_metadata(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test entries carry name, path, type, size and mtime."""
        (workspace / "a.txt").write_text("hello")
        (workspace / "sub").mkdir()

        entries = {e.name: e for e in list_directory(registry, str(workspace))}

        assert set(entries) == {"a.txt", "sub"}
        assert entries["a.txt"].is_directory is False
        assert entries["a.txt"].size == 5
        assert entries["a.txt"].path == str(workspace / "a.txt")
        assert entries["a.txt"].modified > 0
        assert entries["sub"].is_directory is True

    def test_preserves_iteration_order(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test entries come back in os.scandir order, not sorted."""
        for name in ["b", "c", "a"]:
            (workspace / name).write_text(name)

        with os.scandir(workspace) as it:
            expected = [e.name for e in it]

        assert [e.name for e in list_directory(registry, str(workspace))] == expected

    def test_empty_directory(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test an empty directory yields an empty list."""
        assert list_directory(registry, str(workspace)) == []

    def test_missing_directory(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test a missing directory raises NotFoundError."""
        with pytest.raises(NotFoundError, match="not found"):
            list_directory(registry, str(workspace / "nope"))

    def test_path_is_a_file(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test listing a regular file raises FileIOError."""
        target = workspace / "f.txt"
        target.write_text("x")
        with pytest.raises(FileIOError, match="Failed to read directory"):
            list_directory(registry, str(target))

    def test_metadata_failure_resolves_to_zero(
        self, registry: GrantRegistry, workspace: Path
    ) -> None:
        """Test unreadable metadata yields size/modified of 0 rather than an error."""
        class BrokenEntry:
            name = "a.txt"
            path = str(workspace / "a.txt")

            def is_dir(self) -> bool:
                return False

            def stat(self) -> os.stat_result:
                raise OSError("stat failed")

        scandir = MagicMock()
        scandir.return_value.__enter__.return_value = iter([BrokenEntry()])
        with patch("localwork.files.operations.os.scandir", scandir):
            entries = list_directory(registry, str(workspace))

        assert len(entries) == 1
        assert entries[0].name == "a.txt"
        assert entries[0].size == 0
        assert entries[0].modified == 0

    def test_access_denied(self, tmp_path: Path) -> None:
        """Test listing an ungranted directory fails before touching the disk."""
        registry = GrantRegistry()
        with patch("localwork.files.operations.os.scandir") as scandir:
            with pytest.raises(AccessDeniedError, match="Access denied"):
                list_directory(registry, str(tmp_path))
            scandir.assert_not_called()


class TestReadWrite:
    """Test read_file and write_file."""

    def test_write_then_read(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test written content reads back unchanged."""
        path = str(workspace / "notes.txt")
        write_file(registry, path, "line one\nline two\n")
        assert read_file(registry, path) == "line one\nline two\n"

    def test_read_preserves_line_endings(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test CRLF content is returned verbatim."""
        target = workspace / "crlf.txt"
        target.write_bytes(b"a\r\nb\r\n")
        assert read_file(registry, str(target)) == "a\r\nb\r\n"

    def test_write_overwrites_existing(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test write_file truncates existing content."""
        target = workspace / "f.txt"
        target.write_text("a much longer original content")
        write_file(registry, str(target), "short")
        assert target.read_text() == "short"

    def test_read_missing_file(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test reading a missing file raises NotFoundError."""
        with pytest.raises(NotFoundError):
            read_file(registry, str(workspace / "missing.txt"))

    def test_read_binary_file(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test reading non-UTF-8 bytes raises FileIOError."""
        target = workspace / "blob.bin"
        target.write_bytes(b"\xff\xfe\x00\x80")
        with pytest.raises(FileIOError, match="not valid UTF-8"):
            read_file(registry, str(target))

    def test_read_directory(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test reading a directory raises FileIOError."""
        with pytest.raises(FileIOError):
            read_file(registry, str(workspace))

    def test_write_into_missing_directory(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test writing below a missing directory raises FileIOError."""
        with pytest.raises(FileIOError, match="Failed to write file"):
            write_file(registry, str(workspace / "nope" / "f.txt"), "x")

    def test_read_denied(self, registry: GrantRegistry) -> None:
        """Test reading outside every grant is denied."""
        with pytest.raises(AccessDeniedError, match="Access denied"):
            read_file(registry, "/etc/passwd")

    def test_write_denied_has_no_side_effects(self, tmp_path: Path) -> None:
        """Test a denied write creates nothing."""
        registry = GrantRegistry()
        target = tmp_path / "outside.txt"
        with pytest.raises(AccessDeniedError):
            write_file(registry, str(target), "x")
        assert not target.exists()

    def test_sibling_with_shared_prefix_is_writable(self, tmp_path: Path) -> None:
        """Test the string-prefix policy covers sibling directories sharing the prefix."""
        (tmp_path / "docs-backup").mkdir()
        registry = GrantRegistry()
        registry.grant(str(tmp_path / "docs"))

        target = tmp_path / "docs-backup" / "f.txt"
        write_file(registry, str(target), "x")
        assert target.read_text() == "x"


class TestCreateFile:
    """Test create_file."""

    def test_create_new_file(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test creating a new file writes its content."""
        target = workspace / "a.txt"
        create_file(registry, str(target), "hi")
        assert target.read_text() == "hi"

    def test_create_existing_file_fails(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test creating over an existing file fails and leaves it untouched."""
        target = workspace / "a.txt"
        target.write_text("original")

        with pytest.raises(AlreadyExistsError, match="already exists"):
            create_file(registry, str(target), "replacement")

        assert target.read_text() == "original"

    def test_create_over_directory_fails(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test creating at a directory path reports it already exists."""
        (workspace / "sub").mkdir()
        with pytest.raises(AlreadyExistsError):
            create_file(registry, str(workspace / "sub"), "x")

    def test_create_denied(self, tmp_path: Path) -> None:
        """Test create_file outside grants is denied."""
        registry = GrantRegistry()
        with pytest.raises(AccessDeniedError):
            create_file(registry, str(tmp_path / "a.txt"), "x")
        assert not (tmp_path / "a.txt").exists()


class TestDeleteFile:
    """Test delete_file."""

    def test_delete_existing(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test deleting removes the file."""
        target = workspace / "a.txt"
        target.write_text("x")
        delete_file(registry, str(target))
        assert not target.exists()

    def test_delete_missing(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test deleting a missing file raises NotFoundError."""
        with pytest.raises(NotFoundError):
            delete_file(registry, str(workspace / "missing.txt"))

    def test_delete_directory_refused(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test deleting a directory raises FileIOError."""
        (workspace / "sub").mkdir()
        with pytest.raises(FileIOError, match="Failed to delete file"):
            delete_file(registry, str(workspace / "sub"))
        assert (workspace / "sub").is_dir()

    def test_delete_denied(self, tmp_path: Path) -> None:
        """Test deleting outside grants is denied and the file survives."""
        target = tmp_path / "keep.txt"
        target.write_text("x")
        with pytest.raises(AccessDeniedError):
            delete_file(GrantRegistry(), str(target))
        assert target.exists()


class TestMoveFile:
    """Test move_file."""

    def test_move_within_grant(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test a move leaves only the destination, with the original content."""
        src = workspace / "a.txt"
        dest = workspace / "b.txt"
        src.write_text("payload")

        move_file(registry, str(src), str(dest))

        assert not src.exists()
        assert dest.read_text() == "payload"

    def test_move_replaces_existing_destination(
        self, registry: GrantRegistry, workspace: Path
    ) -> None:
        """Test an existing destination file is replaced."""
        src = workspace / "a.txt"
        dest = workspace / "b.txt"
        src.write_text("new")
        dest.write_text("old")

        move_file(registry, str(src), str(dest))

        assert dest.read_text() == "new"

    def test_move_between_grants(self, tmp_path: Path) -> None:
        """Test moving between two separately granted roots."""
        (tmp_path / "one").mkdir()
        (tmp_path / "two").mkdir()
        registry = GrantRegistry()
        registry.grant(str(tmp_path / "one"))
        registry.grant(str(tmp_path / "two"))
        (tmp_path / "one" / "f.txt").write_text("x")

        move_file(registry, str(tmp_path / "one" / "f.txt"), str(tmp_path / "two" / "f.txt"))

        assert (tmp_path / "two" / "f.txt").read_text() == "x"

    def test_move_unauthorized_destination(
        self, registry: GrantRegistry, workspace: Path, tmp_path: Path
    ) -> None:
        """Test an ungranted destination fails closed and leaves the source."""
        src = workspace / "a.txt"
        src.write_text("x")
        dest = tmp_path / "elsewhere.txt"

        with pytest.raises(AccessDeniedError, match="source or destination"):
            move_file(registry, str(src), str(dest))

        assert src.exists()
        assert not dest.exists()

    def test_move_unauthorized_source(
        self, registry: GrantRegistry, workspace: Path, tmp_path: Path
    ) -> None:
        """Test an ungranted source fails closed."""
        src = tmp_path / "outside.txt"
        src.write_text("x")

        with pytest.raises(AccessDeniedError):
            move_file(registry, str(src), str(workspace / "in.txt"))

        assert src.exists()
        assert not (workspace / "in.txt").exists()

    def test_move_missing_source(self, registry: GrantRegistry, workspace: Path) -> None:
        """Test moving a missing file raises NotFoundError."""
        with pytest.raises(NotFoundError):
            move_file(registry, str(workspace / "nope.txt"), str(workspace / "b.txt"))

    def test_move_cross_device_falls_back_to_copy(
        self, registry: GrantRegistry, workspace: Path
    ) -> None:
        """Test EXDEV rename failures fall back to copy-then-delete."""
        src = workspace / "a.txt"
        dest = workspace / "b.txt"
        src.write_text("payload")

        cross_device = OSError(errno.EXDEV, "Invalid cross-device link")
        with patch("localwork.files.operations.os.replace", side_effect=cross_device):
            move_file(registry, str(src), str(dest))

        assert not src.exists()
        assert dest.read_text() == "payload"


def test_worked_example(tmp_path: Path) -> None:
    """Test the create/create/read/denied-read sequence end to end."""
    ws = tmp_path / "ws"
    ws.mkdir()
    registry = GrantRegistry()
    registry.grant(str(ws))
    target = str(ws / "a.txt")

    create_file(registry, target, "hi")
    assert (ws / "a.txt").read_text() == "hi"

    with pytest.raises(AlreadyExistsError, match="already exists"):
        create_file(registry, target, "hi")

    assert read_file(registry, target) == "hi"

    with pytest.raises(AccessDeniedError, match="Access denied"):
        read_file(registry, "/etc/passwd")
