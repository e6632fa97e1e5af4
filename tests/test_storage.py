"""Tests for local keep/delete operations."""

from unittest.mock import MagicMock, patch

import pytest

from filer.exceptions import SourceNotFoundError, TargetDirectoryError
from filer.mover import SafeMover
from filer.storage import FileOperations, LocalFileOperations


@pytest.fixture
def source_dir(tmp_path):
    """Create a source directory with a couple of files."""
    source = tmp_path / "source"
    source.mkdir()
    (source / "a.txt").write_text("hello")
    (source / "b.txt").write_text("world")
    return source


class TestLocalFileOperationsInit:
    """Tests for construction."""

    def test_is_file_operations(self, source_dir):
        assert isinstance(LocalFileOperations(source_dir), FileOperations)

    def test_source_only(self, source_dir):
        operations = LocalFileOperations(source_dir)

        assert operations.source == source_dir
        assert operations.target is None
        assert operations.keeps_in_place

    def test_creates_target_directory(self, source_dir, tmp_path):
        """Test that a missing target is created recursively."""
        target = tmp_path / "kept" / "nested"

        operations = LocalFileOperations(source_dir, target)

        assert target.is_dir()
        assert operations.target == target
        assert not operations.keeps_in_place

    def test_target_creation_failure(self, source_dir, tmp_path):
        """Test that a target blocked by a file is a startup error."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(TargetDirectoryError):
            LocalFileOperations(source_dir, blocker / "target")

    def test_target_same_as_source_keeps_in_place(self, source_dir):
        operations = LocalFileOperations(source_dir, source_dir / ".")

        assert operations.keeps_in_place


class TestKeep:
    """Tests for keep()."""

    def test_keep_without_target_is_noop(self, source_dir):
        operations = LocalFileOperations(source_dir)

        operations.keep("a.txt")

        assert (source_dir / "a.txt").read_text() == "hello"

    def test_keep_without_target_ignores_missing_file(self, source_dir):
        """Test that keeping in place never touches the filesystem."""
        LocalFileOperations(source_dir).keep("does-not-exist.txt")

    def test_keep_moves_to_target(self, source_dir, tmp_path):
        target = tmp_path / "target"
        operations = LocalFileOperations(source_dir, target)

        operations.keep("a.txt")

        assert not (source_dir / "a.txt").exists()
        assert (target / "a.txt").read_text() == "hello"

    def test_keep_uses_mover(self, source_dir, tmp_path):
        mover = MagicMock(spec=SafeMover)
        target = tmp_path / "target"
        operations = LocalFileOperations(source_dir, target, mover=mover)

        operations.keep("a.txt")

        mover.move.assert_called_once_with(source_dir / "a.txt", target / "a.txt")

    def test_keep_does_not_overwrite(self, source_dir, tmp_path):
        """Test that an existing kept file gets a numbered sibling instead."""
        target = tmp_path / "target"
        target.mkdir()
        (target / "a.txt").write_text("earlier")
        (target / "a (1).txt").write_text("earlier too")
        operations = LocalFileOperations(source_dir, target)

        operations.keep("a.txt")

        assert (target / "a.txt").read_text() == "earlier"
        assert (target / "a (2).txt").read_text() == "hello"

    def test_keep_missing_file(self, source_dir, tmp_path):
        operations = LocalFileOperations(source_dir, tmp_path / "target")

        with pytest.raises(SourceNotFoundError):
            operations.keep("missing.txt")

    def test_resolve_conflict_limit(self, source_dir, tmp_path):
        operations = LocalFileOperations(source_dir, tmp_path / "target")

        with patch("filer.storage.local.MAX_CONFLICT_SUFFIX", 2):
            (tmp_path / "target" / "x.txt").touch()
            (tmp_path / "target" / "x (1).txt").touch()
            (tmp_path / "target" / "x (2).txt").touch()

            with pytest.raises(FileExistsError):
                operations._resolve_conflict(tmp_path / "target" / "x.txt")


class TestDelete:
    """Tests for delete()."""

    def test_delete_removes_file(self, source_dir):
        operations = LocalFileOperations(source_dir)

        operations.delete("a.txt")

        assert not (source_dir / "a.txt").exists()
        assert (source_dir / "b.txt").exists()

    def test_delete_missing_file_raises_os_error(self, source_dir):
        """Test that the underlying error is surfaced unchanged."""
        operations = LocalFileOperations(source_dir)

        with pytest.raises(FileNotFoundError):
            operations.delete("missing.txt")
