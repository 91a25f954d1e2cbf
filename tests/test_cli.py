"""Tests for CLI commands using context injection.

Commands accept a _context parameter for dependency injection, so they run
against the in-memory filesystem or a mock instead of the host.
"""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import typer
from typer.testing import CliRunner

from fskit import __version__, cli
from fskit.config import FilesystemSettings
from fskit.context import AppContext
from fskit.errors import OperationFailedError
from fskit.memory import MemoryFilesystem


@pytest.fixture
def memory_context(memory_fs: MemoryFilesystem) -> AppContext:
    """Create an AppContext backed by the sample in-memory tree."""
    return AppContext(filesystem=memory_fs)


@pytest.fixture
def mock_context(mock_filesystem: MagicMock) -> AppContext:
    """Create an AppContext with a mock filesystem."""
    return AppContext(filesystem=mock_filesystem)


class TestQueryCommands:
    """Tests for read-only commands."""

    def test_info(self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test info prints the path kind."""
        cli.info(path="/baseDirectory/test.txt", _context=memory_context)
        assert "file" in capsys.readouterr().out

    def test_info_path_changed_during_checks(self, mock_context: AppContext) -> None:
        """Test inconsistent answers from the filesystem exit with an error."""
        mock_context.filesystem.exists.return_value = False
        mock_context.filesystem.is_file.return_value = True
        with pytest.raises(typer.Exit) as exc_info:
            cli.info(path="/racing.txt", _context=mock_context)
        assert exc_info.value.exit_code == 1

    def test_parent(self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test parent prints the derived directory."""
        cli.parent(path="/parent/child", _context=memory_context)
        assert capsys.readouterr().out.strip() == "/parent"

    def test_ls(self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test ls prints entries in order."""
        cli.list_directory(directory="/baseDirectory/subDirectory", _context=memory_context)
        assert capsys.readouterr().out.split() == ["subFile.txt", "subFile2.txt"]

    def test_ls_empty(self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test ls reports an empty directory."""
        memory_context.filesystem.create_directory("/empty")
        cli.list_directory(directory="/empty", _context=memory_context)
        assert "empty" in capsys.readouterr().out

    def test_ls_not_a_directory(self, memory_context: AppContext) -> None:
        """Test ls exits with an error for a file."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.list_directory(directory="/baseDirectory/test.txt", _context=memory_context)
        assert exc_info.value.exit_code == 1

    def test_cat(self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test cat prints file content verbatim."""
        memory_context.filesystem.create_file("/markup.txt", "[bold]raw[/bold]")
        cli.cat(file="/markup.txt", _context=memory_context)
        assert capsys.readouterr().out == "[bold]raw[/bold]"

    def test_cat_missing(self, memory_context: AppContext) -> None:
        """Test cat exits with an error for a missing file."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.cat(file="/missing.txt", _context=memory_context)
        assert exc_info.value.exit_code == 1


class TestMutatingCommands:
    """Tests for commands that change the filesystem."""

    def test_chmod(self, memory_context: AppContext) -> None:
        """Test chmod parses the octal mode."""
        cli.chmod(path="/baseDirectory/test.txt", mode="755", _context=memory_context)
        assert memory_context.filesystem.is_executable("/baseDirectory/test.txt") is True

    def test_chmod_invalid_mode(self, memory_context: AppContext) -> None:
        """Test a non-octal mode exits with an error."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.chmod(path="/baseDirectory/test.txt", mode="rwx", _context=memory_context)
        assert exc_info.value.exit_code == 1

    def test_chmod_refused(self, mock_context: AppContext) -> None:
        """Test a refused chmod exits with an error."""
        mock_context.filesystem.chmod.return_value = False
        with pytest.raises(typer.Exit):
            cli.chmod(path="/x", mode="644", _context=mock_context)

    def test_mkdir(self, mock_context: AppContext) -> None:
        """Test mkdir passes mode and recursive flag through."""
        cli.mkdir(path="/a/b", mode="700", recursive=False, _context=mock_context)
        mock_context.filesystem.create_directory.assert_called_once_with("/a/b", 0o700, False)

    def test_mkdir_default_mode(self, mock_context: AppContext) -> None:
        """Test mkdir defaults to 0755 and recursive creation."""
        cli.mkdir(path="/a/b", _context=mock_context)
        mock_context.filesystem.create_directory.assert_called_once_with("/a/b", 0o755, True)

    def test_mkdir_mode_from_settings(self, mock_filesystem: MagicMock) -> None:
        """Test mkdir without --mode uses the configured directory mode."""
        ctx = AppContext(
            filesystem=mock_filesystem, settings=FilesystemSettings(directory_mode=0o700)
        )
        cli.mkdir(path="/a/b", _context=ctx)
        mock_filesystem.create_directory.assert_called_once_with("/a/b", 0o700, True)

    def test_mkdir_conflict(self, memory_context: AppContext) -> None:
        """Test mkdir over a file exits with an error."""
        with pytest.raises(typer.Exit):
            cli.mkdir(path="/baseDirectory/test.txt", _context=memory_context)

    def test_write(self, memory_context: AppContext) -> None:
        """Test write creates a file with the given content."""
        cli.write(path="/new/file.txt", content="hello", _context=memory_context)
        assert memory_context.filesystem.read_file("/new/file.txt") == "hello"

    def test_write_from_stdin(
        self, memory_context: AppContext, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test write reads stdin when no content is given."""
        monkeypatch.setattr("sys.stdin", io.StringIO("piped"))
        cli.write(path="/piped.txt", _context=memory_context)
        assert memory_context.filesystem.read_file("/piped.txt") == "piped"

    def test_write_existing_needs_force(self, memory_context: AppContext) -> None:
        """Test write refuses to overwrite without --force."""
        with pytest.raises(typer.Exit):
            cli.write(path="/baseDirectory/test.txt", content="x", _context=memory_context)
        cli.write(path="/baseDirectory/test.txt", content="x", force=True, _context=memory_context)
        assert memory_context.filesystem.read_file("/baseDirectory/test.txt") == "x"

    def test_rm(self, memory_context: AppContext) -> None:
        """Test rm deletes a file."""
        cli.remove(path="/baseDirectory/test.txt", _context=memory_context)
        assert memory_context.filesystem.exists("/baseDirectory/test.txt") is False

    def test_rm_missing_warns(
        self, memory_context: AppContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test rm of a missing path succeeds with a warning."""
        cli.remove(path="/missing.txt", _context=memory_context)
        assert "does not exist" in capsys.readouterr().out

    def test_rm_directory_needs_recursive(self, memory_context: AppContext) -> None:
        """Test rm of a populated directory requires -r."""
        with pytest.raises(typer.Exit):
            cli.remove(path="/baseDirectory", _context=memory_context)
        cli.remove(path="/baseDirectory", recursive=True, _context=memory_context)
        assert memory_context.filesystem.exists("/baseDirectory") is False

    def test_mv(self, memory_context: AppContext) -> None:
        """Test mv renames a path."""
        cli.move(src="/baseDirectory/test.txt", dest="/moved.txt", _context=memory_context)
        assert memory_context.filesystem.read_file("/moved.txt") == "test"

    def test_mv_failure(self, mock_context: AppContext) -> None:
        """Test an OS failure during mv exits with an error."""
        mock_context.filesystem.rename.side_effect = OperationFailedError("denied", "/a")
        with pytest.raises(typer.Exit) as exc_info:
            cli.move(src="/a", dest="/b", _context=mock_context)
        assert exc_info.value.exit_code == 1

    def test_cp(self, memory_context: AppContext) -> None:
        """Test cp copies a directory tree."""
        cli.copy(src="/baseDirectory", dest="/backup", _context=memory_context)
        assert memory_context.filesystem.read_file("/backup/subDirectory/subFile.txt") == "subFile"

    def test_cp_force(self, mock_context: AppContext) -> None:
        """Test --force becomes the overwrite flag."""
        cli.copy(src="/a", dest="/b", force=True, _context=mock_context)
        mock_context.filesystem.copy.assert_called_once_with("/a", "/b", True)


class TestApp:
    """Tests for the Typer application."""

    def test_version(self) -> None:
        """Test --version prints the version."""
        result = CliRunner().invoke(cli.app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_bad_config_exits(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a missing settings file stops the command."""
        monkeypatch.setattr(cli, "_config_path", tmp_path / "missing.yaml")
        with pytest.raises(typer.Exit) as exc_info:
            cli.parent(path="/a/b")
        assert exc_info.value.exit_code == 1
