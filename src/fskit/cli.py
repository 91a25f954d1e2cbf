"""CLI commands using Typer."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from fskit.context import AppContext

import typer
from rich.console import Console
from rich.logging import RichHandler

from fskit import __version__
from fskit.config import parse_mode
from fskit.console import Presenter
from fskit.context import create_context
from fskit.errors import FilesystemError
from fskit.types import PathInfo

app = typer.Typer(
    name="fskit",
    help="Uniform file and directory operations",
    no_args_is_help=True,
)

console = Console()
presenter = Presenter(console)

# Settings file chosen with --config, read when the context is created
_config_path: Path | None = None


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"fskit v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route library logging through Rich when verbose output is requested."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log each filesystem call")
    ] = False,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Settings file (YAML)")
    ] = None,
) -> None:
    """Uniform file and directory operations."""
    global _config_path
    _config_path = config
    _configure_logging(verbose)


def _get_context(context: AppContext | None) -> AppContext:
    """Return the injected context or build the production one.

    Raises:
        typer.Exit: If the settings file cannot be loaded.
    """
    if context is not None:
        return context
    try:
        return create_context(_config_path)
    except (FileNotFoundError, ValueError) as e:
        presenter.show_error(str(e))
        raise typer.Exit(1) from e


def _fail(error: Exception) -> typer.Exit:
    """Report an error and build the exit to raise."""
    presenter.show_error(str(error))
    return typer.Exit(1)


def _parse_mode_option(value: str) -> int:
    """Parse an octal mode argument.

    Raises:
        typer.Exit: If the value is not an octal number.
    """
    try:
        return parse_mode(value)
    except ValueError as e:
        raise _fail(e) from e


# ============================================================================
# Query Commands
# ============================================================================


@app.command()
def info(
    path: Annotated[str, typer.Argument(help="Path to inspect")],
    _context=None,
) -> None:
    """Show existence, kind and permission checks for a path."""
    ctx = _get_context(_context)
    try:
        path_info = PathInfo.from_filesystem(ctx.filesystem, path)
    except ValueError as e:
        # The path changed kind between two checks
        raise _fail(e) from e
    presenter.show_path_info(path_info)


@app.command()
def parent(
    path: Annotated[str, typer.Argument(help="File or directory path")],
    _context=None,
) -> None:
    """Print the parent directory of a path."""
    ctx = _get_context(_context)
    console.print(ctx.filesystem.get_parent_directory(path), markup=False, highlight=False)


@app.command("ls")
def list_directory(
    directory: Annotated[str, typer.Argument(help="Directory to list")] = ".",
    _context=None,
) -> None:
    """List the entries of a directory."""
    ctx = _get_context(_context)
    try:
        names = ctx.filesystem.list_directory(directory)
    except FilesystemError as e:
        raise _fail(e) from e
    presenter.show_listing(directory, names)


@app.command()
def cat(
    file: Annotated[str, typer.Argument(help="File to print")],
    _context=None,
) -> None:
    """Print the content of a file."""
    ctx = _get_context(_context)
    try:
        content = ctx.filesystem.read_file(file)
    except FilesystemError as e:
        raise _fail(e) from e
    presenter.show_text(content)


# ============================================================================
# Mutating Commands
# ============================================================================


@app.command()
def chmod(
    path: Annotated[str, typer.Argument(help="File or directory")],
    mode: Annotated[str, typer.Argument(help="Octal mode, e.g. 644")],
    _context=None,
) -> None:
    """Change the permissions of a path."""
    ctx = _get_context(_context)
    numeric = _parse_mode_option(mode)
    if not ctx.filesystem.chmod(path, numeric):
        presenter.show_error(f"Could not change mode of {path}")
        raise typer.Exit(1)
    presenter.show_success(f"Set mode {numeric:o} on {path}")


@app.command()
def mkdir(
    path: Annotated[str, typer.Argument(help="Directory to create")],
    mode: Annotated[
        str | None, typer.Option("--mode", "-m", help="Octal mode for the directory")
    ] = None,
    recursive: Annotated[
        bool, typer.Option("--recursive/--no-recursive", help="Create missing parents")
    ] = True,
    _context=None,
) -> None:
    """Create a directory."""
    ctx = _get_context(_context)
    numeric = _parse_mode_option(mode) if mode else ctx.settings.directory_mode
    try:
        ctx.filesystem.create_directory(path, numeric, recursive)
    except FilesystemError as e:
        raise _fail(e) from e
    presenter.show_success(f"Created directory {path}")


@app.command()
def write(
    path: Annotated[str, typer.Argument(help="File to create")],
    content: Annotated[
        str | None, typer.Option("--content", help="Text to write (stdin when omitted)")
    ] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing path")] = False,
    _context=None,
) -> None:
    """Create a file with the given content."""
    ctx = _get_context(_context)
    data = content if content is not None else sys.stdin.read()
    try:
        written = ctx.filesystem.create_file(path, data, force)
    except FilesystemError as e:
        raise _fail(e) from e
    presenter.show_success(f"Wrote {written} bytes to {path}")


@app.command("rm")
def remove(
    path: Annotated[str, typer.Argument(help="File or directory to delete")],
    recursive: Annotated[
        bool, typer.Option("--recursive", "-r", help="Delete directories with their contents")
    ] = False,
    _context=None,
) -> None:
    """Delete a file or directory."""
    ctx = _get_context(_context)
    existed = ctx.filesystem.exists(path) or ctx.filesystem.is_symlink(path)
    try:
        ctx.filesystem.delete(path, recursive)
    except FilesystemError as e:
        raise _fail(e) from e
    if existed:
        presenter.show_success(f"Deleted {path}")
    else:
        presenter.show_warning(f"{path} does not exist")


@app.command("mv")
def move(
    src: Annotated[str, typer.Argument(help="Existing path")],
    dest: Annotated[str, typer.Argument(help="New path")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing path")] = False,
    _context=None,
) -> None:
    """Rename a file or directory."""
    ctx = _get_context(_context)
    try:
        ctx.filesystem.rename(src, dest, force)
    except FilesystemError as e:
        raise _fail(e) from e
    presenter.show_success(f"Renamed {src} to {dest}")


@app.command("cp")
def copy(
    src: Annotated[str, typer.Argument(help="File or directory to copy")],
    dest: Annotated[str, typer.Argument(help="Destination path")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite existing paths")] = False,
    _context=None,
) -> None:
    """Copy a file or directory tree."""
    ctx = _get_context(_context)
    try:
        ctx.filesystem.copy(src, dest, force)
    except FilesystemError as e:
        raise _fail(e) from e
    presenter.show_success(f"Copied {src} to {dest}")


if __name__ == "__main__":
    app()
