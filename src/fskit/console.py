"""Rich output for the command-line interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from fskit.types import PathInfo


class Presenter:
    """Renders command results and messages to the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize presenter.

        Args:
            console: Console to print to. A new one is created when omitted.
        """
        self.console = console or Console()

    def show_listing(self, directory: str, names: list[str]) -> None:
        """Display directory entries.

        Args:
            directory: The listed directory.
            names: Entry names in listing order.
        """
        if not names:
            self.console.print(f"[yellow]{escape(directory)} is empty[/yellow]")
            return

        for name in names:
            self.console.print(name, markup=False, highlight=False)

    def show_path_info(self, info: PathInfo) -> None:
        """Display all predicates for a path.

        Args:
            info: Snapshot to display.
        """
        table = Table(title=escape(info.path))
        table.add_column("Check", style="cyan")
        table.add_column("Result")

        rows = [
            ("kind", info.kind.value),
            ("exists", info.exists),
            ("file", info.is_file),
            ("directory", info.is_directory),
            ("symlink", info.is_symlink),
            ("readable", info.readable),
            ("writable", info.writable),
            ("executable", info.executable),
        ]
        for label, value in rows:
            if isinstance(value, bool):
                value = "[green]yes[/green]" if value else "[dim]no[/dim]"
            table.add_row(label, value)

        self.console.print(table)

    def show_text(self, text: str) -> None:
        """Print raw text without markup processing."""
        self.console.print(text, markup=False, highlight=False, end="")

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def show_warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {escape(message)}")
