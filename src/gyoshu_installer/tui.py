"""Rich console output for the command line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from gyoshu_installer.state import InstallState
    from gyoshu_installer.types import RunSummary


@dataclass
class EntryCheck:
    """Presence of one manifest entry in the target root."""

    path: str
    present: bool
    symlink: bool = False
    error: str | None = None


class TUI:
    """Text User Interface for gyoshu-installer (non-interactive mode)."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize TUI."""
        self.console = console or Console()

    def show_summary(self, summary: RunSummary) -> None:
        """Display the outcome of an install run.

        Args:
            summary: Completed run summary.
        """
        table = Table(title="Install Summary")
        table.add_column("Outcome", style="cyan")
        table.add_column("Count", justify="right")
        table.add_row("Installed", str(summary.installed))
        table.add_row("Updated", str(summary.updated))
        table.add_row("Skipped", str(summary.skipped))
        table.add_row("Errors", str(len(summary.errors)))
        self.console.print(table)

        for error in summary.errors:
            self.show_error(error)
        for warning in summary.warnings:
            self.show_warning(warning)

    def show_state(self, state: InstallState | None) -> None:
        """Display the persisted install state.

        Args:
            state: Loaded state, or None when nothing has been installed.
        """
        if state is None:
            self.console.print("[yellow]No install state recorded[/yellow]")
            return

        self.console.print(f"[bold]Version:[/bold] {state.version}")
        self.console.print(
            f"[bold]Installed:[/bold] {state.installed_at.strftime('%Y-%m-%d %H:%M')}"
        )

        table = Table(title="Owned Files")
        table.add_column("Path", style="cyan")
        for path in sorted(state.files):
            table.add_row(path)
        self.console.print(table)

    def show_checks(self, checks: list[EntryCheck]) -> None:
        """Display presence checks for manifest entries."""
        for check in checks:
            if check.error:
                self.show_error(f"{check.path} ({check.error})")
            elif not check.present:
                self.show_error(f"{check.path} (missing)")
            elif check.symlink:
                self.show_success(f"{check.path} (symlink)")
            else:
                self.show_success(check.path)

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        self.console.print(f"[yellow]![/yellow] {message}")
