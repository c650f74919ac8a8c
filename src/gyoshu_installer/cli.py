"""CLI commands using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from gyoshu_installer.context import AppContext

import typer
from rich.console import Console

from gyoshu_installer import __version__
from gyoshu_installer.context import create_context
from gyoshu_installer.install import relative_key
from gyoshu_installer.manifest import ManifestError
from gyoshu_installer.orchestrator import AutoInstaller
from gyoshu_installer.tui import TUI, EntryCheck
from gyoshu_installer.validation import check_entry, is_within_root

app = typer.Typer(
    name="gyoshu-installer",
    help="Install Gyoshu research assets into the OpenCode config directory",
    no_args_is_help=True,
)

console = Console()
tui = TUI(console)

TargetOption = Annotated[
    Path | None,
    typer.Option("--target", "-t", help="Target config directory (default: ~/.config/opencode)"),
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"gyoshu-installer v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Install Gyoshu research assets into the OpenCode config directory."""
    pass


@app.command()
def install(
    target: TargetOption = None,
    _context=None,
) -> None:
    """Install or refresh assets, preserving user-modified files."""
    ctx = _context or create_context(target_root=target)

    try:
        auto = AutoInstaller(
            manifest=ctx.load_manifest(),
            installer=ctx.installer,
            state_store=ctx.state_store,
        )
        summary = auto.run()
    except ManifestError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e
    except OSError as e:
        tui.show_error(f"Cannot prepare {ctx.config.target_root}: {e}")
        raise typer.Exit(1) from e

    tui.show_summary(summary)
    if summary.errors:
        raise typer.Exit(1)
    tui.show_success(f"Gyoshu assets are up to date in {ctx.config.target_root}")


def _check_entries(ctx: AppContext) -> list[EntryCheck]:
    """Check every manifest entry for presence in the target root.

    Raises:
        ManifestError: If the manifest cannot be loaded.
    """
    manifest = ctx.load_manifest()
    checks = []
    for category, entry in manifest.entries():
        key = relative_key(category, entry)
        reason = check_entry(category, entry)
        path = ctx.config.target_root / category / entry
        if reason is None and not is_within_root(path, ctx.config.target_root):
            reason = f"Invalid path '{entry}': resolves outside {ctx.config.target_root}"
        if reason:
            checks.append(EntryCheck(path=key, present=False, error=reason))
            continue
        checks.append(
            EntryCheck(
                path=key,
                present=ctx.filesystem.exists(path),
                symlink=path.is_symlink(),
            )
        )
    return checks


@app.command()
def check(
    target: TargetOption = None,
    _context=None,
) -> None:
    """Verify that every manifest entry is present."""
    ctx = _context or create_context(target_root=target)

    try:
        checks = _check_entries(ctx)
    except ManifestError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e

    tui.show_checks(checks)
    missing = [c for c in checks if not c.present]
    if missing:
        tui.show_error(f"{len(missing)} check(s) failed. Run `gyoshu-installer install` to fix.")
        raise typer.Exit(1)
    tui.show_success("All checks passed! Gyoshu is ready.")


@app.command()
def status(
    target: TargetOption = None,
    _context=None,
) -> None:
    """Show the recorded install state."""
    ctx = _context or create_context(target_root=target)
    tui.show_state(ctx.state_store.load())


if __name__ == "__main__":
    app()
