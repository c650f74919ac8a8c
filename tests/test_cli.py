"""Tests for CLI commands using context injection.

Commands accept a _context parameter for dependency injection, so most
tests call them directly against temporary directories.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import typer
from typer.testing import CliRunner

from gyoshu_installer import __version__, cli
from gyoshu_installer.context import AppContext, create_context


@pytest.fixture
def context(source_root: Path, target_root: Path) -> AppContext:
    """Create a real context over temporary directories."""
    return create_context(target_root=target_root, source_root=source_root)


@pytest.fixture
def mock_tui(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Replace the module-level TUI with a mock."""
    tui = MagicMock()
    monkeypatch.setattr(cli, "tui", tui)
    return tui


class TestInstallCommand:
    """Tests for the install command."""

    def test_install_success(
        self, context: AppContext, target_root: Path, mock_tui: MagicMock
    ) -> None:
        """A clean run installs assets and reports the summary."""
        cli.install(_context=context)

        assert (target_root / "command" / "gyoshu.md").exists()
        summary = mock_tui.show_summary.call_args.args[0]
        assert summary.installed == 2
        mock_tui.show_success.assert_called_once()

    def test_install_entry_errors_exit_nonzero(
        self, context: AppContext, write_manifest, mock_tui: MagicMock
    ) -> None:
        """Entry errors are shown and the command exits with 1."""
        write_manifest({"command": ["../escape.md"]})

        with pytest.raises(typer.Exit) as exc_info:
            cli.install(_context=context)

        assert exc_info.value.exit_code == 1
        summary = mock_tui.show_summary.call_args.args[0]
        assert len(summary.errors) == 1

    def test_install_bad_manifest(
        self, context: AppContext, source_root: Path, mock_tui: MagicMock
    ) -> None:
        """A malformed manifest is reported and exits with 1."""
        (source_root / "gyoshu-manifest.json").write_text('{"files": {}}')

        with pytest.raises(typer.Exit) as exc_info:
            cli.install(_context=context)

        assert exc_info.value.exit_code == 1
        assert "Malformed manifest" in mock_tui.show_error.call_args.args[0]


class TestCheckCommand:
    """Tests for the check command."""

    def test_check_all_present(self, context: AppContext, mock_tui: MagicMock) -> None:
        """After an install every entry is reported present."""
        cli.install(_context=context)

        cli.check(_context=context)

        checks = mock_tui.show_checks.call_args.args[0]
        assert [c.path for c in checks] == ["command/gyoshu.md", "skill/rigor"]
        assert all(c.present for c in checks)

    def test_check_missing(self, context: AppContext, mock_tui: MagicMock) -> None:
        """Missing entries fail the check."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.check(_context=context)

        assert exc_info.value.exit_code == 1
        checks = mock_tui.show_checks.call_args.args[0]
        assert not any(c.present for c in checks)

    def test_check_rejects_traversal_entry(
        self,
        context: AppContext,
        mock_tui: MagicMock,
        write_manifest,
        tmp_path: Path,
    ) -> None:
        """Unsafe entries fail the check without probing outside the root."""
        (tmp_path / "outside.md").write_text("not ours")
        write_manifest({"command": ["../../../outside.md"]})

        with pytest.raises(typer.Exit) as exc_info:
            cli.check(_context=context)

        assert exc_info.value.exit_code == 1
        [result] = mock_tui.show_checks.call_args.args[0]
        assert result.present is False
        assert "parent-directory" in result.error


class TestStatusCommand:
    """Tests for the status command."""

    def test_status_before_install(self, context: AppContext, mock_tui: MagicMock) -> None:
        """No state is shown before the first install."""
        cli.status(_context=context)

        mock_tui.show_state.assert_called_once_with(None)

    def test_status_after_install(self, context: AppContext, mock_tui: MagicMock) -> None:
        """The recorded ownership is shown after an install."""
        cli.install(_context=context)

        cli.status(_context=context)

        state = mock_tui.show_state.call_args.args[0]
        assert state.files == {"command/gyoshu.md", "skill/rigor"}


class TestCliRunner:
    """End-to-end invocation through Typer."""

    def test_version(self) -> None:
        result = CliRunner().invoke(cli.app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_install_with_target(self, temp_home: Path, tmp_path: Path) -> None:
        """The bundled assets install into the --target directory."""
        target = tmp_path / "custom-target"

        result = CliRunner().invoke(cli.app, ["install", "--target", str(target)])

        assert result.exit_code == 0, result.output
        assert (target / ".gyoshu" / "install.json").exists()
        assert not (temp_home / ".config" / "opencode").exists()

        check = CliRunner().invoke(cli.app, ["check", "--target", str(target)])
        assert check.exit_code == 0, check.output
