"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from gyoshu_installer.config import InstallerConfig
from gyoshu_installer.install import Installer

COMMAND_CONTENT = b"---\ndescription: Start a research session\n---\n\nResearch: $ARGUMENTS\n"
SKILL_CONTENT = b"---\nname: rigor\n---\n\n# Rigor\n"
SKILL_SCRIPT = b"print('check')\n"


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    return home


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    """Create an asset directory with one command and one skill bundle."""
    root = tmp_path / "assets"
    (root / "command").mkdir(parents=True)
    (root / "command" / "gyoshu.md").write_bytes(COMMAND_CONTENT)

    skill_dir = root / "skill" / "rigor"
    (skill_dir / "scripts").mkdir(parents=True)
    (skill_dir / "SKILL.md").write_bytes(SKILL_CONTENT)
    (skill_dir / "scripts" / "check.py").write_bytes(SKILL_SCRIPT)

    manifest = {"version": "1.0.0", "files": {"command": ["gyoshu.md"], "skill": ["rigor"]}}
    (root / "gyoshu-manifest.json").write_text(json.dumps(manifest))
    return root


@pytest.fixture
def target_root(tmp_path: Path) -> Path:
    """Return a not-yet-created target config directory."""
    return tmp_path / "config" / "opencode"


@pytest.fixture
def config(source_root: Path, target_root: Path) -> InstallerConfig:
    """Create an installer configuration pointing at temporary directories."""
    return InstallerConfig.create(target_root=target_root, source_root=source_root)


@pytest.fixture
def installer(source_root: Path, target_root: Path) -> Installer:
    """Create an Installer with the real filesystem."""
    installer = Installer.create(source_root=source_root, target_root=target_root)
    installer.ensure_target_root()
    return installer


@pytest.fixture
def write_manifest(source_root: Path):
    """Return a helper that rewrites the test manifest."""

    def _write(files: dict[str, list[str]], version: str = "1.0.0") -> Path:
        path = source_root / "gyoshu-manifest.json"
        path.write_text(json.dumps({"version": version, "files": files}))
        return path

    return _write


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    return fs
