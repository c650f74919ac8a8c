"""Installer configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gyoshu_installer.manifest import ASSETS_DIR, MANIFEST_FILE
from gyoshu_installer.state import default_state_file


def default_target_root() -> Path:
    """Return the OpenCode configuration directory.

    Returns:
        Path to ~/.config/opencode
    """
    return Path.home() / ".config" / "opencode"


@dataclass(frozen=True)
class InstallerConfig:
    """Locations used by one install run.

    Attributes:
        target_root: Directory receiving the assets.
        source_root: Directory holding the assets, one subdirectory per category.
        manifest_path: Manifest JSON file.
        state_file: Install-state JSON file.
    """

    target_root: Path
    source_root: Path
    manifest_path: Path
    state_file: Path

    @classmethod
    def create(
        cls,
        target_root: Path | None = None,
        source_root: Path | None = None,
        manifest_path: Path | None = None,
        state_file: Path | None = None,
    ) -> InstallerConfig:
        """Build a configuration, filling unset locations with defaults.

        Args:
            target_root: Override target directory (for testing).
            source_root: Override asset directory.
            manifest_path: Override manifest file. Defaults to the manifest
                inside source_root.
            state_file: Override state file. Defaults to
                ``<target_root>/.gyoshu/install.json``.

        Returns:
            Fully populated InstallerConfig.
        """
        target_root = target_root or default_target_root()
        source_root = source_root or ASSETS_DIR
        return cls(
            target_root=target_root,
            source_root=source_root,
            manifest_path=manifest_path or source_root / MANIFEST_FILE,
            state_file=state_file or default_state_file(target_root),
        )

    @classmethod
    def create_default(cls) -> InstallerConfig:
        """Create a configuration with the default locations.

        Installs the bundled assets into ~/.config/opencode.
        """
        return cls.create()
