"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands.

Dependencies are typed using Protocols (abstract interfaces) rather than
concrete implementations, so test doubles can be injected without
inheritance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from gyoshu_installer.config import InstallerConfig
from gyoshu_installer.manifest import Manifest
from gyoshu_installer.protocols import EntryInstaller, FileSystem, StateRepository


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from gyoshu_installer.filesystem import RealFileSystem
    return RealFileSystem()


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for all services used by CLI commands.
    """

    config: InstallerConfig
    state_store: StateRepository
    installer: EntryInstaller
    filesystem: FileSystem = field(default_factory=_default_filesystem)

    def load_manifest(self) -> Manifest:
        """Load the manifest named by the configuration.

        Raises:
            ManifestError: If the manifest cannot be loaded.
        """
        return Manifest.from_file(self.config.manifest_path)


def create_context(
    target_root: Path | None = None,
    source_root: Path | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        target_root: Override target directory (for testing).
        source_root: Override asset directory (for testing).

    Returns:
        Configured AppContext with all dependencies.
    """
    from gyoshu_installer.filesystem import RealFileSystem
    from gyoshu_installer.install import Installer
    from gyoshu_installer.state import StateStore

    config = InstallerConfig.create(target_root=target_root, source_root=source_root)
    filesystem = RealFileSystem()
    installer = Installer.create(
        source_root=config.source_root,
        target_root=config.target_root,
        filesystem=filesystem,
    )

    return AppContext(
        config=config,
        state_store=StateStore(config.state_file),
        installer=installer,
        filesystem=filesystem,
    )
