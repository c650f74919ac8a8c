"""Install run orchestration.

Walks every manifest entry in order, hands it to the installer, and folds
the outcomes into a RunSummary. Per-entry failures never escape this
module; only an unreadable manifest or an uncreatable target root do.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from gyoshu_installer.config import InstallerConfig
from gyoshu_installer.filesystem import RealFileSystem
from gyoshu_installer.install import Installer, relative_key
from gyoshu_installer.manifest import Manifest
from gyoshu_installer.protocols import EntryInstaller, FileSystem, StateRepository
from gyoshu_installer.state import InstallState, StateStore
from gyoshu_installer.types import RunSummary

logger = logging.getLogger(__name__)


class AutoInstaller:
    """Runs one complete install pass over a manifest."""

    def __init__(
        self,
        manifest: Manifest,
        installer: EntryInstaller,
        state_store: StateRepository,
    ) -> None:
        """Initialize with required dependencies.

        Args:
            manifest: Manifest describing what to install.
            installer: Per-entry installer.
            state_store: Install-state persistence.
        """
        self.manifest = manifest
        self.installer = installer
        self.state_store = state_store

    @classmethod
    def create(
        cls,
        config: InstallerConfig,
        filesystem: FileSystem | None = None,
    ) -> AutoInstaller:
        """Factory method for production instantiation.

        Args:
            config: Installer locations.
            filesystem: Optional filesystem abstraction.

        Returns:
            Configured AutoInstaller.

        Raises:
            ManifestError: If the manifest cannot be loaded.
        """
        manifest = Manifest.from_file(config.manifest_path)
        installer = Installer.create(
            source_root=config.source_root,
            target_root=config.target_root,
            filesystem=filesystem or RealFileSystem(),
        )
        return cls(
            manifest=manifest,
            installer=installer,
            state_store=StateStore(config.state_file),
        )

    def run(self) -> RunSummary:
        """Install or refresh every manifest entry.

        Returns:
            RunSummary with counts, per-entry errors and run warnings.

        Raises:
            OSError: If the target root cannot be created.
        """
        summary = RunSummary()
        prior = self.state_store.load()
        self.installer.ensure_target_root()

        for category, entry in self.manifest.entries():
            if self.manifest.is_bundle(category):
                result = self.installer.install_bundle(entry, prior)
            else:
                result = self.installer.install_file(category, entry, prior)
            summary.record(relative_key(category, entry), result)

        if summary.changed:
            owned = set(prior.files) if prior else set()
            state = InstallState(
                version=self.manifest.version,
                installed_at=datetime.now(timezone.utc),
                files=owned | set(summary.installed_files),
            )
            warning = self.state_store.save(state)
            if warning:
                summary.warnings.append(warning)

        logger.info(
            "Install run complete: %d installed, %d updated, %d skipped, %d errors",
            summary.installed,
            summary.updated,
            summary.skipped,
            len(summary.errors),
        )
        return summary


def run_auto_install(config: InstallerConfig | None = None) -> RunSummary:
    """Run a full install pass.

    Args:
        config: Installer locations. Defaults to the bundled assets and
            ~/.config/opencode.

    Returns:
        RunSummary for the run.

    Raises:
        ManifestError: If the manifest cannot be loaded.
        OSError: If the target root cannot be created.
    """
    return AutoInstaller.create(config or InstallerConfig.create_default()).run()
