"""Installation of individual manifest entries."""

from __future__ import annotations

import logging
from pathlib import Path

from gyoshu_installer.filesystem import RealFileSystem
from gyoshu_installer.manifest import BUNDLE_CATEGORY
from gyoshu_installer.protocols import FileSystem
from gyoshu_installer.state import InstallState, is_owned
from gyoshu_installer.types import InstallResult
from gyoshu_installer.validation import check_entry, is_within_root

logger = logging.getLogger(__name__)


def relative_key(category: str, entry: str) -> str:
    """Return the ownership key for an entry."""
    return f"{category}/{entry}"


class Installer:
    """Decides and performs install, update or skip for one entry at a time.

    Follows Separate Use from Creation: constructor requires all dependencies.
    Use factory method `create()` for production instantiation with defaults.
    """

    def __init__(
        self,
        source_root: Path,
        target_root: Path,
        filesystem: FileSystem,
    ) -> None:
        """Initialize installer with required dependencies.

        Args:
            source_root: Directory holding one subdirectory per category.
            target_root: Configuration directory receiving the assets.
            filesystem: Filesystem abstraction (required).
        """
        self.source_root = source_root
        self.target_root = target_root
        self.fs = filesystem

    @classmethod
    def create(
        cls,
        source_root: Path,
        target_root: Path,
        filesystem: FileSystem | None = None,
    ) -> Installer:
        """Factory method for production instantiation.

        Args:
            source_root: Directory holding the bundled assets.
            target_root: Configuration directory receiving the assets.
            filesystem: Optional filesystem abstraction (created if not provided).

        Returns:
            Configured Installer instance.
        """
        return cls(
            source_root=source_root,
            target_root=target_root,
            filesystem=filesystem or RealFileSystem(),
        )

    def ensure_target_root(self) -> None:
        """Create the target root directory if it doesn't exist."""
        self.fs.mkdir(self.target_root, parents=True, exist_ok=True)

    def install_file(
        self, category: str, entry: str, state: InstallState | None
    ) -> InstallResult:
        """Install a single-file entry.

        Args:
            category: Manifest category (destination subdirectory).
            entry: Relative file path within the category.
            state: Ownership state from the previous run, if any.

        Returns:
            InstallResult describing what happened.
        """
        return self._install(category, entry, state, bundle=False)

    def install_bundle(self, name: str, state: InstallState | None) -> InstallResult:
        """Install a skill bundle directory.

        Args:
            name: Bundle directory name within the skill category.
            state: Ownership state from the previous run, if any.

        Returns:
            InstallResult describing what happened.
        """
        return self._install(BUNDLE_CATEGORY, name, state, bundle=True)

    def _resolve(self, category: str, entry: str) -> tuple[Path, Path] | str:
        """Validate an entry and compute its source and destination.

        Returns:
            ``(source, destination)`` or a validation error message.
        """
        reason = check_entry(category, entry)
        if reason:
            return reason

        source = self.source_root / category / entry
        destination = self.target_root / category / entry
        if not is_within_root(destination, self.target_root):
            return f"Invalid path '{entry}': resolves outside {self.target_root}"
        return source, destination

    def _install(
        self, category: str, entry: str, state: InstallState | None, bundle: bool
    ) -> InstallResult:
        key = relative_key(category, entry)
        resolved = self._resolve(category, entry)
        if isinstance(resolved, str):
            logger.warning("Rejected manifest entry %r: %s", key, resolved)
            return InstallResult.failure(resolved)
        source, destination = resolved

        try:
            if not self.fs.exists(destination):
                return self._create(source, destination, bundle, key)

            if not is_owned(key, state):
                logger.debug("Skipping %s: not owned by installer", key)
                return InstallResult.skip()

            if bundle:
                self.fs.replace_tree(source, destination)
            else:
                self.fs.copy_file(source, destination)
            logger.debug("Updated %s", key)
            return InstallResult.update()

        except Exception as e:
            logger.exception("Installation failed for %s", key)
            return InstallResult.failure(str(e))

    def _create(self, source: Path, destination: Path, bundle: bool, key: str) -> InstallResult:
        """Create a destination that did not exist at check time."""
        self.fs.mkdir(destination.parent, parents=True, exist_ok=True)
        try:
            if bundle:
                self.fs.copytree_exclusive(source, destination)
            else:
                self.fs.copy_file_exclusive(source, destination)
        except FileExistsError:
            # Another process created it after our existence check
            logger.debug("Skipping %s: created concurrently", key)
            return InstallResult.skip()
        logger.debug("Installed %s", key)
        return InstallResult.install()
