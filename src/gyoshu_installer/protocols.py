"""Protocol definitions for core abstractions.

This module defines abstract interfaces (Protocols) for the services the
orchestrator depends on. Designing to interfaces enables:
- Loose coupling between components
- Easy substitution of test doubles
- Clear contracts for implementations

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from gyoshu_installer.types import InstallResult

if TYPE_CHECKING:
    from gyoshu_installer.state import InstallState


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Implementations provide the copy primitives used by the installer.
    """

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        ...

    def copy_file_exclusive(self, src: Path, dst: Path) -> None:
        """Copy a file, failing with FileExistsError if dst exists."""
        ...

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy a file over an existing destination."""
        ...

    def copytree_exclusive(self, src: Path, dst: Path) -> None:
        """Copy a directory tree, failing with FileExistsError if dst exists."""
        ...

    def replace_tree(self, src: Path, dst: Path) -> None:
        """Replace an existing directory tree with a copy of src."""
        ...


@runtime_checkable
class StateRepository(Protocol):
    """Protocol for install-state persistence.

    Implementations record which destination paths the installer owns.
    """

    def load(self) -> InstallState | None:
        """Load the persisted state.

        Returns:
            The previous InstallState, or None if there is none.
        """
        ...

    def save(self, state: InstallState) -> str | None:
        """Persist state.

        Args:
            state: State to write.

        Returns:
            Warning message if the write failed, None on success.
        """
        ...


@runtime_checkable
class EntryInstaller(Protocol):
    """Protocol for installing a single manifest entry."""

    def install_file(
        self, category: str, entry: str, state: InstallState | None
    ) -> InstallResult:
        """Install a single-file entry."""
        ...

    def install_bundle(self, name: str, state: InstallState | None) -> InstallResult:
        """Install a directory bundle entry."""
        ...

    def ensure_target_root(self) -> None:
        """Create the target root directory if needed."""
        ...


@runtime_checkable
class HookFactory(Protocol):
    """Protocol for the host runtime's hook constructor.

    Given the host load context, returns the hook set (or an awaitable
    resolving to it).
    """

    def __call__(self, ctx: Any) -> Any:
        ...
