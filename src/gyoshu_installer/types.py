"""Shared data types for the Gyoshu installer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = ["InstallResult", "RunSummary"]


@dataclass
class InstallResult:
    """Outcome of installing a single manifest entry.

    Attributes:
        installed: True if the destination was freshly created.
        skipped: True if the destination was left untouched.
        updated: True if an owned destination was overwritten.
        error: Error message (None unless the entry failed).
    """

    installed: bool = False
    skipped: bool = False
    updated: bool = False
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        flags = sum((self.installed, self.skipped, self.updated))
        if flags > 1:
            raise ValueError("at most one of installed/skipped/updated may be set")
        if flags == 1 and self.error is not None:
            raise ValueError("successful result cannot carry an error")
        if flags == 0 and self.error is None:
            raise ValueError("failed result requires error message")

    @classmethod
    def install(cls) -> InstallResult:
        return cls(installed=True)

    @classmethod
    def skip(cls) -> InstallResult:
        return cls(skipped=True)

    @classmethod
    def update(cls) -> InstallResult:
        return cls(updated=True)

    @classmethod
    def failure(cls, error: str) -> InstallResult:
        return cls(error=error)

    @property
    def touched(self) -> bool:
        """True if the installer wrote the destination."""
        return self.installed or self.updated


@dataclass
class RunSummary:
    """Aggregated outcome of one install run.

    Attributes:
        installed: Number of entries freshly installed.
        skipped: Number of entries left untouched.
        updated: Number of owned entries refreshed.
        errors: One message per failed entry, prefixed with its path.
        installed_files: Relative paths written during this run.
        warnings: Run-level problems that did not fail any entry.
    """

    installed: int = 0
    skipped: int = 0
    updated: int = 0
    errors: list[str] = field(default_factory=list)
    installed_files: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def record(self, relative_path: str, result: InstallResult) -> None:
        """Fold a single entry result into the counters.

        Args:
            relative_path: Entry path in ``category/entry`` form.
            result: Outcome of the entry.
        """
        if result.installed:
            self.installed += 1
        elif result.updated:
            self.updated += 1
        elif result.skipped:
            self.skipped += 1
        else:
            self.errors.append(f"{relative_path}: {result.error}")

        if result.touched and relative_path not in self.installed_files:
            self.installed_files.append(relative_path)

    @property
    def changed(self) -> bool:
        return bool(self.installed_files)

    def to_dict(self) -> dict[str, Any]:
        """Render the value handed to the host runtime."""
        return {
            "installed": self.installed,
            "skipped": self.skipped,
            "updated": self.updated,
            "errors": list(self.errors),
            "installedFiles": list(self.installed_files),
            "warnings": list(self.warnings),
        }
