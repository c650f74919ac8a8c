"""Bundled asset manifest."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

ALLOWED_CATEGORIES = ("agent", "command", "tool", "skill", "lib", "bridge", "plugin")

# Entries in this category are directories copied as a unit
BUNDLE_CATEGORY = "skill"

ASSETS_DIR = Path(__file__).parent / "assets"
MANIFEST_FILE = "gyoshu-manifest.json"


class ManifestError(Exception):
    """Raised when the manifest cannot be read or is malformed."""


class Manifest(BaseModel):
    """Versioned declaration of assets to install, grouped by category."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = Field(min_length=1)
    files: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def from_file(cls, path: Path) -> Manifest:
        """Load and validate a manifest from a JSON file.

        Args:
            path: Path to the manifest JSON file.

        Returns:
            Parsed Manifest.

        Raises:
            ManifestError: If the file is missing, not JSON, or malformed.
        """
        if not path.exists():
            raise ManifestError(f"Manifest not found: {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ManifestError(f"Cannot read manifest {path}: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ManifestError(f"Malformed manifest {path}: {e}") from e

    def entries(self) -> Iterator[tuple[str, str]]:
        """Yield ``(category, entry)`` pairs in manifest order."""
        for category, items in self.files.items():
            for item in items:
                yield category, item

    def is_bundle(self, category: str) -> bool:
        return category == BUNDLE_CATEGORY


def load_manifest(path: Path) -> Manifest:
    """Load a manifest from an explicit path."""
    return Manifest.from_file(path)


def load_bundled_manifest() -> Manifest:
    """Load the manifest shipped inside this package."""
    return Manifest.from_file(ASSETS_DIR / MANIFEST_FILE)
