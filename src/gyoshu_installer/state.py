"""Install-state persistence.

The state file is the only record of which destination paths were placed
by the installer. Paths listed there may be overwritten on later runs;
anything else found on disk belongs to the user.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer

logger = logging.getLogger(__name__)

# Relative to the target root
STATE_DIR = ".gyoshu"
STATE_FILE = "install.json"


class InstallState(BaseModel):
    """Ownership record from the most recent run that changed anything."""

    model_config = ConfigDict(populate_by_name=True)

    version: str
    installed_at: datetime = Field(alias="installedAt")
    files: set[str] = Field(default_factory=set)

    @field_serializer("files")
    def _serialize_files(self, files: set[str]) -> list[str]:
        return sorted(files)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def default_state_file(target_root: Path) -> Path:
    """Return the state file location for a target root."""
    return target_root / STATE_DIR / STATE_FILE


def is_owned(relative_path: str, state: InstallState | None) -> bool:
    """Check whether the installer owns a destination path.

    Args:
        relative_path: Path in ``category/entry`` form.
        state: Loaded state, or None on a first run.

    Returns:
        True if the path was recorded by a previous run.
    """
    if state is None:
        return False
    return relative_path in state.files


class StateStore:
    """Reads and writes the install-state file."""

    def __init__(self, state_file: Path) -> None:
        """Initialize the store.

        Args:
            state_file: Location of the JSON state file.
        """
        self.state_file = state_file

    @classmethod
    def for_root(cls, target_root: Path) -> StateStore:
        """Create a store using the default location under a target root."""
        return cls(default_state_file(target_root))

    def load(self) -> InstallState | None:
        """Load state from disk.

        A missing, unreadable or malformed file is treated as no prior state.

        Returns:
            InstallState, or None if there is no usable state.
        """
        try:
            data = json.loads(self.state_file.read_text(encoding="utf-8"))
            return InstallState.model_validate(data)
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable install state %s: %s", self.state_file, e)
            return None

    def save(self, state: InstallState) -> str | None:
        """Write state to disk, replacing any previous file.

        Args:
            state: InstallState to save.

        Returns:
            Warning message on failure, None on success.
        """
        data = state.model_dump(mode="json", by_alias=True)
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.state_file.parent,
                prefix=f".{self.state_file.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                json.dump(data, tmp, indent=2)
            try:
                # NamedTemporaryFile creates 0600
                os.chmod(tmp_path, 0o666 & ~_current_umask())
                os.replace(tmp_path, self.state_file)
            finally:
                tmp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not save install state to %s: %s", self.state_file, e)
            return f"Failed to save install state to {self.state_file}: {e}"
        return None
