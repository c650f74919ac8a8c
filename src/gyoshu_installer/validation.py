"""Path validation for manifest entries.

Every manifest entry is checked twice before the installer touches the
filesystem: once lexically on the ``(category, entry)`` pair, and once on
the resolved destination to confirm it stays inside the target root.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from gyoshu_installer.manifest import ALLOWED_CATEGORIES

logger = logging.getLogger(__name__)

_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:")


def check_entry(category: str, entry: str) -> str | None:
    """Check a manifest entry for unsafe category or path syntax.

    Args:
        category: Manifest category the entry belongs to.
        entry: Relative file path or bundle name.

    Returns:
        Reason the entry is rejected, or None if it is acceptable.

    Example:
        >>> check_entry("command", "gyoshu.md") is None
        True
        >>> check_entry("command", "../x")
        "Invalid path '../x': contains parent-directory segment"
    """
    if category not in ALLOWED_CATEGORIES:
        return f"Invalid category '{category}'"
    if not entry:
        return "Invalid path: entry is empty"
    if "\0" in entry:
        return f"Invalid path {entry!r}: contains null byte"
    if entry.startswith(("/", "\\")) or _DRIVE_PREFIX.match(entry) or os.path.isabs(entry):
        return f"Invalid path '{entry}': absolute paths are not allowed"
    if ".." in re.split(r"[\\/]", entry):
        return f"Invalid path '{entry}': contains parent-directory segment"
    return None


def validate(category: str, entry: str) -> bool:
    """Return True if the entry passes the lexical checks."""
    return check_entry(category, entry) is None


def is_within_root(destination: Path, root: Path) -> bool:
    """Confirm a destination resolves to a strict descendant of root.

    Both paths are canonicalized first, so symlinked parents that point
    outside the root are caught even when the entry string looks safe.

    Args:
        destination: Destination path for the entry.
        root: Target root directory.

    Returns:
        True if destination lies strictly below root. False if either path
        cannot be resolved, such as a symlink loop.
    """
    try:
        resolved_root = str(root.resolve())
        resolved_dest = str(destination.resolve())
    except (OSError, RuntimeError) as e:
        logger.warning("Cannot resolve %s: %s", destination, e)
        return False
    return resolved_dest.startswith(resolved_root.rstrip(os.sep) + os.sep)
