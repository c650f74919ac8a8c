"""Filesystem abstraction for testability.

This module provides the filesystem operations the installer needs,
including the exclusive-create and staged-replace primitives. The
RealFileSystem implementation wraps standard library operations.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from uuid import uuid4


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library Path, os and shutil operations.
    Satisfies the FileSystem protocol structurally.
    """

    def exists(self, path: Path) -> bool:
        """Check if a path exists (dangling symlinks count as existing)."""
        return path.exists() or path.is_symlink()

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        path.mkdir(parents=parents, exist_ok=exist_ok)

    def copy_file_exclusive(self, src: Path, dst: Path) -> None:
        """Copy a file to a destination that must not exist yet.

        The source is opened first so a missing source never leaves an
        empty destination behind.

        Raises:
            FileExistsError: If dst already exists.
        """
        with open(src, "rb") as fsrc:
            fdst = open(dst, "xb")
            try:
                with fdst:
                    shutil.copyfileobj(fsrc, fdst)
            except BaseException:
                dst.unlink(missing_ok=True)
                raise

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy a file over an existing destination."""
        shutil.copyfile(src, dst)

    def copytree_exclusive(self, src: Path, dst: Path) -> None:
        """Copy a directory tree to a destination that must not exist yet.

        The destination directory is claimed with a plain mkdir before any
        file is copied into it.

        Raises:
            FileExistsError: If dst already exists.
        """
        if not src.is_dir():
            raise FileNotFoundError(f"Bundle source is not a directory: {src}")
        dst.mkdir()
        try:
            shutil.copytree(src, dst, dirs_exist_ok=True)
        except BaseException:
            shutil.rmtree(dst, ignore_errors=True)
            raise

    def replace_tree(self, src: Path, dst: Path) -> None:
        """Replace an existing directory with a fresh copy of src.

        The new tree is staged in a hidden sibling directory and renamed
        into place; the old tree is removed only after the rename succeeds.
        """
        if not src.is_dir():
            raise FileNotFoundError(f"Bundle source is not a directory: {src}")
        token = uuid4().hex
        staged_dir = dst.parent / f".{dst.name}.staging-{token}"
        backup_dir = dst.parent / f".{dst.name}.backup-{token}"

        try:
            shutil.copytree(src, staged_dir)
        except BaseException:
            shutil.rmtree(staged_dir, ignore_errors=True)
            raise

        try:
            os.replace(dst, backup_dir)
        except BaseException:
            shutil.rmtree(staged_dir, ignore_errors=True)
            raise

        try:
            os.replace(staged_dir, dst)
        except BaseException:
            os.replace(backup_dir, dst)
            shutil.rmtree(staged_dir, ignore_errors=True)
            raise

        if backup_dir.is_dir() and not backup_dir.is_symlink():
            shutil.rmtree(backup_dir)
        else:
            backup_dir.unlink()
