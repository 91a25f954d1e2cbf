"""Verification and recursive traversal shared by filesystem implementations.

The functions here work against any ``Filesystem`` and hold the only
nontrivial control flow of the package: overwrite verification, implicit
parent creation, and depth-first delete and copy of directory trees.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fskit.errors import AlreadyExistsError, PathConflictError
from fskit.paths import get_parent_directory, is_within, join_path
from fskit.protocols import DEFAULT_DIRECTORY_MODE

if TYPE_CHECKING:
    from fskit.protocols import Filesystem

logger = logging.getLogger(__name__)


def verify_overwrite(fs: Filesystem, path: str, overwrite: bool) -> None:
    """Fail when overwrite is disabled and the target already exists.

    Only checks. Replacing the existing target is left to the operation that
    follows.

    Args:
        fs: Filesystem to query.
        path: Target path.
        overwrite: Whether an existing target may be replaced.

    Raises:
        AlreadyExistsError: If overwrite is disabled and the path exists.
    """
    if overwrite:
        return
    if fs.exists(path) or fs.is_symlink(path):
        raise AlreadyExistsError(f"The path [{path}] already exists.", path)


def ensure_parent(
    fs: Filesystem,
    path: str,
    strict: bool = True,
    mode: int = DEFAULT_DIRECTORY_MODE,
) -> None:
    """Create the parent directory of ``path`` if it is missing.

    In strict mode an existing parent must be a directory. Non-strict mode
    only creates a missing parent and leaves any existing one for the next OS
    call to deal with, which is how file copies behave.

    Args:
        fs: Filesystem to operate on.
        path: Path whose parent should exist.
        strict: Reject an existing parent that is not a directory.
        mode: Permission bits for a created parent.

    Raises:
        PathConflictError: In strict mode, if the parent is not a directory.
        OperationFailedError: If the parent cannot be created.
    """
    parent = get_parent_directory(path)
    if not parent:
        return
    if strict or not fs.exists(parent):
        fs.create_directory(parent, mode)


def is_tree(fs: Filesystem, path: str) -> bool:
    """Check if a path is a directory that traversal may descend into."""
    return fs.is_directory(path) and not fs.is_symlink(path)


def delete_tree(fs: Filesystem, directory: str) -> None:
    """Delete a directory and everything below it, depth first.

    Children are visited in listing order. Each nested directory is emptied
    before it is removed. The first failure aborts the traversal and leaves the
    remaining entries in place.

    Args:
        fs: Filesystem to operate on.
        directory: Directory to delete.

    Raises:
        FilesystemError: On the first entry that cannot be deleted.
    """
    logger.debug("Deleting directory tree %s", directory)
    for child in fs.list_directory(directory):
        child_path = join_path(directory, child)
        if is_tree(fs, child_path):
            delete_tree(fs, child_path)
        else:
            fs.delete(child_path)
    fs.delete(directory)


def copy_tree(fs: Filesystem, src: str, dest: str, overwrite: bool) -> None:
    """Copy the contents of a directory into ``dest``, depth first.

    No directory is created up front; destination directories appear as the
    nested file copies create their parents. An empty source subtree therefore
    produces nothing at the destination. Links to directories are copied as
    the directories they point at.

    Args:
        fs: Filesystem to operate on.
        src: Source directory.
        dest: Destination directory.
        overwrite: Replace existing targets, applied at every level.

    Raises:
        PathConflictError: If dest lies inside src.
        AlreadyExistsError: If a target exists and overwrite is disabled.
        FilesystemError: On the first entry that cannot be copied.
    """
    if is_within(dest, src):
        raise PathConflictError(
            f"The directory [{src}] cannot be copied into itself [{dest}].", dest
        )
    verify_overwrite(fs, dest, overwrite)

    logger.debug("Copying directory tree %s to %s", src, dest)
    for child in fs.list_directory(src):
        child_src = join_path(src, child)
        child_dest = join_path(dest, child)
        if fs.is_directory(child_src):
            copy_tree(fs, child_src, child_dest, overwrite)
        else:
            fs.copy(child_src, child_dest, overwrite)
