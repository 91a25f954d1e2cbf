"""Host filesystem implementation.

``LocalFilesystem`` wraps standard library ``os`` and ``shutil`` calls and
translates every OS failure into the ``FilesystemError`` hierarchy.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable

from fskit.config import FilesystemSettings
from fskit.errors import (
    DirectoryNotEmptyError,
    DirectoryRequiredError,
    FileRequiredError,
    OperationFailedError,
    PathConflictError,
    translate_os_errors,
)
from fskit.paths import base_name, get_parent_directory, join_path
from fskit.protocols import DEFAULT_DIRECTORY_MODE
from fskit.traversal import copy_tree, delete_tree, ensure_parent, is_tree, verify_overwrite

logger = logging.getLogger(__name__)


def _best_effort(check: Callable[[str], bool], path: str) -> bool:
    """Run a predicate, reporting False when the OS cannot answer."""
    try:
        return check(path)
    except (OSError, ValueError):
        return False


class LocalFilesystem:
    """Production filesystem implementation.

    Stateless apart from its settings, so one instance can be shared.
    Satisfies the Filesystem protocol structurally.
    """

    def __init__(self, settings: FilesystemSettings | None = None) -> None:
        """Initialize the filesystem.

        Args:
            settings: Encoding and implicit directory mode. Defaults apply
                when omitted.
        """
        self.settings = settings or FilesystemSettings()

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        return _best_effort(os.path.exists, path)

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        return _best_effort(os.path.isfile, path)

    def is_symlink(self, path: str) -> bool:
        """Check if a path is a symbolic link."""
        return _best_effort(os.path.islink, path)

    def is_directory(self, path: str) -> bool:
        """Check if a path is a directory."""
        return _best_effort(os.path.isdir, path)

    def is_readable(self, path: str) -> bool:
        """Check if a file or directory is readable."""
        return _best_effort(lambda p: os.access(p, os.R_OK), path)

    def is_writable(self, path: str) -> bool:
        """Check if a file or directory is writable."""
        return _best_effort(lambda p: os.access(p, os.W_OK), path)

    def is_executable(self, path: str) -> bool:
        """Check if a file is executable."""
        return _best_effort(lambda p: os.access(p, os.X_OK), path)

    def get_parent_directory(self, path: str) -> str:
        """Get the parent directory of a file or directory."""
        return get_parent_directory(path)

    def is_empty(self, directory: str) -> bool:
        """Check if a directory has no entries."""
        return len(self.list_directory(directory)) == 0

    def list_directory(self, directory: str) -> list[str]:
        """List the names of the entries in a directory.

        Args:
            directory: Directory to list.

        Returns:
            Sorted entry names.

        Raises:
            DirectoryRequiredError: If the path is not a directory.
            OperationFailedError: If the directory cannot be listed.
        """
        self._require_directory(directory)

        with translate_os_errors(f"Could not get a directory listing of [{directory}]", directory):
            with os.scandir(directory) as entries:
                names = [entry.name for entry in entries]
        return sorted(names)

    def read_file(self, file: str) -> str:
        """Read the text content of a file.

        Raises:
            FileRequiredError: If the path is not an existing file.
            OperationFailedError: If the file cannot be read or decoded.
        """
        content = self.read_bytes(file)
        try:
            return content.decode(self.settings.encoding)
        except UnicodeDecodeError as e:
            raise OperationFailedError(
                f"The file [{file}] is not valid {self.settings.encoding}: {e.reason}", file
            ) from e

    def read_bytes(self, file: str) -> bytes:
        """Read the raw content of a file.

        Raises:
            FileRequiredError: If the path is not an existing file.
            OperationFailedError: If the file cannot be read.
        """
        self._require_file(file)

        with translate_os_errors(f"The file [{file}] could not be read", file):
            with open(file, "rb") as handle:
                return handle.read()

    def chmod(self, path: str, mode: int) -> bool:
        """Change permissions of a file or directory.

        Returns:
            True if the mode was applied, False if the OS refused.
        """
        try:
            os.chmod(path, mode)
        except OSError as e:
            logger.debug("chmod %o failed for %s: %s", mode, path, e)
            return False
        return True

    def create_directory(
        self, path: str, mode: int = DEFAULT_DIRECTORY_MODE, recursive: bool = True
    ) -> bool:
        """Create a directory.

        Args:
            path: Directory to create.
            mode: Permission bits for the new directory.
            recursive: Create missing parent directories too.

        Returns:
            True once the directory exists.

        Raises:
            PathConflictError: If the path exists and is not a directory.
            OperationFailedError: If the OS call fails.
        """
        if self.is_directory(path):
            return True
        if self.exists(path) or self.is_symlink(path):
            raise PathConflictError(f"The path [{path}] exists and is not a directory.", path)

        logger.debug("Creating directory %s (mode %o)", path, mode)
        with translate_os_errors(f"The directory [{path}] could not be created", path):
            if recursive:
                os.makedirs(path, mode)
            else:
                os.mkdir(path, mode)
        return True

    def create_file(self, path: str, data: str | bytes, overwrite: bool = False) -> int:
        """Create a file, creating its parent directory when missing.

        Args:
            path: File to create.
            data: Text or bytes to write.
            overwrite: Replace an existing target.

        Returns:
            Number of bytes written.

        Raises:
            AlreadyExistsError: If the target exists and overwrite is disabled.
            PathConflictError: If the parent exists and is not a directory.
            OperationFailedError: If the OS write fails.
        """
        verify_overwrite(self, path, overwrite)
        ensure_parent(self, path, strict=True, mode=self.settings.directory_mode)

        payload = data.encode(self.settings.encoding) if isinstance(data, str) else data
        logger.debug("Writing %d bytes to %s", len(payload), path)
        with translate_os_errors(f"The file [{path}] could not be written", path):
            with open(path, "wb") as handle:
                return handle.write(payload)

    def delete(self, path: str, recursive: bool = False) -> bool:
        """Delete a file or directory.

        Deleting a file that does not exist succeeds. Links are removed
        without touching their target.

        Raises:
            DirectoryNotEmptyError: If a directory has children and recursive
                is disabled.
            OperationFailedError: If the OS call fails.
        """
        if is_tree(self, path):
            if recursive:
                delete_tree(self, path)
                return True
            return self._delete_directory(path)
        return self._delete_file(path)

    def rename(self, src: str, dest: str, overwrite: bool = False) -> bool:
        """Rename a file or directory.

        Raises:
            AlreadyExistsError: If dest exists and overwrite is disabled.
            OperationFailedError: If the OS call fails.
        """
        verify_overwrite(self, dest, overwrite)

        logger.debug("Renaming %s to %s", src, dest)
        with translate_os_errors(f"The file or directory [{src}] could not be renamed", src):
            os.replace(src, dest)
        return True

    def copy(self, src: str, dest: str, overwrite: bool = False) -> bool:
        """Copy a file or a directory tree.

        Raises:
            FileRequiredError: If src does not exist.
            AlreadyExistsError: If a target exists and overwrite is disabled.
            PathConflictError: If dest is nested inside a src directory.
            OperationFailedError: If the OS call fails.
        """
        if self.is_directory(src):
            copy_tree(self, src, dest, overwrite)
            return True
        return self._copy_file(src, dest, overwrite)

    def _delete_directory(self, directory: str) -> bool:
        if not self.is_empty(directory):
            raise DirectoryNotEmptyError(f"The directory [{directory}] is not empty.", directory)

        logger.debug("Removing directory %s", directory)
        with translate_os_errors(f"The directory [{directory}] could not be deleted", directory):
            os.rmdir(directory)
        return True

    def _delete_file(self, file: str) -> bool:
        logger.debug("Removing file %s", file)
        try:
            os.unlink(file)
        except FileNotFoundError:
            return True
        except OSError as e:
            # ENOTDIR from a file in the parent chain still means nothing is there
            if not os.path.lexists(file):
                return True
            raise OperationFailedError(
                f"The file [{file}] could not be deleted: {e.strerror or e}", file
            ) from e
        return True

    def _copy_file(self, src: str, dest: str, overwrite: bool) -> bool:
        self._require_file(src)

        if self.is_directory(dest):
            dest = join_path(dest, base_name(src))

        verify_overwrite(self, dest, overwrite)
        # An existing non-directory parent is left for the copy itself to reject
        ensure_parent(self, dest, strict=False, mode=self.settings.directory_mode)

        logger.debug("Copying file %s to %s", src, dest)
        with translate_os_errors(f"The file [{src}] could not be copied", src):
            shutil.copyfile(src, dest)
        return True

    def _require_directory(self, directory: str) -> None:
        if not self.is_directory(directory):
            raise DirectoryRequiredError(f"The path [{directory}] is not a directory.", directory)

    def _require_file(self, file: str) -> None:
        if not self.is_file(file):
            raise FileRequiredError(f"The path [{file}] is not a file.", file)
