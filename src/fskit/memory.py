"""In-memory filesystem for tests.

``MemoryFilesystem`` keeps a tree of nodes in a dict and implements the
Filesystem protocol without touching disk. Owner permission bits are enforced
as for an unprivileged user, so permission failures can be exercised even when
the test suite runs as root. Symbolic links are not modelled.
"""

from __future__ import annotations

import errno
import logging
import os
import posixpath
from dataclasses import dataclass

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
from fskit.traversal import copy_tree, delete_tree, ensure_parent, verify_overwrite

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644

_READ = 0o400
_WRITE = 0o200
_EXECUTE = 0o100

# Directories that always exist
_ROOTS = ("/", ".")


@dataclass
class _Node:
    """A file or directory held in memory."""

    is_dir: bool
    mode: int
    data: bytes = b""


def _key(path: str) -> str:
    """Normalize a path into a node key."""
    return posixpath.normpath(path.replace("\\", "/"))


def _parent_key(key: str) -> str:
    if key in _ROOTS:
        return key
    return posixpath.dirname(key) or "."


def _os_error(code: int, path: str) -> OSError:
    return OSError(code, os.strerror(code), path)


class MemoryFilesystem:
    """Filesystem held entirely in memory.

    Satisfies the Filesystem protocol structurally, so it can stand in for
    ``LocalFilesystem`` anywhere a ``Filesystem`` is expected.
    """

    def __init__(self, settings: FilesystemSettings | None = None) -> None:
        """Initialize an empty filesystem containing only "/" and ".".

        Args:
            settings: Encoding and implicit directory mode.
        """
        self.settings = settings or FilesystemSettings()
        self._nodes: dict[str, _Node] = {
            root: _Node(is_dir=True, mode=DEFAULT_DIRECTORY_MODE) for root in _ROOTS
        }

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        return self._node(path) is not None

    def is_file(self, path: str) -> bool:
        """Check if a path is a file."""
        node = self._node(path)
        return node is not None and not node.is_dir

    def is_symlink(self, path: str) -> bool:
        """Always False; links are not modelled."""
        return False

    def is_directory(self, path: str) -> bool:
        """Check if a path is a directory."""
        node = self._node(path)
        return node is not None and node.is_dir

    def is_readable(self, path: str) -> bool:
        return self._has_mode(path, _READ)

    def is_writable(self, path: str) -> bool:
        return self._has_mode(path, _WRITE)

    def is_executable(self, path: str) -> bool:
        return self._has_mode(path, _EXECUTE)

    def get_parent_directory(self, path: str) -> str:
        """Get the parent directory of a file or directory."""
        return get_parent_directory(path)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def is_empty(self, directory: str) -> bool:
        return len(self.list_directory(directory)) == 0

    def list_directory(self, directory: str) -> list[str]:
        """List the names of the entries in a directory.

        Raises:
            DirectoryRequiredError: If the path is not a directory.
            OperationFailedError: If the directory is not readable.
        """
        if not self.is_directory(directory):
            raise DirectoryRequiredError(f"The path [{directory}] is not a directory.", directory)

        with translate_os_errors(f"Could not get a directory listing of [{directory}]", directory):
            key = _key(directory)
            self._check_access(key, _READ)
            return sorted(posixpath.basename(child) for child in self._children(key))

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
        if not self.is_file(file):
            raise FileRequiredError(f"The path [{file}] is not a file.", file)

        with translate_os_errors(f"The file [{file}] could not be read", file):
            key = _key(file)
            self._check_traverse(key)
            self._check_access(key, _READ)
            return self._nodes[key].data

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def chmod(self, path: str, mode: int) -> bool:
        """Change permission bits; False if the path does not exist."""
        node = self._node(path)
        if node is None:
            return False
        node.mode = mode
        return True

    def create_directory(
        self, path: str, mode: int = DEFAULT_DIRECTORY_MODE, recursive: bool = True
    ) -> bool:
        """Create a directory.

        Raises:
            PathConflictError: If the path exists and is not a directory.
            OperationFailedError: If a parent is missing or not writable.
        """
        if self.is_directory(path):
            return True
        if self.exists(path):
            raise PathConflictError(f"The path [{path}] exists and is not a directory.", path)

        logger.debug("Creating directory %s (mode %o)", path, mode)
        with translate_os_errors(f"The directory [{path}] could not be created", path):
            if not path:
                raise _os_error(errno.ENOENT, path)
            self._mkdir(_key(path), mode, recursive)
        return True

    def create_file(self, path: str, data: str | bytes, overwrite: bool = False) -> int:
        """Create a file, creating its parent directory when missing.

        Raises:
            AlreadyExistsError: If the target exists and overwrite is disabled.
            PathConflictError: If the parent exists and is not a directory.
            OperationFailedError: If the write is not permitted.
        """
        verify_overwrite(self, path, overwrite)
        ensure_parent(self, path, strict=True, mode=self.settings.directory_mode)

        payload = data.encode(self.settings.encoding) if isinstance(data, str) else data
        logger.debug("Writing %d bytes to %s", len(payload), path)
        with translate_os_errors(f"The file [{path}] could not be written", path):
            self._write(_key(path), payload)
        return len(payload)

    def delete(self, path: str, recursive: bool = False) -> bool:
        """Delete a file or directory.

        Deleting a file that does not exist succeeds.

        Raises:
            DirectoryNotEmptyError: If a directory has children and recursive
                is disabled.
            OperationFailedError: If the removal is not permitted.
        """
        if self.is_directory(path):
            if recursive:
                delete_tree(self, path)
                return True
            if not self.is_empty(path):
                raise DirectoryNotEmptyError(f"The directory [{path}] is not empty.", path)
            with translate_os_errors(f"The directory [{path}] could not be deleted", path):
                self._remove(_key(path))
            return True

        if self._node(path) is None:
            return True
        try:
            self._remove(_key(path))
        except OSError as e:
            raise OperationFailedError(
                f"The file [{path}] could not be deleted: {e.strerror}", path
            ) from e
        return True

    def rename(self, src: str, dest: str, overwrite: bool = False) -> bool:
        """Rename a file or directory, moving any descendants along.

        Raises:
            AlreadyExistsError: If dest exists and overwrite is disabled.
            OperationFailedError: If the move is not permitted.
        """
        verify_overwrite(self, dest, overwrite)

        logger.debug("Renaming %s to %s", src, dest)
        with translate_os_errors(f"The file or directory [{src}] could not be renamed", src):
            self._move(_key(src), _key(dest))
        return True

    def copy(self, src: str, dest: str, overwrite: bool = False) -> bool:
        """Copy a file or a directory tree.

        Raises:
            FileRequiredError: If src does not exist.
            AlreadyExistsError: If a target exists and overwrite is disabled.
            OperationFailedError: If the copy is not permitted.
        """
        if self.is_directory(src):
            copy_tree(self, src, dest, overwrite)
            return True

        if not self.is_file(src):
            raise FileRequiredError(f"The path [{src}] is not a file.", src)
        if self.is_directory(dest):
            dest = join_path(dest, base_name(src))

        verify_overwrite(self, dest, overwrite)
        ensure_parent(self, dest, strict=False, mode=self.settings.directory_mode)

        logger.debug("Copying file %s to %s", src, dest)
        with translate_os_errors(f"The file [{src}] could not be copied", src):
            source = _key(src)
            self._check_traverse(source)
            self._check_access(source, _READ)
            self._write(_key(dest), self._nodes[source].data)
        return True

    # ------------------------------------------------------------------
    # Primitives; these raise OSError like the host calls they mirror
    # ------------------------------------------------------------------

    def _node(self, path: str) -> _Node | None:
        if not path:
            return None
        return self._nodes.get(_key(path))

    def _has_mode(self, path: str, bit: int) -> bool:
        node = self._node(path)
        return node is not None and bool(node.mode & bit)

    def _children(self, key: str) -> list[str]:
        return [k for k in self._nodes if k != key and _parent_key(k) == key]

    def _check_access(self, key: str, bit: int) -> None:
        if not self._nodes[key].mode & bit:
            raise _os_error(errno.EACCES, key)

    def _check_traverse(self, key: str) -> None:
        """Require search permission on the containing directory."""
        parent = _parent_key(key)
        if parent in self._nodes and parent != key:
            self._check_access(parent, _EXECUTE)

    def _require_parent_dir(self, key: str) -> str:
        """Return the parent key, which must be a writable directory."""
        parent = _parent_key(key)
        node = self._nodes.get(parent)
        if node is None:
            raise _os_error(errno.ENOENT, key)
        if not node.is_dir:
            raise _os_error(errno.ENOTDIR, key)
        self._check_access(parent, _WRITE)
        self._check_access(parent, _EXECUTE)
        return parent

    def _mkdir(self, key: str, mode: int, recursive: bool) -> None:
        parent = _parent_key(key)
        if recursive and parent not in self._nodes:
            self._mkdir(parent, DEFAULT_DIRECTORY_MODE, recursive)
        self._require_parent_dir(key)
        self._nodes[key] = _Node(is_dir=True, mode=mode)

    def _write(self, key: str, payload: bytes) -> None:
        self._require_parent_dir(key)
        node = self._nodes.get(key)
        if node is None:
            self._nodes[key] = _Node(is_dir=False, mode=DEFAULT_FILE_MODE, data=payload)
            return
        if node.is_dir:
            raise _os_error(errno.EISDIR, key)
        self._check_access(key, _WRITE)
        node.data = payload

    def _remove(self, key: str) -> None:
        node = self._nodes.get(key)
        if node is None:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), key)
        if key in _ROOTS:
            raise _os_error(errno.EBUSY, key)
        self._require_parent_dir(key)
        if node.is_dir and self._children(key):
            raise _os_error(errno.ENOTEMPTY, key)
        del self._nodes[key]

    def _move(self, src: str, dest: str) -> None:
        node = self._nodes.get(src)
        if node is None:
            raise _os_error(errno.ENOENT, src)
        if src == dest:
            return
        if src in _ROOTS:
            raise _os_error(errno.EBUSY, src)
        self._require_parent_dir(src)
        self._require_parent_dir(dest)

        target = self._nodes.get(dest)
        if target is not None:
            if target.is_dir and not node.is_dir:
                raise _os_error(errno.EISDIR, dest)
            if node.is_dir and not target.is_dir:
                raise _os_error(errno.ENOTDIR, dest)
            if target.is_dir and self._children(dest):
                raise _os_error(errno.ENOTEMPTY, dest)
        if node.is_dir and (dest + "/").startswith(src.rstrip("/") + "/"):
            raise _os_error(errno.EINVAL, dest)

        prefix = src.rstrip("/") + "/"
        moved = {k: v for k, v in self._nodes.items() if k == src or k.startswith(prefix)}
        for old in moved:
            del self._nodes[old]
        for old, moved_node in moved.items():
            self._nodes[dest + old[len(src):]] = moved_node
