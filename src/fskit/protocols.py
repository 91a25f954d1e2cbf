"""Protocol definitions for the filesystem capability set.

Callers depend on the ``Filesystem`` protocol rather than a concrete class.
Designing to the interface enables:
- Swapping the host filesystem for the in-memory double in tests
- A single exception hierarchy regardless of the implementation
- Clear contracts for implementations

All concrete implementations satisfy this protocol structurally (duck typing).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

DEFAULT_DIRECTORY_MODE = 0o755


@runtime_checkable
class Filesystem(Protocol):
    """Protocol for filesystem operations.

    Predicates are best-effort queries: they never raise and report ``False``
    when the OS cannot answer. Every other operation raises a
    ``FilesystemError`` subclass on failure. Mutations are not rolled back, so a
    failed recursive copy or delete leaves the already-processed part of the
    tree as it is.
    """

    def exists(self, path: str) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise.
        """
        ...

    def is_file(self, path: str) -> bool:
        """Check if a path is a regular file."""
        ...

    def is_symlink(self, path: str) -> bool:
        """Check if a path is a symbolic link."""
        ...

    def is_directory(self, path: str) -> bool:
        """Check if a path is a directory."""
        ...

    def is_readable(self, path: str) -> bool:
        """Check if a file or directory is readable."""
        ...

    def is_writable(self, path: str) -> bool:
        """Check if a file or directory is writable."""
        ...

    def is_executable(self, path: str) -> bool:
        """Check if a file is executable."""
        ...

    def get_parent_directory(self, path: str) -> str:
        """Get the parent directory of a file or directory.

        Args:
            path: File or directory path.

        Returns:
            Parent directory, or "" when the path has no real parent.
        """
        ...

    def is_empty(self, directory: str) -> bool:
        """Check if a directory has no entries.

        Args:
            directory: Directory to check.

        Returns:
            True if the listing is empty.

        Raises:
            DirectoryRequiredError: If the path is not a directory.
            OperationFailedError: If the directory cannot be listed.
        """
        ...

    def list_directory(self, directory: str) -> list[str]:
        """List the names of the entries in a directory.

        Args:
            directory: Directory to list.

        Returns:
            Sorted entry names, without "." and "..".

        Raises:
            DirectoryRequiredError: If the path is not a directory.
            OperationFailedError: If the directory cannot be listed.
        """
        ...

    def read_file(self, file: str) -> str:
        """Read the text content of a file.

        Args:
            file: File to read.

        Returns:
            Decoded file content.

        Raises:
            FileRequiredError: If the path is not an existing file.
            OperationFailedError: If the file cannot be read or decoded.
        """
        ...

    def read_bytes(self, file: str) -> bytes:
        """Read the raw content of a file.

        Raises:
            FileRequiredError: If the path is not an existing file.
            OperationFailedError: If the file cannot be read.
        """
        ...

    def chmod(self, path: str, mode: int) -> bool:
        """Change permissions of a file or directory.

        Args:
            path: Path to change.
            mode: Numeric permission bits, e.g. 0o644.

        Returns:
            True if the mode was applied, False if the OS refused.
        """
        ...

    def create_directory(
        self, path: str, mode: int = DEFAULT_DIRECTORY_MODE, recursive: bool = True
    ) -> bool:
        """Create a directory.

        An existing directory is left alone.

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
        ...

    def create_file(self, path: str, data: str | bytes, overwrite: bool = False) -> int:
        """Create a file, creating its parent directory when missing.

        Args:
            path: File to create.
            data: Content to write.
            overwrite: Replace an existing target.

        Returns:
            Number of bytes written.

        Raises:
            AlreadyExistsError: If the target exists and overwrite is disabled.
            PathConflictError: If the parent exists and is not a directory.
            OperationFailedError: If the OS write fails.
        """
        ...

    def delete(self, path: str, recursive: bool = False) -> bool:
        """Delete a file or directory.

        Deleting a file that does not exist succeeds.

        Args:
            path: Path to delete.
            recursive: Delete a directory together with its contents.

        Returns:
            True on success.

        Raises:
            DirectoryNotEmptyError: If a directory has children and recursive
                is disabled.
            OperationFailedError: If the OS call fails.
        """
        ...

    def rename(self, src: str, dest: str, overwrite: bool = False) -> bool:
        """Rename a file or directory.

        Args:
            src: Existing path.
            dest: New path.
            overwrite: Replace an existing target.

        Returns:
            True on success.

        Raises:
            AlreadyExistsError: If dest exists and overwrite is disabled.
            OperationFailedError: If the OS call fails.
        """
        ...

    def copy(self, src: str, dest: str, overwrite: bool = False) -> bool:
        """Copy a file or a directory tree.

        A file copied onto an existing directory lands inside it.

        Args:
            src: File or directory to copy.
            dest: Destination path.
            overwrite: Replace existing targets.

        Returns:
            True on success.

        Raises:
            FileRequiredError: If src does not exist.
            AlreadyExistsError: If a target exists and overwrite is disabled.
            PathConflictError: If dest is nested inside a src directory.
            OperationFailedError: If the OS call fails.
        """
        ...
