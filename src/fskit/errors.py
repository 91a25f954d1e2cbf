"""Exception hierarchy for filesystem operations.

Every failure raised by a ``Filesystem`` implementation is a
``FilesystemError``. Subclasses name the precondition that failed so callers
can react to one kind while still catching the umbrella type.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

__all__ = [
    "AlreadyExistsError",
    "DirectoryNotEmptyError",
    "DirectoryRequiredError",
    "FileRequiredError",
    "FilesystemError",
    "OperationFailedError",
    "PathConflictError",
    "translate_os_errors",
]


class FilesystemError(Exception):
    """Base exception for all filesystem errors."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class DirectoryRequiredError(FilesystemError):
    """Raised when an operation needs a directory and the path is not one."""


class FileRequiredError(FilesystemError):
    """Raised when an operation needs a file and the path is not one."""


class AlreadyExistsError(FilesystemError):
    """Raised when overwrite is disabled and the target already exists."""


class PathConflictError(FilesystemError):
    """Raised when a path exists but has the wrong kind for its role."""


class DirectoryNotEmptyError(FilesystemError):
    """Raised on a non-recursive delete of a directory with children."""


class OperationFailedError(FilesystemError):
    """Raised when the underlying OS call itself fails."""


@contextmanager
def translate_os_errors(message: str, path: str) -> Iterator[None]:
    """Re-raise any ``OSError`` from the block as ``OperationFailedError``.

    Args:
        message: Error message for the translated exception.
        path: Path the failing operation was working on.

    Raises:
        OperationFailedError: If the block raised ``OSError``.
    """
    try:
        yield
    except OSError as e:
        raise OperationFailedError(f"{message}: {e.strerror or e}", path) from e
