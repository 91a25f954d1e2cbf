"""Uniform file and directory operations behind one interface."""

__version__ = "0.1.0"

# Export the protocol, implementations and errors for dependency injection
from fskit.errors import (
    AlreadyExistsError,
    DirectoryNotEmptyError,
    DirectoryRequiredError,
    FileRequiredError,
    FilesystemError,
    OperationFailedError,
    PathConflictError,
)
from fskit.filesystem import LocalFilesystem
from fskit.memory import MemoryFilesystem
from fskit.protocols import Filesystem

__all__ = [
    "__version__",
    "AlreadyExistsError",
    "DirectoryNotEmptyError",
    "DirectoryRequiredError",
    "FileRequiredError",
    "Filesystem",
    "FilesystemError",
    "LocalFilesystem",
    "MemoryFilesystem",
    "OperationFailedError",
    "PathConflictError",
]
