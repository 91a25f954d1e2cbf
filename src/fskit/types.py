"""Shared data types for fskit."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fskit.protocols import Filesystem

__all__ = ["PathInfo", "PathKind"]


class PathKind(str, Enum):
    """What a path currently refers to."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    MISSING = "missing"
    OTHER = "other"


@dataclass(frozen=True)
class PathInfo:
    """Snapshot of every predicate for one path.

    Attributes:
        path: The queried path.
        exists: Path exists (links are followed).
        is_file: Path is a regular file.
        is_directory: Path is a directory.
        is_symlink: Path itself is a symbolic link.
        readable: Path is readable by the current user.
        writable: Path is writable by the current user.
        executable: Path is executable by the current user.
    """

    path: str
    exists: bool
    is_file: bool
    is_directory: bool
    is_symlink: bool
    readable: bool
    writable: bool
    executable: bool

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.is_file and self.is_directory:
            raise ValueError("a path cannot be both a file and a directory")
        if not self.exists and (self.is_file or self.is_directory):
            raise ValueError("a missing path cannot be a file or a directory")

    @property
    def kind(self) -> PathKind:
        """Classify the path, reporting links before their targets."""
        if self.is_symlink:
            return PathKind.SYMLINK
        if self.is_directory:
            return PathKind.DIRECTORY
        if self.is_file:
            return PathKind.FILE
        if self.exists:
            return PathKind.OTHER
        return PathKind.MISSING

    @classmethod
    def from_filesystem(cls, fs: Filesystem, path: str) -> PathInfo:
        """Query all predicates for ``path``.

        Each predicate is answered freshly by ``fs``; nothing is cached.

        Args:
            fs: Filesystem to query.
            path: Path to describe.

        Returns:
            PathInfo for the path.
        """
        return cls(
            path=path,
            exists=fs.exists(path),
            is_file=fs.is_file(path),
            is_directory=fs.is_directory(path),
            is_symlink=fs.is_symlink(path),
            readable=fs.is_readable(path),
            writable=fs.is_writable(path),
            executable=fs.is_executable(path),
        )
