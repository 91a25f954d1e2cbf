"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands.

The filesystem is typed using the ``Filesystem`` Protocol rather than a
concrete implementation, so ``MemoryFilesystem`` or a mock can be injected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from fskit.config import FilesystemSettings, load_settings
from fskit.protocols import Filesystem


def _default_filesystem() -> Filesystem:
    """Create the default filesystem implementation."""
    from fskit.filesystem import LocalFilesystem
    return LocalFilesystem()


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for the services used by CLI commands.
    """

    filesystem: Filesystem = field(default_factory=_default_filesystem)
    settings: FilesystemSettings = field(default_factory=FilesystemSettings)


def create_context(config_path: Path | None = None) -> AppContext:
    """Factory for application dependencies.

    Creates the host filesystem configured from the settings file. Use this
    in production code. For tests, construct AppContext directly with test
    doubles.

    Args:
        config_path: Override settings file location.

    Returns:
        Configured AppContext.
    """
    from fskit.filesystem import LocalFilesystem

    settings = load_settings(config_path)
    return AppContext(filesystem=LocalFilesystem(settings), settings=settings)
