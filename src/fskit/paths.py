"""Pure path helpers.

Nothing here touches the filesystem. Paths are passed through verbatim apart
from parent extraction.
"""

from __future__ import annotations

import os

# Characters trimmed from the end of a derived parent directory
_PARENT_TRAILING = "./\\"
_SEPARATORS = "/\\"


def get_parent_directory(path: str) -> str:
    """Get the parent directory of a file or directory path.

    The final segment is dropped, then trailing separators and current
    directory markers are trimmed from what remains. A path without a real
    parent yields an empty string.

    Args:
        path: File or directory path.

    Returns:
        Parent directory, or "" when there is none.

    Example:
        >>> get_parent_directory("/parent/child")
        '/parent'
        >>> get_parent_directory("./child")
        ''
    """
    return os.path.dirname(path.rstrip(_SEPARATORS)).rstrip(_PARENT_TRAILING)


def join_path(directory: str, name: str) -> str:
    """Join a directory and a child name."""
    return os.path.join(directory, name)


def base_name(path: str) -> str:
    """Get the final segment of a path, ignoring trailing separators."""
    return os.path.basename(path.rstrip(_SEPARATORS))


def is_within(path: str, directory: str) -> bool:
    """Check whether ``path`` is ``directory`` itself or nested inside it."""
    path = os.path.abspath(path)
    directory = os.path.abspath(directory)
    return path == directory or path.startswith(directory.rstrip(os.sep) + os.sep)
