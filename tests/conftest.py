"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from fskit.filesystem import LocalFilesystem
from fskit.memory import MemoryFilesystem

TEST_FILE = "test.txt"
TEST_FILE_DATA = "test"
SUB_DIRECTORY = "subDirectory"
SUB_FILE = "subFile.txt"
SUB_FILE_DATA = "subFile"
SUB_FILE_2 = "subFile2.txt"
SUB_FILE_2_DATA = "subFile2"

MEMORY_BASE = "/baseDirectory"

# Permission bits are not enforced for root on the host filesystem
running_as_root = pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="permission checks are bypassed for root",
)


# ============================================================================
# Host Filesystem Fixtures
# ============================================================================


@pytest.fixture
def base_dir(tmp_path: Path) -> Iterator[Path]:
    """Create the sample tree used across tests.

    baseDirectory/
        test.txt
        subDirectory/
            subFile2.txt   (created first)
            subFile.txt
    """
    base = tmp_path / "baseDirectory"
    sub = base / SUB_DIRECTORY
    sub.mkdir(parents=True)
    (base / TEST_FILE).write_text(TEST_FILE_DATA)
    (sub / SUB_FILE_2).write_text(SUB_FILE_2_DATA)
    (sub / SUB_FILE).write_text(SUB_FILE_DATA)
    yield base
    # Restore permissions so tmp_path cleanup can remove everything
    for root, dirs, files in os.walk(base):
        for name in dirs + files:
            os.chmod(os.path.join(root, name), 0o755)


@pytest.fixture
def local_fs() -> LocalFilesystem:
    """Create a host-backed filesystem."""
    return LocalFilesystem()


# ============================================================================
# In-Memory Filesystem Fixtures
# ============================================================================


@pytest.fixture
def memory_fs() -> MemoryFilesystem:
    """Create an in-memory filesystem holding the sample tree."""
    fs = MemoryFilesystem()
    fs.create_file(f"{MEMORY_BASE}/{TEST_FILE}", TEST_FILE_DATA)
    fs.create_file(f"{MEMORY_BASE}/{SUB_DIRECTORY}/{SUB_FILE_2}", SUB_FILE_2_DATA)
    fs.create_file(f"{MEMORY_BASE}/{SUB_DIRECTORY}/{SUB_FILE}", SUB_FILE_DATA)
    return fs


# ============================================================================
# Mock Filesystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock Filesystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.is_symlink.return_value = False
    fs.is_directory.return_value = False
    fs.list_directory.return_value = []
    return fs
