from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An isolated user data directory for every test.
3. Shared storages used across unit and integration tests.
"""

import os
import sys

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from metatree.domain.storage_models import FileEntry, FileStorage  # noqa: E402


# -----------------------------------------------------------------------------
# Environment Isolation
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Redirect config and log files away from the real home directory."""
    data_dir = tmp_path / "metatree_home"
    monkeypatch.setenv("METATREE_HOME", str(data_dir))
    return data_dir


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_storage() -> FileStorage:
    """
    Two files in one directory plus a top-level file.

    Structure:
      a/x.txt  (10 B)
      a/y.txt  (20 B)
      b.txt    (5 B)
    """
    return FileStorage([
        FileEntry("b.txt", 5),
        FileEntry("a/y.txt", 20),
        FileEntry("a/x.txt", 10),
    ])


@pytest.fixture
def padded_storage() -> FileStorage:
    """A payload file followed by a BEP 47 padding file."""
    return FileStorage([
        FileEntry("f", 100),
        FileEntry(".pad/1", 28, is_padding=True),
    ])


@pytest.fixture
def project_storage() -> FileStorage:
    """
    Nested layout used for full rendering checks.

    Structure:
      docs/readme.md     (1 B)
      setup.py           (5 B)
      src/core/a.py      (2 B)
      src/core/b.py      (3 B)
      src/main.py        (4 B)
    """
    return FileStorage([
        FileEntry("src/main.py", 4),
        FileEntry("src/core/b.py", 3),
        FileEntry("docs/readme.md", 1),
        FileEntry("setup.py", 5),
        FileEntry("src/core/a.py", 2),
    ])
