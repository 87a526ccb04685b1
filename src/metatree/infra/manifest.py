from __future__ import annotations

"""
Manifest Loading.

Reads entry lists and verification results from JSON documents so the
renderer can be driven without a metafile parser.

Manifest layout (either form):
    [{"path": "dir/file.bin", "size": 123, "padding": false}, ...]
    {"files": [{"path": ["dir", "file.bin"], "size": 123}, ...]}

Verification status layout:
    {"dir/file.bin": 100.0, "other.bin": 42.5}
"""

import json
import logging
from typing import Any, Dict, List, Optional, Set

from metatree.core.analysis.line_decoration import StorageVerifier
from metatree.domain.constants import PADDING_DIRECTORY_NAME
from metatree.domain.errors import ManifestError
from metatree.domain.storage_models import FileEntry, FileStorage, PathParts, join_path, split_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_manifest(path: str) -> FileStorage:
    """
    Load a file storage from a JSON manifest on disk.

    Args:
        path: Manifest file path.

    Returns:
        FileStorage: Entries in manifest order.

    Raises:
        FileNotFoundError: If the manifest does not exist.
        ManifestError: If the document is not a valid manifest.
    """
    data = _read_json(path)
    storage = parse_manifest(data)
    logger.info(f"Loaded {len(storage)} entries from manifest: {path}")
    return storage


def parse_manifest(data: Any) -> FileStorage:
    """
    Build a file storage from a decoded manifest document.

    A missing `padding` flag defaults to True for files below the top-level
    '.pad' directory and False otherwise.

    Raises:
        ManifestError: On malformed items, on two items sharing a path and
            on a path used both as a file and as a directory.
    """
    if isinstance(data, dict):
        data = data.get("files")
    if not isinstance(data, list):
        raise ManifestError("Manifest must be a list of files or an object with a 'files' list.")

    entries: List[FileEntry] = []
    files: Set[PathParts] = set()
    directories: Set[PathParts] = set()

    for i, item in enumerate(data):
        entry = _parse_entry(item, i)
        parts = entry.parts
        if parts in files:
            raise ManifestError(f"Manifest item #{i} duplicates path '{entry.path}'.")
        if parts in directories:
            raise ManifestError(f"Manifest item #{i}: '{entry.path}' is also a directory.")

        ancestors = [parts[:depth] for depth in range(1, len(parts))]
        clash = next((a for a in ancestors if a in files), None)
        if clash is not None:
            raise ManifestError(f"Manifest item #{i}: '{join_path(clash)}' is both a file and a directory.")

        files.add(parts)
        directories.update(ancestors)
        entries.append(entry)

    return FileStorage(entries)


def load_verify_status(path: str) -> MappingVerifier:
    """
    Load per-file verification percentages from a JSON object on disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        ManifestError: If the document is not a path-to-percentage object.
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ManifestError("Verification status must be an object mapping paths to percentages.")

    percentages: Dict[str, float] = {}
    for key, value in data.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ManifestError(f"Invalid percentage for '{key}': {value!r}")
        if not 0 <= value <= 100:
            raise ManifestError(f"Percentage out of range for '{key}': {value}")
        percentages[join_path(split_path(key))] = float(value)

    logger.info(f"Loaded verification status for {len(percentages)} files: {path}")
    return MappingVerifier(percentages)

# -----------------------------------------------------------------------------
# VERIFIER
# -----------------------------------------------------------------------------

class MappingVerifier(StorageVerifier):
    """Verifier answering from a precomputed path-to-percentage mapping."""

    def __init__(self, percentages: Dict[str, float]) -> None:
        self._percentages = dict(percentages)

    def percentage(self, entry: FileEntry) -> Optional[float]:
        return self._percentages.get(join_path(entry.parts))

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid JSON in '{path}': {e}") from e


def _parse_entry(item: Any, position: int) -> FileEntry:
    if not isinstance(item, dict):
        raise ManifestError(f"Manifest item #{position} is not an object.")

    raw_path = item.get("path")
    if isinstance(raw_path, list) and all(isinstance(p, str) for p in raw_path):
        raw_path = "/".join(raw_path)
    if not isinstance(raw_path, str):
        raise ManifestError(f"Manifest item #{position} has no valid 'path'.")

    size = item.get("size", 0)
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        raise ManifestError(f"Manifest item #{position} has an invalid 'size': {size!r}")

    try:
        parts = split_path(raw_path)
    except ValueError as e:
        raise ManifestError(f"Manifest item #{position}: {e}") from e
    if not parts:
        raise ManifestError(f"Manifest item #{position} has an empty 'path'.")

    padding = item.get("padding")
    if padding is None:
        padding = len(parts) > 1 and parts[0] == PADDING_DIRECTORY_NAME
    elif not isinstance(padding, bool):
        raise ManifestError(f"Manifest item #{position} has a non-boolean 'padding'.")

    return FileEntry(path=join_path(parts), size=size, is_padding=padding)
