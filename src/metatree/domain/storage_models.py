from __future__ import annotations

"""
File Storage Data Models.

Defines the read-only view of a metafile's file list consumed by the tree
index: individual entries (path, size, padding flag), the ordered storage
container and the padding-directory predicate. Paths are handled as tuples
of segments so ordering and prefix tests never depend on separator quirks.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple, Union

PathLike = Union[str, Sequence[str]]
PathParts = Tuple[str, ...]

# -----------------------------------------------------------------------------
# PATH NORMALIZATION
# -----------------------------------------------------------------------------

def split_path(path: PathLike) -> PathParts:
    """
    Normalize a relative slash-segmented path into a tuple of segments.

    Empty segments and '.' are dropped, so "", ".", "/" and "./" all
    denote the root.

    Args:
        path: Relative path string or an existing sequence of segments.

    Returns:
        PathParts: Normalized segments.

    Raises:
        ValueError: If the path escapes its root through '..'.
    """
    if isinstance(path, str):
        raw = path.replace("\\", "/").split("/")
    else:
        raw = list(path)

    parts = tuple(p for p in raw if p not in ("", "."))
    if ".." in parts:
        raise ValueError(f"Relative path must not contain '..': {path!r}")
    return parts


def join_path(parts: Iterable[str]) -> str:
    """Render segments back into a slash-joined relative path."""
    return "/".join(parts)

# -----------------------------------------------------------------------------
# ENTRY MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileEntry:
    """
    A single file listed by a metafile.

    Entries compare by path segments, which keeps every directory's
    contents contiguous once a storage is sorted.

    Attributes:
        path: Relative path, slash separated.
        size: File size in bytes.
        is_padding: True for alignment filler files (BEP 47).
    """
    path: str
    size: int = 0
    is_padding: bool = False

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError(f"Negative size for entry '{self.path}': {self.size}")
        if not self.parts:
            raise ValueError("Entry path must not be empty.")

    @property
    def parts(self) -> PathParts:
        return split_path(self.path)

    @property
    def name(self) -> str:
        return self.parts[-1]

    def __lt__(self, other: FileEntry) -> bool:
        if not isinstance(other, FileEntry):
            return NotImplemented
        return self.parts < other.parts

# -----------------------------------------------------------------------------
# STORAGE CONTAINER
# -----------------------------------------------------------------------------

class FileStorage:
    """
    Immutable, ordered snapshot of the files described by a metafile.

    Keeps entries in their original (metafile) order; sorting is the tree
    index's concern.
    """

    def __init__(self, entries: Iterable[FileEntry] = ()) -> None:
        self._entries: Tuple[FileEntry, ...] = tuple(entries)

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> FileEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"FileStorage({len(self._entries)} entries)"

    def file_count(self) -> int:
        return len(self._entries)

    def total_file_size(self) -> int:
        """Total size in bytes, padding files included."""
        return sum(f.size for f in self._entries)

    def total_regular_file_size(self) -> int:
        """Total size in bytes of the non-padding files."""
        return sum(f.size for f in self._entries if not f.is_padding)


def is_padding_directory(storage: Iterable[FileEntry], path: PathLike) -> bool:
    """
    Check whether every file below a directory is a padding file.

    A directory without any file below it is not a padding directory.

    Args:
        storage: Ordered collection of entries.
        path: Directory path relative to the storage root.

    Returns:
        bool: True if the directory exists and holds padding files only.
    """
    prefix = split_path(path)
    depth = len(prefix)
    found = False

    for entry in storage:
        parts = entry.parts
        if len(parts) <= depth or parts[:depth] != prefix:
            continue
        if not entry.is_padding:
            return False
        found = True

    return found
