from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the node types of the directory index arena, the items returned
when listing a directory, and the immutable option set driving the tree
renderer.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from metatree.domain.constants import DEFAULT_DIRECTORY_STYLE, DEFAULT_FILE_STYLE
from metatree.domain.storage_models import FileEntry, PathParts

# -----------------------------------------------------------------------------
# INDEX COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class DirectoryNode:
    """
    A directory of the file tree index.

    Attributes:
        path: Normalized path segments (empty tuple for the root).
        first: Index of the first entry of the directory in the sorted index.
        last: One past the index of the last entry of the directory.
        total_size: Sum of the sizes of all entries in [first, last).
        is_padding_only: True when the subtree holds padding files only and
            padding files are hidden.
        children: Child segment to arena index.
    """
    path: PathParts
    first: int
    last: int
    total_size: int = 0
    is_padding_only: bool = False
    children: Dict[str, int] = field(default_factory=dict)

    # Accumulated during construction, independent of padding visibility
    all_padding: bool = True

    @property
    def name(self) -> str:
        return self.path[-1] if self.path else ""

    @property
    def entry_count(self) -> int:
        return self.last - self.first


@dataclass(frozen=True)
class DirectoryContentEntry:
    """
    Immediate child of a directory.

    Attributes:
        name: Child name relative to the listed directory.
        entry: The file entry, or None when the child is a subdirectory.
    """
    name: str
    entry: Optional[FileEntry] = None

    @property
    def is_directory(self) -> bool:
        return self.entry is None

# -----------------------------------------------------------------------------
# RENDERING OPTIONS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TreeOptions:
    """
    Immutable option set for the tree renderer.

    Attributes:
        show_file_size: Append each file's size.
        show_directory_size: Append each directory's aggregate size.
        use_color: Apply styles; when False styling is a passthrough.
        list_padding_files: Show padding files and padding-only directories.
        max_entry_size: Maximum rendered width in cells, None for unbounded.
        directory_style: rich style definition for directory names.
        file_style: rich style definition for file names.
    """
    show_file_size: bool = True
    show_directory_size: bool = True
    use_color: bool = True
    list_padding_files: bool = False
    max_entry_size: Optional[int] = None
    directory_style: str = DEFAULT_DIRECTORY_STYLE
    file_style: str = DEFAULT_FILE_STYLE


@dataclass(frozen=True)
class LineStatus:
    """Decoration appended to a file line (e.g. a verification result)."""
    glyph: str
    style: str = ""
