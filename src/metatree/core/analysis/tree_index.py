from __future__ import annotations

"""
File Tree Index.

Turns the flat file list of a storage into a directory index. Entries are
sorted once by path segments, which places every directory's files in one
contiguous block; a single forward pass then records, per directory, its
range in the sorted order, its aggregate size and whether it holds padding
files only. Directories live in an arena of nodes, each mapping child
segments to arena slots.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from metatree.domain.errors import ContractViolation, DuplicatePathError
from metatree.domain.storage_models import (
    FileEntry,
    FileStorage,
    PathLike,
    PathParts,
    join_path,
    split_path,
)
from metatree.domain.tree_models import DirectoryContentEntry, DirectoryNode

logger = logging.getLogger(__name__)

_ROOT = 0


class FileTreeIndex:
    """
    Read-only directory index over a file storage.

    Args:
        storage: Ordered collection of file entries.
        list_padding_files: When False, directories holding padding files
            only are flagged and omitted from listings, as are padding files.
    """

    def __init__(self, storage: FileStorage, list_padding_files: bool = False) -> None:
        self._storage = storage
        self._list_padding_files = list_padding_files

        self._entries: Tuple[FileEntry, ...] = tuple(storage)
        self._parts: List[PathParts] = [f.parts for f in self._entries]
        self._indices: List[int] = []
        self._nodes: List[DirectoryNode] = []

        self._create_sorted_file_indices()
        self._create_directory_map()

        if not self._list_padding_files:
            self._mark_padding_only_directories()

        logger.debug(
            f"Indexed {len(self._indices)} files into {len(self._nodes)} directories "
            f"({self._nodes[_ROOT].total_size} bytes)."
        )

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    @property
    def list_padding_files(self) -> bool:
        return self._list_padding_files

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, tuple, list)):
            return False
        try:
            parts = split_path(path)
        except ValueError:
            return False
        return self._find(parts) is not None

    def __len__(self) -> int:
        """Number of registered directories, root included."""
        return len(self._nodes)

    def get_directory(self, path: PathLike = "") -> DirectoryNode:
        """
        Return the node registered for a directory path.

        Raises:
            ContractViolation: If the path was never registered.
        """
        parts = split_path(path)
        slot = self._find(parts)
        if slot is None:
            raise ContractViolation(f"Directory not registered in index: '{join_path(parts)}'")
        return self._nodes[slot]

    def get_directory_size(self, path: PathLike = "") -> int:
        """
        Return the aggregate size of every file at or below a directory.

        Args:
            path: Directory path previously produced by the index.

        Returns:
            int: Total size in bytes, padding files included.

        Raises:
            ContractViolation: If the path was never registered.
        """
        return self.get_directory(path).total_size

    def list_directory_content(self, path: PathLike = "") -> List[DirectoryContentEntry]:
        """
        List the immediate children of a directory in sorted order.

        Walks the directory's range of the sorted index and collapses every
        run of entries sharing their next path segment into one subdirectory
        item, skipping the rest of that run.

        Args:
            path: Directory path previously produced by the index.

        Returns:
            List[DirectoryContentEntry]: Subdirectories (entry=None) and files.

        Raises:
            ContractViolation: If the path was never registered.
        """
        node = self.get_directory(path)
        depth = len(node.path)
        out: List[DirectoryContentEntry] = []

        i = node.first
        while i < node.last:
            index = self._indices[i]
            parts = self._parts[index]

            # Entry lives in a subdirectory: list it once and jump over its range
            if len(parts) - depth > 1:
                name = parts[depth]
                child = self._nodes[node.children[name]]
                if not child.is_padding_only:
                    out.append(DirectoryContentEntry(name=name))
                i = child.last
                continue

            entry = self._entries[index]
            if self._list_padding_files or not entry.is_padding:
                out.append(DirectoryContentEntry(name=parts[-1], entry=entry))
            i += 1

        return out

    def directories(self) -> Iterator[Tuple[str, DirectoryNode]]:
        """Iterate over (path, node) pairs in registration order."""
        for node in self._nodes:
            yield join_path(node.path), node

    def sorted_entries(self) -> List[FileEntry]:
        """Return the entries in sorted index order."""
        return [self._entries[i] for i in self._indices]

    # -------------------------------------------------------------------------
    # CONSTRUCTION
    # -------------------------------------------------------------------------

    def _create_sorted_file_indices(self) -> None:
        parts = self._parts
        self._indices = sorted(range(len(self._entries)), key=lambda i: parts[i])

        for prev, cur in zip(self._indices, self._indices[1:]):
            if parts[prev] == parts[cur]:
                raise DuplicatePathError(join_path(parts[cur]))
            # A file sorts right before the entries below a same-named directory
            if parts[cur][:len(parts[prev])] == parts[prev]:
                raise ContractViolation(f"Path is both a file and a directory: '{join_path(parts[prev])}'")

    def _create_directory_map(self) -> None:
        root = DirectoryNode(
            path=(),
            first=0,
            last=len(self._indices),
            total_size=self._storage.total_file_size(),
        )
        root.all_padding = bool(self._entries) and all(f.is_padding for f in self._entries)
        self._nodes.append(root)

        for position, index in enumerate(self._indices):
            entry = self._entries[index]
            parts = self._parts[index]
            slot = _ROOT

            # Ancestors only: the final segment is the file itself
            for depth in range(1, len(parts)):
                name = parts[depth - 1]
                node = self._nodes[slot]
                child_slot = node.children.get(name)

                if child_slot is None:
                    child_slot = len(self._nodes)
                    self._nodes.append(DirectoryNode(
                        path=parts[:depth],
                        first=position,
                        last=position + 1,
                        total_size=entry.size,
                        all_padding=entry.is_padding,
                    ))
                    node.children[name] = child_slot
                else:
                    child = self._nodes[child_slot]
                    child.last += 1
                    child.total_size += entry.size
                    child.all_padding = child.all_padding and entry.is_padding

                slot = child_slot

    def _mark_padding_only_directories(self) -> None:
        for node in self._nodes:
            if node.all_padding:
                node.is_padding_only = True

    def _find(self, parts: Sequence[str]) -> Optional[int]:
        slot = _ROOT
        for name in parts:
            next_slot = self._nodes[slot].children.get(name)
            if next_slot is None:
                return None
            slot = next_slot
        return slot
