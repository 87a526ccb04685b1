from __future__ import annotations

"""
Storage Statistics and Flat Listings.

Summaries that complement the tree view: a short statistics block (file,
directory and padding counts plus total size) and the flat file list used
by the `files` command.
"""

import posixpath
from typing import List, Optional

from metatree.core.analysis.tree_index import FileTreeIndex
from metatree.domain.storage_models import FileStorage
from metatree.utils.formatters import format_size


def format_file_stats(
        storage: FileStorage,
        prefix: str = "",
        include_pad_files: bool = False,
) -> str:
    """
    Summarize a storage as a block of prefixed lines.

    Padding files are always counted on their own line; they only take part
    in the file/directory counts and the total size when `include_pad_files`
    is set.

    Args:
        storage: Ordered collection of file entries.
        prefix: Text prepended to every line.
        include_pad_files: Count padding files and directories as regular ones.

    Returns:
        str: Newline-terminated statistics block.
    """
    index = FileTreeIndex(storage, list_padding_files=include_pad_files)

    padding_count = sum(1 for f in storage if f.is_padding)
    if include_pad_files:
        file_count = storage.file_count()
        total_size = storage.total_file_size()
    else:
        file_count = storage.file_count() - padding_count
        total_size = storage.total_regular_file_size()

    # The root is not a directory of the payload
    directory_count = sum(
        1 for path, node in index.directories() if path and not node.is_padding_only
    )

    lines = [
        f"Files:         {file_count}",
        f"Directories:   {directory_count}",
        f"Padding files: {padding_count}",
        f"Total size:    {format_size(total_size)} ({total_size} bytes)",
    ]
    return "".join(f"{prefix}{line}\n" for line in lines)


def list_files(
        storage: FileStorage,
        prefix: Optional[str] = None,
        show_padding_files: bool = False,
) -> List[str]:
    """
    List file paths in storage order.

    Args:
        storage: Ordered collection of file entries.
        prefix: Optional directory the paths are joined under.
        show_padding_files: Keep padding files in the listing.

    Returns:
        List[str]: Relative (or prefixed) file paths.
    """
    base = posixpath.normpath(prefix) if prefix else ""
    out: List[str] = []

    for f in storage:
        if f.is_padding and not show_padding_files:
            continue
        path = "/".join(f.parts)
        out.append(posixpath.join(base, path) if base else path)

    return out
