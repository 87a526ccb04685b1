from __future__ import annotations

"""
Tree Renderer.

Walks a file tree index depth-first and renders one line per visible entry
with box-drawing connectors, optional size suffixes, optional styling and
width-bounded elision. The walk uses an explicit stack of directory frames
instead of recursion, which also gives cancellation a well defined place:
only between frames, so partial output never holds a half-written line.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from rich.color import ColorSystem
from rich.segment import Segment
from rich.style import Style

from metatree.core.analysis.line_decoration import LineDecoration, StorageVerifier, VerifyDecoration
from metatree.core.analysis.tree_index import FileTreeIndex
from metatree.domain.constants import END_NODE, NODE, SUB, SUB_LAST
from metatree.domain.storage_models import (
    FileEntry,
    FileStorage,
    PathLike,
    PathParts,
    join_path,
    split_path,
)
from metatree.domain.tree_models import DirectoryContentEntry, TreeOptions
from metatree.utils.formatters import ellipsize, format_size

logger = logging.getLogger(__name__)

FileStyler = Callable[[FileEntry], Style]
TreeLine = Tuple[str, Optional[FileEntry]]

# -----------------------------------------------------------------------------
# TRAVERSAL STATE
# -----------------------------------------------------------------------------

@dataclass
class _StackFrame:
    path: PathParts
    content: List[DirectoryContentEntry]
    guides: str
    index: int = 0

    @property
    def exhausted(self) -> bool:
        return self.index >= len(self.content)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

class TreePrinter:
    """
    Depth-first renderer of a storage's file tree.

    Args:
        storage: Ordered collection of file entries.
        prefix: Text prepended to every rendered line.
        options: Rendering options.
        decoration: Optional per-file line decoration (e.g. verify overlay).
        file_styler: Optional callable choosing a style per file entry,
            overriding `options.file_style`.
    """

    def __init__(
            self,
            storage: FileStorage,
            prefix: str = "",
            options: Optional[TreeOptions] = None,
            decoration: Optional[LineDecoration] = None,
            file_styler: Optional[FileStyler] = None,
    ) -> None:
        self._options = options or TreeOptions()
        self._prefix = prefix
        self._decoration = decoration
        self._file_styler = file_styler
        self._index = FileTreeIndex(storage, list_padding_files=self._options.list_padding_files)

        self._directory_style = Style.parse(self._options.directory_style)
        self._file_style = Style.parse(self._options.file_style)

        self._lines: List[str] = []
        self._output: List[TreeLine] = []
        self.cancelled = False

    @property
    def index(self) -> FileTreeIndex:
        return self._index

    @property
    def options(self) -> TreeOptions:
        return self._options

    def walk(
            self,
            root: PathLike = "",
            should_cancel: Optional[Callable[[], bool]] = None,
    ) -> None:
        """
        Render the subtree below a directory, replacing any previous output.

        Args:
            root: Directory to start from, the storage root by default.
            should_cancel: Polled before each directory is opened; returning
                True stops the walk, keeping the lines rendered so far.

        Raises:
            ContractViolation: If `root` is not a directory of the index.
        """
        self._lines = []
        self._output = []
        self.cancelled = False

        root_parts = split_path(root)
        stack: List[_StackFrame] = []

        if not self._open_frame(stack, root_parts, "", should_cancel):
            return

        while stack:
            frame = stack[-1]
            if frame.exhausted:
                stack.pop()
                continue

            item = frame.content[frame.index]
            frame.index += 1
            is_last = frame.exhausted

            connector = END_NODE if is_last else NODE
            path = frame.path + (item.name,)
            self.print_entry(path, item.entry, frame.guides + connector)

            if item.is_directory:
                guides = frame.guides + (SUB_LAST if is_last else SUB)
                if not self._open_frame(stack, path, guides, should_cancel):
                    break

        logger.debug(
            f"Rendered {len(self._lines)} tree lines from '{join_path(root_parts)}'"
            + (" (cancelled)" if self.cancelled else "")
        )

    def print_entry(self, path: PathParts, entry: Optional[FileEntry], node: str) -> bool:
        """
        Format and record the line of a single tree entry.

        Args:
            path: Full path of the entry relative to the storage root.
            entry: File entry, or None for a directory.
            node: Guides and connector preceding the name.

        Returns:
            bool: True if the line had to be elided.
        """
        segments = [Segment(self._prefix + node)]

        if entry is None:
            segments.append(Segment(path[-1], self._directory_style))
            if self._options.show_directory_size:
                size = self._index.get_directory_size(path)
                segments.append(Segment(f" {format_size(size)}"))
        else:
            segments.append(Segment(path[-1], self._style_for(entry)))
            if self._options.show_file_size:
                segments.append(Segment(f" {format_size(entry.size)}"))
            if self._decoration is not None:
                status = self._decoration.status(entry)
                if status is not None:
                    segments.append(Segment(" "))
                    segments.append(Segment(status.glyph, Style.parse(status.style)))

        segments, elided = ellipsize(segments, self._options.max_entry_size)

        self._output.append(("".join(s.text for s in segments), entry))
        self._lines.append(self._render(segments))
        return elided

    def entries(self) -> List[TreeLine]:
        """Return (plain line, entry or None) pairs in visitation order."""
        return list(self._output)

    def result(self) -> str:
        """Return the rendered tree, one newline-terminated line per entry."""
        return "".join(f"{line}\n" for line in self._lines)

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _open_frame(
            self,
            stack: List[_StackFrame],
            path: PathParts,
            guides: str,
            should_cancel: Optional[Callable[[], bool]],
    ) -> bool:
        if should_cancel is not None and should_cancel():
            self.cancelled = True
            return False
        content = self._index.list_directory_content(path)
        stack.append(_StackFrame(path=path, content=content, guides=guides))
        return True

    def _style_for(self, entry: FileEntry) -> Style:
        if self._file_styler is not None:
            return self._file_styler(entry)
        return self._file_style

    def _render(self, segments: List[Segment]) -> str:
        if not self._options.use_color:
            return "".join(s.text for s in segments)
        return "".join(
            s.style.render(s.text, color_system=ColorSystem.STANDARD) if s.style else s.text
            for s in segments
        )

# -----------------------------------------------------------------------------
# FACADES
# -----------------------------------------------------------------------------

def format_file_tree(
        storage: FileStorage,
        prefix: str = "",
        options: Optional[TreeOptions] = None,
        root: PathLike = "",
) -> str:
    """
    Render the file tree of a storage as text.

    Args:
        storage: Ordered collection of file entries.
        prefix: Text prepended to every line.
        options: Rendering options.
        root: Directory to start from.

    Returns:
        str: Rendered tree, empty for an empty storage.
    """
    printer = TreePrinter(storage, prefix=prefix, options=options)
    printer.walk(root)
    return printer.result()


def format_verify_file_tree(
        storage: FileStorage,
        verifier: StorageVerifier,
        prefix: str = "",
        options: Optional[TreeOptions] = None,
        root: PathLike = "",
) -> str:
    """
    Render the file tree with each file's verification status appended.
    """
    printer = TreePrinter(
        storage,
        prefix=prefix,
        options=options,
        decoration=VerifyDecoration(verifier),
    )
    printer.walk(root)
    return printer.result()
