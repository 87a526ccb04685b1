from __future__ import annotations

"""
Per-Line Decoration Strategies.

A decoration supplies an optional status (glyph + style) for a file entry,
appended by the tree renderer to that entry's line. The verification
overlay is one such strategy, backed by a storage verifier reporting how
much of each file is present on disk.
"""

from abc import ABC, abstractmethod
from typing import Optional

from metatree.domain.constants import (
    VERIFY_COMPLETE_GLYPH,
    VERIFY_COMPLETE_STYLE,
    VERIFY_MISSING_GLYPH,
    VERIFY_MISSING_STYLE,
    VERIFY_PARTIAL_STYLE,
)
from metatree.domain.storage_models import FileEntry
from metatree.domain.tree_models import LineStatus


class LineDecoration(ABC):
    """
    Abstract capability decorating file lines of a rendered tree.
    """

    @abstractmethod
    def status(self, entry: FileEntry) -> Optional[LineStatus]:
        """
        Resolve the decoration for a file entry.

        Args:
            entry: File entry being rendered.

        Returns:
            Optional[LineStatus]: Glyph and style, or None to leave the line as is.
        """
        pass


class StorageVerifier(ABC):
    """
    Abstract source of per-file verification results.
    """

    @abstractmethod
    def percentage(self, entry: FileEntry) -> Optional[float]:
        """
        Return the verified share of a file, from 0.0 to 100.0.

        Returns None when no result is known for the entry.
        """
        pass


class VerifyDecoration(LineDecoration):
    """
    Decorates file lines with their verification status.

    Complete files get a green check mark, missing files a red cross and
    partially present files their rounded percentage in yellow.
    """

    def __init__(self, verifier: StorageVerifier) -> None:
        self._verifier = verifier

    def status(self, entry: FileEntry) -> Optional[LineStatus]:
        pct = self._verifier.percentage(entry)
        if pct is None:
            return None
        if pct >= 100.0:
            return LineStatus(VERIFY_COMPLETE_GLYPH, VERIFY_COMPLETE_STYLE)
        if pct <= 0.0:
            return LineStatus(VERIFY_MISSING_GLYPH, VERIFY_MISSING_STYLE)

        # Never round a partial file up to a complete-looking value
        shown = min(int(round(pct)), 99)
        return LineStatus(f"{shown}%", VERIFY_PARTIAL_STYLE)
