from __future__ import annotations

"""
Text Formatting Utilities.

Human-readable byte sizes and display-width aware line elision. Widths are
measured in terminal cells (rich.cells) rather than characters or bytes, so
wide glyphs and box-drawing connectors are accounted for correctly.
"""

from typing import List, Optional, Sequence, Tuple

from rich.cells import cell_len
from rich.segment import Segment

from metatree.domain.constants import ELLIPSIS

_SIZE_UNITS = ("KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


def format_size(size: int) -> str:
    """
    Format a byte count using IEC units.

    Args:
        size: Byte count (>= 0).

    Returns:
        str: e.g. "512 B", "1.50 KiB", "4.00 GiB".
    """
    if size < 1024:
        return f"{size} B"
    value = float(size)
    for unit in _SIZE_UNITS:
        value /= 1024.0
        if value < 1024.0:
            return f"{value:.2f} {unit}"
    return f"{value:.2f} EiB"


def line_width(segments: Sequence[Segment]) -> int:
    """Total display width of a line made of segments."""
    return sum(cell_len(s.text) for s in segments)


def ellipsize(
        segments: Sequence[Segment],
        max_size: Optional[int],
) -> Tuple[List[Segment], bool]:
    """
    Crop a line so it never exceeds a maximum display width.

    When the line is too wide its trailing cells are replaced by an
    ellipsis, leaving a line of exactly `max_size` cells. Lines at or under
    the limit are returned unchanged.

    Args:
        segments: Styled pieces of the line, in order.
        max_size: Maximum width in cells, None for unbounded.

    Returns:
        Tuple[List[Segment], bool]: The resulting segments and whether the
        line was elided.
    """
    line = list(segments)
    if max_size is None or line_width(line) <= max_size:
        return line, False

    marker = ELLIPSIS[:max(max_size, 0)]
    keep = max_size - len(marker)
    cropped = Segment.adjust_line_length(line, keep, pad=False) if keep > 0 else []
    cropped.append(Segment(marker))
    return cropped, True
