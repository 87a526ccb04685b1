from __future__ import annotations

"""
Domain Constants.

Centralizes the box-drawing glyphs used by the tree renderer, the default
styles applied to entries, and configuration schema versioning.
"""

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# TREE GLYPHS
# -----------------------------------------------------------------------------
NODE = "├── "
END_NODE = "└── "
SUB = "│   "
SUB_LAST = "    "

ELLIPSIS = "..."

# -----------------------------------------------------------------------------
# STYLES (rich style definitions)
# -----------------------------------------------------------------------------
DEFAULT_DIRECTORY_STYLE = "blue"
DEFAULT_FILE_STYLE = ""

VERIFY_COMPLETE_GLYPH = "✓"
VERIFY_MISSING_GLYPH = "✗"
VERIFY_COMPLETE_STYLE = "green"
VERIFY_MISSING_STYLE = "red"
VERIFY_PARTIAL_STYLE = "yellow"

# BEP 47 padding files live under this top-level directory
PADDING_DIRECTORY_NAME = ".pad"
