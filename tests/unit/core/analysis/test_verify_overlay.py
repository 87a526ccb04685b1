from __future__ import annotations

"""
Unit tests for the Verify Overlay.

Verifies that verification statuses decorate file lines through the shared
tree walk, leaving directory lines and sizes untouched.
"""

from typing import Dict, Optional

from metatree.core.analysis.line_decoration import StorageVerifier, VerifyDecoration
from metatree.core.analysis.tree_renderer import TreePrinter, format_file_tree, format_verify_file_tree
from metatree.domain.storage_models import FileEntry
from metatree.domain.tree_models import LineStatus, TreeOptions


class FakeVerifier(StorageVerifier):
    """Verifier answering from a dict keyed by entry path."""

    def __init__(self, percentages: Dict[str, float]) -> None:
        self.percentages = percentages

    def percentage(self, entry: FileEntry) -> Optional[float]:
        return self.percentages.get(entry.path)


def test_status_glyphs():
    """Complete, missing, partial and unknown files map to distinct statuses."""
    decoration = VerifyDecoration(FakeVerifier({
        "done": 100.0,
        "gone": 0.0,
        "half": 42.4,
        "almost": 99.6,
    }))

    assert decoration.status(FileEntry("done")) == LineStatus("✓", "green")
    assert decoration.status(FileEntry("gone")) == LineStatus("✗", "red")
    assert decoration.status(FileEntry("half")) == LineStatus("42%", "yellow")
    assert decoration.status(FileEntry("almost")) == LineStatus("99%", "yellow")
    assert decoration.status(FileEntry("unknown")) is None


def test_verify_tree_plain(sample_storage):
    """Statuses are appended after the size of each file line."""
    verifier = FakeVerifier({"a/x.txt": 100.0, "a/y.txt": 50.0, "b.txt": 0.0})
    output = format_verify_file_tree(sample_storage, verifier, options=TreeOptions(use_color=False))

    assert output == (
        "├── a 30 B\n"
        "│   ├── x.txt 10 B ✓\n"
        "│   └── y.txt 20 B 50%\n"
        "└── b.txt 5 B ✗\n"
    )


def test_verify_tree_colored(sample_storage):
    """Status glyphs carry their own style when color is enabled."""
    verifier = FakeVerifier({"b.txt": 100.0})
    lines = format_verify_file_tree(sample_storage, verifier).splitlines()

    assert lines[-1] == "└── b.txt 5 B \x1b[32m✓\x1b[0m"
    assert lines[1] == "│   ├── x.txt 10 B"


def test_overlay_shares_tree_layout(project_storage):
    """Without verification data the overlay renders exactly the plain tree."""
    options = TreeOptions(use_color=False)
    plain = format_file_tree(project_storage, options=options)
    overlay = format_verify_file_tree(project_storage, FakeVerifier({}), options=options)

    assert overlay == plain


def test_overlay_entries_keep_references(sample_storage):
    """Structured output of the overlay still references the entries."""
    printer = TreePrinter(
        sample_storage,
        options=TreeOptions(use_color=False),
        decoration=VerifyDecoration(FakeVerifier({"b.txt": 100.0})),
    )
    printer.walk()
    label, entry = printer.entries()[-1]

    assert label == "└── b.txt 5 B ✓"
    assert entry is sample_storage[0]
