from __future__ import annotations

"""
Unit tests for the Tree Renderer.

Verifies connector layout, size suffixes, styling, elision, padding
visibility, structured output and cancellation of the depth-first walk.
"""

from rich.cells import cell_len
from rich.style import Style

from metatree.core.analysis.tree_renderer import TreePrinter, format_file_tree
from metatree.domain.storage_models import FileEntry, FileStorage
from metatree.domain.tree_models import TreeOptions

PLAIN = TreeOptions(use_color=False)


def test_render_sample_tree(sample_storage):
    """Depth-first rendering with file and directory sizes."""
    expected = (
        "├── a 30 B\n"
        "│   ├── x.txt 10 B\n"
        "│   └── y.txt 20 B\n"
        "└── b.txt 5 B\n"
    )
    assert format_file_tree(sample_storage, options=PLAIN) == expected


def test_render_without_directory_size(sample_storage):
    """Directory lines carry no size when directory sizes are off."""
    options = TreeOptions(use_color=False, show_directory_size=False)
    lines = format_file_tree(sample_storage, options=options).splitlines()

    assert lines[0] == "├── a"
    assert lines[-1] == "└── b.txt 5 B"


def test_render_without_any_size(sample_storage):
    """Names only when both size toggles are off."""
    options = TreeOptions(use_color=False, show_directory_size=False, show_file_size=False)
    assert format_file_tree(sample_storage, options=options) == (
        "├── a\n"
        "│   ├── x.txt\n"
        "│   └── y.txt\n"
        "└── b.txt\n"
    )


def test_render_nested_guides(project_storage):
    """Guides continue below non-last children and stay blank below last ones."""
    expected = (
        "├── docs 1 B\n"
        "│   └── readme.md 1 B\n"
        "├── setup.py 5 B\n"
        "└── src 9 B\n"
        "    ├── core 5 B\n"
        "    │   ├── a.py 2 B\n"
        "    │   └── b.py 3 B\n"
        "    └── main.py 4 B\n"
    )
    assert format_file_tree(project_storage, options=PLAIN) == expected


def test_exactly_one_corner_per_directory(project_storage):
    """Each listed directory has exactly one last-child connector."""
    printer = TreePrinter(project_storage, options=PLAIN)
    printer.walk()
    lines = printer.result().splitlines()

    top_level = [line for line in lines if not line.startswith(("│", " "))]
    assert [line[:4] for line in top_level] == ["├── ", "├── ", "└── "]

    core_children = [line for line in lines if line.startswith("    │   ")]
    assert [line[8:12] for line in core_children] == ["├── ", "└── "]


def test_render_from_subdirectory(project_storage):
    """Walking from a non-root directory renders only its subtree."""
    assert format_file_tree(project_storage, options=PLAIN, root="src") == (
        "├── core 5 B\n"
        "│   ├── a.py 2 B\n"
        "│   └── b.py 3 B\n"
        "└── main.py 4 B\n"
    )


def test_prefix_is_prepended(sample_storage):
    """Every line starts with the caller supplied prefix."""
    output = format_file_tree(sample_storage, prefix="  ", options=PLAIN)
    assert all(line.startswith("  ") for line in output.splitlines())
    assert output.splitlines()[1] == "  │   ├── x.txt 10 B"


def test_empty_storage_renders_nothing():
    assert format_file_tree(FileStorage(), options=PLAIN) == ""


def test_padding_hidden_by_default(padded_storage):
    assert format_file_tree(padded_storage, options=PLAIN) == "└── f 100 B\n"


def test_padding_listed_when_enabled(padded_storage):
    options = TreeOptions(use_color=False, list_padding_files=True)
    assert format_file_tree(padded_storage, options=options) == (
        "├── .pad 28 B\n"
        "│   └── 1 28 B\n"
        "└── f 100 B\n"
    )


def test_directory_style_applied(sample_storage):
    """Directories are blue by default; files are unstyled."""
    output = format_file_tree(sample_storage, options=TreeOptions())
    lines = output.splitlines()

    assert lines[0] == "├── \x1b[34ma\x1b[0m 30 B"
    assert lines[-1] == "└── b.txt 5 B"


def test_custom_styles(sample_storage):
    """Style definitions from the options drive the rendered escape codes."""
    options = TreeOptions(directory_style="bold", file_style="red")
    lines = format_file_tree(sample_storage, options=options).splitlines()

    assert lines[0] == "├── \x1b[1ma\x1b[0m 30 B"
    assert lines[-1] == "└── \x1b[31mb.txt\x1b[0m 5 B"


def test_file_styler_overrides_file_style(sample_storage):
    """A per-entry styler takes precedence over the configured file style."""
    def styler(entry: FileEntry) -> Style:
        return Style(bold=True) if entry.path.endswith("x.txt") else Style.null()

    printer = TreePrinter(sample_storage, options=TreeOptions(file_style="red"), file_styler=styler)
    printer.walk()
    lines = printer.result().splitlines()

    assert lines[1] == "│   ├── \x1b[1mx.txt\x1b[0m 10 B"
    assert lines[2] == "│   └── y.txt 20 B"


def test_long_lines_are_elided(sample_storage):
    """Lines above the width limit end with an ellipsis at exactly that width."""
    options = TreeOptions(use_color=False, max_entry_size=10)
    lines = format_file_tree(sample_storage, options=options).splitlines()

    assert lines[0] == "├── a 30 B"
    assert lines[1] == "│   ├──..."
    assert lines[3] == "└── b.t..."
    assert all(cell_len(line) <= 10 for line in lines)


def test_elision_counts_display_cells():
    """Wide glyphs count as two cells when measuring and cropping."""
    storage = FileStorage([FileEntry("日本語.txt", 1)])

    nine = TreeOptions(use_color=False, show_file_size=False, max_entry_size=9)
    assert format_file_tree(storage, options=nine) == "└── 日...\n"

    ten = TreeOptions(use_color=False, show_file_size=False, max_entry_size=10)
    line = format_file_tree(storage, options=ten).rstrip("\n")
    assert cell_len(line) == 10
    assert line.endswith("...")


def test_elision_keeps_styles_on_visible_part(sample_storage):
    """Cropping a styled name keeps its escape codes balanced."""
    options = TreeOptions(file_style="red", max_entry_size=8)
    lines = format_file_tree(sample_storage, options=options).splitlines()

    assert lines[0] == "├── \x1b[34ma\x1b[0m..."
    assert lines[-1] == "└── \x1b[31mb\x1b[0m..."


def test_print_entry_reports_elision(sample_storage):
    printer = TreePrinter(sample_storage, options=TreeOptions(use_color=False, max_entry_size=12))

    assert printer.print_entry(("a",), None, "├── ") is False
    assert printer.print_entry(("a", "x.txt"), sample_storage[2], "│   ├── ") is True


def test_entries_follow_visitation_order(sample_storage):
    """Structured output pairs each plain line with its entry, None for directories."""
    printer = TreePrinter(sample_storage, options=TreeOptions())
    printer.walk()
    entries = printer.entries()

    assert [label for label, _ in entries] == [
        "├── a 30 B",
        "│   ├── x.txt 10 B",
        "│   └── y.txt 20 B",
        "└── b.txt 5 B",
    ]
    assert entries[0][1] is None
    assert [e.path for _, e in entries[1:]] == ["a/x.txt", "a/y.txt", "b.txt"]


def test_rendering_is_idempotent(project_storage):
    """Walking twice, or with a fresh printer, yields identical output."""
    printer = TreePrinter(project_storage)
    printer.walk()
    first = printer.result()
    printer.walk()

    assert printer.result() == first
    assert format_file_tree(project_storage) == first


def test_cancellation_between_frames(project_storage):
    """Cancelling stops before the next directory is opened, keeping whole lines."""
    calls = []

    def should_cancel() -> bool:
        calls.append(1)
        return len(calls) > 1

    printer = TreePrinter(project_storage, options=PLAIN)
    printer.walk(should_cancel=should_cancel)

    assert printer.cancelled is True
    assert printer.result() == "├── docs 1 B\n"


def test_cancellation_before_root(sample_storage):
    printer = TreePrinter(sample_storage, options=PLAIN)
    printer.walk(should_cancel=lambda: True)

    assert printer.cancelled is True
    assert printer.result() == ""
    assert printer.entries() == []
