from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (subcommands, flags, defaults) and
translates parsed namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict

from metatree.infra.logging import get_default_log_path

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the metatree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="metatree",
        description="Inspect the file tree described by a metafile manifest.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration.",
    )
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Read configuration from this file instead of the user data directory.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration, including this run's flags, as the new defaults.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        nargs="?",
        const=get_default_log_path(),
        default=None,
        help="Also write diagnostics to a rotating log file.",
    )

    sub = p.add_subparsers(dest="command", metavar="<command>")

    # --- tree ---
    tree = sub.add_parser("tree", help="Show the file tree.")
    _add_manifest_argument(tree)
    tree.add_argument(
        "--root",
        default="",
        help="Directory of the tree to start from.",
    )
    tree.add_argument(
        "--prefix",
        default="",
        help="Text prepended to every line.",
    )
    tree.add_argument(
        "--no-file-size",
        action="store_true",
        help="Do not show file sizes.",
    )
    tree.add_argument(
        "--no-directory-size",
        action="store_true",
        help="Do not show aggregate directory sizes.",
    )
    tree.add_argument(
        "--no-color",
        action="store_true",
        help="Disable styling.",
    )
    _add_padding_argument(tree)
    tree.add_argument(
        "--max-width",
        dest="max_entry_size",
        type=int,
        default=None,
        help="Elide lines wider than this many terminal cells.",
    )
    tree.add_argument(
        "--verify",
        dest="verify_status",
        default=None,
        help="JSON file mapping paths to verified percentages; adds a status to each file.",
    )

    # --- files ---
    files = sub.add_parser("files", help="List the files in manifest order.")
    _add_manifest_argument(files)
    _add_padding_argument(files)
    files.add_argument(
        "--prefix",
        default=None,
        help="Custom directory to prepend to the files.",
    )

    # --- stats ---
    stats = sub.add_parser("stats", help="Show file statistics.")
    _add_manifest_argument(stats)
    _add_padding_argument(stats)

    # --- size ---
    size = sub.add_parser("size", help="Show the total size of the regular files.")
    _add_manifest_argument(size)
    size.add_argument(
        "-H", "--human-readable",
        action="store_true",
        help="Output size in a human readable format: eg. 1.00 MiB.",
    )

    return p


def _add_manifest_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument("manifest", help="JSON manifest describing the files.")


def _add_padding_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--show-padding-files",
        action="store_true",
        help="Include padding files.",
    )

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only flags that were actually set produce an override, so persisted
    settings survive unless the command line changes them.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if getattr(args, "no_file_size", False):
        overrides["show_file_size"] = False
    if getattr(args, "no_directory_size", False):
        overrides["show_directory_size"] = False
    if getattr(args, "no_color", False):
        overrides["use_color"] = False
    if getattr(args, "show_padding_files", False):
        overrides["list_padding_files"] = True
    if getattr(args, "max_entry_size", None) is not None:
        overrides["max_entry_size"] = args.max_entry_size

    return overrides
