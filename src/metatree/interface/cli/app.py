from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration resolution
(defaults, persisted file and command-line overrides), manifest loading and
dispatch to the requested view (tree, flat file list, statistics, size).
"""

import argparse
import json
import sys
from typing import Any, Callable, Dict, List, Optional

from metatree.core.analysis.line_decoration import VerifyDecoration
from metatree.core.analysis.tree_renderer import TreePrinter
from metatree.core.analysis.tree_stats import format_file_stats, list_files
from metatree.core.pipeline.validator import validate_config
from metatree.domain.config import get_default_config, load_config, save_config, tree_options_from_config
from metatree.domain.errors import ManifestError
from metatree.domain.storage_models import FileStorage
from metatree.infra.fs import normalize_path
from metatree.infra.logging import LoggingConfig, configure_logging, get_logger
from metatree.infra.manifest import load_manifest, load_verify_status
from metatree.interface.cli import args as cli_args
from metatree.utils.formatters import format_size

logger = get_logger(__name__)

# Exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Resolve configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config(args.config_path)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        save_config(clean_conf, args.config_path)

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if not args.command:
        parser.print_help()
        return EXIT_OK

    # 4. Input loading
    manifest_path = normalize_path(args.manifest)
    try:
        storage = load_manifest(manifest_path)
    except FileNotFoundError:
        return _input_error(f"Manifest does not exist: {manifest_path}")
    except ManifestError as e:
        return _input_error(str(e))

    # 5. Command dispatch
    handler = _DISPATCH_TABLE[args.command]
    try:
        return handler(args, storage, clean_conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except (FileNotFoundError, ManifestError) as e:
        return _input_error(str(e))
    except Exception as e:
        logger.critical(f"Command '{args.command}' failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def run_tree_command(args: argparse.Namespace, storage: FileStorage, conf: Dict[str, Any]) -> int:
    """Render the file tree, with verification status when requested."""
    decoration = None
    if args.verify_status:
        decoration = VerifyDecoration(load_verify_status(normalize_path(args.verify_status)))

    printer = TreePrinter(
        storage,
        prefix=args.prefix,
        options=tree_options_from_config(conf),
        decoration=decoration,
    )

    if args.root and args.root not in printer.index:
        return _input_error(f"Directory not found in manifest: {args.root}")

    printer.walk(args.root)
    sys.stdout.write(printer.result())
    return EXIT_OK


def run_files_command(args: argparse.Namespace, storage: FileStorage, conf: Dict[str, Any]) -> int:
    """Print one file path per line, in manifest order."""
    for path in list_files(storage, prefix=args.prefix, show_padding_files=conf["list_padding_files"]):
        print(path)
    return EXIT_OK


def run_stats_command(args: argparse.Namespace, storage: FileStorage, conf: Dict[str, Any]) -> int:
    """Print the statistics block."""
    sys.stdout.write(format_file_stats(storage, include_pad_files=conf["list_padding_files"]))
    return EXIT_OK


def run_size_command(args: argparse.Namespace, storage: FileStorage, conf: Dict[str, Any]) -> int:
    """Print the total size of the regular (non-padding) files."""
    total = storage.total_regular_file_size()
    print(format_size(total) if args.human_readable else total)
    return EXIT_OK


_DISPATCH_TABLE: Dict[str, Callable[[argparse.Namespace, FileStorage, Dict[str, Any]], int]] = {
    "tree": run_tree_command,
    "files": run_files_command,
    "stats": run_stats_command,
    "size": run_size_command,
}

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of override values into the base configuration.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out


def _input_error(msg: str) -> int:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return EXIT_INVALID_INPUT

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
