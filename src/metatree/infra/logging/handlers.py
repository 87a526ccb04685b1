from __future__ import annotations

"""
Logging Sinks.

Builds the handlers driven by the queue listener and marks them, so a
reconfiguration removes what metatree installed and nothing else (pytest's
capture handlers, for instance).
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

HANDLER_TAG = "_metatree_handler"


def tag_handler(handler: logging.Handler) -> logging.Handler:
    setattr(handler, HANDLER_TAG, True)
    return handler


def is_tagged(handler: logging.Handler) -> bool:
    return bool(getattr(handler, HANDLER_TAG, False))


def stderr_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    """Console sink bound to the current sys.stderr."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(formatter)
    return tag_handler(sh)


def rotating_file_handler(
        log_file: str,
        level: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open a size-rotated log file, creating its directory first.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None when the file
        cannot be opened (a warning is written to stderr instead).
    """
    try:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level)
    fh.setFormatter(formatter)
    tag_handler(fh)
    return fh
