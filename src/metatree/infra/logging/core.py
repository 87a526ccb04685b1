from __future__ import annotations

"""
Logging Setup.

Installs one tagged QueueHandler on the root logger and drains it from a
QueueListener thread into the configured sinks. Setup runs once per
process unless forced; forcing tears down the previous listener and
handlers first.
"""

import atexit
import logging
import os
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from metatree.infra.fs import get_user_data_dir
from metatree.infra.logging.config import LEVELS, LoggingConfig
from metatree.infra.logging.handlers import (
    is_tagged,
    rotating_file_handler,
    stderr_handler,
    tag_handler,
)

CONFIGURED_ATTR = "_metatree_configured"
LISTENER_ATTR = "_metatree_queue_listener"


def get_default_log_path(file_name: str = "metatree.log") -> str:
    """Log file location inside the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Route root logger records through a queue into the configured sinks.

    Args:
        cfg: Level, sinks and formats.
        force: Rebuild the setup even if one is already installed.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, CONFIGURED_ATTR, False) and not force:
        return root

    level = LEVELS.get(str(cfg.level or "").strip().upper(), logging.WARNING)
    root.setLevel(level)
    _teardown(root)

    sinks: List[logging.Handler] = []
    if cfg.console:
        sinks.append(stderr_handler(level, logging.Formatter(cfg.console_fmt)))
    if cfg.log_file:
        fh = rotating_file_handler(
            cfg.log_file,
            level,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh is not None:
            sinks.append(fh)

    if not sinks:
        return root

    records: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    listener = QueueListener(records, *sinks, respect_handler_level=True)
    listener.start()
    root.addHandler(tag_handler(QueueHandler(records)))

    setattr(root, LISTENER_ATTR, listener)
    setattr(root, CONFIGURED_ATTR, True)
    atexit.register(stop_listener, listener)

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener, flushing queued records; no-op once stopped."""
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()


def _teardown(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if is_tagged(h):
            root.removeHandler(h)
            h.close()

    listener = getattr(root, LISTENER_ATTR, None)
    if listener is not None:
        stop_listener(listener)
        setattr(root, LISTENER_ATTR, None)
