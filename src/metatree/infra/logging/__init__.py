from __future__ import annotations

from .config import LoggingConfig
from .core import configure_logging, get_default_log_path, get_logger

__all__ = [
    "LoggingConfig",
    "configure_logging",
    "get_default_log_path",
    "get_logger",
]
