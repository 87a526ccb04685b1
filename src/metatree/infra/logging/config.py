from __future__ import annotations

"""
Logging Settings.

Frozen description of the sinks the CLI wants (stderr, rotating file) and
the level names accepted on the command line or in config files.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

LEVELS: Dict[str, int] = {
    name: getattr(logging, name)
    for name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
}
LEVELS["WARN"] = logging.WARNING


@dataclass(frozen=True)
class LoggingConfig:
    """
    Sinks and formats for a logging setup.

    Attributes:
        level: Level name, case insensitive; unknown names mean WARNING.
        console: Write records to stderr.
        log_file: Rotating log file path, None to disable.
        max_bytes: Rollover size of the log file.
        backup_count: Rotated files kept next to the log file.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
