from __future__ import annotations

"""
Logging Configuration Model.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings applied by `configure_logging`.

    Attributes:
        level: Minimum severity name.
        console: Emit to stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Size threshold before the file rolls over.
        backup_count: Rolled-over files kept.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @property
    def level_value(self) -> int:
        return LEVELS.get(str(self.level or "").strip().upper(), logging.INFO)
