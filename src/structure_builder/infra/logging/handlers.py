from __future__ import annotations

"""
Handler factories and ownership tagging.

Handlers created here carry a marker attribute so reconfiguration only
removes what this package installed and leaves foreign handlers alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

HANDLER_TAG_ATTR: str = "_structure_builder_handler"


def tag_handler(handler: logging.Handler) -> logging.Handler:
    setattr(handler, HANDLER_TAG_ATTR, True)
    return handler


def is_own_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, HANDLER_TAG_ATTR, False))


def create_console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return tag_handler(handler)


def create_rotating_file_handler(
        log_file: str,
        level: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Build a rotating file handler, creating the parent directory first.

    Returns:
        Optional[RotatingFileHandler]: None when the file cannot be opened;
        a warning goes to stderr since logging is not up yet.
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: cannot open log file '{log_file}': {e}\n")
        return None

    handler.setLevel(level)
    handler.setFormatter(formatter)
    tag_handler(handler)
    return handler
