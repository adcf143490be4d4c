from __future__ import annotations

"""
Logging Bootstrap.

Configures the root logger once per process. Records are pushed onto a
queue by a single QueueHandler and written by a QueueListener thread, so
publishing loops never block on console or file I/O.
"""

import atexit
import logging
import os
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from structure_builder.infra.fs import get_user_data_dir
from structure_builder.infra.logging.config import LoggingConfig
from structure_builder.infra.logging.handlers import (
    create_console_handler,
    create_rotating_file_handler,
    is_own_handler,
    tag_handler,
)

CONFIGURED_FLAG_ATTR: str = "_structure_builder_configured"
QUEUE_LISTENER_ATTR: str = "_structure_builder_queue_listener"

# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "structure_builder.log") -> str:
    """Path of the persistent log file inside the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Install the queue-based handler chain on the root logger.

    Repeated calls are no-ops unless `force` is set, in which case the
    previous chain is torn down first.

    Args:
        cfg: Logging settings.
        force: Rebuild even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level = cfg.level_value
    root.setLevel(level)

    shutdown_logging(root)

    sinks: List[logging.Handler] = []
    if cfg.console:
        sinks.append(create_console_handler(level, logging.Formatter(cfg.console_fmt)))
    if cfg.log_file:
        fh = create_rotating_file_handler(
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

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    root.addHandler(tag_handler(QueueHandler(log_queue)))

    listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
    listener.start()
    atexit.register(_stop_listener, listener)

    setattr(root, QUEUE_LISTENER_ATTR, listener)
    setattr(root, CONFIGURED_FLAG_ATTR, True)
    return root


def shutdown_logging(root: Optional[logging.Logger] = None) -> None:
    """Flush and detach everything `configure_logging` installed."""
    root = root or logging.getLogger()

    _stop_listener(getattr(root, QUEUE_LISTENER_ATTR, None))
    setattr(root, QUEUE_LISTENER_ATTR, None)

    for handler in list(root.handlers):
        if is_own_handler(handler):
            root.removeHandler(handler)
            handler.close()

    setattr(root, CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _stop_listener(listener: Optional[QueueListener]) -> None:
    # QueueListener.stop() fails on a listener whose thread was already joined
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
