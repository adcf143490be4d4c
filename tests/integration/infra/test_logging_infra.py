from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the asynchronous QueueListener architecture, idempotency
of configuration, and log file rotation logic.
"""

import logging
import time
from pathlib import Path

from structure_builder.infra.logging import (
    CONFIGURED_FLAG_ATTR,
    HANDLER_TAG_ATTR,
    QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    shutdown_logging,
)


def test_logging_idempotency() -> None:
    """TC-01: Verify that multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    root = logging.getLogger()
    initial_handler_count = len(root.handlers)

    configure_logging(cfg)
    assert len(root.handlers) == initial_handler_count, "Handlers were duplicated."


def test_log_rotation(tmp_path: Path) -> None:
    """TC-02: Verify file rotation when size limit is exceeded."""
    log_file = tmp_path / "test_rotate.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")

    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    # Stopping the listener drains the queue
    shutdown_logging()

    backup_file = tmp_path / "test_rotate.log.1"
    assert log_file.exists()
    assert backup_file.exists(), "Rotation backup file was not created."


def test_queue_listener_architecture() -> None:
    """TC-03: Verify that the root logger uses a QueueHandler-based architecture."""
    configure_logging(LoggingConfig(level="INFO", console=True))

    root = logging.getLogger()
    own_handlers = [h for h in root.handlers if getattr(h, HANDLER_TAG_ATTR, False)]

    assert len(own_handlers) == 1
    assert getattr(root, QUEUE_LISTENER_ATTR) is not None
    assert getattr(root, CONFIGURED_FLAG_ATTR) is True


def test_force_and_shutdown_leave_foreign_handlers(tmp_path: Path) -> None:
    """TC-04: Reconfiguration only removes handlers this package installed."""
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    try:
        configure_logging(LoggingConfig(console=True))
        configure_logging(LoggingConfig(level="DEBUG", log_file=str(tmp_path / "x.log")), force=True)
        assert root.level == logging.DEBUG

        shutdown_logging()
        assert foreign in root.handlers
        assert not any(getattr(h, HANDLER_TAG_ATTR, False) for h in root.handlers)
        assert getattr(root, CONFIGURED_FLAG_ATTR) is False
    finally:
        root.removeHandler(foreign)


def test_file_only_sink_writes_records(tmp_path: Path) -> None:
    """TC-05: Records reach the log file through the queue."""
    log_file = tmp_path / "logs" / "app.log"
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=str(log_file)))

    logging.getLogger("structure_builder.test").info("hello file")
    time.sleep(0.1)
    shutdown_logging()

    assert "hello file" in log_file.read_text(encoding="utf-8")


def test_unknown_level_defaults_to_info() -> None:
    """TC-06: Unrecognized level names resolve to INFO."""
    assert LoggingConfig(level="chatty").level_value == logging.INFO
    assert LoggingConfig(level="warn").level_value == logging.WARNING


def test_default_log_path_in_data_dir(isolated_data_dir: Path) -> None:
    """TC-07: The persistent log file lives under the data directory."""
    assert get_default_log_path().startswith(str(isolated_data_dir))
