from __future__ import annotations

"""
Bounded Retry Loop for Remote File Writes.

Used for Space uploads, where a freshly created container answers
'not found' until provisioning completes. Only that status is retried;
every other failure aborts at once.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from structure_builder.domain.errors import UploadFailure

logger = logging.getLogger(__name__)

HTTP_NOT_FOUND = 404

# A sender performs one write attempt and returns the HTTP status
# (None when the request never reached the server).
Sender = Callable[[], Optional[int]]


@dataclass(frozen=True)
class RetryPolicy:
    """
    Exponential backoff with a ceiling.

    Attributes:
        max_attempts: Total attempts per file, first one included.
        base_delay: Seconds to wait after the first failed attempt.
        factor: Multiplier applied to the delay after each retry.
        max_delay: Ceiling for any single wait.
    """
    max_attempts: int = 5
    base_delay: float = 2.0
    factor: float = 2.0
    max_delay: float = 15.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("Delays cannot be negative.")
        if self.factor < 1:
            raise ValueError("factor must be >= 1 to keep delays non-decreasing.")

    def delays(self) -> Iterator[float]:
        """Yield the waits between consecutive attempts (max_attempts - 1 values)."""
        delay = self.base_delay
        for _ in range(self.max_attempts - 1):
            yield min(delay, self.max_delay)
            delay *= self.factor


@dataclass(frozen=True)
class RetryReport:
    status: int
    attempts: int


def send_with_retry(
        path: str,
        send: Sender,
        policy: RetryPolicy,
        sleep: Callable[[float], None] = time.sleep,
) -> RetryReport:
    """
    Run `send` until it succeeds, aborts, or the attempt budget is spent.

    Args:
        path: File path being written (used in logs and errors).
        send: One write attempt returning the HTTP status.
        policy: Attempt budget and backoff shape.
        sleep: Wait function, replaceable in tests.

    Returns:
        RetryReport: Successful status and the number of attempts used.

    Raises:
        UploadFailure: On a non-retryable status, a connectivity failure,
            or after the last 'not found' answer.
    """
    delays = policy.delays()
    attempt = 0
    status: Optional[int] = None

    while True:
        attempt += 1
        status = send()

        if status is not None and 200 <= status < 300:
            if attempt > 1:
                logger.info(f"Uploaded '{path}' after {attempt} attempts.")
            return RetryReport(status=status, attempts=attempt)

        if status != HTTP_NOT_FOUND:
            raise UploadFailure(path, status, "non-retryable response")

        delay = next(delays, None)
        if delay is None:
            break

        logger.warning(
            f"'{path}' not found on remote (attempt {attempt}/{policy.max_attempts}). "
            f"Retrying in {delay:.1f}s."
        )
        sleep(delay)

    raise UploadFailure(path, status, f"gave up after {attempt} attempts")
