from __future__ import annotations

"""
Domain Error Taxonomy.

Every failure raised while preparing or publishing a project maps to one
of three classes: locally detected validation problems, rejections of the
remote container creation, and failed individual file writes.
"""

from typing import Optional


class StructureBuilderError(Exception):
    """Base class for all project-level failures."""


class ValidationError(StructureBuilderError):
    """
    Locally detected precondition failure. Never retried.

    Attributes:
        reason: Machine-readable key (e.g. 'missing_token', 'empty_tree').
    """

    def __init__(self, reason: str, message: str = "") -> None:
        super().__init__(message or reason)
        self.reason = reason


class RemoteRejection(StructureBuilderError):
    """
    The remote service refused to create the target container.

    Attributes:
        status: HTTP status code, or None for connectivity failures.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class UploadFailure(StructureBuilderError):
    """
    A single file write did not succeed.

    Attributes:
        path: Root-relative path of the file being written.
        status: Last HTTP status observed, or None for connectivity failures.
    """

    def __init__(self, path: str, status: Optional[int], detail: str = "") -> None:
        msg = f"Upload of '{path}' failed (status: {status})"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
        self.path = path
        self.status = status
