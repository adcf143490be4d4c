from __future__ import annotations

"""
Publishing Domain Data Models.

Defines the forms collected before a publish, the lifecycle states of the
publish driver, and the immutable result object handed back to the
interface layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

# -----------------------------------------------------------------------------
# CONSTANTS
# -----------------------------------------------------------------------------

SPACE_SDKS = ("gradio", "streamlit", "static")
SPACE_LICENSES = ("mit", "apache-2.0", "gpl-3.0", "bsd-3-clause")
DEFAULT_DESCRIPTION = "Project created with Structure Builder"

# Entry point each Space SDK expects at the repository root
SDK_ENTRYPOINTS = {
    "gradio": "app.py",
    "streamlit": "app.py",
    "static": "index.html",
}

# Runtime version pinned in the descriptor. Static Spaces have no runtime.
SDK_VERSIONS = {
    "gradio": "4.44.0",
    "streamlit": "1.39.0",
}

# -----------------------------------------------------------------------------
# LIFECYCLE
# -----------------------------------------------------------------------------

class PublishState(Enum):
    """States of a single publish attempt."""
    IDLE = "IDLE"
    VALIDATING = "VALIDATING"
    CREATING = "CREATING"
    UPLOADING = "UPLOADING"
    DONE = "DONE"
    FAILED = "FAILED"
    REJECTED = "REJECTED"

# -----------------------------------------------------------------------------
# FORMS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GitHubRepoForm:
    """
    Repository creation request.

    Attributes:
        repo_name: Name of the repository to create.
        description: Free-text description.
        private: Visibility flag.
        branch: Branch receiving the file writes.
    """
    repo_name: str
    description: str = DEFAULT_DESCRIPTION
    private: bool = False
    branch: str = "main"


@dataclass(frozen=True)
class SpaceForm:
    """
    Hugging Face Space creation request.

    Attributes:
        space_name: Name of the Space to create.
        description: Free-text body placed in the descriptor file.
        sdk: One of SPACE_SDKS.
        license: One of SPACE_LICENSES.
        private: Visibility flag.
        sdk_version: Version pinned in the descriptor front matter. None
            uses the SDK default from SDK_VERSIONS.
    """
    space_name: str
    description: str = DEFAULT_DESCRIPTION
    sdk: str = "gradio"
    license: str = "mit"
    private: bool = False
    sdk_version: Optional[str] = None

# -----------------------------------------------------------------------------
# RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class UploadOutcome:
    """Result of writing one flattened entry to the remote store."""
    path: str
    ok: bool
    status: Optional[int] = None
    attempts: int = 1
    error: str = ""


@dataclass(frozen=True)
class PublishResult:
    """
    Final report of a publish attempt.

    Attributes:
        state: Terminal state reached (DONE, FAILED or REJECTED).
        title: Short user-facing headline.
        message: Explanatory user-facing text.
        url: Location of the created container, when known.
        reason: Validation reason key for REJECTED results.
        outcomes: Per-file upload outcomes, in upload order.
    """
    state: PublishState
    title: str
    message: str
    url: str = ""
    reason: str = ""
    outcomes: List[UploadOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state is PublishState.DONE

    @property
    def failed_paths(self) -> List[str]:
        return [o.path for o in self.outcomes if not o.ok]
