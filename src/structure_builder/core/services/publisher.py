from __future__ import annotations

"""
Project Publishing Service.

Drives one publish attempt of the current forest to a remote target:
validation, creation of the remote container, then one write per
flattened entry. Each publisher instance walks the state machine

    IDLE -> VALIDATING -> CREATING -> UPLOADING -> DONE

exactly once. Validation problems end in REJECTED and remote problems
in FAILED. A failed publish is restarted with a new instance.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

from structure_builder.core.services.flattener import FlatEntries, flatten_forest
from structure_builder.core.services.retry import RetryPolicy, send_with_retry
from structure_builder.core.services.space_descriptor import (
    DESCRIPTOR_PATH,
    build_descriptor,
    build_entrypoint_stub,
    entrypoint_path,
)
from structure_builder.domain.errors import RemoteRejection, UploadFailure, ValidationError
from structure_builder.domain.publish_models import (
    SPACE_SDKS,
    GitHubRepoForm,
    PublishResult,
    PublishState,
    SpaceForm,
    UploadOutcome,
)
from structure_builder.domain.tree_models import Forest
from structure_builder.infra.credentials import mask_token
from structure_builder.infra.network import github_client, huggingface_client
from structure_builder.infra.network.common import DEFAULT_TIMEOUT
from structure_builder.utils.i18n import i18n

logger = logging.getLogger(__name__)

HF_SPACES_URL = "https://huggingface.co/spaces"

# -----------------------------------------------------------------------------
# SHARED STATE MACHINE
# -----------------------------------------------------------------------------

class _Publisher(ABC):
    """
    Single-use publish driver. Subclasses provide validation, container
    creation and the upload loop.
    """

    target = ""
    failed_title_key = ""

    def __init__(self, token: str, forest: Forest, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._token = (token or "").strip()
        self._forest = forest
        self._timeout = timeout
        self._state = PublishState.IDLE
        self._history: List[PublishState] = [PublishState.IDLE]

    @property
    def state(self) -> PublishState:
        return self._state

    @property
    def history(self) -> List[PublishState]:
        """States visited so far, in order."""
        return list(self._history)

    def publish(self) -> PublishResult:
        """
        Run the full publish sequence.

        Returns:
            PublishResult: Terminal report. Never raises for domain failures.

        Raises:
            RuntimeError: If this instance already ran.
        """
        if self._state is not PublishState.IDLE:
            raise RuntimeError(
                f"{type(self).__name__} already ran (state={self._state.value}); "
                "create a new publisher to try again."
            )

        self._transition(PublishState.VALIDATING)
        try:
            self._validate()
        except ValidationError as e:
            return self._reject(e)

        logger.info(f"Publishing to {self.target} with token {mask_token(self._token)}.")

        self._transition(PublishState.CREATING)
        try:
            url = self._create()
        except RemoteRejection as e:
            return self._fail(str(e))

        self._transition(PublishState.UPLOADING)
        return self._upload(url)

    # -- hooks -------------------------------------------------------------

    @abstractmethod
    def _validate(self) -> None:
        """Raise ValidationError for the first unmet precondition."""

    @abstractmethod
    def _create(self) -> str:
        """Create the remote container and return its public URL."""

    @abstractmethod
    def _upload(self, url: str) -> PublishResult:
        """Write every entry and build the terminal result."""

    # -- helpers -----------------------------------------------------------

    def _require(self, condition: bool, reason: str, **kwargs: str) -> None:
        if not condition:
            raise ValidationError(reason, i18n.t(f"publish.rejected.{reason}.message", **kwargs))

    def _check_common(self) -> None:
        self._require(bool(self._token), f"missing_token_{self.target}")
        self._require(bool(self._forest), "empty_tree")

    def _transition(self, state: PublishState) -> None:
        logger.debug(f"{self.target} publish: {self._state.value} -> {state.value}")
        self._state = state
        self._history.append(state)

    def _reject(self, error: ValidationError) -> PublishResult:
        self._transition(PublishState.REJECTED)
        logger.warning(f"{self.target} publish rejected: {error.reason}")
        return PublishResult(
            state=PublishState.REJECTED,
            title=i18n.t(f"publish.rejected.{error.reason}.title"),
            message=str(error),
            reason=error.reason,
        )

    def _fail(
            self,
            message: str,
            url: str = "",
            outcomes: Optional[List[UploadOutcome]] = None,
    ) -> PublishResult:
        self._transition(PublishState.FAILED)
        logger.error(f"{self.target} publish failed: {message}")
        return PublishResult(
            state=PublishState.FAILED,
            title=i18n.t(self.failed_title_key),
            message=message,
            url=url,
            outcomes=outcomes or [],
        )

    def _done(self, title: str, message: str, url: str, outcomes: List[UploadOutcome]) -> PublishResult:
        self._transition(PublishState.DONE)
        logger.info(message)
        return PublishResult(
            state=PublishState.DONE,
            title=title,
            message=message,
            url=url,
            outcomes=outcomes,
        )

# -----------------------------------------------------------------------------
# GITHUB REPOSITORY TARGET
# -----------------------------------------------------------------------------

class GitHubPublisher(_Publisher):
    """
    Creates a repository and writes every entry, best-effort.

    A failed file write is logged and recorded but never stops the
    remaining writes. Writes go one at a time: each one is a commit on the
    target branch, and concurrent commits to one ref conflict.
    """

    target = "github"
    failed_title_key = "publish.github.failed_title"

    def __init__(
            self,
            token: str,
            forest: Forest,
            form: GitHubRepoForm,
            *,
            timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        super().__init__(token, forest, timeout=timeout)
        self._form = form
        self._full_name = ""

    def _validate(self) -> None:
        self._check_common()
        self._require(bool(self._form.repo_name.strip()), "missing_repo_name")

    def _create(self) -> str:
        repo = github_client.create_repository(self._token, self._form, timeout=self._timeout)
        self._full_name = repo.get("full_name") or self._form.repo_name
        return repo.get("html_url", "")

    def _upload(self, url: str) -> PublishResult:
        entries = flatten_forest(self._forest)

        outcomes = [self._write_entry(entry) for entry in entries]

        uploaded = sum(1 for o in outcomes if o.ok)
        if uploaded < len(outcomes):
            logger.warning(f"GitHub: {len(outcomes) - uploaded} file(s) could not be uploaded.")

        return self._done(
            i18n.t("publish.github.done_title"),
            i18n.t(
                "publish.github.done_message",
                name=self._form.repo_name,
                uploaded=uploaded,
                total=len(outcomes),
            ),
            url,
            outcomes,
        )

    def _write_entry(self, entry: Tuple[str, str]) -> UploadOutcome:
        path, content = entry
        status = github_client.put_file(
            self._token,
            self._full_name,
            path,
            content,
            branch=self._form.branch,
            timeout=self._timeout,
        )
        ok = status is not None and 200 <= status < 300
        if not ok:
            failure = UploadFailure(path, status)
            logger.warning(str(failure))
            return UploadOutcome(path=path, ok=False, status=status, error=str(failure))
        return UploadOutcome(path=path, ok=True, status=status)

# -----------------------------------------------------------------------------
# HUGGING FACE SPACE TARGET
# -----------------------------------------------------------------------------

class SpacePublisher(_Publisher):
    """
    Creates a Space and commits every entry through the bounded retry loop.

    The descriptor README is written first, followed by a stub entry point
    when the SDK needs one the project lacks. A root README.md of the
    project is replaced by the descriptor. Files upload one at a time and
    the first file that cannot be written fails the publish.
    """

    target = "huggingface"
    failed_title_key = "publish.space.failed_title"

    def __init__(
            self,
            token: str,
            forest: Forest,
            form: SpaceForm,
            *,
            policy: Optional[RetryPolicy] = None,
            sleep: Callable[[float], None] = time.sleep,
            timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        super().__init__(token, forest, timeout=timeout)
        self._form = form
        self._policy = policy or RetryPolicy()
        self._sleep = sleep
        self._repo_id = ""

    def _validate(self) -> None:
        self._check_common()
        self._require(bool(self._form.space_name.strip()), "missing_space_name")
        self._require(self._form.sdk in SPACE_SDKS, "invalid_sdk", value=self._form.sdk)

    def _create(self) -> str:
        username = huggingface_client.whoami(self._token, timeout=self._timeout)
        huggingface_client.create_space(self._token, self._form, timeout=self._timeout)
        self._repo_id = f"{username}/{self._form.space_name}"
        return f"{HF_SPACES_URL}/{self._repo_id}"

    def upload_plan(self) -> FlatEntries:
        """List the files this publisher writes, in write order."""
        entries = flatten_forest(self._forest)
        plan: FlatEntries = [(DESCRIPTOR_PATH, build_descriptor(self._form, self._forest))]

        entry_file = entrypoint_path(self._form.sdk)
        existing = {path for path, _ in entries}
        if entry_file and entry_file not in existing:
            plan.append((entry_file, build_entrypoint_stub(self._form)))

        for path, content in entries:
            if path == DESCRIPTOR_PATH:
                logger.info("Project README.md replaced by the Space descriptor.")
                continue
            plan.append((path, content))
        return plan

    def _upload(self, url: str) -> PublishResult:
        outcomes: List[UploadOutcome] = []

        for path, content in self.upload_plan():
            try:
                report = send_with_retry(
                    path,
                    lambda p=path, c=content: huggingface_client.upload_file(
                        self._token, self._repo_id, p, c, f"Add {p}", timeout=self._timeout
                    ),
                    self._policy,
                    sleep=self._sleep,
                )
            except UploadFailure as e:
                outcomes.append(UploadOutcome(path=path, ok=False, status=e.status, error=str(e)))
                return self._fail(str(e), url=url, outcomes=outcomes)

            outcomes.append(
                UploadOutcome(path=path, ok=True, status=report.status, attempts=report.attempts)
            )

        return self._done(
            i18n.t("publish.space.done_title"),
            i18n.t("publish.space.done_message", name=self._form.space_name, total=len(outcomes)),
            url,
            outcomes,
        )
