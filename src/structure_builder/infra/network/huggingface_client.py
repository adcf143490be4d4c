from __future__ import annotations

import logging
from typing import Dict, Optional

import requests

from structure_builder.domain.errors import RemoteRejection
from structure_builder.domain.publish_models import SpaceForm
from structure_builder.infra.network.common import (
    DEFAULT_TIMEOUT,
    USER_AGENT,
    encode_content,
    error_message,
)

logger = logging.getLogger(__name__)

HF_API_URL = "https://huggingface.co/api"


def _headers(token: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "User-Agent": USER_AGENT,
    }


def whoami(token: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """
    Resolve the account name behind a token.

    Raises:
        RemoteRejection: If the token is refused or the service is unreachable.
    """
    try:
        response = requests.get(f"{HF_API_URL}/whoami-v2", headers=_headers(token), timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise RemoteRejection(f"Hugging Face API communication failure: {e}") from e

    if not response.ok:
        raise RemoteRejection("Invalid Hugging Face token", response.status_code)

    name = (response.json() or {}).get("name", "")
    if not name:
        raise RemoteRejection("Hugging Face identity response carried no account name")
    return str(name)


def create_space(token: str, form: SpaceForm, timeout: float = DEFAULT_TIMEOUT) -> None:
    """
    Create a Space owned by the token holder.

    Raises:
        RemoteRejection: On a non-2xx answer or a transport failure.
    """
    payload = {
        "type": "space",
        "name": form.space_name,
        "private": form.private,
        "sdk": form.sdk,
        "license": form.license,
    }
    logger.info(f"Hugging Face: creating Space '{form.space_name}' (sdk={form.sdk}).")

    try:
        response = requests.post(
            f"{HF_API_URL}/repos/create",
            json=payload,
            headers=_headers(token),
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        raise RemoteRejection(f"Hugging Face API communication failure: {e}") from e

    if not response.ok:
        msg = error_message(response, "error", "message") or "Failed to create space"
        logger.error(f"Hugging Face: Space creation rejected ({response.status_code}): {msg}")
        raise RemoteRejection(msg, response.status_code)


def upload_file(
        token: str,
        repo_id: str,
        path: str,
        content: str,
        commit_message: str = "",
        timeout: float = DEFAULT_TIMEOUT,
) -> Optional[int]:
    """
    Commit one file to the main branch of a Space.

    Returns:
        Optional[int]: HTTP status, or None if the request never completed.
    """
    payload = {
        "files": [{"path": path, "content": encode_content(content)}],
        "commit_message": commit_message or f"Add {path}",
    }
    try:
        response = requests.post(
            f"{HF_API_URL}/repos/{repo_id}/upload/main",
            json=payload,
            headers=_headers(token),
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        logger.warning(f"Hugging Face: transport failure while writing '{path}': {e}")
        return None

    logger.debug(f"Hugging Face: write of '{path}' answered {response.status_code}.")
    return response.status_code
