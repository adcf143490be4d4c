from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from structure_builder.domain.errors import RemoteRejection
from structure_builder.domain.publish_models import GitHubRepoForm
from structure_builder.infra.network.common import (
    DEFAULT_TIMEOUT,
    USER_AGENT,
    encode_content,
    error_message,
)

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
HTTP_UNPROCESSABLE = 422


def _headers(token: str) -> Dict[str, str]:
    return {
        "Authorization": f"token {token}",
        "Accept": "application/vnd.github.v3+json",
        "User-Agent": USER_AGENT,
    }


def create_repository(
        token: str,
        form: GitHubRepoForm,
        timeout: float = DEFAULT_TIMEOUT,
) -> Dict[str, Any]:
    """
    Create a repository owned by the authenticated user.

    Raises:
        RemoteRejection: On a non-2xx answer or a transport failure.
    """
    payload = {
        "name": form.repo_name,
        "description": form.description,
        "private": form.private,
        "auto_init": True,
    }
    logger.info(f"GitHub: creating repository '{form.repo_name}' (private={form.private}).")

    try:
        response = requests.post(
            f"{GITHUB_API_URL}/user/repos",
            json=payload,
            headers=_headers(token),
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        raise RemoteRejection(f"GitHub API communication failure: {e}") from e

    if not response.ok:
        msg = error_message(response, "message") or "Failed to create repository"
        logger.error(f"GitHub: repository creation rejected ({response.status_code}): {msg}")
        raise RemoteRejection(msg, response.status_code)

    return response.json()


def put_file(
        token: str,
        full_name: str,
        path: str,
        content: str,
        branch: str = "main",
        timeout: float = DEFAULT_TIMEOUT,
) -> Optional[int]:
    """
    Write one file through the contents API.

    A path that already exists on the branch (such as the README created by
    `auto_init`) is answered with 422 until the blob sha is supplied, so
    that answer triggers one lookup of the current sha and a second write.

    Returns:
        Optional[int]: HTTP status, or None if the request never completed.
    """
    payload = {
        "message": f"Add {path}",
        "content": encode_content(content),
        "branch": branch,
    }
    status = _put_contents(token, full_name, path, payload, timeout)

    if status == HTTP_UNPROCESSABLE:
        sha = get_file_sha(token, full_name, path, branch, timeout=timeout)
        if sha:
            logger.info(f"GitHub: '{path}' already exists on '{branch}', updating it.")
            payload = dict(payload, message=f"Update {path}", sha=sha)
            status = _put_contents(token, full_name, path, payload, timeout)
    return status


def get_file_sha(
        token: str,
        full_name: str,
        path: str,
        branch: str = "main",
        timeout: float = DEFAULT_TIMEOUT,
) -> Optional[str]:
    """
    Look up the blob sha of an existing file.

    Returns:
        Optional[str]: The sha, or None when the file is absent or the
        lookup failed.
    """
    try:
        response = requests.get(
            _contents_url(full_name, path),
            params={"ref": branch},
            headers=_headers(token),
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        logger.warning(f"GitHub: could not look up '{path}': {e}")
        return None

    if not response.ok:
        return None
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return data.get("sha") or None


def _contents_url(full_name: str, path: str) -> str:
    return f"{GITHUB_API_URL}/repos/{full_name}/contents/{quote(path)}"


def _put_contents(
        token: str,
        full_name: str,
        path: str,
        payload: Dict[str, Any],
        timeout: float,
) -> Optional[int]:
    try:
        response = requests.put(
            _contents_url(full_name, path),
            json=payload,
            headers=_headers(token),
            timeout=timeout,
        )
    except requests.exceptions.RequestException as e:
        logger.warning(f"GitHub: transport failure while writing '{path}': {e}")
        return None

    if not response.ok:
        logger.warning(
            f"GitHub: write of '{path}' answered {response.status_code}: "
            f"{error_message(response, 'message')}"
        )
    return response.status_code
