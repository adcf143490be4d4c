from __future__ import annotations

"""
Integration tests for Network Infrastructure.

Utilizes mocking to verify the GitHub and Hugging Face REST calls
without making real network calls.
"""

import base64
from unittest.mock import MagicMock, patch

import pytest
import requests

from structure_builder.domain.errors import RemoteRejection
from structure_builder.domain.publish_models import GitHubRepoForm, SpaceForm
from structure_builder.infra.network import encode_content, github_client, huggingface_client


def _response(status: int, payload=None) -> MagicMock:
    mock_response = MagicMock()
    mock_response.status_code = status
    mock_response.ok = 200 <= status < 300
    mock_response.json.return_value = payload if payload is not None else {}
    return mock_response

# -----------------------------------------------------------------------------
# GITHUB
# -----------------------------------------------------------------------------

def test_create_repository_payload() -> None:
    """TC-01: Repository creation posts the form with auto_init enabled."""
    form = GitHubRepoForm(repo_name="demo", description="d", private=True)

    with patch("requests.post", return_value=_response(201, {"full_name": "me/demo"})) as mock_post:
        repo = github_client.create_repository("tok", form)

    assert repo == {"full_name": "me/demo"}
    url = mock_post.call_args.args[0]
    kwargs = mock_post.call_args.kwargs
    assert url == "https://api.github.com/user/repos"
    assert kwargs["json"] == {"name": "demo", "description": "d", "private": True, "auto_init": True}
    assert kwargs["headers"]["Authorization"] == "token tok"


def test_create_repository_rejection_carries_message() -> None:
    """TC-02: The remote error message becomes the rejection text."""
    response = _response(422, {"message": "Repository creation failed."})

    with patch("requests.post", return_value=response):
        with pytest.raises(RemoteRejection) as exc_info:
            github_client.create_repository("tok", GitHubRepoForm(repo_name="demo"))

    assert str(exc_info.value) == "Repository creation failed."
    assert exc_info.value.status == 422


def test_create_repository_generic_message() -> None:
    """TC-03: Bodies without a message fall back to a generic text."""
    response = _response(500)
    response.json.side_effect = ValueError("no json")

    with patch("requests.post", return_value=response):
        with pytest.raises(RemoteRejection) as exc_info:
            github_client.create_repository("tok", GitHubRepoForm(repo_name="demo"))

    assert str(exc_info.value) == "Failed to create repository"


def test_put_file_encodes_content() -> None:
    """TC-04: File writes send base64 UTF-8 content to the quoted path."""
    with patch("requests.put", return_value=_response(201)) as mock_put:
        status = github_client.put_file("tok", "me/demo", "docs/read me.md", "héllo", branch="dev")

    assert status == 201
    assert mock_put.call_args.args[0] == "https://api.github.com/repos/me/demo/contents/docs/read%20me.md"
    payload = mock_put.call_args.kwargs["json"]
    assert payload["message"] == "Add docs/read me.md"
    assert payload["branch"] == "dev"
    assert base64.b64decode(payload["content"]).decode("utf-8") == "héllo"


def test_put_file_transport_failure_returns_none() -> None:
    """TC-05: A request that never completes reports no status."""
    with patch("requests.put", side_effect=requests.exceptions.ConnectionError("down")):
        assert github_client.put_file("tok", "me/demo", "a.py", "") is None


def test_put_file_updates_existing_readme_with_sha() -> None:
    """TC-05b: A 422 on an existing path is retried with the current blob sha."""
    sha_lookup = _response(200, {"sha": "abc123", "path": "README.md"})

    with patch("requests.put", side_effect=[_response(422), _response(200)]) as mock_put, \
            patch("requests.get", return_value=sha_lookup) as mock_get:
        status = github_client.put_file("tok", "me/demo", "README.md", "# Demo\n", branch="dev")

    assert status == 200
    assert mock_put.call_count == 2
    assert "sha" not in mock_put.call_args_list[0].kwargs["json"]
    retry_payload = mock_put.call_args_list[1].kwargs["json"]
    assert retry_payload["sha"] == "abc123"
    assert retry_payload["branch"] == "dev"
    assert base64.b64decode(retry_payload["content"]).decode("utf-8") == "# Demo\n"

    assert mock_get.call_args.args[0] == "https://api.github.com/repos/me/demo/contents/README.md"
    assert mock_get.call_args.kwargs["params"] == {"ref": "dev"}


def test_put_file_422_without_existing_file_is_reported() -> None:
    """TC-05c: When no sha can be found the original 422 is returned."""
    with patch("requests.put", return_value=_response(422)) as mock_put, \
            patch("requests.get", return_value=_response(404)):
        status = github_client.put_file("tok", "me/demo", "bad.py", "x")

    assert status == 422
    assert mock_put.call_count == 1

# -----------------------------------------------------------------------------
# HUGGING FACE
# -----------------------------------------------------------------------------

def test_whoami_resolves_name() -> None:
    """TC-06: The account name is read from the identity endpoint."""
    with patch("requests.get", return_value=_response(200, {"name": "alice"})) as mock_get:
        assert huggingface_client.whoami("hf_tok") == "alice"

    assert mock_get.call_args.args[0] == "https://huggingface.co/api/whoami-v2"
    assert mock_get.call_args.kwargs["headers"]["Authorization"] == "Bearer hf_tok"


def test_whoami_invalid_token() -> None:
    """TC-07: A refused token is a rejection."""
    with patch("requests.get", return_value=_response(401)):
        with pytest.raises(RemoteRejection) as exc_info:
            huggingface_client.whoami("bad")

    assert str(exc_info.value) == "Invalid Hugging Face token"


def test_create_space_payload_and_error() -> None:
    """TC-08: Space creation sends the SDK and surfaces the remote error."""
    form = SpaceForm(space_name="demo", sdk="streamlit", license="apache-2.0")

    with patch("requests.post", return_value=_response(200)) as mock_post:
        huggingface_client.create_space("tok", form)

    assert mock_post.call_args.args[0] == "https://huggingface.co/api/repos/create"
    assert mock_post.call_args.kwargs["json"] == {
        "type": "space",
        "name": "demo",
        "private": False,
        "sdk": "streamlit",
        "license": "apache-2.0",
    }

    with patch("requests.post", return_value=_response(409, {"error": "You already created this space repo"})):
        with pytest.raises(RemoteRejection) as exc_info:
            huggingface_client.create_space("tok", form)
    assert "already created" in str(exc_info.value)


def test_upload_file_reports_status() -> None:
    """TC-09: Commits go to the main branch upload endpoint."""
    with patch("requests.post", return_value=_response(404)) as mock_post:
        status = huggingface_client.upload_file("tok", "alice/demo", "app.py", "x", "Add app.py")

    assert status == 404
    assert mock_post.call_args.args[0] == "https://huggingface.co/api/repos/alice/demo/upload/main"
    payload = mock_post.call_args.kwargs["json"]
    assert payload["commit_message"] == "Add app.py"
    assert payload["files"] == [{"path": "app.py", "content": encode_content("x")}]

    with patch("requests.post", side_effect=requests.exceptions.Timeout()):
        assert huggingface_client.upload_file("tok", "alice/demo", "app.py", "x") is None
