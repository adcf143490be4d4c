from __future__ import annotations

import base64
from typing import Any, Dict

import requests

USER_AGENT = "StructureBuilder-Client/1.0.0"
DEFAULT_TIMEOUT = 15


def encode_content(text: str) -> str:
    """Base64-encode UTF-8 text for JSON upload payloads."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def error_message(response: requests.Response, *keys: str) -> str:
    """Pull the first matching error field out of a JSON error body."""
    try:
        data: Dict[str, Any] = response.json()
    except ValueError:
        return ""
    if not isinstance(data, dict):
        return ""
    for key in keys:
        value = data.get(key)
        if value:
            return str(value)
    return ""
