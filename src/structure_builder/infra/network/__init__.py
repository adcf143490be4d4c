from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the two publishing targets: the GitHub REST API and the
Hugging Face Hub REST API.
"""

from structure_builder.infra.network import github_client, huggingface_client
from structure_builder.infra.network.common import encode_content

__all__ = [
    "github_client",
    "huggingface_client",
    "encode_content",
]
