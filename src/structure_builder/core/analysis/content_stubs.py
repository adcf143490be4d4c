from __future__ import annotations

"""
Default file bodies for entries created by the structure importer.
"""


def _extension(name: str) -> str:
    return name.rsplit(".", 1)[-1] if "." in name else ""


def default_content(name: str) -> str:
    """
    Build the placeholder body for a newly imported file.

    Args:
        name: File name as it appears in the listing.

    Returns:
        str: Deterministic template keyed by extension or well-known name.
    """
    ext = _extension(name)

    if ext == "py":
        return f"# {name}\n# TODO: Implement functionality"
    if ext == "txt":
        return f"# Requirements for {name.replace('.txt', '', 1)}\n# Add your dependencies here"
    if ext == "md":
        return f"# {name.replace('.md', '', 1)}\n\nProject description goes here."
    if ext == "json":
        return '{\n  "// TODO": "Add configuration"\n}'
    if name == "Dockerfile":
        return "FROM python:3.9\n\n# TODO: Add Dockerfile instructions"
    return f"# {name}\n# TODO: Add content"
