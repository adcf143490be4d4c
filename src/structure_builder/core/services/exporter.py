from __future__ import annotations

"""
Local Export Service.

Produces artifacts that recreate the project on a local machine without
publishing it: the canonical JSON document and a self-contained bash
bootstrap script.
"""

import logging
import shlex
from typing import List

from structure_builder.core.services.flattener import FlatEntries, entry_directories

logger = logging.getLogger(__name__)


def render_bootstrap_script(entries: FlatEntries, project_name: str) -> str:
    """
    Render a bash script that recreates the project folder.

    Directories are created with `mkdir -p`. Each file is written by
    `printf '%s'` with its content as one single-quoted argument, so the
    bytes land exactly as given with no expansion and no added newline.

    Args:
        entries: Flattened (path, content) pairs.
        project_name: Folder the script creates and enters.

    Returns:
        str: Script text.
    """
    quoted_project = shlex.quote(project_name)
    lines: List[str] = [
        "#!/bin/bash",
        f"# Project: {project_name}",
        "# Generated by Structure Builder",
        "set -e",
        "",
        f"echo {shlex.quote('Creating project: ' + project_name)}",
        f"mkdir -p {quoted_project}",
        f"cd {quoted_project}",
        "",
        "# Create directories",
    ]
    lines.extend(f"mkdir -p {shlex.quote(d)}" for d in entry_directories(entries))
    lines.extend(["", "# Create files"])

    for path, content in entries:
        lines.append(f"printf '%s' {shlex.quote(content)} > {shlex.quote(path)}")
        lines.append("")

    lines.append('echo "Project created successfully!"')
    logger.debug(f"Rendered bootstrap script for {len(entries)} file(s).")
    return "\n".join(lines) + "\n"
