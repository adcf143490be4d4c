from __future__ import annotations

"""
CLI Argument Definition.

Defines the command-line schema: one subcommand per workspace action,
plus global diagnostics flags.
"""

import argparse

from structure_builder.domain.publish_models import SPACE_LICENSES, SPACE_SDKS
from structure_builder.utils.i18n import i18n

TOKEN_TARGETS = ("github", "huggingface")

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the structure-builder CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="structure-builder",
        description=i18n.t("app.description"),
    )
    p.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print machine-readable results.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    sub = p.add_subparsers(dest="command", required=True)

    # --- Structure conversion ---
    parse_cmd = sub.add_parser("parse", help="Parse a tree listing into the JSON project document.")
    _add_source(parse_cmd)
    parse_cmd.add_argument("-o", "--output", default=None, help="Write JSON here instead of stdout.")

    flatten_cmd = sub.add_parser("flatten", help="List the file paths the project flattens to.")
    _add_source(flatten_cmd)

    # --- Local export ---
    script_cmd = sub.add_parser("script", help="Render a bash script that recreates the project.")
    _add_source(script_cmd)
    _add_project_name(script_cmd)
    script_cmd.add_argument("-o", "--output", default=None, help="Write the script here instead of stdout.")

    mat_cmd = sub.add_parser("materialize", help="Write the project files to a local directory.")
    _add_source(mat_cmd)
    mat_cmd.add_argument("dest", help="Directory receiving the project folder.")
    _add_project_name(mat_cmd)

    # --- Publishing ---
    gh_cmd = sub.add_parser("github", help="Create a GitHub repository and upload the project.")
    _add_source(gh_cmd)
    gh_cmd.add_argument("--repo", dest="repo_name", required=True, help="Repository name.")
    gh_cmd.add_argument("--description", default=None, help="Repository description.")
    gh_cmd.add_argument("--private", action="store_true", default=None, help="Create a private repository.")
    gh_cmd.add_argument("--branch", default=None, help="Target branch for file writes.")

    space_cmd = sub.add_parser("space", help="Create a Hugging Face Space and upload the project.")
    _add_source(space_cmd)
    space_cmd.add_argument("--space", dest="space_name", required=True, help="Space name.")
    space_cmd.add_argument("--description", default=None, help="Text placed in the Space README.")
    space_cmd.add_argument("--sdk", choices=SPACE_SDKS, default=None)
    space_cmd.add_argument("--license", dest="license_id", choices=SPACE_LICENSES, default=None)
    space_cmd.add_argument("--private", action="store_true", default=None, help="Create a private Space.")

    # --- Credentials ---
    token_cmd = sub.add_parser("token", help="Manage stored publishing tokens.")
    token_cmd.add_argument("action", choices=("set", "clear", "show"))
    token_cmd.add_argument("target", choices=TOKEN_TARGETS)
    token_cmd.add_argument("value", nargs="?", default=None, help="Token value for 'set'.")

    return p

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _add_source(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("source", help="Tree listing text file, or a JSON project document.")


def _add_project_name(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("-n", "--name", dest="project_name", default=None, help="Project folder name.")
