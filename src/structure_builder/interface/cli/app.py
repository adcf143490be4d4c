from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration loading,
project loading into a workspace, dispatch to the requested action and
result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional

from structure_builder.core.services.exporter import render_bootstrap_script
from structure_builder.core.services.publisher import GitHubPublisher, SpacePublisher
from structure_builder.core.services.workspace import ProjectWorkspace
from structure_builder.domain.config import load_config, retry_policy_from_config
from structure_builder.domain.publish_models import (
    DEFAULT_DESCRIPTION,
    GitHubRepoForm,
    PublishResult,
    SpaceForm,
)
from structure_builder.infra.credentials import TOKEN_KEYS, CredentialStore, mask_token
from structure_builder.infra.fs import materialize_project
from structure_builder.infra.logging import LoggingConfig, configure_logging, get_logger
from structure_builder.interface.cli import args as cli_args
from structure_builder.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130


class _InputError(Exception):
    """Raised when the source file cannot be turned into a project."""

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, store: Optional[CredentialStore] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.
        store: Credential store override (used by tests).

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig(
        level="DEBUG" if args.debug else "INFO",
        console=True,
        log_file=args.log_file,
    ))

    config = load_config()
    store = store or CredentialStore()

    handlers: Dict[str, Callable[..., int]] = {
        "parse": _cmd_parse,
        "flatten": _cmd_flatten,
        "script": _cmd_script,
        "materialize": _cmd_materialize,
        "github": _cmd_github,
        "space": _cmd_space,
        "token": _cmd_token,
    }

    try:
        return handlers[args.command](args, config, store)
    except _InputError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _cmd_parse(args: Any, config: Dict[str, Any], store: CredentialStore) -> int:
    ws = _load_workspace(args.source, config)
    _emit_text(ws.to_json() + "\n", args.output)
    return EXIT_OK


def _cmd_flatten(args: Any, config: Dict[str, Any], store: CredentialStore) -> int:
    ws = _load_workspace(args.source, config)
    entries = ws.flatten()
    if args.json_output:
        print(json.dumps([{"path": p, "bytes": len(c.encode("utf-8"))} for p, c in entries], indent=2))
    else:
        for path, _ in entries:
            print(path)
    return EXIT_OK


def _cmd_script(args: Any, config: Dict[str, Any], store: CredentialStore) -> int:
    ws = _load_workspace(args.source, config, args.project_name)
    _emit_text(render_bootstrap_script(ws.flatten(), ws.project_name), args.output)
    return EXIT_OK


def _cmd_materialize(args: Any, config: Dict[str, Any], store: CredentialStore) -> int:
    ws = _load_workspace(args.source, config, args.project_name)
    try:
        written = materialize_project(ws.flatten(), args.dest, ws.project_name)
    except (OSError, ValueError) as e:
        logger.error(f"Materialization failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE
    print(i18n.t("cli.status.written", path=os.path.join(args.dest, ws.project_name)))
    logger.debug(f"{len(written)} file(s) written.")
    return EXIT_OK


def _cmd_github(args: Any, config: Dict[str, Any], store: CredentialStore) -> int:
    ws = _load_workspace(args.source, config)
    form = GitHubRepoForm(
        repo_name=args.repo_name,
        description=args.description if args.description is not None else DEFAULT_DESCRIPTION,
        private=bool(args.private) if args.private is not None else config["github_private"],
        branch=args.branch or config["github_branch"],
    )
    publisher = GitHubPublisher(
        store.get(TOKEN_KEYS["github"]),
        ws.forest,
        form,
        timeout=config["request_timeout"],
    )
    return _render_result(publisher.publish(), args.json_output)


def _cmd_space(args: Any, config: Dict[str, Any], store: CredentialStore) -> int:
    ws = _load_workspace(args.source, config)
    form = SpaceForm(
        space_name=args.space_name,
        description=args.description if args.description is not None else DEFAULT_DESCRIPTION,
        sdk=args.sdk or config["space_sdk"],
        license=args.license_id or config["space_license"],
        private=bool(args.private) if args.private is not None else config["space_private"],
    )
    publisher = SpacePublisher(
        store.get(TOKEN_KEYS["huggingface"]),
        ws.forest,
        form,
        policy=retry_policy_from_config(config),
        timeout=config["request_timeout"],
    )
    return _render_result(publisher.publish(), args.json_output)


def _cmd_token(args: Any, config: Dict[str, Any], store: CredentialStore) -> int:
    key = TOKEN_KEYS[args.target]

    if args.action == "set":
        if not args.value:
            print("ERROR: a token value is required for 'set'.", file=sys.stderr)
            return EXIT_BAD_INPUT
        store.set(key, args.value)
        print(i18n.t("cli.status.token_saved", target=args.target))
    elif args.action == "clear":
        store.clear(key)
        print(i18n.t("cli.status.token_cleared", target=args.target))
    else:
        value = store.get(key)
        if not value:
            print(i18n.t("cli.status.token_missing", target=args.target))
            return EXIT_FAILURE
        print(mask_token(value))
    return EXIT_OK

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _load_workspace(
        source: str,
        config: Dict[str, Any],
        project_name: Optional[str] = None,
) -> ProjectWorkspace:
    """
    Build a workspace from a tree listing or a JSON project document.

    Raises:
        _InputError: If the file is missing, unreadable or yields nothing.
    """
    if not os.path.isfile(source):
        raise _InputError(i18n.t("cli.errors.file_not_found", path=source))

    try:
        with open(source, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise _InputError(i18n.t("cli.errors.unreadable", path=source, error=str(e))) from e

    ws = ProjectWorkspace(project_name or config["project_name"])

    if source.lower().endswith(".json") or text.lstrip().startswith("["):
        try:
            ws.load_json(text)
        except ValueError as e:
            raise _InputError(i18n.t("cli.errors.unreadable", path=source, error=str(e))) from e
    else:
        ws.import_structure(text)

    if ws.is_empty:
        raise _InputError(i18n.t("cli.errors.empty_structure", path=source))
    return ws


def _emit_text(text: str, output: Optional[str]) -> None:
    if not output:
        sys.stdout.write(text)
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(text)
    print(i18n.t("cli.status.written", path=output))

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _render_result(result: PublishResult, as_json: bool) -> int:
    """Print a publish report and map it to an exit code."""
    if as_json:
        data = asdict(result)
        data["state"] = result.state.value
        data["ok"] = result.ok
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        stream = sys.stdout if result.ok else sys.stderr
        print(result.title, file=stream)
        print(result.message, file=stream)
        if result.url:
            print(f"URL: {result.url}", file=stream)
        for path in result.failed_paths:
            print(f"  - not uploaded: {path}", file=stream)

    if result.ok:
        return EXIT_OK
    return EXIT_BAD_INPUT if result.reason else EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
