from __future__ import annotations

"""
Smoke tests for imports and the public module contracts used by the CLI.
"""

import importlib

import pytest

MODULES = [
    "structure_builder.main",
    "structure_builder.interface.cli.app",
    "structure_builder.interface.cli.args",
    "structure_builder.core.analysis.structure_parser",
    "structure_builder.core.services.publisher",
    "structure_builder.core.services.workspace",
    "structure_builder.core.services.exporter",
    "structure_builder.infra.network",
    "structure_builder.infra.logging",
    "structure_builder.infra.credentials",
    "structure_builder.domain.config",
]


@pytest.mark.parametrize("name", MODULES)
def test_module_importable(name: str) -> None:
    assert importlib.import_module(name) is not None


def test_cli_subcommands_registered() -> None:
    from structure_builder.interface.cli.args import build_parser

    parser = build_parser()
    for argv in (
        ["parse", "x"],
        ["flatten", "x"],
        ["script", "x"],
        ["materialize", "x", "out"],
        ["github", "x", "--repo", "r"],
        ["space", "x", "--space", "s"],
        ["token", "show", "github"],
    ):
        assert parser.parse_args(argv).command == argv[0]
