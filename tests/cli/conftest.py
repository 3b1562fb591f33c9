"""Fixtures for CLI interface tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner, Result

from linear_mcp.cli import cli
from tests.conftest import StubLinearClient


@pytest.fixture
def invoke(cli_runner: CliRunner, stub_client: StubLinearClient, isolated_env: Path) -> Callable[..., Result]:
    """Invoke the CLI with the stub client injected in place of a real one."""

    def _invoke(*args: str) -> Result:
        return cli_runner.invoke(cli, list(args), obj={"client": stub_client})

    return _invoke


@pytest.fixture
def no_credentials(isolated_env: Path) -> Path:
    """Clear every key source; returns a config path that does not exist."""
    return isolated_env / "config.json"


def _extract_id(create_output: str) -> str:
    """Extract issue ID from 'Created X1: Title' output."""
    return create_output.split(":")[0].replace("Created ", "").strip()


def _args_of(stub: StubLinearClient, name: str) -> tuple[Any, ...]:
    return next(args for call, args in stub.calls if call == name)
