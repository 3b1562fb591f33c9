"""Fixtures for MCP server tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from linear_mcp.dispatch import Dispatcher
from tests.conftest import StubLinearClient


@pytest.fixture
def mcp_dispatcher(stub_client: StubLinearClient) -> Generator[Dispatcher, None, None]:
    """Build a dispatcher over the stub client and patch the MCP module global."""
    import linear_mcp.mcp_server as mcp_mod

    original = mcp_mod._dispatcher
    d = mcp_mod.create_dispatcher(stub_client)
    mcp_mod._dispatcher = d

    yield d

    mcp_mod._dispatcher = original
