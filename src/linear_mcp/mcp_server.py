"""MCP server exposing Linear to model-driven clients over stdio.

Usage:
    linear-mcp-server                          # Key from $LINEAR_API_KEY, .env, or config.json
    linear-mcp-server lin_api_xxx              # Key as first argument
    linear-mcp-server --config ~/linear.json   # Explicit config file
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import (
    CallToolResult,
    GetPromptResult,
    Prompt,
    PromptMessage,
    Resource,
    TextContent,
    Tool,
)

from linear_mcp import __version__
from linear_mcp.config import ServerConfig, load_config, load_env_file
from linear_mcp.dispatch import Dispatcher
from linear_mcp.envelope import Envelope
from linear_mcp.errors import CapabilityNotFoundError, CredentialNotFoundError
from linear_mcp.linear_client import LinearClient
from linear_mcp.mcp_tools import build_registry
from linear_mcp.operations import LinearOperations
from linear_mcp.registry import CapabilityKind

SERVER_NAME = "linear-mcp-server"

server = Server(SERVER_NAME, version=__version__)
_dispatcher: Dispatcher | None = None
_logger: logging.Logger | None = None


def _get_dispatcher() -> Dispatcher:
    if _dispatcher is None:
        msg = "Dispatcher not initialized"
        raise RuntimeError(msg)
    return _dispatcher


def _tool_result(envelope: Envelope) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=block.text) for block in envelope.blocks],
        isError=envelope.is_error,
    )


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


@server.list_resources()  # type: ignore[untyped-decorator,no-untyped-call]
async def list_resources() -> list[Resource]:
    return [
        Resource(
            uri=cap.uri,  # type: ignore[arg-type]
            name=cap.name,
            description=cap.description or None,
            mimeType=cap.mime_type,
        )
        for cap in _get_dispatcher().registry.of_kind(CapabilityKind.RESOURCE)
    ]


@server.read_resource()  # type: ignore[untyped-decorator,no-untyped-call]
async def read_resource(uri: Any) -> list[ReadResourceContents]:
    try:
        envelope = await _get_dispatcher().read_resource(str(uri))
    except CapabilityNotFoundError as exc:
        raise ValueError(str(exc)) from None
    return [ReadResourceContents(content=block.text, mime_type=block.mime_type) for block in envelope.blocks]


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


@server.list_prompts()  # type: ignore[untyped-decorator,no-untyped-call]
async def list_prompts() -> list[Prompt]:
    return [
        Prompt(name=cap.name, description=cap.description, arguments=cap.contract.prompt_arguments())
        for cap in _get_dispatcher().registry.of_kind(CapabilityKind.PROMPT)
    ]


@server.get_prompt()  # type: ignore[untyped-decorator,no-untyped-call]
async def get_prompt(name: str, arguments: dict[str, str] | None = None) -> GetPromptResult:
    try:
        rendering = _get_dispatcher().get_prompt(name, arguments)
    except CapabilityNotFoundError as exc:
        raise ValueError(str(exc)) from None
    return GetPromptResult(
        description=rendering.description,
        messages=[PromptMessage(role="user", content=TextContent(type="text", text=rendering.text))],
    )


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@server.list_tools()  # type: ignore[untyped-decorator,no-untyped-call]
async def list_tools() -> list[Tool]:
    return [
        Tool(name=cap.name, description=cap.description, inputSchema=cap.contract.to_json_schema())
        for cap in _get_dispatcher().registry.of_kind(CapabilityKind.TOOL)
    ]


# Contracts are enforced by the dispatcher, which reports a structured
# rejection; the SDK's own JSON Schema pass would pre-empt it.
@server.call_tool(validate_input=False)  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any] | None) -> CallToolResult:
    try:
        envelope = await _get_dispatcher().call_tool(name, arguments)
    except CapabilityNotFoundError as exc:
        raise ValueError(str(exc)) from None
    return _tool_result(envelope)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def create_dispatcher(client: Any) -> Dispatcher:
    """Build operations, registry, and dispatcher around a Linear client."""
    return Dispatcher(build_registry(LinearOperations(client)))


async def _run(config: ServerConfig) -> None:
    global _dispatcher, _logger

    from linear_mcp.logging import setup_logging

    _logger = setup_logging(config.log_file)
    _logger.info(
        "mcp_server_start",
        extra={"tool": "server", "args_data": {"api_url": config.api_url, "key_source": config.source}},
    )

    async with LinearClient.from_config(config) as client:
        _dispatcher = create_dispatcher(client)
        _logger.info("Linear MCP Server running...")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Linear MCP server")
    parser.add_argument("api_key", nargs="?", default=None, help="Linear API key (overrides $LINEAR_API_KEY and config file)")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (default: ./config.json, then ~/.linear-mcp/config.json)",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write JSON logs to this file")
    args = parser.parse_args(argv)

    load_env_file()
    try:
        config = load_config(args.api_key, config_path=args.config, log_file=args.log_file)
    except CredentialNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    asyncio.run(_run(config))


if __name__ == "__main__":
    main()
