"""Developer CLI for linear-mcp.

Runs the same backing operations the MCP server exposes, which makes it
easy to check a key or a team ID without an MCP client.

Usage:
    linear-mcp teams                                 # List teams
    linear-mcp tasks <team-id> --state Done -n 5     # Issues for a team
    linear-mcp create <team-id> "Fix login" -p 2     # Create an issue
    linear-mcp update <issue-id> --title "New"       # Update an issue
    linear-mcp serve                                 # Run the stdio MCP server
"""

from __future__ import annotations

import asyncio
import json as json_mod
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from linear_mcp import __version__
from linear_mcp.config import ServerConfig, load_config, load_env_file
from linear_mcp.errors import CredentialNotFoundError, LinearMCPError
from linear_mcp.linear_client import LinearClient
from linear_mcp.operations import DEFAULT_LIMIT, LinearOperations

_T = TypeVar("_T")


def _get_config(ctx: click.Context, *, log_file: Path | None = None) -> ServerConfig:
    try:
        return load_config(ctx.obj.get("api_key"), config_path=ctx.obj.get("config_path"), log_file=log_file)
    except CredentialNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _run_op(ctx: click.Context, op: Callable[[LinearOperations], Awaitable[_T]]) -> _T:
    """Run one backing operation, exiting 1 with a message on API failure.

    Tests inject a stub client via ``obj={"client": ...}``.
    """
    injected = ctx.obj.get("client")
    config = None if injected is not None else _get_config(ctx)

    async def _go() -> _T:
        if config is None:
            return await op(LinearOperations(injected))
        async with LinearClient.from_config(config) as client:
            return await op(LinearOperations(client))

    try:
        return asyncio.run(_go())
    except LinearMCPError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _echo_json(data: Any) -> None:
    click.echo(json_mod.dumps(data, indent=2, default=str))


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="linear-mcp")
@click.option("--api-key", default=None, help="Linear API key (overrides $LINEAR_API_KEY and config file)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="JSON config file (default: ./config.json, then ~/.linear-mcp/config.json)",
)
@click.pass_context
def cli(ctx: click.Context, api_key: str | None, config_path: Path | None) -> None:
    """Linear issue tracker, from the terminal or as an MCP server."""
    load_env_file()
    ctx.ensure_object(dict)
    ctx.obj.setdefault("api_key", api_key)
    ctx.obj.setdefault("config_path", config_path)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def teams(ctx: click.Context, as_json: bool) -> None:
    """List teams in the workspace."""
    result = _run_op(ctx, lambda ops: ops.list_teams())
    if as_json:
        _echo_json(result)
        return
    if not result:
        click.echo("No teams.")
        return
    for team in result:
        click.echo(f"{team['key']:<8} {team['id']}  {team['name']}")


@cli.command()
@click.argument("team_id")
@click.option("--state", "-s", "states", multiple=True, help="Workflow state name to include (repeatable)")
@click.option("--limit", "-n", default=DEFAULT_LIMIT, type=click.IntRange(min=1), help="Max issues to return")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def tasks(ctx: click.Context, team_id: str, states: tuple[str, ...], limit: int, as_json: bool) -> None:
    """List issues for a team."""
    result = _run_op(ctx, lambda ops: ops.list_issues(team_id, states=list(states) or None, limit=limit))
    if as_json:
        _echo_json(result)
        return
    if not result:
        click.echo("No tasks found.")
        return
    for issue in result:
        click.echo(f"P{issue['priority']} [{issue['state']}] {issue['id']}: {issue['title']} ({issue['assignee']})")


@cli.command()
@click.argument("team_id")
@click.argument("title")
@click.option("--description", "-d", default=None, help="Description")
@click.option("--assignee", "assignee_id", default=None, help="Assignee user ID")
@click.option("--priority", "-p", default=None, type=click.IntRange(0, 4), help="Priority 0-4 (0=none, 4=urgent)")
@click.option("--state-id", default=None, help="Workflow state ID")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def create(
    ctx: click.Context,
    team_id: str,
    title: str,
    description: str | None,
    assignee_id: str | None,
    priority: int | None,
    state_id: str | None,
    as_json: bool,
) -> None:
    """Create an issue in a team."""
    result = _run_op(
        ctx,
        lambda ops: ops.create_issue(
            team_id,
            title,
            description=description,
            assignee_id=assignee_id,
            priority=priority,
            state_id=state_id,
        ),
    )
    if as_json:
        _echo_json(result)
    else:
        click.echo(f"Created {result['id']}: {result['title']}")
        if result["url"]:
            click.echo(f"  {result['url']}")


@cli.command()
@click.argument("issue_id")
@click.option("--title", default=None, help="New title")
@click.option("--description", "-d", default=None, help="New description")
@click.option("--assignee", "assignee_id", default=None, help="New assignee user ID")
@click.option("--priority", "-p", default=None, type=click.IntRange(0, 4), help="New priority 0-4")
@click.option("--state-id", default=None, help="New workflow state ID")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def update(
    ctx: click.Context,
    issue_id: str,
    title: str | None,
    description: str | None,
    assignee_id: str | None,
    priority: int | None,
    state_id: str | None,
    as_json: bool,
) -> None:
    """Update fields on an existing issue."""
    if all(v is None for v in (title, description, assignee_id, priority, state_id)):
        click.echo("Nothing to update. Pass at least one field option.", err=True)
        sys.exit(1)
    result = _run_op(
        ctx,
        lambda ops: ops.update_issue(
            issue_id,
            title=title,
            description=description,
            assignee_id=assignee_id,
            priority=priority,
            state_id=state_id,
        ),
    )
    if as_json:
        _echo_json(result)
    else:
        click.echo(f"Updated {result['id']}: {result['title']}")


@cli.command()
@click.option("--log-file", type=click.Path(path_type=Path, dir_okay=False), default=None, help="Also write JSON logs here")
@click.pass_context
def serve(ctx: click.Context, log_file: Path | None) -> None:
    """Run the MCP server over stdio."""
    from linear_mcp.mcp_server import _run

    asyncio.run(_run(_get_config(ctx, log_file=log_file)))


if __name__ == "__main__":
    cli()
