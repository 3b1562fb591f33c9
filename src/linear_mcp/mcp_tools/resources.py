"""Read-only resources addressed by static URIs."""

from __future__ import annotations

from linear_mcp.envelope import JSON_MIME
from linear_mcp.operations import LinearOperations
from linear_mcp.registry import CapabilityRegistry
from linear_mcp.types.core import TeamProjection

TEAMS_URI = "linear://teams"


def register(registry: CapabilityRegistry, ops: LinearOperations) -> None:
    async def read_teams(uri: str) -> list[TeamProjection]:
        return await ops.list_teams()

    registry.register_resource(
        "teams",
        TEAMS_URI,
        read_teams,
        description="All teams in the Linear workspace",
        mime_type=JSON_MIME,
        error_label="fetching teams",
    )
