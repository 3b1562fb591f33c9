# IMPORT CONSTRAINT: types/ modules must only import from typing, stdlib, and each other.
# NEVER import from linear_client, operations, or mcp_tools here; it would create circular imports.
"""Typed shapes for Linear projections, config, and MCP tool arguments."""

from __future__ import annotations

from linear_mcp.types.core import (
    FileConfig,
    IssueProjection,
    TaskMutationResult,
    TeamProjection,
)

__all__ = [
    "FileConfig",
    "IssueProjection",
    "TaskMutationResult",
    "TeamProjection",
]
