"""MCP capability modules.

Each domain module exposes ``register(registry, ops)``.  :func:`build_registry`
wires them all up and seals the result.
"""

from __future__ import annotations

from linear_mcp.mcp_tools import prompts, resources, tasks
from linear_mcp.operations import LinearOperations
from linear_mcp.registry import CapabilityRegistry


def build_registry(ops: LinearOperations) -> CapabilityRegistry:
    registry = CapabilityRegistry()
    for module in (prompts, resources, tasks):
        module.register(registry, ops)
    registry.seal()
    return registry


__all__ = ["build_registry"]
