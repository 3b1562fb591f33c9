"""TypedDict contracts for MCP tool and prompt arguments.

Each TypedDict mirrors the :class:`~linear_mcp.contracts.Contract` declared
for the matching capability.  ``TOOL_ARGS_MAP`` and ``PROMPT_ARGS_MAP`` let
the sync test verify that keys and required/optional status agree.

The contract validator has already run by the time a handler sees its
arguments; ``cast()`` to these types is for static analysis only.
"""

# NOTE: Do NOT add ``from __future__ import annotations`` to this module.
# It breaks TypedDict.__required_keys__ / __optional_keys__ introspection
# on Python <3.14, which the sync test depends on.

from typing import NotRequired, TypedDict


class GetTeamTasksArgs(TypedDict):
    teamId: str
    states: NotRequired[list[str]]
    limit: NotRequired[int]


class CreateTaskArgs(TypedDict):
    teamId: str
    title: str
    description: NotRequired[str]
    assigneeId: NotRequired[str]
    priority: NotRequired[int]
    stateId: NotRequired[str]


class UpdateTaskArgs(TypedDict):
    issueId: str
    title: NotRequired[str]
    description: NotRequired[str]
    assigneeId: NotRequired[str]
    priority: NotRequired[int]
    stateId: NotRequired[str]


class CreateTaskTemplateArgs(TypedDict):
    teamName: str
    title: str
    description: str
    priority: str


TOOL_ARGS_MAP: dict[str, type] = {
    "get-team-tasks": GetTeamTasksArgs,
    "create-task": CreateTaskArgs,
    "update-task": UpdateTaskArgs,
}

PROMPT_ARGS_MAP: dict[str, type] = {
    "create-task-template": CreateTaskTemplateArgs,
}
