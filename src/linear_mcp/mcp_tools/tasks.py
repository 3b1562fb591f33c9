"""Task tools: list a team's issues, create an issue, update an issue."""

from __future__ import annotations

from typing import Any

from linear_mcp.contracts import Contract, Field, FieldType
from linear_mcp.mcp_tools.common import _parse_args
from linear_mcp.operations import DEFAULT_LIMIT, LinearOperations
from linear_mcp.registry import CapabilityRegistry
from linear_mcp.types.core import IssueProjection, TaskMutationResult
from linear_mcp.types.inputs import CreateTaskArgs, GetTeamTasksArgs, UpdateTaskArgs

_PRIORITY_DESCRIPTION = "(0-4, where 0 is no priority)"

GET_TEAM_TASKS_CONTRACT = Contract.of(
    Field("teamId", FieldType.STRING, "ID of the team to fetch tasks for"),
    Field(
        "states",
        FieldType.STRING_ARRAY,
        "Optional filter for issue states (e.g. 'todo', 'in_progress', 'done')",
        required=False,
    ),
    Field(
        "limit",
        FieldType.INTEGER,
        f"Maximum number of tasks to return (default: {DEFAULT_LIMIT})",
        required=False,
        default=DEFAULT_LIMIT,
        minimum=1,
    ),
)

CREATE_TASK_CONTRACT = Contract.of(
    Field("teamId", FieldType.STRING, "ID of the team to create the task for"),
    Field("title", FieldType.STRING, "Title of the task"),
    Field("description", FieldType.STRING, "Description of the task", required=False),
    Field("assigneeId", FieldType.STRING, "ID of the user to assign the task to", required=False),
    Field(
        "priority",
        FieldType.INTEGER,
        f"Priority of the task {_PRIORITY_DESCRIPTION}",
        required=False,
        minimum=0,
        maximum=4,
    ),
    Field("stateId", FieldType.STRING, "ID of the state to set for the task", required=False),
)

UPDATE_TASK_CONTRACT = Contract.of(
    Field("issueId", FieldType.STRING, "ID of the issue to update"),
    Field("title", FieldType.STRING, "New title for the task", required=False),
    Field("description", FieldType.STRING, "New description for the task", required=False),
    Field("assigneeId", FieldType.STRING, "ID of the user to assign the task to", required=False),
    Field(
        "priority",
        FieldType.INTEGER,
        f"New priority of the task {_PRIORITY_DESCRIPTION}",
        required=False,
        minimum=0,
        maximum=4,
    ),
    Field("stateId", FieldType.STRING, "ID of the new state for the task", required=False),
)


def register(registry: CapabilityRegistry, ops: LinearOperations) -> None:
    async def get_team_tasks(arguments: dict[str, Any]) -> list[IssueProjection]:
        args = _parse_args(arguments, GetTeamTasksArgs)
        return await ops.list_issues(
            args["teamId"],
            states=args.get("states"),
            limit=args.get("limit", DEFAULT_LIMIT),
        )

    async def create_task(arguments: dict[str, Any]) -> TaskMutationResult:
        args = _parse_args(arguments, CreateTaskArgs)
        return await ops.create_issue(
            args["teamId"],
            args["title"],
            description=args.get("description"),
            assignee_id=args.get("assigneeId"),
            priority=args.get("priority"),
            state_id=args.get("stateId"),
        )

    async def update_task(arguments: dict[str, Any]) -> TaskMutationResult:
        args = _parse_args(arguments, UpdateTaskArgs)
        return await ops.update_issue(
            args["issueId"],
            title=args.get("title"),
            description=args.get("description"),
            assignee_id=args.get("assigneeId"),
            priority=args.get("priority"),
            state_id=args.get("stateId"),
        )

    registry.register_tool(
        "get-team-tasks",
        "Get tasks for a specific team with filtering options",
        GET_TEAM_TASKS_CONTRACT,
        get_team_tasks,
        error_label="fetching team tasks",
    )
    registry.register_tool(
        "create-task",
        "Create a new task for a team",
        CREATE_TASK_CONTRACT,
        create_task,
        error_label="creating task",
    )
    registry.register_tool(
        "update-task",
        "Update an existing task",
        UPDATE_TASK_CONTRACT,
        update_task,
        error_label="updating task",
    )
