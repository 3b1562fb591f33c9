"""Prompt capabilities: templated guidance text, no Linear calls."""

from __future__ import annotations

from typing import Any

from linear_mcp.contracts import Contract, Field, FieldType
from linear_mcp.mcp_tools.common import _parse_args, priority_label
from linear_mcp.operations import LinearOperations
from linear_mcp.registry import CapabilityRegistry
from linear_mcp.types.inputs import CreateTaskTemplateArgs

CREATE_TASK_TEMPLATE = """\
I need to create a new task for the {teamName} team in Linear.

Please format it using the following structure:

Title: {title}

Description:
{description}

Priority: {priority} {label}

Let me know if you need any other information to create this task."""

CREATE_TASK_TEMPLATE_CONTRACT = Contract.of(
    Field("teamName", FieldType.STRING, "Name of the team this task is for"),
    Field("title", FieldType.STRING, "Concise, specific task title"),
    Field("description", FieldType.STRING, "Detailed description of the task"),
    Field("priority", FieldType.STRING, "Priority level (0-4)"),
)


def render_create_task_template(arguments: dict[str, Any]) -> str:
    args = _parse_args(arguments, CreateTaskTemplateArgs)
    return CREATE_TASK_TEMPLATE.format(
        teamName=args["teamName"],
        title=args["title"],
        description=args["description"],
        priority=args["priority"],
        label=priority_label(args["priority"]),
    )


def register(registry: CapabilityRegistry, ops: LinearOperations) -> None:
    registry.register_prompt(
        "create-task-template",
        "Template for creating a new Linear task with proper formatting",
        CREATE_TASK_TEMPLATE_CONTRACT,
        render_create_task_template,
    )
