"""TypedDicts for projections returned to MCP clients and for config.json."""

from __future__ import annotations

from typing import TypedDict


class FileConfig(TypedDict, total=False):
    """Shape of config.json."""

    linearApiKey: str
    apiUrl: str
    timeout: float


class TeamProjection(TypedDict):
    id: str
    name: str
    key: str
    description: str


class IssueProjection(TypedDict):
    id: str
    title: str
    description: str | None
    state: str
    assignee: str
    priority: int | None
    createdAt: str | None
    url: str | None


class TaskMutationResult(TypedDict):
    """Response body of create-task and update-task."""

    id: str
    title: str
    url: str
    message: str
