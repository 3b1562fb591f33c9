"""Backing operations: one Linear call per intent, projected for MCP clients.

Mutation responses are classified into :class:`WellFormed` or
:class:`Malformed` before anything reads them.  Creation tolerates a
malformed response and falls back to placeholders.  Update accepts only the
``issue`` wrapper and raises
:class:`~linear_mcp.errors.MalformedResponseError` for anything else.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from linear_mcp.errors import MalformedResponseError
from linear_mcp.types.core import IssueProjection, TaskMutationResult, TeamProjection

DEFAULT_LIMIT = 10
CREATED_MESSAGE = "Task created successfully"
UPDATED_MESSAGE = "Task updated successfully"


class IssueTrackerClient(Protocol):
    """The slice of the Linear API the adapter consumes."""

    async def list_teams(self) -> list[dict[str, Any]]: ...

    async def list_issues(self, filter: dict[str, Any], first: int) -> list[dict[str, Any]]: ...

    async def create_issue(self, fields: dict[str, Any]) -> Any: ...

    async def update_issue(self, issue_id: str, fields: dict[str, Any]) -> Any: ...


@dataclass(frozen=True)
class WellFormed:
    entity: Mapping[str, Any]


@dataclass(frozen=True)
class Malformed:
    reason: str
    raw: Any = None


MutationResponse = WellFormed | Malformed


def classify_mutation(payload: Any, *, require_wrapper: bool = False) -> MutationResponse:
    """Find the issue entity in a create/update response.

    Accepts the ``{"issue": {...}}`` wrapper Linear returns and, unless
    *require_wrapper* is set, a bare issue object carrying an ``id``.
    """
    match payload:
        case {"issue": Mapping() as entity}:
            return WellFormed(entity)
        case {"issue": None}:
            return Malformed("response has a null 'issue' field", payload)
        case Mapping() if not require_wrapper and "id" in payload and "issue" not in payload:
            return WellFormed(payload)
        case Mapping():
            return Malformed("response has no 'issue' object", payload)
        case None:
            return Malformed("response is empty", payload)
        case _:
            return Malformed(f"expected an object, got {type(payload).__name__}", payload)


def _name_or(ref: Any, fallback: str) -> str:
    if isinstance(ref, Mapping):
        name = ref.get("name")
        if name:
            return str(name)
    return fallback


def _compact(**fields: Any) -> dict[str, Any]:
    """Drop unset fields so Linear only sees what the caller supplied."""
    return {k: v for k, v in fields.items() if v is not None}


def project_issue(issue: Mapping[str, Any]) -> IssueProjection:
    return {
        "id": issue.get("id"),
        "title": issue.get("title"),
        "description": issue.get("description"),
        "state": _name_or(issue.get("state"), "Unknown"),
        "assignee": _name_or(issue.get("assignee"), "Unassigned"),
        "priority": issue.get("priority"),
        "createdAt": issue.get("createdAt"),
        "url": issue.get("url"),
    }


def project_team(team: Mapping[str, Any]) -> TeamProjection:
    return TeamProjection(
        id=team.get("id"),
        name=team.get("name"),
        key=team.get("key"),
        description=team.get("description") or "No description",
    )


def build_issue_filter(team_id: str, states: list[str] | None = None) -> dict[str, Any]:
    issue_filter: dict[str, Any] = {"team": {"id": {"eq": team_id}}}
    if states:
        issue_filter["state"] = {"name": {"in": list(states)}}
    return issue_filter


class LinearOperations:
    def __init__(self, client: IssueTrackerClient) -> None:
        self.client = client

    async def list_teams(self) -> list[TeamProjection]:
        teams = await self.client.list_teams()
        return [project_team(t) for t in teams]

    async def list_issues(
        self,
        team_id: str,
        states: list[str] | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[IssueProjection]:
        issues = await self.client.list_issues(build_issue_filter(team_id, states), limit)
        return [project_issue(i) for i in issues]

    async def create_issue(
        self,
        team_id: str,
        title: str,
        *,
        description: str | None = None,
        assignee_id: str | None = None,
        priority: int | None = None,
        state_id: str | None = None,
    ) -> TaskMutationResult:
        payload = await self.client.create_issue(
            _compact(
                teamId=team_id,
                title=title,
                description=description,
                assigneeId=assignee_id,
                priority=priority,
                stateId=state_id,
            )
        )
        match classify_mutation(payload):
            case WellFormed(entity):
                created: Mapping[str, Any] = entity
            case Malformed():
                created = {}
        return TaskMutationResult(
            id=created.get("id") or "unknown",
            title=created.get("title") or "unknown",
            url=created.get("url") or "",
            message=CREATED_MESSAGE,
        )

    async def update_issue(
        self,
        issue_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        assignee_id: str | None = None,
        priority: int | None = None,
        state_id: str | None = None,
    ) -> TaskMutationResult:
        payload = await self.client.update_issue(
            issue_id,
            _compact(
                title=title,
                description=description,
                assigneeId=assignee_id,
                priority=priority,
                stateId=state_id,
            ),
        )
        match classify_mutation(payload, require_wrapper=True):
            case WellFormed(entity):
                updated = entity
            case Malformed(reason):
                raise MalformedResponseError("issueUpdate", reason)
        missing = [k for k in ("id", "title", "url") if k not in updated]
        if missing:
            raise MalformedResponseError("issueUpdate", f"issue is missing {', '.join(missing)}")
        return TaskMutationResult(
            id=updated["id"],
            title=updated["title"],
            url=updated["url"],
            message=UPDATED_MESSAGE,
        )
