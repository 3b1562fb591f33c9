"""Shared pytest fixtures for linear-mcp tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from linear_mcp.config import API_KEY_ENV, API_URL_ENV
from linear_mcp.dispatch import Dispatcher
from linear_mcp.mcp_tools import build_registry
from linear_mcp.operations import LinearOperations
from linear_mcp.registry import CapabilityRegistry

TEAM_ID = "team-eng"

SAMPLE_TEAMS: list[dict[str, Any]] = [
    {"id": "team-eng", "name": "Engineering", "key": "ENG", "description": "Builds things"},
    {"id": "team-des", "name": "Design", "key": "DES", "description": None},
]


def _issue(n: int, state: str | None, team_id: str = TEAM_ID, assignee: str | None = "Ada") -> dict[str, Any]:
    return {
        "id": f"issue-{n}",
        "title": f"Issue {n}",
        "description": f"Description {n}",
        "priority": n % 5,
        "createdAt": f"2026-01-{n:02d}T00:00:00.000Z",
        "url": f"https://linear.app/acme/issue/ENG-{n}",
        "state": {"id": f"state-{state}", "name": state} if state else None,
        "assignee": {"id": "user-1", "name": assignee} if assignee else None,
        "team": {"id": team_id},
    }


def sample_issues() -> list[dict[str, Any]]:
    """Mixed-state dataset: 12 ENG issues (3 done, 4 todo, 4 in_progress, 1 stateless) + 2 DES."""
    issues = []
    states = ["done", "todo", "in_progress"]
    for n in range(1, 12):
        issues.append(_issue(n, states[n % 3]))
    issues.append(_issue(12, None, assignee=None))
    issues.append(_issue(13, "done", team_id="team-des"))
    issues.append(_issue(14, "todo", team_id="team-des"))
    return issues


def _matches_filter(issue: dict[str, Any], issue_filter: dict[str, Any]) -> bool:
    team_eq = issue_filter.get("team", {}).get("id", {}).get("eq")
    if team_eq is not None and (issue.get("team") or {}).get("id") != team_eq:
        return False
    state_in = issue_filter.get("state", {}).get("name", {}).get("in")
    if state_in is not None:
        state = issue.get("state") or {}
        if state.get("name") not in state_in:
            return False
    return True


class StubLinearClient:
    """In-memory stand-in for LinearClient.

    Records every call in ``calls`` and applies issue filters the way the
    Linear API does for team id ``eq`` and state name ``in``.  Set ``error``
    to make every call raise it.
    """

    def __init__(
        self,
        *,
        teams: list[dict[str, Any]] | None = None,
        issues: list[dict[str, Any]] | None = None,
        create_response: Any = None,
        update_response: Any = None,
    ) -> None:
        self.teams = SAMPLE_TEAMS if teams is None else teams
        self.issues = sample_issues() if issues is None else issues
        self.create_response = (
            {"success": True, "issue": {"id": "X1", "title": "T", "url": "u"}} if create_response is None else create_response
        )
        self.update_response = (
            {"success": True, "issue": {"id": "X1", "title": "Renamed", "url": "u"}} if update_response is None else update_response
        )
        self.error: Exception | None = None
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.error is not None:
            raise self.error

    async def list_teams(self) -> list[dict[str, Any]]:
        self._record("list_teams")
        return list(self.teams)

    async def list_issues(self, filter: dict[str, Any], first: int) -> list[dict[str, Any]]:
        self._record("list_issues", filter, first)
        return [i for i in self.issues if _matches_filter(i, filter)][:first]

    async def create_issue(self, fields: dict[str, Any]) -> Any:
        self._record("create_issue", fields)
        return self.create_response

    async def update_issue(self, issue_id: str, fields: dict[str, Any]) -> Any:
        self._record("update_issue", issue_id, fields)
        return self.update_response


@pytest.fixture
def stub_client() -> StubLinearClient:
    return StubLinearClient()


@pytest.fixture
def ops(stub_client: StubLinearClient) -> LinearOperations:
    return LinearOperations(stub_client)


@pytest.fixture
def registry(ops: LinearOperations) -> CapabilityRegistry:
    return build_registry(ops)


@pytest.fixture
def dispatcher(registry: CapabilityRegistry) -> Dispatcher:
    return Dispatcher(registry)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty working directory, empty home, no Linear variables in the environment.

    Returns the working directory.
    """
    for name in (API_KEY_ENV, API_URL_ENV):
        # setenv first so teardown also clears values load_dotenv writes.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work
