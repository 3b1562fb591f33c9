"""Async GraphQL client for the Linear API.

Thin pass-through: one HTTP POST per call, no retries, no caching, a single
page per list query.  Returns plain dicts straight from the ``data`` field;
shaping them for MCP clients is :mod:`linear_mcp.operations`' job.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from linear_mcp.config import DEFAULT_API_URL, DEFAULT_TIMEOUT, ServerConfig
from linear_mcp.errors import LinearAPIError, LinearConnectionError

TEAMS_QUERY = """
query Teams {
  teams {
    nodes { id name key description }
  }
}
"""

ISSUES_QUERY = """
query Issues($filter: IssueFilter, $first: Int) {
  issues(filter: $filter, first: $first) {
    nodes {
      id
      title
      description
      priority
      createdAt
      url
      state { id name }
      assignee { id name }
    }
  }
}
"""

ISSUE_CREATE_MUTATION = """
mutation IssueCreate($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue { id title url }
  }
}
"""

ISSUE_UPDATE_MUTATION = """
mutation IssueUpdate($id: String!, $input: IssueUpdateInput!) {
  issueUpdate(id: $id, input: $input) {
    success
    issue { id title url }
  }
}
"""


def _coerce_error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or f"HTTP {response.status_code} error"
    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            return str(errors[0].get("message", errors[0]))
        for key in ("error", "message", "detail"):
            if isinstance(payload.get(key), str):
                return str(payload[key])
    return json.dumps(payload, sort_keys=True)


class LinearClient:
    """Minimal Linear API client exposing the four calls the adapter needs."""

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            msg = "api_key must not be empty"
            raise ValueError(msg)
        self.api_url = api_url
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        # Personal API keys go in the header as-is (no "Bearer" prefix).
        self._headers = {"Authorization": api_key, "Content-Type": "application/json"}

    @classmethod
    def from_config(cls, config: ServerConfig, *, http_client: httpx.AsyncClient | None = None) -> LinearClient:
        return cls(config.api_key, api_url=config.api_url, timeout=config.timeout, http_client=http_client)

    async def __aenter__(self) -> LinearClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        body = {"query": query, "variables": variables or {}}
        try:
            response = await self._http.post(self.api_url, json=body, headers=self._headers)
        except httpx.HTTPError as exc:
            msg = f"Failed to connect to Linear API at {self.api_url}: {exc}"
            raise LinearConnectionError(msg) from exc

        if response.status_code >= 400:
            raise LinearAPIError(_coerce_error_detail(response), status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            msg = "Linear API returned a non-JSON body"
            raise LinearAPIError(msg, status_code=response.status_code) from exc

        if not isinstance(payload, dict):
            msg = "Linear API returned an unexpected payload"
            raise LinearAPIError(msg, status_code=response.status_code, payload=payload)

        errors = payload.get("errors")
        if errors:
            first = errors[0] if isinstance(errors, list) else errors
            detail = first.get("message", str(first)) if isinstance(first, dict) else str(first)
            raise LinearAPIError(detail, status_code=response.status_code, payload=payload)

        data = payload.get("data")
        if not isinstance(data, dict):
            msg = "Linear API response has no data"
            raise LinearAPIError(msg, status_code=response.status_code, payload=payload)
        return data

    @staticmethod
    def _nodes(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
        connection = data.get(key) or {}
        nodes = connection.get("nodes") if isinstance(connection, dict) else None
        return list(nodes or [])

    async def list_teams(self) -> list[dict[str, Any]]:
        data = await self._execute(TEAMS_QUERY)
        return self._nodes(data, "teams")

    async def list_issues(self, filter: dict[str, Any], first: int) -> list[dict[str, Any]]:
        data = await self._execute(ISSUES_QUERY, {"filter": filter, "first": first})
        return self._nodes(data, "issues")

    async def create_issue(self, fields: dict[str, Any]) -> Any:
        data = await self._execute(ISSUE_CREATE_MUTATION, {"input": fields})
        return data.get("issueCreate")

    async def update_issue(self, issue_id: str, fields: dict[str, Any]) -> Any:
        data = await self._execute(ISSUE_UPDATE_MUTATION, {"id": issue_id, "input": fields})
        return data.get("issueUpdate")
