"""Exception hierarchy for linear-mcp.

Pure definitions, no MCP or httpx dependencies, so every layer can import
them without circular-import issues.
"""

from __future__ import annotations

from typing import Any


class LinearMCPError(Exception):
    """Base class for all linear-mcp errors."""


class CredentialNotFoundError(LinearMCPError):
    """No Linear API key could be resolved at startup."""


class LinearConnectionError(LinearMCPError):
    """The Linear API could not be reached."""


class LinearAPIError(LinearMCPError):
    """Linear answered with an HTTP error or a GraphQL ``errors`` list."""

    def __init__(
        self,
        detail: str,
        *,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        self.detail = detail
        self.status_code = status_code
        self.payload = payload
        status_hint = f" (status={status_code})" if status_code is not None else ""
        super().__init__(f"{detail}{status_hint}")


class MalformedResponseError(LinearMCPError):
    """A Linear response did not have the shape an operation depends on."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Malformed {operation} response: {reason}")


class CapabilityNotFoundError(KeyError):
    """Lookup of an unregistered prompt, resource, or tool."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown {self.kind}: {self.name}"


class RegistryError(LinearMCPError):
    """Invalid registration (duplicate name, or registry already sealed)."""


class PromptArgumentError(ValueError):
    """Prompt arguments failed their contract."""
