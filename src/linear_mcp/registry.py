"""Capability registry: prompts, resources, and tools by name.

Populated once at startup, then sealed.  After that it is read-only, so
dispatch needs no locking.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from linear_mcp.contracts import EMPTY_CONTRACT, Contract
from linear_mcp.envelope import JSON_MIME
from linear_mcp.errors import CapabilityNotFoundError, RegistryError

PromptTemplate = Callable[[dict[str, Any]], str]
ResourceReader = Callable[[str], Awaitable[Any]]
ToolAction = Callable[[dict[str, Any]], Awaitable[Any]]


class CapabilityKind(str, Enum):
    PROMPT = "prompt"
    RESOURCE = "resource"
    TOOL = "tool"


@dataclass(frozen=True)
class Capability:
    name: str
    kind: CapabilityKind
    description: str
    contract: Contract
    handler: Callable[..., Any]
    uri: str | None = None
    mime_type: str | None = None
    # Verb phrase used in failure text, e.g. "creating task".
    error_label: str = ""


class CapabilityRegistry:
    def __init__(self) -> None:
        self._by_kind: dict[CapabilityKind, dict[str, Capability]] = {kind: {} for kind in CapabilityKind}
        self._by_uri: dict[str, Capability] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    def _add(self, cap: Capability) -> Capability:
        if self._sealed:
            msg = f"Registry is sealed; cannot register {cap.kind.value} {cap.name!r}"
            raise RegistryError(msg)
        table = self._by_kind[cap.kind]
        if cap.name in table:
            msg = f"Duplicate {cap.kind.value} name: {cap.name!r}"
            raise RegistryError(msg)
        if cap.uri is not None:
            if cap.uri in self._by_uri:
                msg = f"Duplicate resource URI: {cap.uri!r}"
                raise RegistryError(msg)
            self._by_uri[cap.uri] = cap
        table[cap.name] = cap
        return cap

    def register_prompt(self, name: str, description: str, contract: Contract, template: PromptTemplate) -> Capability:
        return self._add(Capability(name, CapabilityKind.PROMPT, description, contract, template))

    def register_resource(
        self,
        name: str,
        uri: str,
        reader: ResourceReader,
        *,
        description: str = "",
        mime_type: str = JSON_MIME,
        error_label: str = "",
    ) -> Capability:
        return self._add(
            Capability(
                name,
                CapabilityKind.RESOURCE,
                description,
                EMPTY_CONTRACT,
                reader,
                uri=uri,
                mime_type=mime_type,
                error_label=error_label or f"reading {name}",
            )
        )

    def register_tool(
        self,
        name: str,
        description: str,
        contract: Contract,
        action: ToolAction,
        *,
        error_label: str = "",
    ) -> Capability:
        return self._add(
            Capability(
                name,
                CapabilityKind.TOOL,
                description,
                contract,
                action,
                error_label=error_label or f"running {name}",
            )
        )

    def get(self, kind: CapabilityKind, name: str) -> Capability:
        try:
            return self._by_kind[kind][name]
        except KeyError:
            raise CapabilityNotFoundError(kind.value, name) from None

    def get_resource_by_uri(self, uri: str) -> Capability:
        # URL parsers may append a trailing slash to an empty path.
        try:
            return self._by_uri.get(uri) or self._by_uri[uri.rstrip("/")]
        except KeyError:
            raise CapabilityNotFoundError(CapabilityKind.RESOURCE.value, uri) from None

    def of_kind(self, kind: CapabilityKind) -> list[Capability]:
        return list(self._by_kind[kind].values())
