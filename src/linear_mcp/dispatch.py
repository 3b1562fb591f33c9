"""Request dispatch: lookup, contract gate, single handler call, envelope.

Per request::

    received -> validated -> executing -> completed
    received -> rejected                       (contract failure, no handler call)
    received -> validated -> executing -> failed   (handler raised)

The dispatcher holds nothing but the sealed registry, so requests never
share state.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

from linear_mcp.contracts import validate
from linear_mcp.envelope import TEXT_MIME, ContentBlock, DispatchStatus, Envelope
from linear_mcp.errors import PromptArgumentError
from linear_mcp.registry import CapabilityKind, CapabilityRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptRendering:
    description: str
    text: str


class Dispatcher:
    def __init__(self, registry: CapabilityRegistry) -> None:
        self.registry = registry

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> Envelope:
        """Run one tool invocation and return its envelope.

        Raises :class:`~linear_mcp.errors.CapabilityNotFoundError` for an
        unknown tool; every other outcome is an envelope.
        """
        cap = self.registry.get(CapabilityKind.TOOL, name)
        t0 = time.monotonic()

        checked = validate(cap.contract, arguments)
        if not checked.ok:
            logger.warning(
                "tool_rejected",
                extra={"tool": name, "args_data": arguments, "error": checked.reason},
            )
            return Envelope.rejection_for(name, checked)

        try:
            result = await cap.handler(checked.value)
        except Exception as exc:
            logger.error("tool_error", extra={"tool": name, "args_data": checked.value}, exc_info=True)
            return Envelope.failure(f"Error {cap.error_label}: {exc}")

        duration_ms = round((time.monotonic() - t0) * 1000, 1)
        logger.info("tool_call", extra={"tool": name, "args_data": checked.value, "duration_ms": duration_ms})
        return Envelope.json(result)

    async def read_resource(self, uri: str) -> Envelope:
        """Read a resource by URI.  Reader failures become a ``text/plain`` block."""
        cap = self.registry.get_resource_by_uri(uri)
        t0 = time.monotonic()
        try:
            data = await cap.handler(uri)
        except Exception as exc:
            logger.error("resource_error", extra={"tool": cap.name, "args_data": {"uri": uri}}, exc_info=True)
            return Envelope.failure(f"Error {cap.error_label}: {exc}", uri=uri)

        duration_ms = round((time.monotonic() - t0) * 1000, 1)
        logger.info("resource_read", extra={"tool": cap.name, "args_data": {"uri": uri}, "duration_ms": duration_ms})
        if isinstance(data, str):
            return Envelope((ContentBlock(cap.mime_type or TEXT_MIME, data, uri),), DispatchStatus.COMPLETED)
        return Envelope.json(data, uri=uri)

    def get_prompt(self, name: str, arguments: dict[str, Any] | None) -> PromptRendering:
        """Render a prompt.  Prompts do no I/O, so only a bad payload can fail."""
        cap = self.registry.get(CapabilityKind.PROMPT, name)
        checked = validate(cap.contract, arguments)
        if not checked.ok:
            msg = f"Invalid arguments for {name}: {checked.reason}"
            raise PromptArgumentError(msg)
        return PromptRendering(description=cap.description, text=cap.handler(checked.value))
