"""Uniform result shape for every dispatch."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from linear_mcp.contracts import ValidationResult

JSON_MIME = "application/json"
TEXT_MIME = "text/plain"


class DispatchStatus(str, Enum):
    COMPLETED = "completed"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass(frozen=True)
class ContentBlock:
    mime_type: str
    text: str
    uri: str | None = None


@dataclass(frozen=True)
class Envelope:
    """Success payload, pre-dispatch rejection, or handler failure.

    ``rejection`` is set only for :attr:`DispatchStatus.REJECTED` and keeps
    the structured field/reason of the failed contract check.
    """

    blocks: tuple[ContentBlock, ...]
    status: DispatchStatus = DispatchStatus.COMPLETED
    rejection: ValidationResult | None = None

    @property
    def is_error(self) -> bool:
        return self.status is not DispatchStatus.COMPLETED

    @property
    def text(self) -> str:
        return "\n".join(b.text for b in self.blocks)

    @classmethod
    def json(cls, data: Any, *, uri: str | None = None) -> Envelope:
        return cls((ContentBlock(JSON_MIME, json.dumps(data, indent=2, default=str), uri),))

    @classmethod
    def failure(cls, message: str, *, uri: str | None = None) -> Envelope:
        return cls((ContentBlock(TEXT_MIME, message, uri),), status=DispatchStatus.FAILED)

    @classmethod
    def rejection_for(cls, capability: str, result: ValidationResult) -> Envelope:
        message = f"Invalid arguments for {capability}: {result.reason}"
        return cls((ContentBlock(TEXT_MIME, message),), status=DispatchStatus.REJECTED, rejection=result)
