"""Declarative input contracts and the single generic validator.

Every capability declares a :class:`Contract` (a closed list of
:class:`Field` descriptors).  :func:`validate` checks a raw MCP argument
dict against it, applies defaults, and drops unknown keys.  The same
contract renders the JSON Schema advertised in ``tools/list`` and the
argument list advertised in ``prompts/list``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from mcp.types import PromptArgument


class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING_ARRAY = "string_array"


_TYPE_LABELS: dict[FieldType, str] = {
    FieldType.STRING: "a string",
    FieldType.NUMBER: "a number",
    FieldType.INTEGER: "an integer",
    FieldType.BOOLEAN: "a boolean",
    FieldType.STRING_ARRAY: "an array of strings",
}


def _matches(kind: FieldType, value: Any) -> bool:
    # bool is an int subclass; never accept it as a number.  JSON has one
    # number type, so 5.0 counts as an integer.
    match kind:
        case FieldType.STRING:
            return isinstance(value, str)
        case FieldType.NUMBER:
            return isinstance(value, int | float) and not isinstance(value, bool)
        case FieldType.INTEGER:
            if isinstance(value, float):
                return value.is_integer()
            return isinstance(value, int) and not isinstance(value, bool)
        case FieldType.BOOLEAN:
            return isinstance(value, bool)
        case FieldType.STRING_ARRAY:
            return isinstance(value, list | tuple) and all(isinstance(v, str) for v in value)
    return False


def _coerce(kind: FieldType, value: Any) -> Any:
    if kind is FieldType.STRING_ARRAY:
        return list(value)
    if kind is FieldType.INTEGER:
        return int(value)
    return value


@dataclass(frozen=True)
class Field:
    """One declared input field."""

    name: str
    type: FieldType
    description: str = ""
    required: bool = True
    default: Any = None
    minimum: int | None = None
    maximum: int | None = None

    def __post_init__(self) -> None:
        if self.required and self.default is not None:
            msg = f"Field {self.name!r}: a default is only allowed on optional fields"
            raise ValueError(msg)
        if self.default is not None and not _matches(self.type, self.default):
            msg = f"Field {self.name!r}: default {self.default!r} is not {_TYPE_LABELS[self.type]}"
            raise ValueError(msg)
        bounded = self.minimum is not None or self.maximum is not None
        if bounded and self.type not in (FieldType.NUMBER, FieldType.INTEGER):
            msg = f"Field {self.name!r}: minimum/maximum only apply to numeric fields"
            raise ValueError(msg)

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any]
        if self.type is FieldType.STRING_ARRAY:
            schema = {"type": "array", "items": {"type": "string"}}
        else:
            schema = {"type": self.type.value}
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        if self.default is not None:
            schema["default"] = self.default
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class Contract:
    """Closed, ordered set of field descriptors for one capability."""

    fields: tuple[Field, ...] = ()

    def __post_init__(self) -> None:
        names = [f.name for f in self.fields]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            msg = f"Duplicate contract fields: {', '.join(dupes)}"
            raise ValueError(msg)

    @classmethod
    def of(cls, *fields: Field) -> Contract:
        return cls(tuple(fields))

    @property
    def required_names(self) -> list[str]:
        return [f.name for f in self.fields if f.required]

    def to_json_schema(self) -> dict[str, Any]:
        """Render as an MCP tool ``inputSchema``."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {f.name: f.json_schema() for f in self.fields},
        }
        if self.required_names:
            schema["required"] = self.required_names
        return schema

    def prompt_arguments(self) -> list[PromptArgument]:
        return [PromptArgument(name=f.name, description=f.description or None, required=f.required) for f in self.fields]


EMPTY_CONTRACT = Contract()


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :func:`validate`: a typed payload or a named-field failure."""

    ok: bool
    value: dict[str, Any] = field(default_factory=dict)
    field_name: str | None = None
    reason: str = ""

    @classmethod
    def success(cls, value: dict[str, Any]) -> ValidationResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, field_name: str, reason: str) -> ValidationResult:
        return cls(ok=False, field_name=field_name, reason=reason)


def validate(contract: Contract, payload: Mapping[str, Any] | None) -> ValidationResult:
    """Check *payload* against *contract*.

    Required fields must be present, non-null, and well-typed.  Optional
    fields that are present must be well-typed; missing optional fields
    get their default (or are left out when they have none).  Keys the
    contract does not declare are ignored.
    """
    raw = payload or {}
    if not isinstance(raw, Mapping):
        return ValidationResult.failure("", "arguments must be an object")

    value: dict[str, Any] = {}
    for f in contract.fields:
        present = raw.get(f.name) is not None
        if not present:
            if f.required:
                return ValidationResult.failure(f.name, f"missing required field '{f.name}'")
            if f.default is not None:
                value[f.name] = f.default
            continue
        candidate = raw[f.name]
        if not _matches(f.type, candidate):
            return ValidationResult.failure(
                f.name,
                f"field '{f.name}' must be {_TYPE_LABELS[f.type]}, got {type(candidate).__name__}",
            )
        if f.minimum is not None and candidate < f.minimum:
            return ValidationResult.failure(f.name, f"field '{f.name}' must be >= {f.minimum}")
        if f.maximum is not None and candidate > f.maximum:
            return ValidationResult.failure(f.name, f"field '{f.name}' must be <= {f.maximum}")
        value[f.name] = _coerce(f.type, candidate)
    return ValidationResult.success(value)
