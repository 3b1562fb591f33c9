"""Pure helpers shared across MCP capability modules."""

from __future__ import annotations

from typing import Any, TypeVar, cast

_T = TypeVar("_T")

PRIORITY_LABELS = ("(No priority)", "(Low)", "(Medium)", "(High)", "(Urgent)")


def _parse_args(arguments: dict[str, Any], cls: type[_T]) -> _T:
    """Cast validated arguments to a typed dict for static analysis.

    The dispatcher has already checked them against the capability's
    contract; this cast() adds no runtime validation.
    """
    return cast(_T, arguments)


def priority_label(priority: Any) -> str:
    """Label for a 0-4 priority given as a number or numeric string, else ''."""
    if isinstance(priority, str) and not priority.strip():
        priority = 0
    try:
        value = float(priority)
    except (TypeError, ValueError):
        return ""
    if not value.is_integer() or not 0 <= value < len(PRIORITY_LABELS):
        return ""
    return PRIORITY_LABELS[int(value)]
