"""Input parsing utilities for CLI commands."""

import json
from typing import Any


def parse_value(raw: str) -> Any:
    """Parse a CLI value as JSON, falling back to the raw string.

    Examples:
        "1.5" → 1.5
        "true" → True
        "Blue Pen" → "Blue Pen"
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def parse_assignment(spec: str) -> tuple[str, Any]:
    """Parse a ``column=value`` assignment.

    Raises:
        ValueError: If the assignment has no '=' or an empty column
    """
    if "=" not in spec:
        raise ValueError(f"Invalid assignment: '{spec}'. Expected format: column=value")
    column, raw = spec.split("=", 1)
    column = column.strip()
    if not column:
        raise ValueError(f"Invalid assignment: '{spec}'. Column name is empty")
    return column, parse_value(raw)


def parse_column_list(spec: str | None) -> list[str]:
    """Split a comma-separated column list, dropping blanks."""
    if not spec:
        return []
    return [part.strip() for part in spec.split(",") if part.strip()]
