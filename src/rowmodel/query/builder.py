"""Deferred SELECT statement accumulated by chained clause calls.

Each clause holds exactly one fragment: setting it again replaces the
previous value. Nothing is reset after execution, so executing twice sends
the same statement twice.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl


def parse_params(params: str | Mapping[str, Any] | None) -> dict[str, Any]:
    """Parse a ``key=value&key2=value2`` parameter string into bind values.

    Query-string decoding applies (``+`` and ``%XX`` escapes), blank values
    are kept and a repeated key keeps its last value. A mapping is copied
    as-is.

    Examples:
        "id=5" → {"id": "5"}
        "name=Blue+Pen&price=" → {"name": "Blue Pen", "price": ""}
    """
    if params is None:
        return {}
    if isinstance(params, Mapping):
        return dict(params)
    if not params:
        return {}
    return dict(parse_qsl(params, keep_blank_values=True))


@dataclass
class PendingStatement:
    """Accumulated clauses of one logical SELECT."""

    base: str = ""
    params: dict[str, Any] = field(default_factory=dict)
    group: str = ""
    order: str = ""
    limit: str = ""
    offset: str = ""

    def select(
        self,
        table: str,
        terms: str | None = None,
        params: str | Mapping[str, Any] | None = None,
        columns: str = "*",
    ) -> None:
        """Seed the base SELECT, replacing any previous base and parameters."""
        if terms:
            self.base = f"SELECT {columns} FROM {table} WHERE {terms}"
            self.params = parse_params(params)
        else:
            self.base = f"SELECT {columns} FROM {table}"
            self.params = {}

    def set_group(self, column: str) -> None:
        self.group = f" GROUP BY {column}"

    def set_order(self, column_order: str) -> None:
        self.order = f" ORDER BY {column_order}"

    def set_limit(self, limit: int) -> None:
        self.limit = f" LIMIT {int(limit)}"

    def set_offset(self, offset: int) -> None:
        self.offset = f" OFFSET {int(offset)}"

    def sql(self) -> str:
        """Full statement text: base, group, order, limit, offset."""
        return f"{self.base}{self.group}{self.order}{self.limit}{self.offset}"

    def count_sql(self) -> str:
        """Row count over the base statement only."""
        return f"SELECT COUNT(*) AS total FROM ({self.base}) AS counted"

    def reset(self) -> None:
        self.base = ""
        self.params = {}
        self.group = ""
        self.order = ""
        self.limit = ""
        self.offset = ""
