"""Insert, update and delete execution for a single table.

Values are bound under generated parameter names (``_v0``, ``_v1``, ...)
so they cannot collide with the placeholders of a caller's filter.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from rowmodel.core.connection import DatabaseConnection
from rowmodel.core.types import EntityDescriptor
from rowmodel.query.builder import parse_params

logger = logging.getLogger(__name__)

CREATED_AT = "created_at"
UPDATED_AT = "updated_at"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def utc_timestamp() -> str:
    """Current UTC time as ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


class CrudExecutor:
    """Runs raw write statements against one table.

    Every method raises ``ExecutionError`` on driver failure; ``Model``
    is responsible for capturing it.
    """

    def __init__(self, connection: DatabaseConnection, descriptor: EntityDescriptor) -> None:
        self._connection = connection
        self._descriptor = descriptor

    @property
    def table(self) -> str:
        return self._connection.quote(self._descriptor.table)

    def _bind(self, values: Mapping[str, Any]) -> tuple[list[str], list[str], dict[str, Any]]:
        columns: list[str] = []
        placeholders: list[str] = []
        bound: dict[str, Any] = {}
        for i, (column, value) in enumerate(values.items()):
            name = f"_v{i}"
            columns.append(self._connection.quote(column))
            placeholders.append(f":{name}")
            bound[name] = value
        return columns, placeholders, bound

    def create(self, values: Mapping[str, Any]) -> Any:
        """Insert a row.

        Args:
            values: Column/value pairs, primary key excluded

        Returns:
            The generated primary key value, or None if the driver reports none
        """
        data = dict(values)
        if self._descriptor.timestamps:
            now = utc_timestamp()
            data.setdefault(CREATED_AT, now)
            data.setdefault(UPDATED_AT, now)

        columns, placeholders, bound = self._bind(data)
        if columns:
            sql = (
                f"INSERT INTO {self.table} ({', '.join(columns)}) "
                f"VALUES ({', '.join(placeholders)})"
            )
        else:
            sql = f"INSERT INTO {self.table} DEFAULT VALUES"

        returning = self._connection.supports_returning
        if returning:
            sql += f" RETURNING {self._connection.quote(self._descriptor.primary_key)}"

        stmt = self._connection.prepare(sql)
        stmt.execute(bound)
        logger.debug(f"Inserted into {self._descriptor.table}: {sql}")

        if returning:
            row = stmt.fetch_one()
            return next(iter(row.values())) if row else None
        return stmt.last_insert_id()

    def update(
        self,
        values: Mapping[str, Any],
        terms: str,
        params: str | Mapping[str, Any] | None = None,
    ) -> bool:
        """Update rows matching ``terms``.

        Returns:
            True if at least one row was affected
        """
        data = dict(values)
        if self._descriptor.timestamps:
            data[UPDATED_AT] = utc_timestamp()
        if not data:
            return False

        columns, placeholders, bound = self._bind(data)
        assignments = ", ".join(f"{c} = {p}" for c, p in zip(columns, placeholders))
        sql = f"UPDATE {self.table} SET {assignments} WHERE {terms}"

        stmt = self._connection.prepare(sql)
        stmt.execute({**parse_params(params), **bound})
        logger.debug(f"Updated {stmt.row_count()} row(s) in {self._descriptor.table}")
        return stmt.row_count() > 0

    def delete(self, terms: str, params: str | Mapping[str, Any] | None = None) -> bool:
        """Delete rows matching ``terms``.

        Returns:
            True if at least one row was affected
        """
        stmt = self._connection.prepare(f"DELETE FROM {self.table} WHERE {terms}")
        stmt.execute(parse_params(params))
        logger.debug(f"Deleted {stmt.row_count()} row(s) from {self._descriptor.table}")
        return stmt.row_count() > 0
