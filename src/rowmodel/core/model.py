"""Base record type with fluent querying and a save/destroy lifecycle.

Concrete entities subclass ``Model`` and describe their table:

    class Product(Model):
        def __init__(self, connection: DatabaseConnection) -> None:
            super().__init__(connection, "products", required=["name", "price"])

Failures never propagate out of a model operation, including a database
that cannot be opened. They are logged on the
``rowmodel.<ClassName>`` logger, kept on ``fail`` and reported through a
``False``/``None``/``0`` result.
"""

from __future__ import annotations

import copy
import logging
import traceback
from collections.abc import Iterable, Mapping
from typing import Any

from rowmodel.core.attributes import AttributeBag, Scalar, is_empty
from rowmodel.core.connection import DatabaseConnection
from rowmodel.core.types import EntityDescriptor, FetchResult, FetchStatus
from rowmodel.data.crud import CrudExecutor
from rowmodel.exceptions import (
    RecordNotFoundError,
    RowModelError,
    ValidationError,
)
from rowmodel.query.builder import PendingStatement
from rowmodel.support.message import Message

SAVE_FAILED = "The record could not be saved."
DELETE_FAILED = "The record could not be removed."


class Model:
    """A row of ``table`` plus the query being built against it."""

    def __init__(
        self,
        connection: DatabaseConnection,
        table: str,
        required: Iterable[str] = (),
        primary_key: str = "id",
        timestamps: bool = True,
    ) -> None:
        """Initialize the model.

        Args:
            connection: Shared database handle
            table: Backing table name
            required: Columns that must be non-empty before a write
            primary_key: Primary key column
            timestamps: Maintain created_at/updated_at on writes
        """
        self._connection = connection
        self._descriptor = EntityDescriptor(
            table=table,
            primary_key=primary_key,
            required=required,
            timestamps=timestamps,
        )
        self._crud = CrudExecutor(connection, self._descriptor)
        self._data = AttributeBag()
        self._statement = PendingStatement()
        self._fail: Exception | None = None
        self._message = Message()

    # -- state -------------------------------------------------------------

    @property
    def connection(self) -> DatabaseConnection:
        return self._connection

    @property
    def descriptor(self) -> EntityDescriptor:
        return self._descriptor

    @property
    def data(self) -> AttributeBag:
        """The record's column values."""
        return self._data

    @property
    def fail(self) -> Exception | None:
        """Exception from the most recent failed operation.

        Not cleared by later successes; check the operation's result first.
        """
        return self._fail

    @property
    def message(self) -> Message:
        return self._message

    @property
    def statement(self) -> str:
        """SQL text that ``fetch()`` would send."""
        return self._statement.sql()

    def get(self, name: str) -> Scalar:
        return self._data.get(name)

    def set(self, name: str, value: Any) -> Model:
        self._data.set(name, value)
        return self

    def has(self, name: str) -> bool:
        return self._data.has(name)

    def to_dict(self) -> dict[str, Scalar]:
        return self._data.snapshot()

    @property
    def _logger(self) -> logging.Logger:
        return logging.getLogger(f"rowmodel.{type(self).__name__}")

    def _capture(self, exc: Exception, feedback: str | None = None) -> None:
        frames = traceback.extract_tb(exc.__traceback__)
        if frames:
            line, file = frames[-1].lineno, frames[-1].filename
        else:
            line, file = 0, "<unknown>"
        self._logger.error(f"Line: {line} - File: {file} - {exc}")
        self._fail = exc
        if feedback:
            self._message.error(feedback)

    def _spawn(self, row: Mapping[str, Any] | None = None) -> Model:
        """New instance of the same class holding ``row`` and no pending query."""
        clone = copy.copy(self)
        clone._data = AttributeBag.from_row(row or {})
        clone._statement = PendingStatement()
        clone._fail = None
        clone._message = Message()
        return clone

    def _primary_filter(self) -> str:
        return f"{self._connection.quote(self._descriptor.primary_key)} = :id"

    # -- query building ----------------------------------------------------

    def find(
        self,
        terms: str | None = None,
        params: str | Mapping[str, Any] | None = None,
        columns: str = "*",
    ) -> Model:
        """Seed the SELECT.

        Args:
            terms: Raw filter expression, e.g. ``"price > :p"``
            params: ``"p=10&q=x"`` style string (or a mapping) of bind values
            columns: Column list for the projection
        """
        self._statement.select(self._descriptor.table, terms, params, columns)
        return self

    def find_by_id(self, record_id: Any, columns: str = "*") -> Model | None:
        """Fetch the single row whose primary key equals ``record_id``."""
        try:
            terms = self._primary_filter()
        except RowModelError as e:
            self._capture(e)
            return None
        return self.find(terms, {"id": record_id}, columns).fetch()

    def group(self, column: str) -> Model:
        self._statement.set_group(column)
        return self

    def order(self, column_order: str) -> Model:
        self._statement.set_order(column_order)
        return self

    def limit(self, limit: int) -> Model:
        self._statement.set_limit(limit)
        return self

    def offset(self, offset: int) -> Model:
        self._statement.set_offset(offset)
        return self

    def reset(self) -> Model:
        """Drop every clause and bound parameter."""
        self._statement.reset()
        return self

    def fetch_result(self, all: bool = False) -> FetchResult:
        """Execute the pending statement and report what happened.

        Args:
            all: Map every row instead of only the first

        Returns:
            FetchResult with status found, not_found or failed
        """
        if not self._statement.base:
            self.find()

        try:
            stmt = self._connection.prepare(self._statement.sql())
            stmt.execute(self._statement.params)
            rows = stmt.fetch_all()
            if not all:
                rows = rows[:1]
            records = [self._spawn(row) for row in rows]
        except (RowModelError, TypeError, ValueError) as e:
            self._capture(e)
            return FetchResult(status=FetchStatus.FAILED, error=e)

        if not records:
            return FetchResult(status=FetchStatus.NOT_FOUND)
        return FetchResult(status=FetchStatus.FOUND, records=records)

    def fetch(self, all: bool = False) -> Model | list[Model] | None:
        """Execute the pending statement.

        Returns:
            One record (``all=False``) or a list of records (``all=True``).
            No rows gives None for a single fetch and ``[]`` for ``all``;
            a failed statement gives None in both modes, with ``fail`` set.
        """
        result = self.fetch_result(all)
        if result.failed:
            return None
        if all:
            return result.records
        return result.first()

    def count(self) -> int:
        """Number of rows matched by the current filter.

        Group, order, limit and offset are ignored.
        """
        if not self._statement.base:
            self.find()

        try:
            stmt = self._connection.prepare(self._statement.count_sql())
            stmt.execute(self._statement.params)
        except RowModelError as e:
            self._capture(e)
            return 0

        row = stmt.fetch_one()
        return int(next(iter(row.values()))) if row else 0

    # -- writes ------------------------------------------------------------

    def _missing_required(self) -> list[str]:
        data = self._data.snapshot()
        return [f for f in self._descriptor.required if is_empty(data.get(f))]

    def required(self) -> bool:
        """Whether every required field is present and non-empty."""
        return not self._missing_required()

    def safe(self) -> dict[str, Scalar]:
        """Values to write: the snapshot without the primary key."""
        safe = self._data.snapshot()
        safe.pop(self._descriptor.primary_key, None)
        return safe

    def create(self, values: Mapping[str, Any]) -> Any:
        """Insert ``values``; the new id, or None on failure."""
        try:
            return self._crud.create(values)
        except RowModelError as e:
            self._capture(e, SAVE_FAILED)
            return None

    def update(
        self,
        values: Mapping[str, Any],
        terms: str,
        params: str | Mapping[str, Any] | None = None,
    ) -> bool:
        """Update rows matching ``terms``; whether any row changed."""
        try:
            return self._crud.update(values, terms, params)
        except RowModelError as e:
            self._capture(e, SAVE_FAILED)
            return False

    def delete(self, terms: str, params: str | Mapping[str, Any] | None = None) -> bool:
        """Delete rows matching ``terms``; whether any row was removed."""
        try:
            return self._crud.delete(terms, params)
        except RowModelError as e:
            self._capture(e, DELETE_FAILED)
            return False

    def save(self) -> bool:
        """Insert or update this record, then reload it from the database.

        A record without a primary key value is inserted; otherwise the row
        with that key is updated. The attribute bag is replaced with the row
        as stored, so defaults and triggers applied by the database show up.

        Returns:
            True when the row was written and read back
        """
        primary = self._descriptor.primary_key

        try:
            missing = self._missing_required()
            if missing:
                raise ValidationError(
                    f"Fill in the required fields: {', '.join(missing)}", missing
                )

            record_id = self._data.get(primary)
            if not is_empty(record_id):
                self._crud.update(self.safe(), self._primary_filter(), {"id": record_id})
            else:
                record_id = self._crud.create(self.safe())

            if is_empty(record_id):
                return False

            reader = self._spawn()
            fresh = reader.find_by_id(record_id)
            if fresh is None:
                if reader.fail is not None:
                    self._fail = reader.fail
                    self._message.error(SAVE_FAILED)
                    return False
                raise RecordNotFoundError(record_id, self._descriptor.table)

            self._data = fresh.data
            return True
        except ValidationError as e:
            self._capture(e)
            self._message.warning(e.message)
            return False
        except RowModelError as e:
            self._capture(e, SAVE_FAILED)
            return False

    def destroy(self) -> bool:
        """Delete the row identified by this record's primary key.

        Returns:
            False without touching the database when there is no key value
        """
        record_id = self._data.get(self._descriptor.primary_key)
        if is_empty(record_id):
            return False

        try:
            terms = self._primary_filter()
        except RowModelError as e:
            self._capture(e, DELETE_FAILED)
            return False
        return self.delete(terms, {"id": record_id})

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._descriptor.table}, {self._data.snapshot()!r})"
