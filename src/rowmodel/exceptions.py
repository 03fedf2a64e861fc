"""Custom exceptions for rowmodel.

Model operations never let these escape to callers: they are logged,
stored on the record (``Model.fail``) and turned into ``False``/``None``
results. The connection layer raises them directly.
"""

from __future__ import annotations

from typing import Any


class RowModelError(Exception):
    """Base exception for all rowmodel errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Return error as JSON-serializable dict."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ConnectionError(RowModelError):
    """Failed to connect to the database."""

    pass


class ValidationError(RowModelError):
    """Required fields are missing or empty."""

    def __init__(self, message: str, missing_fields: list[str] | None = None) -> None:
        super().__init__(message, {"missing_fields": missing_fields or []})
        self.missing_fields = missing_fields or []


class ExecutionError(RowModelError):
    """The driver failed to prepare, execute or fetch a statement."""

    def __init__(
        self,
        message: str,
        statement: str | None = None,
        params: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, {"statement": statement, "params": params or {}})
        self.statement = statement
        self.params = params or {}


class RecordNotFoundError(RowModelError):
    """A row that was just written could not be read back."""

    def __init__(self, record_id: Any, table: str) -> None:
        message = f"Record '{record_id}' not found in '{table}'."
        super().__init__(message, {"record_id": record_id, "table": table})
        self.record_id = record_id
        self.table = table
