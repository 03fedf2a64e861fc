"""Core types for rowmodel.

All types are JSON-serializable so they can be printed by the CLI.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from rowmodel.core.model import Model


class FetchStatus(StrEnum):
    """Outcome of executing a pending statement."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values."""
        return [s.value for s in cls]


class EntityDescriptor(BaseModel):
    """Static configuration of a record type.

    Example:
        EntityDescriptor(table="products", required=["name", "price"])
    """

    model_config = ConfigDict(frozen=True)

    table: str = Field(..., min_length=1, description="Backing table name")
    primary_key: str = Field("id", min_length=1, description="Primary key column")
    required: tuple[str, ...] = Field(
        default=(), description="Columns that must be non-empty before a write"
    )
    timestamps: bool = Field(True, description="Maintain created_at/updated_at on writes")

    @field_validator("required", mode="before")
    @classmethod
    def _dedupe_required(cls, v: Any) -> tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        return tuple(dict.fromkeys(str(name) for name in v))


class FetchResult(BaseModel):
    """Result of ``Model.fetch_result()``.

    Unlike ``fetch()``, separates "no rows" from "the statement failed".
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: FetchStatus
    records: list[Any] = Field(default_factory=list)
    error: Exception | None = None

    @property
    def found(self) -> bool:
        return self.status == FetchStatus.FOUND

    @property
    def failed(self) -> bool:
        return self.status == FetchStatus.FAILED

    def first(self) -> Model | None:
        """First record, or None."""
        return self.records[0] if self.records else None
