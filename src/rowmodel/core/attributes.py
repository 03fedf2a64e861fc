"""In-memory column state of a single record."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Union

Scalar = Union[None, bool, int, float, str]


def to_scalar(value: Any) -> Scalar:
    """Normalize a value to one of the scalar column variants.

    Driver-native values are folded into the nearest scalar: ``Decimal``
    becomes ``float``, temporal values become ISO-8601 strings and ``bytes``
    are decoded as UTF-8, with undecodable bytes replaced by U+FFFD.

    Raises:
        TypeError: If the value has no scalar representation
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    raise TypeError(
        f"Unsupported column value of type '{type(value).__name__}'. "
        "Expected None, bool, int, float or str."
    )


def is_empty(value: Any) -> bool:
    """Whether a column value counts as missing (None or empty string)."""
    return value is None or value == ""


class AttributeBag:
    """Mapping from column name to scalar value.

    Unknown names read as None; nothing here raises on lookup.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Scalar] = {}
        if values:
            self.update(values)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> AttributeBag:
        """Build a bag from a driver row mapping."""
        return cls(row)

    def set(self, name: str, value: Any) -> None:
        self._values[name] = to_scalar(value)

    def get(self, name: str, default: Scalar = None) -> Scalar:
        return self._values.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._values

    def discard(self, name: str) -> None:
        self._values.pop(name, None)

    def update(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self.set(name, value)

    def clear(self) -> None:
        self._values.clear()

    def snapshot(self) -> dict[str, Scalar]:
        """Copy of the current mapping; later writes are not reflected in it."""
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeBag):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"AttributeBag({self._values!r})"
