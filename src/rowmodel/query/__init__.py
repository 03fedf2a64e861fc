"""Statement building for rowmodel models."""

from rowmodel.query.builder import PendingStatement, parse_params

__all__ = [
    "PendingStatement",
    "parse_params",
]
