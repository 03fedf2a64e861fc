"""Core components for rowmodel."""

from rowmodel.core.attributes import AttributeBag, Scalar, is_empty, to_scalar
from rowmodel.core.connection import DatabaseConnection, PreparedStatement
from rowmodel.core.model import Model
from rowmodel.core.types import EntityDescriptor, FetchResult, FetchStatus

__all__ = [
    "AttributeBag",
    "DatabaseConnection",
    "EntityDescriptor",
    "FetchResult",
    "FetchStatus",
    "Model",
    "PreparedStatement",
    "Scalar",
    "is_empty",
    "to_scalar",
]
