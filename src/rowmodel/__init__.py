"""rowmodel - a small active-record core over SQLAlchemy.

A concrete entity names its table, required fields, primary key and
timestamp policy, then reads and writes rows through a fluent query API.

Example:
    from rowmodel import DatabaseConnection, Model

    class Product(Model):
        def __init__(self, connection: DatabaseConnection) -> None:
            super().__init__(connection, "products", required=["name", "price"])

    db = DatabaseConnection("sqlite:///shop.db")

    pen = Product(db).set("name", "Pen").set("price", 1.5)
    if not pen.save():
        print(pen.message, pen.fail)

    cheapest = Product(db).order("price ASC").limit(5).find().fetch(all=True)
    expensive = Product(db).find("price > :p", "p=10").count()
"""

from rowmodel.core.attributes import AttributeBag, Scalar
from rowmodel.core.connection import DatabaseConnection, PreparedStatement
from rowmodel.core.model import Model
from rowmodel.core.types import EntityDescriptor, FetchResult, FetchStatus
from rowmodel.data.crud import CrudExecutor
from rowmodel.exceptions import (
    ConnectionError,
    ExecutionError,
    RecordNotFoundError,
    RowModelError,
    ValidationError,
)
from rowmodel.query.builder import PendingStatement, parse_params
from rowmodel.support.message import Message, MessageType

__version__ = "0.1.0"

__all__ = [
    # Main classes
    "Model",
    "DatabaseConnection",
    "PreparedStatement",
    "CrudExecutor",
    # State
    "AttributeBag",
    "Scalar",
    "PendingStatement",
    "parse_params",
    # Types
    "EntityDescriptor",
    "FetchResult",
    "FetchStatus",
    # Feedback
    "Message",
    "MessageType",
    # Exceptions
    "RowModelError",
    "ConnectionError",
    "ValidationError",
    "ExecutionError",
    "RecordNotFoundError",
]
