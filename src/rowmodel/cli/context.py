"""CLI context management for database connections and shared state."""

import os
from collections.abc import Iterable
from dataclasses import dataclass, field

from rowmodel import DatabaseConnection, Model

DEFAULT_DATABASE_URL = "sqlite:///./rowmodel.db"
DEFAULT_LOG_LEVEL = "WARNING"


def get_database_url(url: str | None) -> str:
    """Resolve database URL from CLI arg, environment variable, or default.

    Priority:
    1. Explicit URL argument
    2. ROWMODEL_URL environment variable
    3. Default: sqlite:///./rowmodel.db
    """
    if url:
        return url
    if env_url := os.getenv("ROWMODEL_URL"):
        return env_url
    return DEFAULT_DATABASE_URL


def get_log_level(level: str | None) -> str:
    """Resolve log level from CLI arg, ROWMODEL_LOG_LEVEL, or WARNING."""
    if level:
        return level.upper()
    if env_level := os.getenv("ROWMODEL_LOG_LEVEL"):
        return env_level.upper()
    return DEFAULT_LOG_LEVEL


@dataclass
class CLIContext:
    """Shared context for CLI commands.

    Manages database connection lifecycle and output preferences.
    """

    database_url: str
    echo: bool
    json_output: bool
    _db: DatabaseConnection | None = field(default=None, init=False, repr=False)

    def get_db(self) -> DatabaseConnection:
        """Get or create database connection (lazy initialization)."""
        if self._db is None:
            self._db = DatabaseConnection(self.database_url, echo=self.echo)
        return self._db

    def model(
        self,
        table: str,
        required: Iterable[str] = (),
        primary_key: str = "id",
        timestamps: bool = True,
    ) -> Model:
        """Build an ad-hoc model over ``table`` on the shared connection."""
        return Model(
            self.get_db(),
            table,
            required=required,
            primary_key=primary_key,
            timestamps=timestamps,
        )

    def close(self) -> None:
        """Close database connection if open."""
        if self._db is not None:
            self._db.close()
            self._db = None
