"""Shared test fixtures for rowmodel."""

import os
from collections.abc import Callable, Generator

import pytest

from rowmodel import DatabaseConnection, Model

PRODUCTS_DDL = """
CREATE TABLE products (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    price REAL,
    category TEXT,
    stock INTEGER DEFAULT 0,
    created_at TEXT,
    updated_at TEXT
)
"""

NOTES_DDL = """
CREATE TABLE notes (
    note_id INTEGER PRIMARY KEY,
    body TEXT NOT NULL
)
"""


class Product(Model):
    """Entity used throughout the tests."""

    def __init__(self, connection: DatabaseConnection) -> None:
        super().__init__(connection, "products", required=["name", "price"])


class Note(Model):
    """Entity with a custom primary key and no timestamps."""

    def __init__(self, connection: DatabaseConnection) -> None:
        super().__init__(
            connection, "notes", required=["body"], primary_key="note_id", timestamps=False
        )


def _psycopg_available() -> bool:
    """Check if psycopg is installed."""
    try:
        import psycopg  # noqa: F401

        return True
    except ImportError:
        return False


def _postgresql_connectable(url: str) -> bool:
    """Check if we can connect to PostgreSQL."""
    if not _psycopg_available():
        return False
    try:
        conn = DatabaseConnection(url)
        result = conn.test_connection()
        conn.close()
        return result
    except Exception:
        return False


@pytest.fixture
def postgresql_url() -> str:
    """Get PostgreSQL URL from environment or use default."""
    url = os.environ.get("TEST_DATABASE_URL")
    if not url:
        url = "postgresql://localhost/rowmodel_test"

    if not _psycopg_available():
        pytest.skip("psycopg not installed")

    if not _postgresql_connectable(url):
        pytest.skip(f"Cannot connect to PostgreSQL at {url}")

    return url


@pytest.fixture
def connection() -> Generator[DatabaseConnection, None, None]:
    """SQLite in-memory connection with the test tables created."""
    conn = DatabaseConnection("sqlite:///:memory:")
    conn.prepare(PRODUCTS_DDL).execute()
    conn.prepare(NOTES_DDL).execute()
    yield conn
    conn.close()


@pytest.fixture
def make_product(connection: DatabaseConnection) -> Callable[[], Product]:
    """Factory for fresh Product instances on the test connection."""
    return lambda: Product(connection)


@pytest.fixture
def make_note(connection: DatabaseConnection) -> Callable[[], Note]:
    """Factory for fresh Note instances on the test connection."""
    return lambda: Note(connection)


@pytest.fixture
def seeded(make_product: Callable[[], Product]) -> list[Product]:
    """Three saved products: Pen 1.5, Notebook 4.0, Stapler 12.0."""
    saved = []
    for name, price, category in [
        ("Pen", 1.5, "writing"),
        ("Notebook", 4.0, "paper"),
        ("Stapler", 12.0, "office"),
    ]:
        product = make_product().set("name", name).set("price", price).set("category", category)
        assert product.save(), product.fail
        saved.append(product)
    return saved


@pytest.fixture
def sqlite_file_url(tmp_path) -> str:
    """URL of a file-backed SQLite database with the products table."""
    url = f"sqlite:///{tmp_path / 'rowmodel.db'}"
    conn = DatabaseConnection(url)
    conn.prepare(PRODUCTS_DDL).execute()
    conn.close()
    return url
