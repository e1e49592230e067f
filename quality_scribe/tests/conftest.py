"""
Shared pytest fixtures for the Quality Scribe test suite.
"""

import sqlite3
import pytest
from unittest.mock import MagicMock

from quality_scribe.core.interfaces import BaseLLMClient


@pytest.fixture
def sqlite_db(tmp_path) -> str:
    """
    Creates a temporary SQLite database with three tables and a view.

    `users` and `products` hold a few rows; `orders` references both.
    """
    db_path = tmp_path / "shop.db"
    conn = sqlite3.connect(db_path)
    conn.executescript(
        """
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT
        );
        CREATE TABLE products (
            id INTEGER PRIMARY KEY,
            title TEXT NOT NULL,
            price REAL DEFAULT 0
        );
        CREATE TABLE orders (
            id INTEGER PRIMARY KEY,
            user_id INTEGER REFERENCES users(id),
            product_id INTEGER REFERENCES products(id)
        );
        CREATE VIEW user_orders AS
            SELECT u.name, o.id AS order_id
            FROM users u JOIN orders o ON o.user_id = u.id;
        """
    )
    conn.executemany(
        "INSERT INTO users (id, name, email) VALUES (?, ?, ?)",
        [(i, f"user{i}", f"user{i}@example.com") for i in range(1, 8)],
    )
    conn.executemany(
        "INSERT INTO products (id, title, price) VALUES (?, ?, ?)",
        [(1, "book", 12.5), (2, "pen", 1.0)],
    )
    conn.execute("INSERT INTO orders (id, user_id, product_id) VALUES (1, 1, 2)")
    conn.commit()
    conn.close()
    return str(db_path)


@pytest.fixture
def mock_llm_client() -> MagicMock:
    """An LLM client whose completions echo a fixed test definition."""
    client = MagicMock(spec=BaseLLMClient)
    client.complete.return_value = "version: 2\nmodels: []"
    return client
