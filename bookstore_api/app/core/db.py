"""
Store clients and the schema initializer.

The application talks to its relational store through a ``Database``
object that wraps a single connection opened once at startup.  Two
backends are provided: ``SQLiteDatabase`` (embedded, the default) and
``MySQLDatabase``.  Queries are written with ``?`` placeholders and are
always executed with bound parameters; values are never formatted into
SQL text.

``reset_schema`` drops and recreates the ``books`` and ``customers``
tables.  It is destructive and is only run when explicitly requested,
either at startup (``RESET_SCHEMA_ON_STARTUP``) or via ``reset_db.py``.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

import mysql.connector

from .config import Settings

logger = logging.getLogger(__name__)


BOOKS_TABLE = """
        CREATE TABLE IF NOT EXISTS books (
            ISBN VARCHAR(255) PRIMARY KEY,
            title VARCHAR(255),
            Author VARCHAR(255),
            description TEXT,
            genre VARCHAR(255),
            price DECIMAL(10, 2),
            quantity INT
        )
    """

# SQLite ignores VARCHAR widths, so the customer field limits are CHECKs there.
CUSTOMERS_TABLE = {
    "sqlite": """
        CREATE TABLE IF NOT EXISTS customers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            userId VARCHAR(255) UNIQUE,
            name VARCHAR(255),
            phone VARCHAR(15) CHECK (length(phone) <= 15),
            address TEXT,
            address2 TEXT,
            city VARCHAR(255),
            state VARCHAR(255),
            zipcode VARCHAR(10) CHECK (length(zipcode) <= 10)
        )
    """,
    "mysql": """
        CREATE TABLE IF NOT EXISTS customers (
            id INT AUTO_INCREMENT PRIMARY KEY,
            userId VARCHAR(255) UNIQUE,
            name VARCHAR(255),
            phone VARCHAR(15),
            address TEXT,
            address2 TEXT,
            city VARCHAR(255),
            state VARCHAR(255),
            zipcode VARCHAR(10)
        )
    """,
}


class Database:
    """Minimal store client interface used by the service layer."""

    dialect: str = ""

    def fetch_one(self, query: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        """Run a SELECT and return the first row as a dict, or ``None``."""
        raise NotImplementedError

    def execute(self, query: str, params: Sequence[Any] = ()) -> Tuple[Optional[int], int]:
        """Run a mutating statement and commit.

        Returns ``(lastrowid, rowcount)``.
        """
        raise NotImplementedError

    def execute_script(self, statements: Iterable[str]) -> None:
        """Run several parameterless statements in order and commit."""
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class SQLiteDatabase(Database):
    """Store client backed by a single ``sqlite3`` connection."""

    dialect = "sqlite"

    def __init__(self, path: str) -> None:
        self.path = path
        # Handlers run on the event loop while the connection may have been
        # opened on another thread (startup, TestClient portal).
        self.conn = sqlite3.connect(path, check_same_thread=False)
        # Return rows as dict-like objects keyed by column name
        self.conn.row_factory = sqlite3.Row

    def fetch_one(self, query: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        row = self.conn.execute(query, tuple(params)).fetchone()
        return dict(row) if row is not None else None

    def execute(self, query: str, params: Sequence[Any] = ()) -> Tuple[Optional[int], int]:
        try:
            cursor = self.conn.execute(query, tuple(params))
            self.conn.commit()
        except sqlite3.Error:
            self.conn.rollback()
            raise
        return cursor.lastrowid, cursor.rowcount

    def execute_script(self, statements: Iterable[str]) -> None:
        try:
            for statement in statements:
                self.conn.execute(statement)
            self.conn.commit()
        except sqlite3.Error:
            self.conn.rollback()
            raise

    def close(self) -> None:
        self.conn.close()


class MySQLDatabase(Database):
    """Store client backed by a single ``mysql-connector`` connection."""

    dialect = "mysql"

    def __init__(self, host: str, user: str, password: str, database: str) -> None:
        self.conn = mysql.connector.connect(
            host=host,
            user=user,
            password=password,
            database=database,
        )

    @staticmethod
    def _sql(query: str) -> str:
        # mysql-connector uses the ``format`` paramstyle.
        return query.replace("?", "%s")

    def fetch_one(self, query: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        cursor = self.conn.cursor(dictionary=True)
        try:
            cursor.execute(self._sql(query), tuple(params))
            # Consume the whole result set; the connector refuses to run the
            # next statement while rows are left unread.
            rows = cursor.fetchall()
            return rows[0] if rows else None
        finally:
            cursor.close()

    def execute(self, query: str, params: Sequence[Any] = ()) -> Tuple[Optional[int], int]:
        cursor = self.conn.cursor()
        try:
            cursor.execute(self._sql(query), tuple(params))
            self.conn.commit()
            return cursor.lastrowid, cursor.rowcount
        except mysql.connector.Error:
            self.conn.rollback()
            raise
        finally:
            cursor.close()

    def execute_script(self, statements: Iterable[str]) -> None:
        cursor = self.conn.cursor()
        try:
            for statement in statements:
                cursor.execute(statement)
            self.conn.commit()
        except mysql.connector.Error:
            self.conn.rollback()
            raise
        finally:
            cursor.close()

    def close(self) -> None:
        self.conn.close()


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths and ``:memory:`` are used as is.  Relative paths are
    resolved against the project root.
    """
    if database_url == ":memory:" or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # bookstore_api/
    return str((base_dir / database_url).resolve())


def open_database(settings: Settings) -> Database:
    """Open the store client selected by ``settings.db_backend``."""
    if settings.db_backend == "mysql":
        logger.info("Connecting to MySQL at %s (database %s)", settings.mysql_host, settings.mysql_database)
        db: Database = MySQLDatabase(
            host=settings.mysql_host,
            user=settings.mysql_user,
            password=settings.mysql_password,
            database=settings.mysql_database,
        )
    elif settings.db_backend == "sqlite":
        path = get_database_path(settings.database_url)
        logger.info("Opening SQLite database %s", path)
        db = SQLiteDatabase(path)
    else:
        raise ValueError(f"Unsupported DB_BACKEND: {settings.db_backend!r}")
    logger.info("Connected to database")
    return db


def reset_schema(db: Database) -> None:
    """Drop and recreate the ``books`` and ``customers`` tables.

    All existing rows are lost.
    """
    db.execute_script(
        [
            "DROP TABLE IF EXISTS books",
            "DROP TABLE IF EXISTS customers",
            BOOKS_TABLE,
            CUSTOMERS_TABLE[db.dialect],
        ]
    )
    logger.info("Books and customers tables recreated")
