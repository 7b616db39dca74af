import dataclasses
import sqlite3

import pytest
from fastapi.testclient import TestClient

from bookstore_api.app.core.config import settings
from bookstore_api.app.core.db import Database, SQLiteDatabase, reset_schema
from bookstore_api.app.main import create_app


BOOK = {
    "ISBN": "978-0321815736",
    "title": "Software Architecture in Practice",
    "Author": "Bass, L.",
    "description": "seminal book on software architecture",
    "genre": "non-fiction",
    "price": "59.95",
    "quantity": 106,
}

CUSTOMER = {
    "userId": "starlord2002@gmail.com",
    "name": "Star Lord",
    "phone": "+14122144122",
    "address": "48 Galaxy Rd",
    "address2": "suite 4",
    "city": "Fargo",
    "state": "ND",
    "zipcode": "58102",
}


class BrokenDatabase(Database):
    """Store client whose every call fails like a lost connection."""

    dialect = "sqlite"

    def fetch_one(self, query, params=()):
        raise sqlite3.OperationalError("database is locked")

    def execute(self, query, params=()):
        raise sqlite3.OperationalError("database is locked")

    def execute_script(self, statements):
        raise sqlite3.OperationalError("database is locked")

    def close(self):
        pass


@pytest.fixture
def test_settings():
    return dataclasses.replace(settings, reset_schema_on_startup=False)


@pytest.fixture
def db(tmp_path):
    # Each test gets its own database file with fresh tables
    database = SQLiteDatabase(str(tmp_path / "bookstore_test.db"))
    reset_schema(database)
    yield database
    database.close()


@pytest.fixture
def client(db, test_settings):
    app = create_app(settings=test_settings, database=db)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def broken_client(test_settings):
    app = create_app(settings=test_settings, database=BrokenDatabase())
    with TestClient(app) as test_client:
        yield test_client
