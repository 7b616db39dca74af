"""
Persistence for books.

``BookService`` wraps a ``Database`` handed to it at construction time
and exposes the three store operations the book handlers need: lookup
by ISBN, insert and full-replace update.  All queries use parameterized
statements.

Prices are written as two-decimal text (``"12.50"``) into a
``DECIMAL(10, 2)`` column and converted to ``float`` when read back.
"""

import logging
from typing import Any, Dict, Optional

from ..core.db import Database
from ..schemas.book import BookCreate, BookRead

logger = logging.getLogger(__name__)


class BookService:
    """Service class for the ``books`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def find_by_isbn(self, isbn: str) -> Optional[BookRead]:
        """Return the stored book or ``None``."""
        row = self.db.fetch_one("SELECT * FROM books WHERE ISBN = ?", (isbn,))
        if row is None:
            return None
        return self._row_to_book_read(row)

    async def insert(self, book: BookCreate) -> None:
        self.db.execute(
            """
            INSERT INTO books (ISBN, title, Author, description, genre, price, quantity)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (book.ISBN, book.title, book.author, book.description, book.genre, book.price, book.quantity),
        )
        logger.info("Created book %s", book.ISBN)

    async def update(self, isbn: str, book: BookCreate) -> int:
        """Replace every column of the row keyed by ``isbn``.

        The row's ISBN is set to ``book.ISBN``, which may differ from
        ``isbn``.  Returns the number of affected rows.
        """
        _, rowcount = self.db.execute(
            """
            UPDATE books
            SET ISBN = ?, title = ?, Author = ?, description = ?, genre = ?, price = ?, quantity = ?
            WHERE ISBN = ?
            """,
            (book.ISBN, book.title, book.author, book.description, book.genre, book.price, book.quantity, isbn),
        )
        logger.info("Updated book %s (%s row(s))", isbn, rowcount)
        return rowcount

    @staticmethod
    def _row_to_book_read(row: Dict[str, Any]) -> BookRead:
        """Convert a database row to a BookRead schema instance."""
        return BookRead(
            ISBN=row["ISBN"],
            title=row["title"],
            author=row["Author"],
            description=row["description"],
            genre=row["genre"],
            # SQLite hands back a float, MySQL a Decimal
            price=float(row["price"]),
            quantity=row["quantity"],
        )
