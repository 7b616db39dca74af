"""
Persistence for customers.

``CustomerService`` looks customers up by their store-assigned ``id`` or
by ``userId`` and inserts new rows, returning the generated id.  There
is no update or delete.
"""

import logging
from typing import Any, Dict, Optional

from ..core.db import Database
from ..schemas.customer import CustomerCreate, CustomerRead

logger = logging.getLogger(__name__)


class CustomerService:
    """Service class for the ``customers`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def find_by_id(self, customer_id: int) -> Optional[CustomerRead]:
        row = self.db.fetch_one("SELECT * FROM customers WHERE id = ?", (customer_id,))
        return self._row_to_customer_read(row) if row else None

    async def find_by_user_id(self, user_id: str) -> Optional[CustomerRead]:
        row = self.db.fetch_one("SELECT * FROM customers WHERE userId = ?", (user_id,))
        return self._row_to_customer_read(row) if row else None

    async def insert(self, customer: CustomerCreate) -> int:
        """Insert a customer and return the id assigned by the store."""
        customer_id, _ = self.db.execute(
            """
            INSERT INTO customers (userId, name, phone, address, address2, city, state, zipcode)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                customer.userId,
                customer.name,
                customer.phone,
                customer.address,
                customer.address2,
                customer.city,
                customer.state,
                customer.zipcode,
            ),
        )
        logger.info("Created customer %s (%s)", customer_id, customer.userId)
        return customer_id

    @staticmethod
    def _row_to_customer_read(row: Dict[str, Any]) -> CustomerRead:
        return CustomerRead(
            id=row["id"],
            userId=row["userId"],
            name=row["name"],
            phone=row["phone"],
            address=row["address"],
            address2=row["address2"],
            city=row["city"],
            state=row["state"],
            zipcode=row["zipcode"],
        )
