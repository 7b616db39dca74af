"""
Top-level API router.

Aggregates the book and customer routers under their resource
prefixes.
"""

from fastapi import APIRouter

from .endpoints import books, customers

router = APIRouter()

router.include_router(books.router, prefix="/books", tags=["books"])
router.include_router(customers.router, prefix="/customers", tags=["customers"])
