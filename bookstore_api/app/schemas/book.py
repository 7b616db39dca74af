"""
Pydantic models for book data.

A book is identified by its ``ISBN``.  On the wire the author field is
spelled ``Author`` (matching the table column); ``author`` is accepted
as an input alias.  ``BookCreate`` is built by the validation layer
after the request body has passed all checks, so its ``price`` is the
already-validated decimal text.  ``BookRead`` is what GET returns, with
``price`` converted to a number.
"""

from pydantic import BaseModel, Field


class BookBase(BaseModel):
    ISBN: str = Field(..., examples=["978-0321815736"])
    title: str = Field(..., examples=["Software Architecture in Practice"])
    author: str = Field(..., alias="Author", examples=["Bass, L."])
    description: str = Field(..., examples=["seminal book on software architecture"])
    genre: str = Field(..., examples=["non-fiction"])
    quantity: int = Field(..., examples=[106])

    model_config = {
        "populate_by_name": True,
    }


class BookCreate(BookBase):
    """Validated book payload for create and full-replace update."""

    price: str = Field(..., examples=["59.95"])


class BookRead(BookBase):
    """Schema for reading a book from the API."""

    price: float = Field(..., examples=[59.95])
