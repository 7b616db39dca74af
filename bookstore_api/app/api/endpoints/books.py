"""
Book endpoints.

Each handler validates the request, checks the ISBN against the store,
then writes or reads.  Create and update echo the submitted body back
to the client; GET returns the stored row with ``price`` as a number.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from ...core.errors import ConflictError, NotFoundError, store_errors
from ...schemas.book import BookRead
from ...services.book_service import BookService
from ...services.validation import validate_book_create, validate_book_update
from ..deps import get_book_service

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_book(
    body: Optional[Dict[str, Any]] = Body(None),
    books: BookService = Depends(get_book_service),
) -> JSONResponse:
    """Add a book.

    Returns 422 if the ISBN is already stored.  On success the response
    carries a ``Location`` header for the new book.
    """
    book = validate_book_create(body)
    with store_errors(f"querying book {book.ISBN}"):
        existing = await books.find_by_isbn(book.ISBN)
    if existing is not None:
        raise ConflictError("This ISBN already exists in the system.")
    with store_errors(f"inserting book {book.ISBN}"):
        await books.insert(book)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=body,
        headers={"Location": f"/books/{quote(book.ISBN)}"},
    )


@router.put("/{isbn}")
async def update_book(
    isbn: str,
    body: Optional[Dict[str, Any]] = Body(None),
    books: BookService = Depends(get_book_service),
) -> JSONResponse:
    """Replace every field of an existing book."""
    book = validate_book_update(isbn, body)
    with store_errors(f"querying book {isbn}"):
        existing = await books.find_by_isbn(isbn)
    if existing is None:
        raise NotFoundError("ISBN not found")
    with store_errors(f"updating book {isbn}"):
        await books.update(isbn, book)
    return JSONResponse(status_code=status.HTTP_200_OK, content=body)


@router.get("/isbn/{isbn}", response_model=BookRead)
@router.get("/{isbn}", response_model=BookRead)
async def get_book(
    isbn: str,
    books: BookService = Depends(get_book_service),
) -> BookRead:
    """Retrieve a book by ISBN.  Served under both route shapes."""
    with store_errors(f"querying book {isbn}"):
        book = await books.find_by_isbn(isbn)
    if book is None:
        raise NotFoundError("ISBN not found")
    return book
