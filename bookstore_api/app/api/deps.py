"""
FastAPI dependencies that hand services to the endpoints.

Services are attached to ``app.state`` by ``create_app`` (or by the
startup hook once the store connection is open), so each request picks
up whatever store the application was built with.
"""

from fastapi import Request

from ..services.book_service import BookService
from ..services.customer_service import CustomerService


def get_book_service(request: Request) -> BookService:
    return request.app.state.book_service


def get_customer_service(request: Request) -> CustomerService:
    return request.app.state.customer_service
