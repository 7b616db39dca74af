"""
Customer endpoints.

Customers can be created and looked up, either by their numeric id or
by ``userId`` passed as a query parameter.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse

from ...core.errors import ConflictError, NotFoundError, store_errors
from ...schemas.customer import CustomerRead
from ...services.customer_service import CustomerService
from ...services.validation import (
    validate_customer_create,
    validate_customer_id,
    validate_user_id_query,
)
from ..deps import get_customer_service

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_customer(
    body: Optional[Dict[str, Any]] = Body(None),
    customers: CustomerService = Depends(get_customer_service),
) -> JSONResponse:
    """Add a customer.

    Returns 422 if the ``userId`` is taken.  The response echoes the
    submitted customer with the ``id`` assigned by the store.
    """
    customer = validate_customer_create(body)
    with store_errors(f"querying customer {customer.userId}"):
        existing = await customers.find_by_user_id(customer.userId)
    if existing is not None:
        raise ConflictError("This user ID already exists in the system.")
    with store_errors(f"inserting customer {customer.userId}"):
        customer_id = await customers.insert(customer)
    content = dict(body)
    content["id"] = customer_id
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=content,
        headers={"Location": f"/customers/{customer_id}"},
    )


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(
    customer_id: str,
    customers: CustomerService = Depends(get_customer_service),
) -> CustomerRead:
    """Retrieve a customer by numeric id."""
    parsed_id = validate_customer_id(customer_id)
    with store_errors(f"querying customer id {parsed_id}"):
        customer = await customers.find_by_id(parsed_id)
    if customer is None:
        raise NotFoundError("ID does not exist in the system")
    return customer


@router.get("", response_model=CustomerRead)
async def get_customer_by_user_id(
    userId: Optional[str] = Query(None),
    customers: CustomerService = Depends(get_customer_service),
) -> CustomerRead:
    """Retrieve a customer by ``userId`` (``GET /customers?userId=...``)."""
    user_id = validate_user_id_query(userId)
    with store_errors(f"querying customer {user_id}"):
        customer = await customers.find_by_user_id(user_id)
    if customer is None:
        raise NotFoundError("User-ID does not exist in the system")
    return customer
