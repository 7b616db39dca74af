"""
Pydantic models for customer data.

Customers carry a store-assigned numeric ``id`` and a unique ``userId``
which must look like an email address.  ``address2`` is the only
optional field.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CustomerBase(BaseModel):
    userId: str = Field(..., examples=["starlord2002@gmail.com"])
    name: str = Field(..., examples=["Star Lord"])
    phone: str = Field(..., description="Up to 15 characters", examples=["+14122144122"])
    address: str = Field(..., examples=["48 Galaxy Rd"])
    address2: Optional[str] = Field(None, examples=["suite 4"])
    city: str = Field(..., examples=["Fargo"])
    state: str = Field(..., examples=["ND"])
    zipcode: str = Field(..., description="Up to 10 characters", examples=["58102"])


class CustomerCreate(CustomerBase):
    """Validated customer payload."""


class CustomerRead(CustomerBase):
    """Schema for reading a customer from the API."""

    id: int

    model_config = {
        "from_attributes": True,
    }
