"""
Request validation for books and customers.

Every function here is pure: it inspects the incoming request data,
raises ``ValidationError`` with the client-facing message on the first
violated rule, and otherwise returns a typed payload ready to be
persisted.  No function touches the store.

Required fields are checked for *truthiness*: an absent key, ``None``,
an empty string, ``0`` and ``False`` all count as missing.  This means a
legitimate quantity or price of zero is rejected.
"""

import re
from decimal import Context, Decimal, InvalidOperation
from typing import Any, Dict, Optional

from ..core.errors import MALFORMED_INPUT, ValidationError
from ..schemas.book import BookCreate
from ..schemas.customer import CustomerCreate

# Non-negative integer or decimal with at most two fractional digits.
PRICE_PATTERN = re.compile(r"\d+(\.\d{1,2})?", re.ASCII)

# Something, "@", something, ".", something.  Searched, not anchored.
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

US_STATES = frozenset(
    {
        "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
        "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
        "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
        "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
        "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    }
)

BOOK_FIELDS = ("ISBN", "title", "Author", "description", "genre", "price", "quantity")
CUSTOMER_FIELDS = ("userId", "name", "phone", "address", "city", "state", "zipcode")

BOOK_FIELDS_MANDATORY = "All fields in the request body are mandatory."
BOOK_PRICE_INVALID = "Price must be a valid number with 2 decimal places"
BOOK_QUANTITY_INVALID = "Quantity must be a whole number"

# Largest id a signed 64-bit integer column can hold.
MAX_CUSTOMER_ID = 2 ** 63 - 1


def _as_object(body: Any) -> Dict[str, Any]:
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError(MALFORMED_INPUT)
    return body


def _book_field(body: Dict[str, Any], name: str) -> Any:
    value = body.get(name)
    if value is None and name == "Author":
        value = body.get("author")
    return value


def _as_text(value: Any) -> str:
    if isinstance(value, (dict, list)):
        raise ValidationError(MALFORMED_INPUT)
    return str(value)


def is_valid_price(value: Any) -> bool:
    """Return ``True`` if ``value`` renders as ``^\\d+(\\.\\d{1,2})?$``.

    Both strings (``"19.99"``) and JSON numbers (``19.99``) are accepted;
    booleans are not.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return False
    return PRICE_PATTERN.fullmatch(str(value)) is not None


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.search(value) is not None


def is_valid_state(value: Any) -> bool:
    """Case-insensitive check against the 50 US state codes."""
    return isinstance(value, str) and value.upper() in US_STATES


def _quantity(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(BOOK_QUANTITY_INVALID)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(BOOK_QUANTITY_INVALID)


def _build_book(body: Dict[str, Any]) -> BookCreate:
    text = str(body["price"])
    # Enough precision for every digit the pattern lets through.
    price = Decimal(text).quantize(Decimal("0.01"), context=Context(prec=len(text) + 3))
    return BookCreate(
        ISBN=_as_text(body["ISBN"]),
        title=_as_text(body["title"]),
        author=_as_text(_book_field(body, "Author")),
        description=_as_text(body["description"]),
        genre=_as_text(body["genre"]),
        price=str(price),
        quantity=_quantity(body["quantity"]),
    )


def validate_book_create(body: Any) -> BookCreate:
    """Validate the body of ``POST /books``."""
    body = _as_object(body)
    if not all(_book_field(body, name) for name in BOOK_FIELDS):
        raise ValidationError(BOOK_FIELDS_MANDATORY)
    if not is_valid_price(body["price"]):
        raise ValidationError(BOOK_PRICE_INVALID + ".")
    return _build_book(body)


def validate_book_update(isbn: Optional[str], body: Any) -> BookCreate:
    """Validate ``PUT /books/{ISBN}``.

    Fields are checked one at a time so the message names the first
    missing one.  The body's own ``ISBN`` is required as well as the
    path ISBN.
    """
    body = _as_object(body)
    for name in BOOK_FIELDS:
        if not _book_field(body, name):
            raise ValidationError(f"Missing required field: {name}")
    if not isbn or not body:
        raise ValidationError(MALFORMED_INPUT)
    if not is_valid_price(body["price"]):
        raise ValidationError(BOOK_PRICE_INVALID)
    return _build_book(body)


def validate_customer_create(body: Any) -> CustomerCreate:
    """Validate the body of ``POST /customers``.

    The state is compared upper-cased but returned in the casing the
    client sent.
    """
    body = _as_object(body)
    if not all(body.get(name) for name in CUSTOMER_FIELDS):
        raise ValidationError(MALFORMED_INPUT)
    if not is_valid_email(body["userId"]):
        raise ValidationError(MALFORMED_INPUT)
    if not is_valid_state(body["state"]):
        raise ValidationError(MALFORMED_INPUT)
    address2 = body.get("address2")
    return CustomerCreate(
        userId=body["userId"],
        name=_as_text(body["name"]),
        phone=_as_text(body["phone"]),
        address=_as_text(body["address"]),
        address2=_as_text(address2) if address2 is not None else None,
        city=_as_text(body["city"]),
        state=body["state"],
        zipcode=_as_text(body["zipcode"]),
    )


def validate_customer_id(raw: Optional[str]) -> int:
    """Parse the ``id`` path parameter.

    Any value numerically equal to an integer passes, so ``"3"`` and
    ``"3.0"`` both yield ``3``.  Ids outside the signed 64-bit range
    are rejected before conversion.
    """
    if not raw:
        raise ValidationError(MALFORMED_INPUT)
    try:
        number = Decimal(raw.strip())
    except InvalidOperation:
        raise ValidationError(MALFORMED_INPUT) from None
    if not number.is_finite() or not -MAX_CUSTOMER_ID <= number <= MAX_CUSTOMER_ID:
        raise ValidationError(MALFORMED_INPUT)
    if number != number.to_integral_value():
        raise ValidationError(MALFORMED_INPUT)
    return int(number)


def validate_user_id_query(raw: Optional[str]) -> str:
    """Validate the ``userId`` query parameter of ``GET /customers``."""
    if not raw or not is_valid_email(raw):
        raise ValidationError(MALFORMED_INPUT)
    return raw
