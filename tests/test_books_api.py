import logging

import pytest

from conftest import BOOK


def test_create_book(client):
    response = client.post("/books", json=BOOK)
    assert response.status_code == 201
    assert response.headers["location"] == f"/books/{BOOK['ISBN']}"
    assert response.json() == BOOK


def test_create_duplicate_isbn_keeps_existing_row(client):
    assert client.post("/books", json=BOOK).status_code == 201

    response = client.post("/books", json=dict(BOOK, title="Another Title"))
    assert response.status_code == 422
    assert response.json() == {"message": "This ISBN already exists in the system."}

    stored = client.get(f"/books/{BOOK['ISBN']}").json()
    assert stored["title"] == BOOK["title"]


@pytest.mark.parametrize("field", ["ISBN", "title", "Author", "description", "genre", "price", "quantity"])
def test_create_book_missing_field_inserts_nothing(client, field):
    body = dict(BOOK)
    del body[field]
    response = client.post("/books", json=body)
    assert response.status_code == 400
    assert response.json() == {"message": "All fields in the request body are mandatory."}
    assert client.get(f"/books/{BOOK['ISBN']}").status_code == 404


@pytest.mark.parametrize(
    "price, expected_status",
    [("19.99", 201), ("19", 201), ("19.999", 400), ("-5.00", 400), ("abc", 400)],
)
def test_create_book_price_format(client, price, expected_status):
    response = client.post("/books", json=dict(BOOK, price=price))
    assert response.status_code == expected_status
    if expected_status == 400:
        assert response.json() == {"message": "Price must be a valid number with 2 decimal places."}


def test_create_book_with_numeric_price(client):
    response = client.post("/books", json=dict(BOOK, price=24.5))
    assert response.status_code == 201
    assert client.get(f"/books/{BOOK['ISBN']}").json()["price"] == 24.5


def test_create_book_with_very_long_price(client):
    response = client.post("/books", json=dict(BOOK, price="1" * 27))
    assert response.status_code == 201


def test_create_book_zero_quantity_is_rejected(client):
    response = client.post("/books", json=dict(BOOK, quantity=0))
    assert response.status_code == 400


def test_create_book_non_integer_quantity(client):
    response = client.post("/books", json=dict(BOOK, quantity="many"))
    assert response.status_code == 400
    assert client.get(f"/books/{BOOK['ISBN']}").status_code == 404


def test_create_book_malformed_json(client):
    response = client.post("/books", content="{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"message": "Illegal, missing, or malformed input"}


def test_create_book_without_body(client):
    response = client.post("/books")
    assert response.status_code == 400
    assert response.json() == {"message": "All fields in the request body are mandatory."}


@pytest.mark.parametrize("path", ["/books/{}", "/books/isbn/{}"])
def test_get_missing_book(client, path):
    response = client.get(path.format("0000000000"))
    assert response.status_code == 404
    assert response.json() == {"message": "ISBN not found"}


@pytest.mark.parametrize("path", ["/books/{}", "/books/isbn/{}"])
def test_price_round_trip(client, path):
    client.post("/books", json=dict(BOOK, price="12.50"))
    response = client.get(path.format(BOOK["ISBN"]))
    assert response.status_code == 200
    body = response.json()
    assert body["price"] == 12.5
    assert isinstance(body["price"], float)
    assert body["Author"] == BOOK["Author"]
    assert body["quantity"] == BOOK["quantity"]


def test_update_book(client):
    client.post("/books", json=BOOK)
    changed = dict(BOOK, title="Software Architecture in Practice, 4th ed.", price="64.99", quantity=12)

    response = client.put(f"/books/{BOOK['ISBN']}", json=changed)
    assert response.status_code == 200
    assert response.json() == changed

    stored = client.get(f"/books/{BOOK['ISBN']}").json()
    assert stored["title"] == changed["title"]
    assert stored["price"] == 64.99
    assert stored["quantity"] == 12


def test_update_missing_book_performs_no_write(client):
    response = client.put(f"/books/{BOOK['ISBN']}", json=BOOK)
    assert response.status_code == 404
    assert response.json() == {"message": "ISBN not found"}
    assert client.get(f"/books/{BOOK['ISBN']}").status_code == 404


def test_update_book_missing_field(client):
    client.post("/books", json=BOOK)
    body = dict(BOOK)
    del body["description"]
    response = client.put(f"/books/{BOOK['ISBN']}", json=body)
    assert response.status_code == 400
    assert response.json() == {"message": "Missing required field: description"}


def test_update_book_bad_price(client):
    client.post("/books", json=BOOK)
    response = client.put(f"/books/{BOOK['ISBN']}", json=dict(BOOK, price="1.234"))
    assert response.status_code == 400
    assert response.json() == {"message": "Price must be a valid number with 2 decimal places"}
    assert client.get(f"/books/{BOOK['ISBN']}").json()["price"] == 59.95


def test_store_failure_returns_generic_error(broken_client, caplog):
    with caplog.at_level(logging.ERROR):
        response = broken_client.post("/books", json=BOOK)
    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error"}
    assert "database is locked" not in response.text
    assert "database is locked" in caplog.text


def test_store_failure_on_get(broken_client):
    response = broken_client.get(f"/books/isbn/{BOOK['ISBN']}")
    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error"}


def test_validation_runs_before_store(broken_client):
    response = broken_client.post("/books", json=dict(BOOK, price="abc"))
    assert response.status_code == 400
