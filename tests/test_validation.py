import pytest

from app.errors import ValidationFailed
from app.validation import collect_violations, validate_payload
from schemas.schemas import BookCreate, BookFilter, BookUpdate, ReviewCreate, UserCreate, UserUpdate


def violations(schema, payload):
    with pytest.raises(ValidationFailed) as exc:
        validate_payload(schema, payload)
    return exc.value.details


def test_book_payload_is_normalized():
    fields = validate_payload(BookCreate, {
        "title": "  Dune  ",
        "author": "Frank Herbert",
        "description": "A desert planet saga of politics and prophecy.",
        "isbn": "0-441-01359-7",
        "publishedYear": "1965",
        "price": "12.99",
        "genre": "science fiction",
    })
    assert fields == {
        "title": "Dune",
        "author": "Frank Herbert",
        "description": "A desert planet saga of politics and prophecy.",
        "isbn": "0-441-01359-7",
        "published_year": 1965,
        "price": 12.99,
    }
    assert isinstance(fields["published_year"], int)
    assert isinstance(fields["price"], float)


def test_partial_update_keeps_only_present_fields():
    assert validate_payload(BookUpdate, {"price": 3}) == {"price": 3.0}
    assert validate_payload(BookUpdate, {}) == {}


def test_partial_update_applies_the_same_bounds():
    assert violations(BookUpdate, {"title": "", "price": -0.01}) == [
        {"field": "title", "message": "Title must be between 1 and 200 characters"},
        {"field": "price", "message": "Price must be a non-negative number"},
    ]


def test_null_is_not_absent():
    assert [v["field"] for v in violations(UserUpdate, {"username": None})] == ["username"]


def test_missing_fields_are_reported_by_wire_name():
    details = violations(ReviewCreate, {"text": "Long enough to count."})
    assert details == [
        {"field": "bookId", "message": "bookId is required"},
        {"field": "userId", "message": "userId is required"},
        {"field": "rating", "message": "rating is required"},
    ]


@pytest.mark.parametrize("isbn", ["123456789", "12345678901234", "978044101359X", "978 0441013593"])
def test_isbn_pattern(isbn):
    book = {
        "title": "Dune",
        "author": "Frank Herbert",
        "description": "A desert planet saga of politics and prophecy.",
        "isbn": isbn,
        "publishedYear": 1965,
        "price": 12.99,
    }
    assert violations(BookCreate, book) == [
        {"field": "isbn", "message": "ISBN must be 10-13 digits with optional hyphens"}
    ]


@pytest.mark.parametrize("rating", [0, 6, 4.5, "five"])
def test_rating_must_be_an_integer_in_range(rating):
    review = {"bookId": "1", "userId": "1", "text": "Long enough to count.", "rating": rating}
    assert [v["field"] for v in violations(ReviewCreate, review)] == ["rating"]


@pytest.mark.parametrize("schema, payload, field", [
    (BookUpdate, {"price": True}, "price"),
    (BookUpdate, {"publishedYear": False}, "publishedYear"),
    (BookFilter, {"minPrice": True}, "minPrice"),
    (ReviewCreate, {"bookId": "1", "userId": "1", "text": "Long enough to count.", "rating": True}, "rating"),
])
def test_booleans_are_not_numbers(schema, payload, field):
    assert [v["field"] for v in violations(schema, payload)] == [field]


def test_numeric_strings_still_accepted():
    assert validate_payload(BookUpdate, {"price": "0", "publishedYear": "2000"}) == {"price": 0.0, "published_year": 2000}


def test_non_finite_price_rejected():
    assert [v["field"] for v in violations(BookUpdate, {"price": "inf"})] == ["price"]


def test_email_is_kept_as_received():
    fields = validate_payload(UserCreate, {"username": "alice", "email": " Alice@Example.COM "})
    assert fields["email"] == "Alice@Example.COM"


def test_one_violation_per_field():
    details = violations(UserCreate, {"username": 12, "email": "nope"})
    assert [v["field"] for v in details] == ["username", "email"]


def test_filter_values():
    assert validate_payload(BookFilter, {"author": "orwell", "minPrice": "5"}) == {"author": "orwell", "min_price": 5.0}
    assert [v["field"] for v in violations(BookFilter, {"maxPrice": "-3"})] == ["maxPrice"]


def test_payload_must_be_an_object():
    assert violations(UserCreate, ["alice"])[0]["field"] == "body"


def test_request_errors_are_mapped_to_fields():
    errors = [
        {"type": "json_invalid", "loc": ("body", 1), "msg": "JSON decode error"},
        {"type": "dict_type", "loc": ("body",), "msg": "Input should be a valid dictionary"},
        {"type": "float_parsing", "loc": ("query", "minPrice"), "msg": "Input should be a valid number"},
    ]
    assert collect_violations(None, errors) == [
        {"field": "body", "message": "JSON decode error"},
        {"field": "minPrice", "message": "Input should be a valid number"},
    ]
