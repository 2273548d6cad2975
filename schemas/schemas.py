from pydantic import AfterValidator, BaseModel, BeforeValidator, Field
from pydantic.alias_generators import to_camel
from email_validator import validate_email, EmailNotValidError
from typing import Annotated, Optional
from datetime import datetime

ISBN_PATTERN = r"^[0-9-]{10,13}$"


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


def check_email(value: str) -> str:
    # Syntax check only; the address is stored exactly as received.
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(str(exc))
    return value

EmailAddress = Annotated[str, AfterValidator(check_email)]


def reject_bool(value):
    # bool is an int subclass; lax int/float parsing would turn true into 1.
    if isinstance(value, bool):
        raise ValueError("Input should be a number, not a boolean")
    return value

Integer = Annotated[int, BeforeValidator(reject_bool)]
Number = Annotated[float, BeforeValidator(reject_bool)]

# ------------------- BOOK SCHEMAS -------------------

class BookCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    author: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=10, max_length=2000)
    isbn: str = Field(..., pattern=ISBN_PATTERN)
    published_year: Integer = Field(..., ge=1800, le=2024)
    price: Number = Field(..., ge=0, allow_inf_nan=False)

class BookUpdate(CamelModel):
    # Absent fields stay unset; an explicit null fails the type check.
    title: str = Field(None, min_length=1, max_length=200)
    author: str = Field(None, min_length=1, max_length=100)
    description: str = Field(None, min_length=10, max_length=2000)
    isbn: str = Field(None, pattern=ISBN_PATTERN)
    published_year: Integer = Field(None, ge=1800, le=2024)
    price: Number = Field(None, ge=0, allow_inf_nan=False)

class BookFilter(CamelModel):
    author: str = None
    min_price: Number = Field(None, ge=0, allow_inf_nan=False)
    max_price: Number = Field(None, ge=0, allow_inf_nan=False)

class BookResponse(CamelModel):
    id: str
    title: str
    author: str
    description: str
    isbn: str
    published_year: int
    price: float
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# ------------------- USER SCHEMAS -------------------

class UserCreate(CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailAddress

class UserUpdate(CamelModel):
    username: str = Field(None, min_length=3, max_length=50)
    email: EmailAddress = None

class UserResponse(CamelModel):
    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# ------------------- REVIEW SCHEMAS -------------------

class ReviewCreate(CamelModel):
    book_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=10, max_length=1000)
    rating: Integer = Field(..., ge=1, le=5)

class ReviewUpdate(CamelModel):
    book_id: str = Field(None, min_length=1)
    user_id: str = Field(None, min_length=1)
    text: str = Field(None, min_length=10, max_length=1000)
    rating: Integer = Field(None, ge=1, le=5)

class ReviewResponse(CamelModel):
    id: str
    book_id: str
    user_id: str
    text: str
    rating: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
