from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Book:
    id: str
    title: str
    author: str
    description: str
    isbn: str
    published_year: int
    price: float
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass
class User:
    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass
class Review:
    id: str
    book_id: str  # key into the book store and the review link index
    user_id: str
    text: str
    rating: int
    created_at: datetime
    updated_at: Optional[datetime] = None
