"""
In-memory resource stores.

Each store exclusively owns its records (a dict kept in insertion order) and
an id counter that only ever grows, so ids are never reissued after a delete.
Every public operation runs under the store's lock; the ``Database`` hands
the same re-entrant lock to all of its stores so cross-store checks (a
review's book) happen in the same critical section as the write.
"""
import logging
import threading
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from app.errors import Conflict, NotFound, ValidationFailed
from models.models import Book, Review, User

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResourceStore:
    """Generic create/get/list/update/delete over one record type.

    Subclasses set ``record_type``, ``resource`` (used in messages) and
    ``unique_fields``: ``(attribute, conflict code, message)`` tuples whose
    values must not repeat among live records.
    """

    record_type = None
    resource = "Record"
    unique_fields = ()

    def __init__(self, lock=None):
        self._records = {}
        self._counter = 0
        self._lock = lock or threading.RLock()

    def __len__(self):
        return len(self._records)

    def __contains__(self, record_id):
        return record_id in self._records

    def _next_id(self) -> str:
        self._counter += 1
        return str(self._counter)

    def _check_unique(self, fields: dict, exclude_id: Optional[str] = None) -> None:
        for attribute, code, message in self.unique_fields:
            if attribute not in fields:
                continue
            value = fields[attribute]
            for record in self._records.values():
                if record.id != exclude_id and getattr(record, attribute) == value:
                    raise Conflict(message, code)

    def create(self, fields: dict):
        with self._lock:
            self._check_unique(fields)
            record = self.record_type(id=self._next_id(), created_at=utcnow(), **fields)
            self._records[record.id] = record
            logger.info("Created %s %s", self.resource.lower(), record.id)
            return replace(record)

    def _live(self, record_id: str):
        record = self._records.get(record_id)
        if record is None:
            raise NotFound(self.resource, record_id)
        return record

    def get(self, record_id: str):
        """Return a snapshot of the record; changing it does not touch the store."""
        with self._lock:
            return replace(self._live(record_id))

    def list(self) -> list:
        with self._lock:
            return [replace(record) for record in self._records.values()]

    def update(self, record_id: str, fields: dict):
        """Apply the fields present in ``fields`` and stamp ``updated_at``."""
        with self._lock:
            record = self._live(record_id)
            changed_unique = {
                attribute: fields[attribute]
                for attribute, _, _ in self.unique_fields
                if attribute in fields and fields[attribute] != getattr(record, attribute)
            }
            self._check_unique(changed_unique, exclude_id=record.id)

            for attribute, value in fields.items():
                setattr(record, attribute, value)
            record.updated_at = self._stamp_after(record.updated_at or record.created_at)
            logger.info("Updated %s %s (%s)", self.resource.lower(), record.id, ", ".join(sorted(fields)) or "no fields")
            return replace(record)

    def delete(self, record_id: str) -> None:
        with self._lock:
            self._live(record_id)
            del self._records[record_id]
            logger.info("Deleted %s %s", self.resource.lower(), record_id)

    @staticmethod
    def _stamp_after(previous: datetime) -> datetime:
        # Clock resolution can repeat a timestamp; updates must move forward.
        now = utcnow()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        return now


class BookStore(ResourceStore):
    record_type = Book
    resource = "Book"
    unique_fields = (("isbn", "DUPLICATE_ISBN", "A book with this ISBN already exists"),)

    def list(self, author: Optional[str] = None, min_price: Optional[float] = None,
             max_price: Optional[float] = None) -> List[Book]:
        """Live books in insertion order, narrowed by every filter given."""
        books = super().list()
        if author is not None:
            needle = author.lower()
            books = [book for book in books if needle in book.author.lower()]
        if min_price is not None:
            books = [book for book in books if book.price >= min_price]
        if max_price is not None:
            books = [book for book in books if book.price <= max_price]
        return books


class UserStore(ResourceStore):
    record_type = User
    resource = "User"
    unique_fields = (("email", "DUPLICATE_EMAIL", "A user with this email already exists"),)


class ReviewStore(ResourceStore):
    """Review records plus the book -> review ids link index.

    The index is updated in the same critical section as every review
    create, update and delete, so it only ever names live reviews whose
    ``book_id`` matches the key.
    """

    record_type = Review
    resource = "Review"

    def __init__(self, books: BookStore, lock=None):
        super().__init__(lock)
        self._books = books
        self._links: Dict[str, List[str]] = {}

    def _require_book(self, book_id: str) -> None:
        if book_id not in self._books:
            raise ValidationFailed([{"field": "bookId", "message": "Book not found"}])

    def create(self, fields: dict) -> Review:
        with self._lock:
            self._require_book(fields["book_id"])
            review = super().create(fields)
            self._links.setdefault(review.book_id, []).append(review.id)
            return review

    def update(self, record_id: str, fields: dict) -> Review:
        with self._lock:
            review = self._live(record_id)
            if "book_id" in fields:
                self._require_book(fields["book_id"])
            previous_book = review.book_id
            review = super().update(record_id, fields)
            if review.book_id != previous_book:
                self._unlink(previous_book, review.id)
                self._links.setdefault(review.book_id, []).append(review.id)
            return review

    def delete(self, record_id: str) -> None:
        with self._lock:
            review = self._live(record_id)
            super().delete(record_id)
            self._unlink(review.book_id, review.id)

    def _unlink(self, book_id: str, review_id: str) -> None:
        # The (possibly empty) entry is kept for the book.
        linked = self._links.get(book_id, [])
        if review_id in linked:
            linked.remove(review_id)

    def reviews_for_book(self, book_id: str) -> List[Review]:
        with self._lock:
            return [replace(self._records[review_id]) for review_id in self._links.get(book_id, [])]

    def delete_for_book(self, book_id: str) -> int:
        """Drop every review of a book along with its index entry."""
        with self._lock:
            review_ids = self._links.pop(book_id, [])
            for review_id in review_ids:
                del self._records[review_id]
            if review_ids:
                logger.info("Deleted %d review(s) of book %s", len(review_ids), book_id)
            return len(review_ids)

    def index_snapshot(self) -> Dict[str, List[str]]:
        with self._lock:
            return {book_id: list(review_ids) for book_id, review_ids in self._links.items()}
