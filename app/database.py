"""
In-memory database.

One ``Database`` is built per application and kept on ``app.state``; route
handlers receive it through the ``get_db`` dependency. It owns the three
stores and the lock they share.
"""
import threading

from fastapi import Request

from app.store import BookStore, ReviewStore, UserStore


class Database:
    def __init__(self):
        self.lock = threading.RLock()
        self.books = BookStore(self.lock)
        self.users = UserStore(self.lock)
        self.reviews = ReviewStore(self.books, self.lock)

    def delete_book(self, book_id: str) -> None:
        """Delete a book and the reviews that reference it."""
        with self.lock:
            self.books.delete(book_id)
            self.reviews.delete_for_book(book_id)


def get_db(request: Request) -> Database:
    return request.app.state.db
