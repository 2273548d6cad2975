from app.database import Database
from app.validation import validate_payload
from schemas.schemas import BookCreate, UserCreate, ReviewCreate

# Sample users
users = [
    {"username": "alice", "email": "alice@example.com"},
    {"username": "bob", "email": "bob@example.com"},
]

# Sample books
books = [
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "description": "Wealth and longing on Long Island in the jazz age.",
     "isbn": "9780743273565", "publishedYear": 1925, "price": 10.99},
    {"title": "1984", "author": "George Orwell", "description": "A surveillance state and the man who doubts it.",
     "isbn": "9780451524935", "publishedYear": 1949, "price": 9.99},
    {"title": "Animal Farm", "author": "George Orwell", "description": "A fable of revolution gone sour on an English farm.",
     "isbn": "9780451526342", "publishedYear": 1945, "price": 7.5},
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "description": "A trial in a small Alabama town seen by a child.",
     "isbn": "9780061120084", "publishedYear": 1960, "price": 14.0},
]

# Sample reviews, by index into users and books
reviews = [
    {"user": 0, "book": 0, "text": "An amazing book! A must-read.", "rating": 5},
    {"user": 1, "book": 1, "text": "This book changed my perspective on society.", "rating": 5},
    {"user": 0, "book": 1, "text": "Bleak, but impossible to put down.", "rating": 4},
    {"user": 0, "book": 3, "text": "I found it quite dull and overrated.", "rating": 2},
]


def seed(db: Database) -> dict:
    """Load the sample records into ``db`` through the regular validation path."""
    user_objects = [db.users.create(validate_payload(UserCreate, user)) for user in users]
    book_objects = [db.books.create(validate_payload(BookCreate, book)) for book in books]

    review_objects = []
    for review in reviews:
        payload = {
            "bookId": book_objects[review["book"]].id,
            "userId": user_objects[review["user"]].id,
            "text": review["text"],
            "rating": review["rating"],
        }
        review_objects.append(db.reviews.create(validate_payload(ReviewCreate, payload)))

    return {"users": user_objects, "books": book_objects, "reviews": review_objects}
