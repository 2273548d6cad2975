"""
Book routes

Create, list (with author and price filters), fetch, update and delete books.
Payloads go through the validation engine before any store operation; store
errors (not found, duplicate ISBN) propagate to the error responder.
"""
from fastapi import APIRouter, Body, Depends, Request, Response, status
from typing import List
from app.database import Database, get_db
from app.validation import validate_payload
from schemas.schemas import BookCreate, BookUpdate, BookFilter, BookResponse

router = APIRouter(
    prefix = "/books",
    tags = ["Books"]
)

@router.post(
    "",
    response_model = BookResponse,
    response_model_exclude_none = True,
    status_code = status.HTTP_201_CREATED,
    summary = "Create a new book",
    responses = {
        400: {"description": "Validation failed"},
        409: {"description": "A book with this ISBN already exists (DUPLICATE_ISBN)"}
    })
def create_book(payload: dict = Body(...), db: Database = Depends(get_db)):
    fields = validate_payload(BookCreate, payload)
    return db.books.create(fields)

@router.get(
    "",
    response_model = List[BookResponse],
    response_model_exclude_none = True,
    summary = "List books",
    description = """Returns every book in creation order.

    - **author**: case-insensitive substring of the author name
    - **minPrice** / **maxPrice**: inclusive price bounds

    All given filters must match.""",
    responses = {400: {"description": "Invalid filter value"}})
def list_books(request: Request, db: Database = Depends(get_db)):
    filters = validate_payload(BookFilter, dict(request.query_params))
    return db.books.list(**filters)

@router.get(
    "/{book_id}",
    response_model = BookResponse,
    response_model_exclude_none = True,
    summary = "Retrieve one book",
    responses = {404: {"description": "Book not found"}})
def get_book(book_id: str, db: Database = Depends(get_db)):
    return db.books.get(book_id)

@router.put(
    "/{book_id}",
    response_model = BookResponse,
    response_model_exclude_none = True,
    summary = "Update a book",
    description = "Only the fields present in the body change; `updatedAt` is refreshed.",
    responses = {
        400: {"description": "Validation failed"},
        404: {"description": "Book not found"},
        409: {"description": "A book with this ISBN already exists (DUPLICATE_ISBN)"}
    })
def update_book(book_id: str, payload: dict = Body(...), db: Database = Depends(get_db)):
    fields = validate_payload(BookUpdate, payload)
    return db.books.update(book_id, fields)

@router.delete(
    "/{book_id}",
    status_code = status.HTTP_204_NO_CONTENT,
    summary = "Delete a book and its reviews",
    responses = {404: {"description": "Book not found"}})
def delete_book(book_id: str, db: Database = Depends(get_db)):
    db.delete_book(book_id)
    return Response(status_code = status.HTTP_204_NO_CONTENT)
