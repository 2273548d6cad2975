"""
Review routes

This module provides operations to create a review for a book, view the
reviews of one specific book, and fetch, update or delete a single review.

Dependencies:
- FastAPI for API routing
- The validation engine for request validation
- The in-memory database for the review store and its book link index
"""
from fastapi import APIRouter, Body, Depends, Response, status
from typing import List
from app.database import Database, get_db
from app.validation import validate_payload
from schemas.schemas import ReviewCreate, ReviewUpdate, ReviewResponse

router = APIRouter(
    prefix = "/reviews",
    tags = ["Reviews"]
)

REVIEW_EXAMPLE = {
    "id": "1",
    "bookId": "1",
    "userId": "1",
    "text": "A desert planet saga worth rereading.",
    "rating": 5,
    "createdAt": "2024-02-19T14:25:36.123456Z"
}

@router.post(
    "",
    response_model = ReviewResponse,
    response_model_exclude_none = True,
    status_code = status.HTTP_201_CREATED,
    summary = "Create a new review for a book",
    description = "The referenced book must exist; the review is appended to that book's review list.",
    responses = {
        201: {
            "description": "Successful response with the details of the created review.",
            "content": {"application/json": {"example": REVIEW_EXAMPLE}}
        },
        400: {"description": "Validation failed, or the book does not exist"}
    })
def create_review(payload: dict = Body(...), db: Database = Depends(get_db)):
    fields = validate_payload(ReviewCreate, payload)
    return db.reviews.create(fields)

@router.get(
    "/book/{book_id}",
    response_model = List[ReviewResponse],
    response_model_exclude_none = True,
    summary = "Retrieve the reviews of one specific book",
    description = "Reviews are returned in the order they were linked to the book. An unknown book yields an empty list.",
    responses = {
        200: {
            "description": "Successful response with a list of reviews of the book.",
            "content": {"application/json": {"example": [REVIEW_EXAMPLE]}}
        }
    })
def get_reviews_by_book(book_id: str, db: Database = Depends(get_db)):
    return db.reviews.reviews_for_book(book_id)

@router.get(
    "/{review_id}",
    response_model = ReviewResponse,
    response_model_exclude_none = True,
    summary = "Retrieve one review",
    responses = {404: {"description": "Review not found"}})
def get_review(review_id: str, db: Database = Depends(get_db)):
    return db.reviews.get(review_id)

@router.put(
    "/{review_id}",
    response_model = ReviewResponse,
    response_model_exclude_none = True,
    summary = "Update an existing review",
    description = """Only the fields present in the body change.

    **Raises**
        - 400: If a field breaks a rule or the new book does not exist.
        - 404: If the review with the given ID does not exist.""",
    responses = {
        400: {"description": "Validation failed"},
        404: {"description": "Review not found"}
    })
def update_review(review_id: str, payload: dict = Body(...), db: Database = Depends(get_db)):
    fields = validate_payload(ReviewUpdate, payload)
    return db.reviews.update(review_id, fields)

@router.delete(
    "/{review_id}",
    status_code = status.HTTP_204_NO_CONTENT,
    summary = "Delete a review",
    responses = {404: {"description": "Review not found"}})
def delete_review(review_id: str, db: Database = Depends(get_db)):
    db.reviews.delete(review_id)
    return Response(status_code = status.HTTP_204_NO_CONTENT)
