from fastapi import APIRouter, Body, Depends, Response, status
from typing import List
from app.database import Database, get_db
from app.validation import validate_payload
from schemas.schemas import UserCreate, UserUpdate, UserResponse

router = APIRouter(
    prefix = "/users",
    tags = ["Users"]
)

@router.post("", response_model = UserResponse, response_model_exclude_none = True, status_code = status.HTTP_201_CREATED)
def create_user(payload: dict = Body(...), db: Database = Depends(get_db)):
    """
    Register a new user.

    The email must not belong to another user; the comparison is exact,
    so addresses differing only in case are distinct.

    Raises:
        ValidationFailed: If the username or email breaks a field rule.
        Conflict: If a user with the provided email already exists.

    Returns:
        UserResponse: The newly created user.
    """
    fields = validate_payload(UserCreate, payload)
    return db.users.create(fields)

@router.get("", response_model = List[UserResponse], response_model_exclude_none = True)
def list_users(db: Database = Depends(get_db)):
    """Return every user in creation order."""
    return db.users.list()

@router.get("/{user_id}", response_model = UserResponse, response_model_exclude_none = True)
def get_user(user_id: str, db: Database = Depends(get_db)):
    """Return one user, or 404 if it does not exist."""
    return db.users.get(user_id)

@router.put("/{user_id}", response_model = UserResponse, response_model_exclude_none = True)
def update_user(user_id: str, payload: dict = Body(...), db: Database = Depends(get_db)):
    """
    Update the username and/or email of a user.

    Raises:
        ValidationFailed: If a provided field breaks a rule.
        NotFound: If the user does not exist.
        Conflict: If the new email belongs to another user.
    """
    fields = validate_payload(UserUpdate, payload)
    return db.users.update(user_id, fields)

@router.delete("/{user_id}", status_code = status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str, db: Database = Depends(get_db)):
    db.users.delete(user_id)
    return Response(status_code = status.HTTP_204_NO_CONTENT)
