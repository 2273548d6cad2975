"""
Validation engine.

A rule set is one of the pydantic schemas in ``schemas.schemas``. Running a
payload through it either yields the normalized fields that were present
(trimmed strings, numbers coerced to int/float) or raises ``ValidationFailed``
with every field violation found, one per field, in rule-set order.

Validation never touches a store; uniqueness and book existence are checked
by the stores afterwards.
"""
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from app.errors import ValidationFailed

# Message reported for any rule broken on a field, keyed by attribute name.
FIELD_MESSAGES = {
    "title": "Title must be between 1 and 200 characters",
    "author": "Author must be between 1 and 100 characters",
    "description": "Description must be between 10 and 2000 characters",
    "isbn": "ISBN must be 10-13 digits with optional hyphens",
    "published_year": "Published year must be between 1800 and 2024",
    "price": "Price must be a non-negative number",
    "min_price": "Minimum price must be a non-negative number",
    "max_price": "Maximum price must be a non-negative number",
    "username": "Username must be between 3 and 50 characters",
    "email": "Must be a valid email address",
    "book_id": "Book ID must be a non-empty string",
    "user_id": "User ID must be a non-empty string",
    "text": "Review text must be between 10 and 1000 characters",
    "rating": "Rating must be an integer between 1 and 5",
}

REQUEST_SECTIONS = ("body", "query", "path")


def _wire_name(schema: Optional[Type[BaseModel]], loc: tuple) -> str:
    if schema is None:
        # FastAPI request errors are prefixed with the request section.
        if loc and loc[0] in REQUEST_SECTIONS:
            loc = loc[1:]
        if not loc or isinstance(loc[0], int):
            return "body"
        return str(loc[0])
    if not loc:
        return "body"
    name = loc[0]
    if name in schema.model_fields:
        return schema.model_fields[name].alias or name
    return str(name)


def _attribute_name(schema: Optional[Type[BaseModel]], wire_name: str) -> str:
    if schema is not None:
        for attribute, field in schema.model_fields.items():
            if field.alias == wire_name or attribute == wire_name:
                return attribute
    return wire_name


def collect_violations(schema: Optional[Type[BaseModel]], errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Turn pydantic error dicts into ``[{"field", "message"}]``, first error per field."""
    violations = []
    seen = set()
    for error in errors:
        field = _wire_name(schema, tuple(error.get("loc", ())))
        if field in seen:
            continue
        seen.add(field)

        attribute = _attribute_name(schema, field)
        if error.get("type") == "missing":
            message = f"{field} is required"
        else:
            message = FIELD_MESSAGES.get(attribute, error.get("msg", "Invalid value"))
        violations.append({"field": field, "message": message})
    return violations


def validate_payload(schema: Type[BaseModel], payload: Any) -> Dict[str, Any]:
    """Validate ``payload`` against ``schema``.

    Returns only the fields present in the payload, keyed by attribute name,
    so a partial update never sees defaults for the fields it left out.

    Raises:
        ValidationFailed: with the aggregated violation list.
    """
    try:
        model = schema.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailed(collect_violations(schema, exc.errors()))
    return model.model_dump(exclude_unset=True)
