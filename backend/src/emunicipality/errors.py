"""Application error taxonomy.

Services raise these; the exception handlers in main.py turn them into the
standard response envelope. Each error carries the HTTP status it maps to.
"""

from typing import Optional


class AppError(Exception):
    """Base class for expected, user-visible failures."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class ValidationError(AppError):
    """Malformed or missing input, or an illegal enum value."""

    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


# Display names used in "<entity> not found" messages
ENTITY_LABELS = {
    "user": "User",
    "doctype": "Document type",
    "document": "Document",
}


class NotFoundError(AppError):
    """Targeted or referenced entity does not exist."""

    status_code = 404
    error_code = "not_found"

    def __init__(self, entity: str):
        self.entity = entity
        label = ENTITY_LABELS.get(entity, entity.capitalize())
        super().__init__(f"{label} not found")


class ConflictError(AppError):
    """Uniqueness violation."""

    status_code = 409
    error_code = "conflict"


class ReferentialBlockError(AppError):
    """Delete rejected because documents still reference the entity."""

    status_code = 400
    error_code = "referential_block"


class DatastoreError(AppError):
    """Any failure in the datastore layer.

    The original SQLAlchemy exception is kept as __cause__ and its text in
    ``detail``; neither is shown to clients unless verbose errors are on.
    """

    status_code = 500
    error_code = "database_error"

    def __init__(self, message: str = "A database error occurred", detail: Optional[str] = None):
        super().__init__(message, detail=detail)
