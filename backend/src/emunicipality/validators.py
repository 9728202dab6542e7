"""Entity validators.

Each validator either returns normally (valid) or raises the matching
AppError subclass. Existence and uniqueness checks perform exactly one read
against the datastore and never write. Services call them in sequence; the
first failure aborts the operation.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from email_validator import EmailNotValidError, validate_email

from .datastore import Datastore
from .domain.documents import VALID_STATUSES, is_valid_status
from .errors import ConflictError, NotFoundError, ReferentialBlockError, ValidationError
from .users.roles import VALID_ROLES

# Tables and their primary key columns. Identifiers interpolated into SQL must
# come from here; values always go through bind parameters.
PRIMARY_KEYS = {
    "users": "user_id",
    "document_types": "doctype_id",
    "documents": "document_id",
}

UNIQUE_COLUMNS = {
    ("users", "username"),
    ("users", "email"),
    ("document_types", "name"),
}

# Human-readable names for conflict messages
FIELD_LABELS = {
    ("users", "username"): "Username",
    ("users", "email"): "Email",
    ("document_types", "name"): "Document type name",
}


def is_missing(value: Any) -> bool:
    """None, or a string that is empty after stripping."""
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def require_fields(fields: Iterable[str], candidate: Mapping[str, Any]) -> None:
    """Fail on the first required field that is absent, null or empty.

    Raises:
        ValidationError: naming the missing field
    """
    for name in fields:
        if is_missing(candidate.get(name)):
            raise ValidationError(f"{name} is required", field=name)


def _fetch_by_id(store: Datastore, table: str, entity_id: Any) -> Optional[Dict[str, Any]]:
    pk = PRIMARY_KEYS[table]
    result = store.execute(f"SELECT * FROM {table} WHERE {pk} = ?", [entity_id])
    return result.first()


def ensure_user_exists(store: Datastore, user_id: Any) -> Dict[str, Any]:
    """Return the user row or raise NotFoundError("user")."""
    row = _fetch_by_id(store, "users", user_id)
    if row is None:
        raise NotFoundError("user")
    return row


def ensure_doctype_exists(store: Datastore, doctype_id: Any) -> Dict[str, Any]:
    """Return the document type row or raise NotFoundError("doctype")."""
    row = _fetch_by_id(store, "document_types", doctype_id)
    if row is None:
        raise NotFoundError("doctype")
    return row


def ensure_document_exists(store: Datastore, document_id: Any) -> Dict[str, Any]:
    """Return the raw document row or raise NotFoundError("document")."""
    row = _fetch_by_id(store, "documents", document_id)
    if row is None:
        raise NotFoundError("document")
    return row


def ensure_unique(
    store: Datastore,
    table: str,
    column: str,
    value: Any,
    exclude_id: Optional[Any] = None,
) -> None:
    """Fail if another row already holds ``value`` in ``column``.

    Matching is exact and case-sensitive. On updates, pass the target's id as
    ``exclude_id`` so the row does not conflict with itself.

    Raises:
        ConflictError: a matching row exists
    """
    if (table, column) not in UNIQUE_COLUMNS:
        raise ValueError(f"{table}.{column} is not a unique column")

    pk = PRIMARY_KEYS[table]
    statement = f"SELECT {pk} FROM {table} WHERE {column} = ?"
    params = [value]
    if exclude_id is not None:
        statement += f" AND {pk} != ?"
        params.append(exclude_id)

    if store.execute(statement, params).row_count > 0:
        label = FIELD_LABELS[(table, column)]
        raise ConflictError(f"{label} already exists")


def ensure_valid_status(status: Any) -> None:
    """Raises ValidationError unless status is one of the four status values."""
    if not is_valid_status(status):
        raise ValidationError(
            f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}",
            field="status",
        )


def ensure_valid_role(role: Any) -> None:
    """Raises ValidationError unless role is citizen, admin or employee."""
    if not isinstance(role, str) or role not in VALID_ROLES:
        raise ValidationError(
            f"Invalid role. Must be one of: {', '.join(VALID_ROLES)}",
            field="role",
        )


def ensure_valid_email(email: Any) -> None:
    """Syntactic check only; deliverability is not verified."""
    if not isinstance(email, str):
        raise ValidationError("Invalid email address", field="email")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValidationError(f"Invalid email address: {exc}", field="email") from exc


def ensure_not_referenced(store: Datastore, column: str, value: Any, entity: str) -> None:
    """Block deletion of a user or document type still used by documents.

    Raises:
        ReferentialBlockError: at least one document references the entity
    """
    if column not in ("user_id", "doctype_id"):
        raise ValueError(f"documents.{column} is not a reference column")

    result = store.execute(
        f"SELECT document_id FROM documents WHERE {column} = ? LIMIT 1", [value]
    )
    if result.row_count > 0:
        raise ReferentialBlockError(
            f"Cannot delete {entity} with existing documents. Please delete documents first."
        )
