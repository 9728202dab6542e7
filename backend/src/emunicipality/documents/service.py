"""Document request lifecycle handlers.

Create, read, update and delete document requests. Reads are enriched with
the owning user's username/email and the document type's name/description.

Every mutating handler runs its validation reads and its single write in
one datastore transaction, so a reference cannot disappear between the
check and the write.

Status is unrestricted: any of the four values may replace any other.
"""

from typing import Any, Dict, List, Mapping

from ..datastore import Datastore
from ..domain.documents import DocumentStatus, leaves_pending
from ..errors import NotFoundError
from ..observability.logging_config import get_logger
from ..observability.metrics import document_requests_total, document_status_changes_total
from ..utils import utcnow
from ..validators import (
    ensure_doctype_exists,
    ensure_document_exists,
    ensure_user_exists,
    ensure_valid_status,
    require_fields,
)
from .schemas import DocumentResponse

logger = get_logger(__name__)

ENRICHED_SELECT = """
    SELECT
        d.document_id,
        d.user_id,
        d.doctype_id,
        d.status,
        d.request_date,
        d.issue_date,
        d.notes,
        u.username AS user_name,
        u.email AS user_email,
        dt.name AS doctype_name,
        dt.description AS doctype_description
    FROM documents d
    JOIN users u ON d.user_id = u.user_id
    JOIN document_types dt ON d.doctype_id = dt.doctype_id
"""

NEWEST_FIRST = " ORDER BY d.request_date DESC, d.document_id DESC"

REQUIRED_ON_CREATE = ("user_id", "doctype_id")

# Columns a PUT may change, in statement order
UPDATABLE_FIELDS = ("user_id", "doctype_id", "status", "issue_date", "notes")


def _to_response(row: Mapping[str, Any]) -> DocumentResponse:
    return DocumentResponse.model_validate(dict(row))


def _fetch_enriched(store: Datastore, document_id: Any) -> DocumentResponse:
    result = store.execute(ENRICHED_SELECT + " WHERE d.document_id = ?", [document_id])
    row = result.first()
    if row is None:
        raise NotFoundError("document")
    return _to_response(row)


def list_documents(store: Datastore) -> List[DocumentResponse]:
    """All document requests, newest first. Empty list when there are none."""
    result = store.execute(ENRICHED_SELECT + NEWEST_FIRST)
    return [_to_response(row) for row in result.rows]


def get_document(store: Datastore, document_id: int) -> DocumentResponse:
    """Raises NotFoundError("document") if the id does not resolve."""
    return _fetch_enriched(store, document_id)


def list_documents_by_user(store: Datastore, user_id: int) -> List[DocumentResponse]:
    """Document requests of one user, newest first.

    The user must exist (NotFoundError("user") otherwise); a known user with
    no requests gets an empty list.
    """
    ensure_user_exists(store, user_id)
    result = store.execute(ENRICHED_SELECT + " WHERE d.user_id = ?" + NEWEST_FIRST, [user_id])
    return [_to_response(row) for row in result.rows]


def create_document(store: Datastore, data: Mapping[str, Any]) -> DocumentResponse:
    """Create a pending document request.

    Args:
        store: Request datastore
        data: {user_id, doctype_id, notes?}

    Returns:
        DocumentResponse: the new request, enriched

    Raises:
        ValidationError: user_id or doctype_id missing
        NotFoundError: user or document type does not exist
    """
    require_fields(REQUIRED_ON_CREATE, data)

    with store.transaction():
        ensure_user_exists(store, data["user_id"])
        ensure_doctype_exists(store, data["doctype_id"])

        result = store.execute(
            "INSERT INTO documents (user_id, doctype_id, status, request_date, notes) "
            "VALUES (?, ?, ?, ?, ?) RETURNING document_id",
            [
                data["user_id"],
                data["doctype_id"],
                DocumentStatus.PENDING.value,
                utcnow(),
                data.get("notes"),
            ],
        )
        document_id = result.rows[0]["document_id"]
        document = _fetch_enriched(store, document_id)

    document_requests_total.labels(event="created").inc()
    logger.info(
        "Document request created",
        extra={"entity": "document", "entity_id": document_id},
    )
    return document


def update_document(store: Datastore, document_id: int, changes: Mapping[str, Any]) -> DocumentResponse:
    """Merge-patch a document request.

    Only supplied, non-null fields change. Moving a request out of pending
    stamps issue_date with the current time when neither the request nor the
    stored row carries one.

    Raises:
        NotFoundError: document, or a supplied user/document type, does not exist
        ValidationError: status is not a legal value
    """
    patch: Dict[str, Any] = {
        key: changes[key]
        for key in UPDATABLE_FIELDS
        if key in changes and changes[key] is not None
    }

    with store.transaction():
        current = ensure_document_exists(store, document_id)

        if "user_id" in patch:
            ensure_user_exists(store, patch["user_id"])
        if "doctype_id" in patch:
            ensure_doctype_exists(store, patch["doctype_id"])
        if "status" in patch:
            ensure_valid_status(patch["status"])

        new_status = patch.get("status")
        if (
            leaves_pending(current["status"], new_status)
            and "issue_date" not in patch
            and current.get("issue_date") is None
        ):
            patch["issue_date"] = utcnow()

        if patch:
            assignments = ", ".join(f"{column} = ?" for column in patch)
            store.execute(
                f"UPDATE documents SET {assignments} WHERE document_id = ?",
                [*patch.values(), document_id],
            )

        document = _fetch_enriched(store, document_id)

    if new_status is not None and new_status != current["status"]:
        document_status_changes_total.labels(
            from_status=current["status"], to_status=new_status
        ).inc()
    document_requests_total.labels(event="updated").inc()
    logger.info(
        f"Document request updated: {', '.join(patch) or 'no changes'}",
        extra={"entity": "document", "entity_id": document_id},
    )
    return document


def delete_document(store: Datastore, document_id: int) -> None:
    """Raises NotFoundError("document") if the id does not resolve."""
    with store.transaction():
        ensure_document_exists(store, document_id)
        store.execute("DELETE FROM documents WHERE document_id = ?", [document_id])

    document_requests_total.labels(event="deleted").inc()
    logger.info(
        "Document request deleted",
        extra={"entity": "document", "entity_id": document_id},
    )
