"""Document type handlers. Names are unique (exact match)."""

from typing import Any, Dict, List, Mapping

from ..datastore import Datastore
from ..errors import NotFoundError
from ..observability.logging_config import get_logger
from ..utils import utcnow
from ..validators import (
    ensure_doctype_exists,
    ensure_not_referenced,
    ensure_unique,
    require_fields,
)
from .schemas import DocTypeResponse

logger = get_logger(__name__)

DOCTYPE_COLUMNS = "doctype_id, name, description"

UPDATABLE_FIELDS = ("name", "description")


def _fetch_doctype(store: Datastore, doctype_id: Any) -> DocTypeResponse:
    result = store.execute(
        f"SELECT {DOCTYPE_COLUMNS} FROM document_types WHERE doctype_id = ?", [doctype_id]
    )
    row = result.first()
    if row is None:
        raise NotFoundError("doctype")
    return DocTypeResponse.model_validate(row)


def list_doctypes(store: Datastore) -> List[DocTypeResponse]:
    result = store.execute(f"SELECT {DOCTYPE_COLUMNS} FROM document_types ORDER BY name ASC")
    return [DocTypeResponse.model_validate(row) for row in result.rows]


def get_doctype(store: Datastore, doctype_id: int) -> DocTypeResponse:
    return _fetch_doctype(store, doctype_id)


def create_doctype(store: Datastore, data: Mapping[str, Any]) -> DocTypeResponse:
    """Raises ValidationError without a name, ConflictError if the name is taken."""
    require_fields(("name",), data)

    with store.transaction():
        ensure_unique(store, "document_types", "name", data["name"])
        result = store.execute(
            "INSERT INTO document_types (name, description, created_at) "
            "VALUES (?, ?, ?) RETURNING doctype_id",
            [data["name"], data.get("description"), utcnow()],
        )
        doctype_id = result.rows[0]["doctype_id"]
        doctype = _fetch_doctype(store, doctype_id)

    logger.info("Document type created", extra={"entity": "doctype", "entity_id": doctype_id})
    return doctype


def update_doctype(store: Datastore, doctype_id: int, changes: Mapping[str, Any]) -> DocTypeResponse:
    """Merge-patch a document type. The description may be set to an empty string."""
    patch: Dict[str, Any] = {
        key: changes[key]
        for key in UPDATABLE_FIELDS
        if key in changes and changes[key] is not None
    }
    if "name" in patch:
        require_fields(("name",), patch)

    with store.transaction():
        current = ensure_doctype_exists(store, doctype_id)

        if "name" in patch and patch["name"] != current["name"]:
            ensure_unique(store, "document_types", "name", patch["name"], exclude_id=doctype_id)

        if patch:
            assignments = ", ".join(f"{column} = ?" for column in patch)
            store.execute(
                f"UPDATE document_types SET {assignments} WHERE doctype_id = ?",
                [*patch.values(), doctype_id],
            )

        doctype = _fetch_doctype(store, doctype_id)

    logger.info("Document type updated", extra={"entity": "doctype", "entity_id": doctype_id})
    return doctype


def delete_doctype(store: Datastore, doctype_id: int) -> None:
    """Raises NotFoundError if absent, ReferentialBlockError while documents reference it."""
    with store.transaction():
        ensure_doctype_exists(store, doctype_id)
        ensure_not_referenced(store, "doctype_id", doctype_id, "document type")
        store.execute("DELETE FROM document_types WHERE doctype_id = ?", [doctype_id])

    logger.info("Document type deleted", extra={"entity": "doctype", "entity_id": doctype_id})
