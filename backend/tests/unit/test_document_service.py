"""Unit tests for the document request lifecycle handlers.

Handlers are called directly with a Datastore over an in-memory database.
"""

from datetime import datetime, timezone

import pytest

from emunicipality.documents import service
from emunicipality.errors import NotFoundError, ValidationError

pytestmark = pytest.mark.unit


def _naive(value: datetime) -> datetime:
    return value.replace(tzinfo=None) if value.tzinfo else value


class TestCreateDocument:

    def test_created_pending_with_fresh_id(self, store, make_user, make_doctype):
        user = make_user()
        doctype = make_doctype()
        before = datetime.now(timezone.utc).replace(tzinfo=None)

        first = service.create_document(store, {"user_id": user.user_id, "doctype_id": doctype.doctype_id})
        second = service.create_document(store, {"user_id": user.user_id, "doctype_id": doctype.doctype_id})

        assert first.status == "pending"
        assert first.document_id != second.document_id
        assert _naive(first.request_date) >= before
        assert first.issue_date is None
        assert first.notes is None

    def test_created_document_is_enriched(self, store, make_user, make_doctype):
        user = make_user(username="bob", email="bob@example.com")
        doctype = make_doctype(name="Residence Permit", description="Proof of residence")

        document = service.create_document(
            store, {"user_id": user.user_id, "doctype_id": doctype.doctype_id, "notes": "urgent"}
        )

        assert document.notes == "urgent"
        assert document.user_name == "bob"
        assert document.user_email == "bob@example.com"
        assert document.doctype_name == "Residence Permit"
        assert document.doctype_description == "Proof of residence"

    @pytest.mark.parametrize("missing", ["user_id", "doctype_id"])
    def test_missing_reference(self, store, missing):
        data = {"user_id": 1, "doctype_id": 1}
        del data[missing]
        with pytest.raises(ValidationError) as exc_info:
            service.create_document(store, data)
        assert exc_info.value.field == missing

    def test_unknown_user_with_valid_doctype(self, store, make_doctype):
        doctype = make_doctype()
        with pytest.raises(NotFoundError) as exc_info:
            service.create_document(store, {"user_id": 999, "doctype_id": doctype.doctype_id})
        assert exc_info.value.entity == "user"
        assert service.list_documents(store) == []

    def test_unknown_doctype_with_valid_user(self, store, make_user):
        user = make_user()
        with pytest.raises(NotFoundError) as exc_info:
            service.create_document(store, {"user_id": user.user_id, "doctype_id": 999})
        assert exc_info.value.entity == "doctype"
        assert service.list_documents(store) == []


class TestReadDocuments:

    def test_empty_list(self, store):
        assert service.list_documents(store) == []

    def test_newest_first(self, store, make_document):
        first = make_document()
        second = make_document()

        ids = [doc.document_id for doc in service.list_documents(store)]
        assert ids == [second.document_id, first.document_id]

    def test_get_unknown(self, store):
        with pytest.raises(NotFoundError):
            service.get_document(store, 12345)

    def test_list_by_user(self, store, make_user, make_document):
        alice = make_user()
        bob = make_user()
        mine = make_document(user=alice)
        make_document(user=bob)

        documents = service.list_documents_by_user(store, alice.user_id)
        assert [doc.document_id for doc in documents] == [mine.document_id]

    def test_list_by_known_user_without_documents(self, store, make_user):
        assert service.list_documents_by_user(store, make_user().user_id) == []

    def test_list_by_unknown_user(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            service.list_documents_by_user(store, 999)
        assert exc_info.value.entity == "user"


class TestUpdateDocument:

    def test_empty_update_is_noop(self, store, make_document):
        document = make_document(notes="keep me")

        updated = service.update_document(store, document.document_id, {})

        assert updated == document

    def test_null_fields_are_ignored(self, store, make_document):
        document = make_document(notes="keep me")

        updated = service.update_document(
            store, document.document_id, {"notes": None, "status": None, "user_id": None}
        )

        assert updated == document

    def test_status_change_keeps_other_fields(self, store, make_document):
        document = make_document(notes="urgent")

        updated = service.update_document(store, document.document_id, {"status": "approved"})

        assert updated.status == "approved"
        assert updated.notes == "urgent"
        assert updated.user_id == document.user_id
        assert updated.request_date == document.request_date

    def test_leaving_pending_sets_issue_date(self, store, make_document):
        document = make_document()
        before = datetime.now(timezone.utc).replace(tzinfo=None)

        updated = service.update_document(store, document.document_id, {"status": "in_progress"})

        assert updated.issue_date is not None
        assert _naive(updated.issue_date) >= before

    def test_explicit_issue_date_wins(self, store, make_document):
        document = make_document()
        issued = datetime(2026, 1, 15, 9, 30)

        updated = service.update_document(
            store, document.document_id, {"status": "approved", "issue_date": issued}
        )

        assert _naive(updated.issue_date) == issued

    def test_issue_date_kept_on_later_changes(self, store, make_document):
        document = make_document()
        approved = service.update_document(store, document.document_id, {"status": "approved"})

        rejected = service.update_document(store, document.document_id, {"status": "rejected"})

        assert rejected.issue_date == approved.issue_date

    def test_any_status_may_follow_any_other(self, store, make_document):
        document = make_document()
        for status in ("approved", "pending", "rejected", "in_progress", "pending"):
            updated = service.update_document(store, document.document_id, {"status": status})
            assert updated.status == status

    def test_invalid_status_leaves_document_unchanged(self, store, make_document):
        document = make_document(notes="original")

        with pytest.raises(ValidationError):
            service.update_document(
                store, document.document_id, {"status": "archived", "notes": "changed"}
            )

        assert service.get_document(store, document.document_id) == document

    def test_unknown_document(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            service.update_document(store, 999, {"status": "approved"})
        assert exc_info.value.entity == "document"

    def test_reassign_to_unknown_user(self, store, make_document):
        document = make_document()
        with pytest.raises(NotFoundError) as exc_info:
            service.update_document(store, document.document_id, {"user_id": 999})
        assert exc_info.value.entity == "user"

    def test_reassign_doctype(self, store, make_document, make_doctype):
        document = make_document()
        other = make_doctype(name="Marriage Certificate")

        updated = service.update_document(store, document.document_id, {"doctype_id": other.doctype_id})

        assert updated.doctype_id == other.doctype_id
        assert updated.doctype_name == "Marriage Certificate"


class TestDeleteDocument:

    def test_delete_then_get(self, store, make_document):
        document = make_document()

        service.delete_document(store, document.document_id)

        with pytest.raises(NotFoundError):
            service.get_document(store, document.document_id)

    def test_delete_unknown(self, store):
        with pytest.raises(NotFoundError):
            service.delete_document(store, 999)
