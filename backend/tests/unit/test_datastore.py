"""Unit tests for the datastore access layer."""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from emunicipality.datastore import QueryResult, bind_positional
from emunicipality.errors import DatastoreError

pytestmark = pytest.mark.unit


class TestBindPositional:

    def test_placeholders_become_named_binds(self):
        clause = bind_positional("SELECT * FROM users WHERE user_id = ? AND role = ?", [1, "admin"])
        assert ":p0" in clause.text
        assert ":p1" in clause.text
        assert "?" not in clause.text

    def test_parameter_count_mismatch(self):
        with pytest.raises(ValueError, match="expects 2 parameters, got 1"):
            bind_positional("SELECT * FROM users WHERE user_id = ? AND role = ?", [1])

    def test_no_parameters(self):
        clause = bind_positional("SELECT 1", [])
        assert clause.text == "SELECT 1"


class TestQueryResult:

    def test_first(self):
        assert QueryResult(rows=[{"a": 1}, {"a": 2}], row_count=2).first() == {"a": 1}
        assert QueryResult().first() is None


class TestDatastoreExecute:

    def test_select_returns_rows_and_count(self, store):
        store.execute(
            "INSERT INTO document_types (name, description, created_at) VALUES (?, ?, CURRENT_TIMESTAMP)",
            ["Passport", None],
        )
        result = store.execute("SELECT name, description FROM document_types")

        assert result.row_count == 1
        assert result.rows == [{"name": "Passport", "description": None}]

    def test_select_with_no_rows(self, store):
        result = store.execute("SELECT * FROM users WHERE user_id = ?", [999])
        assert result.rows == []
        assert result.row_count == 0

    def test_write_without_returning_reports_affected_rows(self, store):
        for name in ("A", "B"):
            store.execute(
                "INSERT INTO document_types (name, created_at) VALUES (?, CURRENT_TIMESTAMP)", [name]
            )
        result = store.execute("UPDATE document_types SET description = ?", ["x"])

        assert result.rows == []
        assert result.row_count == 2

    def test_insert_returning(self, store):
        result = store.execute(
            "INSERT INTO document_types (name, created_at) VALUES (?, CURRENT_TIMESTAMP) RETURNING doctype_id",
            ["ID card"],
        )
        assert result.row_count == 1
        assert isinstance(result.rows[0]["doctype_id"], int)

    def test_failure_is_wrapped(self, store):
        with pytest.raises(DatastoreError) as exc_info:
            store.execute("SELECT * FROM no_such_table")

        assert exc_info.value.status_code == 500
        assert isinstance(exc_info.value.__cause__, SQLAlchemyError)
        assert "no_such_table" in exc_info.value.detail
        # The raw driver text never becomes the user-facing message
        assert "no_such_table" not in exc_info.value.message


class TestTransaction:

    def test_commit_on_success(self, store):
        with store.transaction():
            store.execute(
                "INSERT INTO document_types (name, created_at) VALUES (?, CURRENT_TIMESTAMP)", ["Permit"]
            )
        assert store.execute("SELECT * FROM document_types").row_count == 1

    def test_rollback_on_error(self, store):
        with pytest.raises(RuntimeError):
            with store.transaction():
                store.execute(
                    "INSERT INTO document_types (name, created_at) VALUES (?, CURRENT_TIMESTAMP)", ["Permit"]
                )
                raise RuntimeError("abort")

        assert store.execute("SELECT * FROM document_types").row_count == 0
        assert store.in_transaction is False

    def test_nested_transaction_joins_outer(self, store):
        with pytest.raises(RuntimeError):
            with store.transaction():
                with store.transaction():
                    store.execute(
                        "INSERT INTO document_types (name, created_at) VALUES (?, CURRENT_TIMESTAMP)",
                        ["Permit"],
                    )
                assert store.in_transaction is True
                raise RuntimeError("abort outer")

        assert store.execute("SELECT * FROM document_types").row_count == 0
