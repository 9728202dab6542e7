"""Security tests for SQL injection prevention.

Every value reaches the database through bind parameters, so payloads are
stored and compared as plain text.
"""

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.security

PAYLOADS = [
    "' OR '1'='1",
    "'; DROP TABLE users; --",
    "1' UNION SELECT * FROM users WHERE '1'='1",
    "admin'--",
]


class TestValueInjection:

    @pytest.mark.parametrize("payload", PAYLOADS)
    def test_doctype_name_stored_verbatim(self, client: TestClient, payload: str):
        response = client.post("/api/doctypes", json={"name": payload})

        assert response.status_code == 201
        assert response.json()["data"]["name"] == payload
        assert client.get("/api/doctypes").json()["count"] == 1

    @pytest.mark.parametrize("payload", PAYLOADS)
    def test_notes_do_not_alter_other_rows(self, client: TestClient, make_document, payload: str):
        first = make_document(notes="untouched")
        second = make_document()

        response = client.put(f"/api/documents/{second.document_id}", json={"notes": payload})

        assert response.status_code == 200
        assert response.json()["data"]["notes"] == payload
        assert client.get(f"/api/documents/{first.document_id}").json()["data"]["notes"] == "untouched"
        assert client.get("/api/users").json()["count"] == 2

    def test_uniqueness_check_is_exact(self, client: TestClient, make_user):
        make_user(username="alice", email="alice@example.com")

        response = client.post(
            "/api/users",
            json={"username": "' OR '1'='1", "email": "bob@example.com", "password": "x", "role": "citizen"},
        )

        assert response.status_code == 201
