"""Pytest fixtures for the eMunicipality backend.

Provides reusable test fixtures for:
- An in-memory SQLite engine with the schema created per test
- A database session and a Datastore bound to it
- A FastAPI TestClient whose get_db dependency uses the test session
- Small factories creating users, document types and documents

Usage:
    def test_list_documents(client):
        response = client.get("/api/documents")
        assert response.status_code == 200
"""

import os

# Set environment variables BEFORE any application imports so settings pick them up
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("EXPOSE_ERROR_DETAILS", "false")

from typing import Any, Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from emunicipality.database import build_engine, get_db
from emunicipality.datastore import Datastore
from emunicipality.models import Base
from emunicipality.doctypes import service as doctype_service
from emunicipality.documents import service as document_service
from emunicipality.users import service as user_service


@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database per test; StaticPool keeps one shared connection."""
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    try:
        yield test_engine
    finally:
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine: Engine) -> Generator[Session, None, None]:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def store(db_session: Session) -> Datastore:
    return Datastore(db_session)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client with the database dependency pointed at the test session."""
    from emunicipality.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(store: Datastore) -> Callable[..., Any]:
    counter = {"n": 0}

    def _make(**overrides: Any):
        counter["n"] += 1
        data: Dict[str, Any] = {
            "username": f"citizen{counter['n']}",
            "email": f"citizen{counter['n']}@example.com",
            "password": "secret",
            "role": "citizen",
        }
        data.update(overrides)
        return user_service.create_user(store, data)

    return _make


@pytest.fixture
def make_doctype(store: Datastore) -> Callable[..., Any]:
    counter = {"n": 0}

    def _make(**overrides: Any):
        counter["n"] += 1
        data: Dict[str, Any] = {
            "name": f"Certificate {counter['n']}",
            "description": "Official certificate",
        }
        data.update(overrides)
        return doctype_service.create_doctype(store, data)

    return _make


@pytest.fixture
def make_document(store: Datastore, make_user, make_doctype) -> Callable[..., Any]:
    def _make(user=None, doctype=None, notes=None):
        user = user or make_user()
        doctype = doctype or make_doctype()
        return document_service.create_document(
            store,
            {"user_id": user.user_id, "doctype_id": doctype.doctype_id, "notes": notes},
        )

    return _make
