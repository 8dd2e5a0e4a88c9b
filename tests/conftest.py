"""Pytest Fixtures und Test-Konfiguration"""
import os

# Vor dem Import von app.config setzen: keine Log-Datei, kein Rate Limit in Tests
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("RATE_LIMIT", "100000/minute")

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.models import Task
from app.services.task_service import TaskService


@pytest.fixture(scope="function")
def db_session() -> Session:
    """
    Erstellt eine temporäre In-Memory-SQLite-Datenbank für Tests
    Jeder Test bekommt eine frische, isolierte Datenbank
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def sample_task(db_session: Session) -> Task:
    """Offene Task von 'requester-1' ohne Helfer"""
    result = TaskService.create(
        db_session,
        requester="requester-1",
        title="Waschbecken reparieren",
        description="Der Abfluss ist verstopft.",
        deadline=datetime(2025, 1, 1, 12, 0),
        files=["foto.jpg"],
    )
    return result["task"]


@pytest.fixture
def api_client(db_session: Session):
    """
    Liefert eine Funktion, die einen angemeldeten TestClient erzeugt.

    Alle Clients teilen sich die Test-Datenbank, haben aber eigene Session-Cookies.
    """
    from fastapi.testclient import TestClient
    from app.database import get_db
    from app.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    def login(user_id: str | None = None) -> TestClient:
        client = TestClient(app)
        if user_id is not None:
            response = client.post("/auth/login", data={"user_id": user_id})
            assert response.status_code == 200
        return client

    try:
        yield login
    finally:
        app.dependency_overrides.clear()
