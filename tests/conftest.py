import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from crm.db import get_db
from crm.main import app
from crm.models import Base
from crm.services import sheet_sync


@pytest.fixture()
def engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite+pysqlite:///{db_path}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def SessionLocal(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(SessionLocal):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(SessionLocal):
    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise sheet_sync.requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


@pytest.fixture(autouse=True)
def sheet_calls(monkeypatch):
    """Keep the lead sheet offline; records PATCH calls and serves GET rows."""
    calls = {"patch": [], "rows": []}

    def fake_get(url, timeout=None):
        return FakeResponse(calls["rows"])

    def fake_patch(url, json=None, timeout=None):
        calls["patch"].append((url, json))
        return FakeResponse({"updated": 1})

    monkeypatch.setattr(sheet_sync.requests, "get", fake_get)
    monkeypatch.setattr(sheet_sync.requests, "patch", fake_patch)
    return calls
