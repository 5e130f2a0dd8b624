"""
Shared pytest fixtures.

Uses a SQLite file database so no Postgres is required for tests, and pins
the clock through the `now_utc` dependency so reveal decisions are
deterministic.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_escrow.db")

from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.db.base import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.services.reveal import now_utc  # noqa: E402
from tests.factories import MORNING  # noqa: E402

SQLITE_URL = "sqlite:///./test_escrow.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def clock():
    return SimpleNamespace(now=MORNING)


@pytest.fixture()
def client(clock):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[now_utc] = lambda: clock.now
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def group(client):
    r = client.post("/groups", json={"name": "Breakfast Club", "players": ["Joe", "Pete"]})
    assert r.status_code == 201
    return r.json()


@pytest.fixture()
def session_factory():
    return TestingSessionLocal
