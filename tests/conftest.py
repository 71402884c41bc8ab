# tests/conftest.py

import os
import tempfile
from datetime import timedelta

# Point the app at a throwaway SQLite file before anything imports the engine
_TMP_DIR = tempfile.mkdtemp(prefix="comingsoon-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"

import pytest
from fastapi.testclient import TestClient

from comingsoon import models  # noqa: F401
from comingsoon.core.database import Base, SessionLocal, engine
from comingsoon.main import create_app
from comingsoon.services.session_store import SessionStore

ADMIN_PASSWORD = "s3cret-pass"


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _fresh_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.setenv("ADMIN_USERNAME", "admin")
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASSWORD)
    for key in (
        "TELEGRAM_BOT_TOKEN",
        "TG_MONITOR_BOT_TOKEN",
        "TELEGRAM_MONITOR_CHAT_ID",
        "TG_MONITOR_CHAT_ID",
        "TELEGRAM_CHAT_ID",
        "DEFAULT_TARGET_DATE",
        "DEFAULT_PROJECT_NAME",
        "DEFAULT_SITE_TITLE",
        "COOKIE_SECURE",
        "SESSION_TTL_HOURS",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session_store(clock):
    return SessionStore(ttl=timedelta(hours=24), clock=clock)


@pytest.fixture
def client(session_store):
    app = create_app(session_store=session_store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_client(client):
    r = client.post("/api/admin/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert r.status_code == 200
    return client
