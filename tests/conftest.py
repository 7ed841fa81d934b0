import os

# Configuração precisa existir antes de importar a aplicação
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-definitely-longer-than-32-bytes")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.config import settings as app_settings
from app.db.base import Base
from app.db.init_db import init_db
from app.db.session import enable_sqlite_foreign_keys, get_db
from app.main import api
from app.models.event import Event

USER_EMAIL = "user@user.com"
USER_PASSWORD = "User123"


@pytest.fixture
def settings():
    return app_settings


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(eng)
    Base.metadata.create_all(eng)
    try:
        yield eng
    finally:
        Base.metadata.drop_all(eng)
        eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    init_db(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db, session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    api.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(api)
    finally:
        api.dependency_overrides.clear()


@pytest.fixture
def tokens(client):
    resp = client.post("/api/authorization/login", json={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture
def auth_headers(tokens):
    return {"Authorization": f"Bearer {tokens['token']}"}


@pytest.fixture
def three_events(db):
    rows = [
        Event(name="Event 1", location="Location 1", country="PL", capacity=100),
        Event(name="Event 2", location="Location 2", country="DE", capacity=50),
        Event(name="Event 3", location="Location 3", country=None, capacity=None),
    ]
    db.add_all(rows)
    db.commit()
    for r in rows:
        db.refresh(r)
    return rows
