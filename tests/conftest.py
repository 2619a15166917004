"""
Shared test fixtures.

Provides:
- Network blocking (no accidental gateway/OpenAI calls)
- In-memory SQLite engine and session
- Signed access tokens and signed-in AuthSessions
- A TestClient wired to the test session
"""

import os
import socket
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

# Set test environment BEFORE any animeforge imports
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SUPABASE_JWT_SECRET"] = "test-secret-for-animeforge-unit-tests-only"
os.environ["AI_GATEWAY_API_KEY"] = "test-gateway-key"
os.environ.pop("OPENAI_API_KEY", None)

import jwt
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from animeforge import models
from animeforge.api.dependencies import get_db
from animeforge.core.config import settings
from animeforge.db import Base, init_db
from animeforge.main import app
from animeforge.services.auth_session import AuthSession


class NetworkBlockedError(Exception):
    """Raised when a test attempts to make a network connection."""


def _block_socket_connect(*args, **kwargs):
    raise NetworkBlockedError("Network access is blocked in unit tests; mock the call instead.")


@pytest.fixture(autouse=True)
def block_network():
    with patch.object(socket.socket, "connect", _block_socket_connect):
        with patch.object(socket, "create_connection", _block_socket_connect):
            yield


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

def make_token(sub: str = "user-1", email: str = "hikari@example.com", expires_in: int = 3600, **claims) -> str:
    payload = {
        "sub": sub,
        "email": email,
        "aud": settings.JWT_AUDIENCE,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        "user_metadata": {"display_name": "Hikari"},
    }
    payload.update(claims)
    return jwt.encode(payload, settings.SUPABASE_JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


@pytest.fixture
def token_factory():
    return make_token


@pytest.fixture
def auth(db):
    return AuthSession(db).sign_in(make_token("user-1"))


@pytest.fixture
def other_auth(db):
    """A second signed-in user sharing the same database."""
    return AuthSession(db).sign_in(make_token("user-2", email="ren@example.com"))


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token('user-1')}"}


# ---------------------------------------------------------------------------
# Domain objects
# ---------------------------------------------------------------------------

@pytest.fixture
def project(db, auth):
    project = models.Project(
        name="Crystal Blade",
        description="A young swordswoman and a sentient crystal",
        genre="Fantasy",
        status=models.ProjectStatus.funding,
        created_by=auth.user_id,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@pytest.fixture
def client(db, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "MEDIA_ROOT", str(tmp_path / "media"))

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
