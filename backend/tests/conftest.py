import os

# Ensure JWT_SECRET exists before importing app.main (it calls require_jwt_secret() at import time).
os.environ.setdefault("JWT_SECRET", "test_jwt_secret")
# Keep app.core.database from building a Postgres engine; tests swap get_db anyway.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth.identity import Identity
from app.core.base import Base
from app.core import config as app_config

# Import models so they register with SQLAlchemy metadata.
from app.models.company import Company  # noqa: F401
from app.models.application import Application  # noqa: F401
from app.models.application_activity import ApplicationActivity  # noqa: F401

from app.core.database import get_db
from app.dependencies.auth import get_current_identity


@pytest.fixture(scope="session")
def db_engine():
    # In-memory SQLite for fast, isolated tests.
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture()
def db_session(db_engine):
    # The in-memory DB persists across tests with StaticPool; reset schema per test.
    Base.metadata.drop_all(bind=db_engine)
    Base.metadata.create_all(bind=db_engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def app(db_session):
    app_config.settings.JWT_SECRET = app_config.settings.JWT_SECRET or "test_jwt_secret"

    import app.main as main

    fastapi_app = main.app

    def override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def users():
    """
    Two distinct authenticated identities for ownership / isolation tests.
    """
    user_a = Identity.from_claims({"sub": "user-a", "email": "test@example.com"})
    user_b = Identity.from_claims({"sub": "user-b", "email": "other@example.com"})
    return user_a, user_b


@pytest.fixture()
def client(app, users):
    """
    Default client authenticated as user_a.
    """
    user_a, _ = users
    app.dependency_overrides[get_current_identity] = lambda: user_a
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.pop(get_current_identity, None)


@pytest.fixture()
def client_for(app):
    """
    Context manager to create a client authenticated as an arbitrary identity.

    Usage:
        with client_for(identity) as c:
            ...
    """

    @contextmanager
    def _client_for(identity: Identity):
        app.dependency_overrides[get_current_identity] = lambda: identity
        with TestClient(app) as c:
            yield c
        app.dependency_overrides.pop(get_current_identity, None)

    return _client_for


@pytest.fixture()
def anon_client(app):
    """Client with the real bearer-token dependency in place."""
    app.dependency_overrides.pop(get_current_identity, None)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def company_for(db_session):
    """Insert a company row directly for the given owner id."""

    def _company_for(owner_id: str, name: str = "Acme", location: str | None = None) -> Company:
        company = Company(owner_id=owner_id, name=name, location=location)
        db_session.add(company)
        db_session.commit()
        db_session.refresh(company)
        return company

    return _company_for
