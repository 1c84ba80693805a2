"""Pytest configuration and shared fixtures.

This module provides fixtures and configuration used across all tests.
"""

import itertools
import os
from datetime import datetime
from typing import Callable, Dict, Generator, Iterable, Optional, Tuple

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set required environment variables for tests BEFORE importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("DATABASE_AUTO_CREATE", "false")
os.environ.setdefault("JWT_SECRET", "test_jwt_secret_for_testing_only")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("PUBLIC_BASE_URL", "https://feedback.example.com")

from fastapi.testclient import TestClient

from feedback_app.main import app
from feedback_app.models import Admin, FeedbackSession, Question
from feedback_app.models.database import Base, get_db
from feedback_app.services.security import create_access_token, get_password_hash

DEFAULT_PASSWORD = "correct-horse-battery"


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine with SQLite in-memory database.

    Yields:
        Engine: SQLAlchemy engine for testing

    Note:
        A single shared connection (StaticPool) lets the TestClient's worker
        threads see the same in-memory database as the test itself.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,  # Set to True for SQL debugging
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enable foreign key support for SQLite
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Create all tables
    Base.metadata.create_all(engine)

    yield engine

    # Drop all tables after test
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine) -> sessionmaker:
    """Session factory bound to the test engine."""
    return sessionmaker(
        bind=db_engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture(scope="function")
def db_session(session_factory) -> Generator[Session, None, None]:
    """Create a test database session.

    Args:
        session_factory: Test session factory fixture

    Yields:
        Session: SQLAlchemy session for testing

    Note:
        Session is rolled back after each test to ensure isolation.
    """
    session = session_factory()

    yield session

    # Rollback any uncommitted changes
    session.rollback()
    session.close()


@pytest.fixture(scope="function")
def client(session_factory) -> Generator[TestClient, None, None]:
    """FastAPI test client whose requests use the test database.

    Every request gets its own session, as in production.
    """
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_admin(db_session) -> Callable[..., Admin]:
    """Factory storing admins with a known password.

    Returns:
        Callable taking optional name, email and password
    """
    counter = itertools.count(1)

    def _make(name: str = "Test Admin", email: Optional[str] = None,
              password: str = DEFAULT_PASSWORD) -> Admin:
        admin = Admin(
            name=name,
            email=email or f"admin{next(counter)}@example.com",
            password_hash=get_password_hash(password),
        )
        db_session.add(admin)
        db_session.commit()
        return admin

    return _make


@pytest.fixture
def admin(make_admin) -> Admin:
    """The admin acting in most tests."""
    return make_admin(name="Ada Lovelace", email="ada@example.com")


@pytest.fixture
def other_admin(make_admin) -> Admin:
    """A second admin who owns nothing the first admin owns."""
    return make_admin(name="Grace Hopper", email="grace@example.com")


def _bearer(admin: Admin) -> Dict[str, str]:
    """Authorization header carrying a fresh token for ``admin``."""
    return {"Authorization": f"Bearer {create_access_token(admin.id, admin.email)}"}


@pytest.fixture
def auth_headers(admin) -> Dict[str, str]:
    return _bearer(admin)


@pytest.fixture
def other_auth_headers(other_admin) -> Dict[str, str]:
    return _bearer(other_admin)


@pytest.fixture
def make_session(db_session) -> Callable[..., FeedbackSession]:
    """Factory storing a feedback session with questions.

    Questions are given as (text, type, is_required) tuples.
    """
    def _make(owner: Admin, questions: Iterable[Tuple[str, str, bool]] = (),
              title: str = "Spring meetup") -> FeedbackSession:
        session = FeedbackSession(
            title=title,
            description="Tell us how it went",
            date=datetime(2025, 4, 12),
            admin_id=owner.id,
        )
        session.questions = [
            Question(text=text, type=qtype, is_required=required)
            for text, qtype, required in questions
        ]
        db_session.add(session)
        db_session.commit()
        return session

    return _make


@pytest.fixture
def three_question_session(make_session, admin) -> FeedbackSession:
    """Session with one required question of each type, in YES_NO, RATING, TEXT order."""
    return make_session(
        admin,
        questions=[
            ("Would you come again?", "YES_NO", True),
            ("Rate the venue", "RATING", True),
            ("Anything else?", "TEXT", True),
        ],
    )
