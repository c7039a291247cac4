"""
pytest Fixtures for Book Reviews API Tests

Shared fixtures used across all test files.

For database tests, we use:
- session scope for the engine (expensive to create)
- function scope for sessions (isolation between tests)
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GRAPHQL_IDE_ENABLED"] = "false"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, enable_sqlite_foreign_keys, get_db
from app.main import app
from app.models import Book, Review, User, UserRole
from app.schemas.records import UserRecord
from app.services.security import create_access_token, hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory keeps tests fast and self-contained. StaticPool keeps the
# single connection alive so the database survives between sessions.


@pytest.fixture(scope="session")
def engine():
    """Create a SQLite in-memory database engine with all tables."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is wrapped in a transaction that's rolled back,
    ensuring test isolation without needing to recreate tables.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client bound to the test database.

    The GraphQL context gets its session from `get_db`, so overriding the
    dependency routes every resolver to the test session.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# HELPERS
# =============================================================================


def make_token(user: User) -> str:
    """Issue an access token for a stored user."""
    return create_access_token(UserRecord.model_validate(user))


def _create_user(
    db: Session, username: str, email: str, password: str, role: UserRole
) -> User:
    user = User(
        username=username,
        email=email,
        hashed_password=hash_password(password),
        role=role.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample user for testing."""
    return _create_user(
        db_session, "testuser", "testuser@example.com", "SecurePass123", UserRole.USER
    )


@pytest.fixture
def second_user(db_session: Session) -> User:
    """Create a second user for testing ownership scenarios."""
    return _create_user(
        db_session, "seconduser", "seconduser@example.com", "SecurePass456", UserRole.USER
    )


@pytest.fixture
def admin_user(db_session: Session) -> User:
    """Create an admin for testing moderation and role changes."""
    return _create_user(
        db_session, "admin", "admin@example.com", "AdminPass123", UserRole.ADMIN
    )


@pytest.fixture
def sample_book(db_session: Session, sample_user: User) -> Book:
    """Create a sample book added by sample_user."""
    book = Book(
        title="1984",
        author="George Orwell",
        description="A dystopian novel set in a totalitarian society.",
        added_by_id=sample_user.id,
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def sample_review(
    db_session: Session,
    sample_book: Book,
    sample_user: User,
) -> Review:
    """Create a sample review written by sample_user."""
    review = Review(
        book_id=sample_book.id,
        user_id=sample_user.id,
        rating=4,
        comment="I really enjoyed reading this book.",
    )
    db_session.add(review)
    db_session.commit()
    db_session.refresh(review)
    return review
