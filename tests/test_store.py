"""
Tests for the Store-Access Service

- Loaders return fully expanded records
- Lookups raise RecordNotFoundError for missing rows
- Database failures surface as typed store errors
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.database import Base, enable_sqlite_foreign_keys
from app.models import Book, Review, User, UserRole
from app.schemas.records import BookRecord, UserRecord
from app.services import store


class TestBookLoaders:
    """Tests for load_books / load_book."""

    def test_load_books_empty(self, db_session: Session):
        assert store.load_books(db_session) == []

    def test_load_book_expands_owner_and_reviews(
        self, db_session: Session, sample_review: Review, sample_user: User
    ):
        record = store.load_book(db_session, sample_review.book_id)

        assert isinstance(record, BookRecord)
        assert record.added_by.username == sample_user.username
        assert len(record.reviews) == 1
        assert record.reviews[0].user.id == sample_user.id
        assert record.reviews[0].rating == 4

    def test_load_books_expands_every_book(
        self, db_session: Session, sample_book: Book, second_user: User
    ):
        store.create_book(
            db_session,
            title="Emma",
            author="Jane Austen",
            description="A comedy of manners.",
            added_by_id=second_user.id,
        )

        records = store.load_books(db_session)

        assert [r.title for r in records] == ["1984", "Emma"]
        assert records[1].added_by.username == "seconduser"
        assert records[1].reviews == []

    def test_load_missing_book(self, db_session: Session):
        with pytest.raises(store.RecordNotFoundError) as exc_info:
            store.load_book(db_session, 9999)

        assert exc_info.value.entity == "Book"

    def test_book_exists(self, db_session: Session, sample_book: Book):
        assert store.book_exists(db_session, sample_book.id) is True
        assert store.book_exists(db_session, 9999) is False


class TestUsers:
    """Tests for user lookups and writes."""

    def test_create_user_defaults_to_user_role(self, db_session: Session):
        record = store.create_user(
            db_session,
            username="alice",
            email="a@x.com",
            hashed_password="$2b$10$placeholderhashvalue",
        )

        assert isinstance(record, UserRecord)
        assert record.role == "user"
        assert "hashed_password" not in record.model_dump()

    def test_username_or_email_taken(self, db_session: Session, sample_user: User):
        assert store.username_or_email_taken(db_session, "testuser", "new@example.com")
        assert store.username_or_email_taken(db_session, "newname", "testuser@example.com")
        assert not store.username_or_email_taken(db_session, "newname", "new@example.com")

    def test_find_credentials(self, db_session: Session, sample_user: User):
        credentials = store.find_credentials(db_session, sample_user.email)

        assert credentials.user.id == sample_user.id
        assert credentials.hashed_password == sample_user.hashed_password

    def test_find_credentials_unknown_email(self, db_session: Session):
        with pytest.raises(store.RecordNotFoundError):
            store.find_credentials(db_session, "nobody@example.com")

    def test_update_user_role(self, db_session: Session, sample_user: User):
        record = store.update_user_role(db_session, sample_user.id, UserRole.ADMIN)

        assert record.role == "admin"

    def test_update_missing_user_role(self, db_session: Session):
        with pytest.raises(store.RecordNotFoundError):
            store.update_user_role(db_session, 9999, UserRole.ADMIN)


class TestReviews:
    """Tests for review writes and lookups."""

    def test_create_review_expands_author(
        self, db_session: Session, sample_book: Book, second_user: User
    ):
        record = store.create_review(
            db_session,
            book_id=sample_book.id,
            user_id=second_user.id,
            rating=5,
            comment="Superb.",
        )

        assert record.user.username == "seconduser"
        assert record.book_id == sample_book.id
        assert record.created_at is not None

    def test_find_and_delete_review(self, db_session: Session, sample_review: Review):
        review_id = sample_review.id

        stored = store.find_review(db_session, review_id)
        assert stored.user_id == sample_review.user_id

        store.delete_review(db_session, review_id)

        with pytest.raises(store.RecordNotFoundError):
            store.find_review(db_session, review_id)

    def test_delete_missing_review(self, db_session: Session):
        with pytest.raises(store.RecordNotFoundError):
            store.delete_review(db_session, 9999)


class TestStoreFailures:
    """Database failures are reported as typed store errors."""

    def test_database_error_becomes_store_unavailable(self):
        db = MagicMock(spec=Session)
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(store.StoreUnavailableError) as exc_info:
            store.load_books(db)

        assert exc_info.value.operation == "load_books"
        db.rollback.assert_called_once()

    def test_integrity_error_on_register_becomes_duplicate(self):
        db = MagicMock(spec=Session)
        db.commit.side_effect = IntegrityError("INSERT", {}, Exception("unique"))

        with pytest.raises(store.DuplicateRecordError):
            store.create_user(
                db,
                username="alice",
                email="a@x.com",
                hashed_password="hash",
            )

        db.rollback.assert_called_once()

    def test_not_found_is_not_reported_as_unavailable(self):
        db = MagicMock(spec=Session)
        db.get.return_value = None

        with pytest.raises(store.RecordNotFoundError):
            store.find_review(db, 1)

        db.rollback.assert_not_called()

    def test_ping(self, db_session: Session):
        assert store.ping(db_session) is True

        broken = MagicMock(spec=Session)
        broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        assert store.ping(broken) is False


class TestForeignKeys:
    """SQLite enforces references to users and books."""

    def test_pragma_enabled_on_test_engine(self, db_session: Session):
        assert db_session.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_book_for_missing_user_is_rejected(self):
        engine = create_engine("sqlite://", poolclass=StaticPool)
        enable_sqlite_foreign_keys(engine)
        Base.metadata.create_all(bind=engine)

        with Session(engine) as db:
            with pytest.raises(store.StoreUnavailableError):
                store.create_book(
                    db,
                    title="Orphan",
                    author="Nobody",
                    description="Owned by a deleted account.",
                    added_by_id=9999,
                )

            assert store.load_books(db) == []

        engine.dispose()
