"""
Store-Access Service

All database reads and writes used by the GraphQL resolvers.

Loaders return expanded records from `app.schemas.records`: every
relationship a response needs is fetched with `selectinload`, so listing N
books costs one query per relationship rather than one per book.

Error Model
===========
Failures are raised as typed store errors so callers can tell them apart:

- RecordNotFoundError: the requested row does not exist
- DuplicateRecordError: a uniqueness constraint rejected a new row
- StoreUnavailableError: the database could not complete the operation

All three derive from StoreError. Any SQLAlchemyError is logged, the
session is rolled back, and StoreUnavailableError is raised in its place.

Usage:
    from app.services import store

    book = store.load_book(db, book_id)
    print(book.added_by.username, len(book.reviews))
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import BaseModel, ConfigDict
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.models import Book, Review, User, UserRole
from app.schemas.records import BookRecord, ReviewRecord, StoredReview, UserRecord

logger = logging.getLogger(__name__)


# =============================================================================
# Store errors
# =============================================================================


class StoreError(Exception):
    """Base class for store-access failures."""

    pass


class RecordNotFoundError(StoreError):
    """Raised when a requested record does not exist."""

    def __init__(self, entity: str, identifier: object):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} {identifier!r} not found")


class DuplicateRecordError(StoreError):
    """Raised when a new record collides with a unique constraint."""

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"{entity} already exists")


class StoreUnavailableError(StoreError):
    """Raised when the database fails to complete an operation."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Store failure during {operation}")


@contextmanager
def _store_operation(db: Session, operation: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into StoreUnavailableError."""
    try:
        yield
    except StoreError:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error during {operation}: {e}")
        raise StoreUnavailableError(operation) from e


class UserCredentials(BaseModel):
    """A user's public record together with the stored password hash."""

    user: UserRecord
    hashed_password: str

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Users
# =============================================================================


def username_or_email_taken(db: Session, username: str, email: str) -> bool:
    """Check whether either the username or the email is already registered."""
    with _store_operation(db, "username_or_email_taken"):
        stmt = select(User.id).where(
            or_(User.email == email, User.username == username)
        )
        return db.execute(stmt).first() is not None


def create_user(
    db: Session,
    *,
    username: str,
    email: str,
    hashed_password: str,
    role: UserRole = UserRole.USER,
) -> UserRecord:
    """
    Insert a new user.

    Raises:
        DuplicateRecordError: If the username or email is already in use
        StoreUnavailableError: On any other database failure
    """
    user = User(
        username=username,
        email=email,
        hashed_password=hashed_password,
        role=role.value,
    )

    with _store_operation(db, "create_user"):
        db.add(user)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.info(f"Rejected duplicate user registration: {username}")
            raise DuplicateRecordError("User") from e
        db.refresh(user)
        return UserRecord.model_validate(user)


def find_credentials(db: Session, email: str) -> UserCredentials:
    """
    Fetch a user's record and password hash by email.

    Raises:
        RecordNotFoundError: If no user has this email
    """
    with _store_operation(db, "find_credentials"):
        stmt = select(User).where(User.email == email)
        user = db.execute(stmt).scalar_one_or_none()

    if user is None:
        raise RecordNotFoundError("User", email)

    return UserCredentials(
        user=UserRecord.model_validate(user),
        hashed_password=user.hashed_password,
    )


def update_user_role(db: Session, user_id: int, role: UserRole) -> UserRecord:
    """
    Overwrite a user's role.

    Raises:
        RecordNotFoundError: If the user does not exist
    """
    with _store_operation(db, "update_user_role"):
        user = db.get(User, user_id)
        if user is None:
            raise RecordNotFoundError("User", user_id)

        user.role = role.value
        db.commit()
        db.refresh(user)
        return UserRecord.model_validate(user)


# =============================================================================
# Books
# =============================================================================


def _expanded_books():
    return select(Book).options(
        selectinload(Book.added_by),
        selectinload(Book.reviews).selectinload(Review.user),
    )


def load_books(db: Session) -> list[BookRecord]:
    """
    Fetch every book with its owner and reviews expanded.

    Unbounded: there is no pagination. Ordered by creation (id).
    """
    with _store_operation(db, "load_books"):
        stmt = _expanded_books().order_by(Book.id)
        books = db.execute(stmt).scalars().all()
        return [BookRecord.model_validate(book) for book in books]


def load_book(db: Session, book_id: int) -> BookRecord:
    """
    Fetch one book with its owner and reviews expanded.

    Raises:
        RecordNotFoundError: If the book does not exist
    """
    with _store_operation(db, "load_book"):
        stmt = _expanded_books().where(Book.id == book_id)
        book = db.execute(stmt).scalar_one_or_none()
        if book is None:
            raise RecordNotFoundError("Book", book_id)
        return BookRecord.model_validate(book)


def book_exists(db: Session, book_id: int) -> bool:
    with _store_operation(db, "book_exists"):
        stmt = select(Book.id).where(Book.id == book_id)
        return db.execute(stmt).first() is not None


def create_book(
    db: Session,
    *,
    title: str,
    author: str,
    description: str,
    added_by_id: int,
) -> BookRecord:
    """Insert a book owned by `added_by_id` and return it expanded."""
    book = Book(
        title=title,
        author=author,
        description=description,
        added_by_id=added_by_id,
    )

    with _store_operation(db, "create_book"):
        db.add(book)
        db.commit()
        db.refresh(book)

    return load_book(db, book.id)


# =============================================================================
# Reviews
# =============================================================================


def create_review(
    db: Session,
    *,
    book_id: int,
    user_id: int,
    rating: int,
    comment: str,
) -> ReviewRecord:
    """
    Insert a review and return it with its author expanded.

    The caller is responsible for checking that the book exists and the
    rating is in range.
    """
    review = Review(
        book_id=book_id,
        user_id=user_id,
        rating=rating,
        comment=comment,
    )

    with _store_operation(db, "create_review"):
        db.add(review)
        db.commit()

        stmt = (
            select(Review)
            .options(selectinload(Review.user))
            .where(Review.id == review.id)
        )
        review = db.execute(stmt).scalar_one()
        return ReviewRecord.model_validate(review)


def find_review(db: Session, review_id: int) -> StoredReview:
    """
    Fetch a review's ownership data.

    Raises:
        RecordNotFoundError: If the review does not exist
    """
    with _store_operation(db, "find_review"):
        review = db.get(Review, review_id)
        if review is None:
            raise RecordNotFoundError("Review", review_id)
        return StoredReview.model_validate(review)


def delete_review(db: Session, review_id: int) -> None:
    """
    Permanently delete a review.

    Raises:
        RecordNotFoundError: If the review does not exist
    """
    with _store_operation(db, "delete_review"):
        review = db.get(Review, review_id)
        if review is None:
            raise RecordNotFoundError("Review", review_id)

        db.delete(review)
        db.commit()


# =============================================================================
# Health
# =============================================================================


def ping(db: Session) -> bool:
    """Return True if the database answers a trivial query."""
    try:
        db.execute(select(1))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return False
