"""
User Model

Represents a registered account. Users are created on registration and
only ever changed by an admin updating their role; they are never deleted.

SQLAlchemy 2.0 Features Used:
- mapped_column(): Define columns with full type support
- Mapped[]: Type hint wrapper for SQLAlchemy columns
- relationship(): Define relationships between models
"""

from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.book import Book
    from app.models.review import Review


class UserRole(str, Enum):
    """
    Roles a user can hold.

    - USER: default role given on registration
    - ADMIN: may change roles and delete any review
    """
    USER = "user"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]


class User(Base):
    """
    User model representing registered users.

    Table: users

    Relationships:
    - books: One-to-Many with Book (books this user added)
    - reviews: One-to-Many with Review (reviews this user wrote)

    Indexes:
    - email: Unique index for login lookups
    - username: Unique index

    Example:
        user = User(
            username="alice",
            email="alice@example.com",
            hashed_password=hash_password("secret"),
            role=UserRole.USER.value,
        )
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
        comment="Unique username"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="User's email address (used for login)"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    role: Mapped[str] = mapped_column(
        String(20),
        default=UserRole.USER.value,
        nullable=False,
        comment="Authorization role (user, admin)"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
        comment="When the user registered"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="added_by",
    )

    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="user",
    )

    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="ck_user_role"),
    )

    def __repr__(self) -> str:
        return f"User(id={self.id}, username='{self.username}', role='{self.role}')"
