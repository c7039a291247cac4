"""
Book Model

A book added by an authenticated user. Books are immutable once created:
no operation updates or deletes them.

`added_by` is a lookup reference to the User who created the book; the
book does not own that user record.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.review import Review
    from app.models.user import User


class Book(Base):
    """
    Book model.

    Table: books

    Fields:
    - title: Book title
    - author: Author name, free text
    - description: Book summary
    - added_by_id: User who added the book

    Relationships:
    - added_by: Many-to-One with User
    - reviews: One-to-Many with Review

    Example:
        book = Book(
            title="1984",
            author="George Orwell",
            description="A dystopian novel...",
            added_by_id=user.id,
        )
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Author name"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Book summary/description"
    )

    added_by_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="User who added the book"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
        comment="When the book was added"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    added_by: Mapped["User"] = relationship(
        "User",
        back_populates="books",
    )

    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="book",
        order_by="Review.id",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', author='{self.author}')"
