"""
SQLAlchemy Models Package

Model Relationships:
- User -> Book: One-to-Many (a user adds many books)
- User -> Review: One-to-Many (a user writes many reviews)
- Book -> Review: One-to-Many (a book collects many reviews)

All models are imported here so Alembic and `create_tables()` see them.
"""

from app.models.user import User, UserRole
from app.models.book import Book
from app.models.review import Review

__all__ = [
    "User",
    "UserRole",
    "Book",
    "Review",
]
