"""
GraphQL Types Package

Types defined here:
- BookType: Book with its owner and reviews
- ReviewType: Book review with its author and book
- UserType: Public user information
- AuthPayload: Token plus user, returned by register and login
"""

from app.graphql.types.book import BookType
from app.graphql.types.review import ReviewType
from app.graphql.types.user import AuthPayload, UserType

__all__ = [
    "BookType",
    "ReviewType",
    "UserType",
    "AuthPayload",
]
