"""
GraphQL Book Type

Defines the Book type for GraphQL queries.
"""

import strawberry

from app.graphql.types.review import ReviewType
from app.graphql.types.user import UserType


@strawberry.type(name="Book")
class BookType:
    """
    GraphQL type representing a book.

    Relationships are populated by the shaping functions in
    `app.graphql.queries` from expanded records.
    """

    id: strawberry.ID
    title: str
    author: str
    description: str
    added_by: UserType
    reviews: list[ReviewType] = strawberry.field(default_factory=list)
