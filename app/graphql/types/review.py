"""
GraphQL Review Type

Defines the Review type for GraphQL queries.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated

import strawberry

from app.graphql.types.user import UserType

if TYPE_CHECKING:
    from app.graphql.types.book import BookType


@strawberry.type(name="Review")
class ReviewType:
    """
    GraphQL type representing a book review.

    `user` is the review's author; `book` is the reviewed book, shaped
    with its owner and reviews.
    """

    id: strawberry.ID
    rating: int
    comment: str
    created_at: datetime = strawberry.field(
        description="When the review was written, as an ISO-8601 string"
    )
    user: UserType
    book: Annotated["BookType", strawberry.lazy("app.graphql.types.book")]
