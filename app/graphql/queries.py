"""
GraphQL Query Resolvers

Defines all read operations (queries) for the GraphQL API, plus the
functions that shape expanded records into GraphQL types.
"""

import strawberry
from strawberry.types import Info

from app.graphql.context import GraphQLContext
from app.graphql.errors import internal_errors
from app.graphql.types.book import BookType
from app.graphql.types.review import ReviewType
from app.graphql.types.user import UserType
from app.schemas.records import BookRecord, ReviewRecord, UserRecord
from app.services import store


# Primary keys are 32-bit signed INTEGER columns
MAX_ID = 2**31 - 1


def parse_id(value: strawberry.ID | str) -> int | None:
    """
    Convert a GraphQL ID to a primary key, or None if it is not one.

    Only canonical ASCII digit strings in the primary-key range are
    accepted, so "0_1", "+1" or "01" never alias an existing row.
    """
    raw = str(value)
    if not (raw.isascii() and raw.isdigit()) or raw.startswith("0"):
        return None
    pk = int(raw)
    return pk if 0 < pk <= MAX_ID else None


def user_to_graphql(user: UserRecord) -> UserType:
    """Convert a UserRecord to the public GraphQL UserType."""
    return UserType(
        id=strawberry.ID(str(user.id)),
        username=user.username,
        email=user.email,
        role=user.role,
    )


def review_to_graphql(review: ReviewRecord, book: BookType) -> ReviewType:
    """Convert a ReviewRecord to ReviewType, attached to its shaped book."""
    return ReviewType(
        id=strawberry.ID(str(review.id)),
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
        user=user_to_graphql(review.user),
        book=book,
    )


def book_to_graphql(book: BookRecord) -> BookType:
    """
    Convert a BookRecord to BookType.

    Each review's `book` field points back at the returned BookType.
    """
    book_type = BookType(
        id=strawberry.ID(str(book.id)),
        title=book.title,
        author=book.author,
        description=book.description,
        added_by=user_to_graphql(book.added_by),
    )
    book_type.reviews = [review_to_graphql(r, book_type) for r in book.reviews]
    return book_type


@strawberry.type
class Query:
    """
    GraphQL Query type containing all read operations.

    Queries are public: no principal is required.
    """

    @strawberry.field(description="Get every book with its owner and reviews")
    def get_books(self, info: Info[GraphQLContext, None]) -> list[BookType]:
        """
        Get all books.

        Not paginated. Fails as a whole if any part of the expansion fails.
        """
        with internal_errors("Error fetching books"):
            books = store.load_books(info.context.db)
            return [book_to_graphql(book) for book in books]

    @strawberry.field(description="Get a single book by ID")
    def get_book(
        self,
        info: Info[GraphQLContext, None],
        id: strawberry.ID,
    ) -> BookType | None:
        """
        Get a single book with its reviews.

        Returns:
            Book if found, None otherwise
        """
        with internal_errors("Error fetching book"):
            book_id = parse_id(id)
            if book_id is None:
                return None

            try:
                book = store.load_book(info.context.db, book_id)
            except store.RecordNotFoundError:
                return None

            return book_to_graphql(book)
