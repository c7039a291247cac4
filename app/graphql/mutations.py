"""
GraphQL Mutation Resolvers

Defines all write operations (mutations) for the GraphQL API.

Every mutation runs the same checks in the same order:
authentication, authorization, input and referential validation, the
single write, then response shaping. Classified errors raised along the
way reach the client unchanged; anything else becomes an opaque
INTERNAL_SERVER_ERROR.
"""

import logging

import strawberry
from strawberry.types import Info

from app.graphql.context import GraphQLContext
from app.graphql.errors import (
    AuthenticationError,
    BadUserInputError,
    ForbiddenError,
    internal_errors,
)
from app.graphql.queries import book_to_graphql, parse_id, user_to_graphql
from app.graphql.types.book import BookType
from app.graphql.types.review import ReviewType
from app.graphql.types.user import AuthPayload, UserType
from app.models.user import UserRole
from app.services import store
from app.services.security import (
    Principal,
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def require_auth(info: Info[GraphQLContext, None], message: str) -> Principal:
    """Helper to require authentication and return the principal."""
    user = info.context.user
    if user is None:
        raise AuthenticationError(message)
    return user


# =============================================================================
# Mutation Type
# =============================================================================


@strawberry.type
class Mutation:
    """
    GraphQL Mutation type containing all write operations.

    register and login are open; everything else needs a bearer token.
    """

    # =========================================================================
    # Authentication Mutations
    # =========================================================================

    @strawberry.mutation(description="Register a new user account")
    def register(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        email: str,
        password: str,
    ) -> AuthPayload:
        """
        Create a new account with the `user` role.

        Both the username and the email must be unused.
        """
        with internal_errors("Error registering user"):
            db = info.context.db

            if store.username_or_email_taken(db, username, email):
                raise BadUserInputError(
                    "User already exists with this email or username"
                )

            try:
                user = store.create_user(
                    db,
                    username=username,
                    email=email,
                    hashed_password=hash_password(password),
                )
            except store.DuplicateRecordError:
                raise BadUserInputError(
                    "User already exists with this email or username"
                )

            logger.info(f"Registered user {user.id} ({user.username})")
            return AuthPayload(
                token=create_access_token(user),
                user=user_to_graphql(user),
            )

    @strawberry.mutation(description="Login with email and password")
    def login(
        self,
        info: Info[GraphQLContext, None],
        email: str,
        password: str,
    ) -> AuthPayload:
        """
        Authenticate with email and password.

        An unknown email and a wrong password produce the same error.
        """
        with internal_errors("Error logging in"):
            try:
                credentials = store.find_credentials(info.context.db, email)
            except store.RecordNotFoundError:
                raise AuthenticationError("Invalid credentials")

            if not verify_password(password, credentials.hashed_password):
                raise AuthenticationError("Invalid credentials")

            return AuthPayload(
                token=create_access_token(credentials.user),
                user=user_to_graphql(credentials.user),
            )

    @strawberry.mutation(description="Change a user's role (admin only)")
    def update_user_role(
        self,
        info: Info[GraphQLContext, None],
        user_id: strawberry.ID,
        role: str,
    ) -> UserType:
        """
        Overwrite a user's role.

        Only admins may call this, including for their own account.
        """
        with internal_errors("Error updating user role"):
            principal = info.context.user
            if principal is None or not principal.is_admin:
                raise ForbiddenError("You are not authorized to update user roles")

            if role not in UserRole.values():
                raise BadUserInputError("Invalid role")

            target_id = parse_id(user_id)
            if target_id is None:
                raise BadUserInputError("User not found")

            try:
                user = store.update_user_role(
                    info.context.db, target_id, UserRole(role)
                )
            except store.RecordNotFoundError:
                raise BadUserInputError("User not found")

            logger.info(
                f"User {principal.id} set role of user {user.id} to {user.role}"
            )
            return user_to_graphql(user)

    # =========================================================================
    # Book Mutations
    # =========================================================================

    @strawberry.mutation(description="Add a new book")
    def add_book(
        self,
        info: Info[GraphQLContext, None],
        title: str,
        author: str,
        description: str,
    ) -> BookType:
        """
        Add a book owned by the caller.

        Requires authentication.
        """
        with internal_errors("Error adding book"):
            principal = require_auth(info, "You must be logged in to add a book")

            book = store.create_book(
                info.context.db,
                title=title,
                author=author,
                description=description,
                added_by_id=principal.id,
            )
            return book_to_graphql(book)

    # =========================================================================
    # Review Mutations
    # =========================================================================

    @strawberry.mutation(description="Add a review for a book")
    def add_review(
        self,
        info: Info[GraphQLContext, None],
        book_id: strawberry.ID,
        rating: int,
        comment: str,
    ) -> ReviewType:
        """
        Create a review for an existing book.

        Requires authentication. Rating must be between 1 and 5.
        """
        with internal_errors("Error adding review"):
            principal = require_auth(info, "You must be logged in to add a review")
            db = info.context.db

            target_id = parse_id(book_id)
            if target_id is None or not store.book_exists(db, target_id):
                raise BadUserInputError("Book not found")

            if rating < MIN_RATING or rating > MAX_RATING:
                raise BadUserInputError(
                    f"Rating must be between {MIN_RATING} and {MAX_RATING}"
                )

            review = store.create_review(
                db,
                book_id=target_id,
                user_id=principal.id,
                rating=rating,
                comment=comment,
            )

            # Shape the review inside its freshly loaded book so that
            # Review.book is fully expanded as well.
            book = book_to_graphql(store.load_book(db, target_id))
            return next(r for r in book.reviews if r.id == str(review.id))

    @strawberry.mutation(description="Delete a review")
    def delete_review(
        self,
        info: Info[GraphQLContext, None],
        id: strawberry.ID,
    ) -> bool:
        """
        Delete a review.

        Requires authentication. The review's author can delete it;
        admins can delete any review.
        """
        with internal_errors("Error deleting review"):
            principal = require_auth(
                info, "You must be logged in to delete a review"
            )
            db = info.context.db

            review_id = parse_id(id)
            if review_id is None:
                raise BadUserInputError("Review not found")

            try:
                review = store.find_review(db, review_id)
            except store.RecordNotFoundError:
                raise BadUserInputError("Review not found")

            if not principal.is_admin and review.user_id != principal.id:
                raise ForbiddenError("You are not authorized to delete this review")

            store.delete_review(db, review_id)
            logger.info(f"User {principal.id} deleted review {review_id}")
            return True
