"""
GraphQL Errors

Classified errors surfaced to clients. Each carries its classification
code in `extensions.code`:

- UNAUTHENTICATED: no valid principal
- FORBIDDEN: authenticated but not allowed
- BAD_USER_INPUT: validation or referential failure
- INTERNAL_SERVER_ERROR: anything unexpected, including store failures
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from graphql import GraphQLError

logger = logging.getLogger(__name__)


class ClassifiedError(GraphQLError):
    """A GraphQL error tagged with a classification code."""

    code: str = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message, extensions={"code": self.code})


class AuthenticationError(ClassifiedError):
    """Raised when authentication is required but not provided."""

    code = "UNAUTHENTICATED"


class ForbiddenError(ClassifiedError):
    """Raised when the principal lacks permission for an operation."""

    code = "FORBIDDEN"


class BadUserInputError(ClassifiedError):
    """Raised when input validation or a referential check fails."""

    code = "BAD_USER_INPUT"


class InternalServerError(ClassifiedError):
    """Opaque error for unexpected failures; uses the default code."""


@contextmanager
def internal_errors(message: str) -> Iterator[None]:
    """
    Run a resolver body, hiding unexpected failures behind `message`.

    GraphQL errors raised deliberately pass through untouched. Anything
    else is logged with its traceback and replaced by an
    InternalServerError whose message carries no internal detail.

    Usage:
        with internal_errors("Error adding book"):
            ...
    """
    try:
        yield
    except GraphQLError:
        raise
    except Exception as e:
        logger.exception(f"{message}: {e}")
        raise InternalServerError(message) from e
