"""
GraphQL Context

Provides request context to all GraphQL resolvers:
- Database session for the request
- The authenticated principal (None for anonymous callers)

The context is created fresh for each GraphQL request and passed
to all resolvers via the `info` parameter.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from app.database import get_db
from app.services.security import Principal, get_user_from_token


class GraphQLContext(BaseContext):
    """
    Context object available to all GraphQL resolvers.

    Attributes:
        db: SQLAlchemy database session
        user: Principal decoded from the bearer token, or None
    """

    def __init__(self, db: Session, user: Principal | None = None):
        super().__init__()
        self.db = db
        self.user = user


async def get_context(
    request: Request,
    db: Session = Depends(get_db),
) -> GraphQLContext:
    """
    Create GraphQL context for each request.

    Called by Strawberry as a FastAPI dependency, so the session comes from
    `get_db` and is closed when the request ends. An invalid or missing
    token leaves the context anonymous; it never fails the request.

    Args:
        request: FastAPI request object
        db: Request-scoped database session

    Returns:
        GraphQLContext with db session and optional principal
    """
    user = get_user_from_token(request.headers.get("Authorization"))
    return GraphQLContext(db=db, user=user)
