"""
GraphQL Package

The book-review GraphQL API, built with Strawberry GraphQL.

Features:
- Queries: getBooks, getBook
- Mutations: register, login, addBook, addReview, deleteReview,
  updateUserRole
- Authentication via a bearer JWT resolved in the context
- Classified errors in `extensions.code`

Example Query:
    query {
        getBooks {
            id
            title
            addedBy { username }
            reviews { rating comment user { username } }
        }
    }
"""

import strawberry
from strawberry.fastapi import GraphQLRouter

from app.config import get_settings
from app.graphql.context import get_context
from app.graphql.mutations import Mutation
from app.graphql.queries import Query

schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
)


def create_graphql_router() -> GraphQLRouter:
    """
    Create the GraphQL router for FastAPI.

    Returns:
        GraphQLRouter configured with schema and context
    """
    settings = get_settings()
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        # Options: "graphiql", "apollo-sandbox", or None to disable
        graphql_ide="apollo-sandbox" if settings.graphql_ide_enabled else None,
    )


__all__ = ["schema", "create_graphql_router"]
