"""
GraphQL User Type

Defines the User type and the authentication payload.
Only exposes public/safe fields: the password hash never appears here.
"""

import strawberry


@strawberry.type(name="User")
class UserType:
    """
    GraphQL type representing a user.

    Built from a UserRecord; shown as the owner of a book, the author of
    a review, and in authentication payloads.
    """

    id: strawberry.ID
    username: str
    email: str
    role: str


@strawberry.type
class AuthPayload:
    """
    Response type for register and login.

    Contains the access token and the user it identifies.
    """

    token: str
    user: UserType
