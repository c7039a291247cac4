"""
Expanded Record Schemas

Read-only snapshots returned by the store-access loaders in
`app.services.store`.

Every reference a response needs is already expanded here:
- BookRecord.added_by is a full UserRecord
- BookRecord.reviews is a list of ReviewRecord
- ReviewRecord.user is a full UserRecord

The GraphQL shaping functions only accept these records, so a field
resolver can never be handed a bare foreign key.

Pydantic v2 Features Used:
- model_config: from_attributes=True builds records from ORM objects
- frozen=True: records are immutable once loaded
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    """
    Public projection of a user.

    The password hash is deliberately not a field.
    """

    id: int
    username: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ReviewRecord(BaseModel):
    """A review with its author expanded."""

    id: int
    rating: int
    comment: str
    created_at: datetime
    book_id: int
    user: UserRecord

    model_config = ConfigDict(from_attributes=True, frozen=True)


class BookRecord(BaseModel):
    """A book with its owner and its reviews expanded."""

    id: int
    title: str
    author: str
    description: str
    created_at: datetime
    added_by: UserRecord
    reviews: list[ReviewRecord] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True, frozen=True)


class StoredReview(BaseModel):
    """
    Review row without expansion.

    Returned by lookups that only need ownership (e.g. deleting a review).
    """

    id: int
    book_id: int
    user_id: int

    model_config = ConfigDict(from_attributes=True, frozen=True)
