"""
Pydantic Schemas Package

Records exchanged between the store-access layer and the GraphQL layer.
They control exactly what data can reach a response: none of them carries
a password hash.
"""

from app.schemas.records import BookRecord, ReviewRecord, StoredReview, UserRecord

__all__ = [
    "UserRecord",
    "ReviewRecord",
    "BookRecord",
    "StoredReview",
]
