"""
Pydantic models for stored records.
"""
from mintdb.models.base import Record
from mintdb.models.user import User
from mintdb.models.token import Token
from mintdb.models.collection import Collection

__all__ = [
    "Record",
    "User",
    "Token",
    "Collection",
]
