"""
mintdb - MongoDB data access for users, tokens and collections.
"""
from mintdb.config import Settings, get_settings
from mintdb.core.errors import (
    DbError,
    DbErrorType,
    MissingEnvVarError,
    NotFoundError,
    AlreadyExistsError,
    ThrottledError,
)
from mintdb.models import User, Token, Collection
from mintdb.repository import DbHelper
from mintdb.schemas import ByUUID, ByContract, ByFields

__all__ = [
    "Settings",
    "get_settings",
    "DbError",
    "DbErrorType",
    "MissingEnvVarError",
    "NotFoundError",
    "AlreadyExistsError",
    "ThrottledError",
    "User",
    "Token",
    "Collection",
    "DbHelper",
    "ByUUID",
    "ByContract",
    "ByFields",
]
