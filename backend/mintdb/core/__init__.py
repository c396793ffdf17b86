"""
Core module - errors and verification code helpers.
"""
from mintdb.core.errors import (
    DbError,
    DbErrorType,
    MissingEnvVarError,
    NotFoundError,
    AlreadyExistsError,
    ThrottledError,
)
from mintdb.core.security import hash_code, generate_sms_code

__all__ = [
    "DbError",
    "DbErrorType",
    "MissingEnvVarError",
    "NotFoundError",
    "AlreadyExistsError",
    "ThrottledError",
    "hash_code",
    "generate_sms_code",
]
