"""
Lookup schemas for DbHelper queries.
"""
from mintdb.schemas.queries import (
    ByUUID,
    ByContract,
    ByFields,
    TokenQuery,
    CollectionQuery,
)

__all__ = [
    "ByUUID",
    "ByContract",
    "ByFields",
    "TokenQuery",
    "CollectionQuery",
]
