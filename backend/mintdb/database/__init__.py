"""
Database module - MongoDB connection and collection definitions.
"""
from mintdb.database.connections import create_mongo_client
from mintdb.database.layout import Collections, create_indexes

__all__ = [
    "create_mongo_client",
    "Collections",
    "create_indexes",
]
