"""
Collection names and uniqueness constraints.

Structure:
- users: phone-verified user records
- tokens: minted tokens, one per (contractAddress, _id)
- collections: caller-defined token collections
"""
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class Collections:
    """Collection names in the data layer database."""
    USERS = "users"
    TOKENS = "tokens"
    COLLECTIONS = "collections"
    
    # Unique indexes backing the create-time existence checks
    INDEXES = {
        "users": [
            {"keys": [("uuid", 1)], "unique": True},
            {"keys": [("phone", 1)], "unique": True},
        ],
        "tokens": [
            {"keys": [("uuid", 1)], "unique": True},
            {"keys": [("contractAddress", 1)]},
        ],
        "collections": [
            {"keys": [("uuid", 1)], "unique": True},
        ],
    }


async def create_indexes(db: AsyncIOMotorDatabase) -> list[str]:
    """
    Create the indexes for all collections.
    
    Returns:
        Names of the indexes created (or already present)
    """
    names = []
    for collection_name, indexes in Collections.INDEXES.items():
        collection = db[collection_name]
        for index_def in indexes:
            keys = index_def["keys"]
            kwargs = {k: v for k, v in index_def.items() if k != "keys"}
            name = await collection.create_index(keys, **kwargs)
            logger.debug(f"Index ready: {collection_name}.{name}")
            names.append(name)
    return names
