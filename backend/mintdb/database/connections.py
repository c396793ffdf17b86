"""
MongoDB client construction.
"""
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.server_api import ServerApi


def create_mongo_client(uri: str, server_api_version: str = "1") -> AsyncIOMotorClient:
    """
    Create a MongoDB client pinned to a stable server API version.
    
    Motor connects lazily; network errors surface on the first operation.
    Datetimes are read back timezone-aware (UTC).
    """
    return AsyncIOMotorClient(
        uri,
        server_api=ServerApi(server_api_version),
        tz_aware=True,
    )
