"""
Global test fixtures for mintdb.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- A connected DbHelper backed by the mock client
- Record factories
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest
import pytest_asyncio

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def test_settings():
    """Settings with both required values present."""
    from mintdb.config import Settings
    
    return Settings(
        mongo_uri="mongodb://test:27017",
        mongo_database="mintdb_test",
        sms_resend_interval_seconds=60,
    )


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    
    tz_aware matches the production client built by create_mongo_client.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient(tz_aware=True)
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def db_helper(test_settings, mock_async_mongo_client):
    """
    A connected DbHelper whose client is the in-memory mock.
    """
    from mintdb.repository import DbHelper
    
    with patch(
        "mintdb.repository.create_mongo_client",
        return_value=mock_async_mongo_client,
    ):
        helper = DbHelper(test_settings)
        await helper.connect()
        yield helper
        if helper.client is not None:
            await helper.close()


@pytest.fixture
def mock_db(mock_async_mongo_client, test_settings):
    """The raw mock database DbHelper writes to."""
    return mock_async_mongo_client[test_settings.mongo_database]


# =============================================================================
# Record Fixtures
# =============================================================================

@pytest.fixture
def test_phone() -> str:
    return "+15550001111"


@pytest.fixture
def make_user(test_phone):
    """Factory for unsaved users."""
    from mintdb.models.user import User
    
    def _make(phone: str = test_phone, **kwargs) -> User:
        return User(uuid=User.generate_uuid(), phone=phone, **kwargs)
    return _make


@pytest.fixture
def make_token():
    """Factory for unsaved tokens."""
    from mintdb.models.token import Token
    
    def _make(**kwargs) -> Token:
        data = {
            "contract_address": "0x8a90cab2b38dba80c64b7734e58ee1db38b8992e",
            "sequence": 42,
        }
        data.update(kwargs)
        return Token(**data)
    return _make


@pytest.fixture
def make_collection():
    """Factory for unsaved collections with caller fields."""
    from mintdb.models.collection import Collection
    
    def _make(**kwargs) -> Collection:
        data = {"name": "Genesis Drop", "owner": "artist-1"}
        data.update(kwargs)
        return Collection(**data)
    return _make
