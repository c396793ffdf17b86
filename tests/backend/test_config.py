"""
Tests for configuration, construction checks and logging setup.

These tests cover:
- Required MONGO_URI / MONGO_DATABASE values
- Connect / close lifecycle
- Logging configuration
"""

import logging
import pytest
from unittest.mock import MagicMock, patch

from mintdb.config import Settings, get_settings
from mintdb.core.errors import DbErrorType, MissingEnvVarError, NotFoundError
from mintdb.repository import DbHelper


class TestConstruction:
    """Tests for DbHelper configuration checks."""

    def test_valid_settings_construct(self, test_settings):
        """Both values present should construct without connecting."""
        with patch("mintdb.repository.create_mongo_client") as factory:
            helper = DbHelper(test_settings)
        
        factory.assert_not_called()
        assert helper.client is None
        assert helper.db is None

    def test_missing_uri_fails(self):
        """Empty MONGO_URI should fail with MISSING_REQUIRED_ENV_VAR."""
        settings = Settings(mongo_uri="", mongo_database="mintdb_test")
        
        with pytest.raises(MissingEnvVarError) as exc_info:
            DbHelper(settings)
        
        assert exc_info.value.code == DbErrorType.MISSING_REQUIRED_ENV_VAR
        assert "MONGO_URI" in exc_info.value.message

    def test_missing_database_fails(self):
        """Empty MONGO_DATABASE should fail with MISSING_REQUIRED_ENV_VAR."""
        settings = Settings(mongo_uri="mongodb://test:27017", mongo_database="")
        
        with pytest.raises(MissingEnvVarError) as exc_info:
            DbHelper(settings)
        
        assert exc_info.value.code == DbErrorType.MISSING_REQUIRED_ENV_VAR
        assert "MONGO_DATABASE" in exc_info.value.message

    def test_settings_read_from_environment(self, monkeypatch):
        """Without explicit settings, values come from the environment."""
        monkeypatch.setenv("MONGO_URI", "mongodb://env-host:27017")
        monkeypatch.setenv("MONGO_DATABASE", "env_db")
        get_settings.cache_clear()
        
        try:
            helper = DbHelper()
            assert helper.settings.mongo_uri == "mongodb://env-host:27017"
            assert helper.settings.mongo_database == "env_db"
        finally:
            get_settings.cache_clear()


class TestConnection:
    """Tests for connect/close handling."""

    @pytest.mark.asyncio
    async def test_connect_selects_database(self, test_settings):
        """connect should build the client from settings and pick the database."""
        client = MagicMock()
        with patch(
            "mintdb.repository.create_mongo_client",
            return_value=client,
        ) as factory:
            helper = await DbHelper(test_settings).connect()

        factory.assert_called_once_with("mongodb://test:27017", "1")
        client.__getitem__.assert_called_once_with("mintdb_test")
        assert helper.client is client
        assert helper.db is client["mintdb_test"]
        await helper.close()

    @pytest.mark.asyncio
    async def test_connect_twice_keeps_client(self, test_settings):
        """A second connect should reuse the open client."""
        with patch("mintdb.repository.create_mongo_client") as factory:
            helper = DbHelper(test_settings)
            await helper.connect()
            await helper.connect()

        factory.assert_called_once()

    @pytest.mark.asyncio
    async def test_close_before_connect_fails(self, test_settings):
        """close without connect should fail with UNINITIALIZED."""
        helper = DbHelper(test_settings)
        
        with pytest.raises(NotFoundError) as exc_info:
            await helper.close()
        
        assert exc_info.value.code == DbErrorType.UNINITIALIZED

    @pytest.mark.asyncio
    async def test_close_releases_client(self, test_settings):
        """close should close the driver client and drop the handle."""
        client = MagicMock()
        with patch("mintdb.repository.create_mongo_client", return_value=client):
            helper = await DbHelper(test_settings).connect()
        
        await helper.close()
        
        client.close.assert_called_once()
        assert helper.client is None
        assert helper.db is None

    @pytest.mark.asyncio
    async def test_operations_before_connect_fail(self, test_settings):
        """Repository calls before connect should fail with UNINITIALIZED."""
        helper = DbHelper(test_settings)
        
        with pytest.raises(NotFoundError):
            await helper.get_user_by_phone("+15550001111")

    @pytest.mark.asyncio
    async def test_context_manager_connects_and_closes(self, test_settings, mock_async_mongo_client):
        """async with should connect on entry and close on exit."""
        with patch(
            "mintdb.repository.create_mongo_client",
            return_value=mock_async_mongo_client,
        ):
            async with DbHelper(test_settings) as helper:
                assert helper.db is not None
        
        assert helper.client is None

    def test_create_mongo_client_pins_server_api(self):
        """The motor client should be built with the pinned server API."""
        with patch("mintdb.database.connections.AsyncIOMotorClient") as mock_client:
            from mintdb.database.connections import create_mongo_client
            
            create_mongo_client("mongodb://test:27017", "1")
        
        args, kwargs = mock_client.call_args
        assert args == ("mongodb://test:27017",)
        assert kwargs["server_api"].version == "1"
        assert kwargs["tz_aware"] is True


class TestLogging:
    """Tests for configure_logging."""

    def test_configure_logging_uses_given_level(self):
        from mintdb.log import configure_logging, LOG_FORMAT
        
        with patch("mintdb.log.logging.basicConfig") as basic_config:
            configure_logging("debug")
        
        kwargs = basic_config.call_args.kwargs
        assert kwargs["level"] == logging.DEBUG
        assert kwargs["format"] == LOG_FORMAT

    def test_configure_logging_unknown_level_falls_back(self):
        from mintdb.log import configure_logging
        
        with patch("mintdb.log.logging.basicConfig") as basic_config:
            configure_logging("chatty")
        
        assert basic_config.call_args.kwargs["level"] == logging.INFO
