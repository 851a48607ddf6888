"""
Tests for configuration and storage error translation.
"""

import pytest

from log_service.config import Settings
from log_service.database import Database, storage_errors
from log_service.errors import StorageError


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.max_concurrent_operations == 20
        assert settings.max_pending_operations == 100
        assert settings.sanitizer_max_length == 1000
        assert settings.strip_shell_metacharacters is False
        assert settings.log_timezone is None

    def test_asyncpg_dsn_strips_driver(self):
        settings = Settings(_env_file=None, database_url="postgresql+asyncpg://u:p@db:5432/logs")

        assert settings.asyncpg_dsn == "postgresql://u:p@db:5432/logs"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("MAX_CONCURRENT_OPERATIONS", "3")

        assert Settings(_env_file=None).max_concurrent_operations == 3


class TestStorageErrors:
    """Tests for translation of driver failures."""

    @pytest.mark.asyncio
    async def test_os_error_becomes_storage_error(self):
        with pytest.raises(StorageError) as exc_info:
            async with storage_errors("test"):
                raise ConnectionRefusedError("refused")

        assert isinstance(exc_info.value.__cause__, ConnectionRefusedError)

    @pytest.mark.asyncio
    async def test_other_errors_pass_through(self):
        with pytest.raises(ValueError):
            async with storage_errors("test"):
                raise ValueError("not storage")

    @pytest.mark.asyncio
    async def test_unconnected_database(self):
        db = Database(Settings(_env_file=None))

        with pytest.raises(StorageError):
            await db.fetchval("SELECT 1")
        assert await db.health_check() is False
