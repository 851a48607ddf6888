"""
Database connection and session management using asyncpg.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import asyncpg
from asyncpg import Pool, Connection
from fastapi import Request

from log_service.config import Settings
from log_service.errors import StorageError

logger = logging.getLogger(__name__)

# Failures that mean "the store did not do what we asked"
STORAGE_FAILURES = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


@asynccontextmanager
async def storage_errors(operation: str) -> AsyncGenerator[None, None]:
    """Translate driver and network failures into StorageError."""
    try:
        yield
    except STORAGE_FAILURES as e:
        logger.exception(f"Storage failure during {operation}: {e}")
        raise StorageError() from e


class Database:
    """Async PostgreSQL database connection pool manager."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._pool: Optional[Pool] = None
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        """Initialize the connection pool."""
        async with self._lock:
            if self._pool is not None:
                return

            logger.info("Connecting to PostgreSQL...")

            self._pool = await asyncpg.create_pool(
                dsn=self.settings.asyncpg_dsn,
                min_size=self.settings.db_pool_min_size,
                max_size=self.settings.db_pool_max_size,
                command_timeout=self.settings.db_command_timeout,
                server_settings={
                    'application_name': self.settings.app_name,
                }
            )

            logger.info("PostgreSQL connection pool created successfully")

    async def disconnect(self) -> None:
        """Close the connection pool."""
        async with self._lock:
            if self._pool is None:
                return

            logger.info("Closing PostgreSQL connection pool...")
            await self._pool.close()
            self._pool = None
            logger.info("PostgreSQL connection pool closed")

    @property
    def pool(self) -> Pool:
        """Get the connection pool."""
        if self._pool is None:
            logger.error("Database used before connect()")
            raise StorageError()
        return self._pool

    async def execute(self, query: str, *args) -> str:
        """Execute a query and return status."""
        async with storage_errors("execute"):
            async with self.pool.acquire() as conn:
                return await conn.execute(query, *args)

    async def fetch(self, query: str, *args) -> list:
        """Fetch all rows from a query."""
        async with storage_errors("fetch"):
            async with self.pool.acquire() as conn:
                return await conn.fetch(query, *args)

    async def fetchrow(self, query: str, *args) -> Optional[asyncpg.Record]:
        """Fetch a single row from a query."""
        async with storage_errors("fetchrow"):
            async with self.pool.acquire() as conn:
                return await conn.fetchrow(query, *args)

    async def fetchval(self, query: str, *args):
        """Fetch a single value from a query."""
        async with storage_errors("fetchval"):
            async with self.pool.acquire() as conn:
                return await conn.fetchval(query, *args)

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[Connection, None]:
        """Get a connection with transaction context."""
        async with storage_errors("transaction"):
            async with self.pool.acquire() as conn:
                async with conn.transaction():
                    yield conn

    async def health_check(self) -> bool:
        """Check database connectivity."""
        try:
            result = await self.fetchval("SELECT 1")
            return result == 1
        except StorageError as e:
            logger.error(f"Database health check failed: {e}")
            return False


async def get_db(request: Request) -> Database:
    """Dependency injection for database access."""
    return request.app.state.database
