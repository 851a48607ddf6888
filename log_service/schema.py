"""
PostgreSQL schema for the tenant directory and the log store.

Log namespaces share one table partitioned by the ``namespace`` column
rather than one physical table per tenant.
"""

import logging

from log_service.database import Database

logger = logging.getLogger(__name__)


SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS tenants (
        name        TEXT PRIMARY KEY,
        id          TEXT NOT NULL UNIQUE,
        api_key     TEXT NOT NULL,
        created_at  TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    "CREATE INDEX IF NOT EXISTS tenants_credentials_idx ON tenants (api_key, id)",
    """
    CREATE TABLE IF NOT EXISTS log_namespaces (
        namespace   TEXT PRIMARY KEY,
        created_at  TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS log_entries (
        id          BIGSERIAL PRIMARY KEY,
        namespace   TEXT NOT NULL REFERENCES log_namespaces (namespace),
        message     TEXT,
        class_name  TEXT,
        log_level   TEXT,
        date        TEXT NOT NULL,
        time        TEXT NOT NULL,
        received_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    "CREATE INDEX IF NOT EXISTS log_entries_namespace_date_idx ON log_entries (namespace, date)",
)


async def create_schema(db: Database) -> None:
    """Create tables and indexes that do not exist yet."""
    async with db.transaction() as conn:
        for statement in SCHEMA_STATEMENTS:
            await conn.execute(statement)

    logger.info(f"Schema ready ({len(SCHEMA_STATEMENTS)} statements applied)")
