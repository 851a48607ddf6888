"""
Log store.

Append-only log collections, one logical namespace per tenant, queryable
by calendar day.
"""

import logging
from datetime import date, timedelta
from typing import List, Optional

from prometheus_client import Histogram

from log_service.database import Database
from log_service.models import LogEntry

logger = logging.getLogger(__name__)

store_write_duration = Histogram(
    'log_store_write_seconds',
    'Log entry write duration'
)
store_query_duration = Histogram(
    'log_store_query_seconds',
    'Log query duration'
)


class LogStore:
    """Per-namespace append-only storage of log entries."""

    def __init__(self, db: Database):
        self.db = db

    async def create_namespace(self, key: str, conn=None) -> None:
        """Create an empty namespace. No-op if it already exists."""
        executor = conn or self.db

        status = await executor.execute(
            """
            INSERT INTO log_namespaces (namespace)
            VALUES ($1)
            ON CONFLICT (namespace) DO NOTHING
            """,
            key
        )

        if status == "INSERT 0 1":
            logger.info(f"Namespace created: {key}")

    async def append(self, key: str, entry: LogEntry) -> None:
        """Add one entry to namespace ``key``."""
        with store_write_duration.time():
            await self.db.execute(
                """
                INSERT INTO log_entries (
                    namespace, message, class_name, log_level, date, time
                ) VALUES ($1, $2, $3, $4, $5, $6)
                """,
                key,
                entry.message,
                entry.class_name,
                entry.log_level,
                entry.date,
                entry.time
            )

        logger.debug(f"Log entry appended: namespace={key}, level={entry.log_level}")

    async def query(self, key: str, date_filter: Optional[date] = None) -> List[LogEntry]:
        """
        Return entries of namespace ``key``.

        With ``date_filter`` only entries stamped on that day are returned.
        The filter is the half-open range [day, day + 1) compared over the
        stored ISO date strings. Results are in store order.
        """
        if date_filter is None:
            query = """
                SELECT message, class_name, log_level, date, time
                FROM log_entries
                WHERE namespace = $1
            """
            params = [key]
        else:
            query = """
                SELECT message, class_name, log_level, date, time
                FROM log_entries
                WHERE namespace = $1 AND date >= $2 AND date < $3
            """
            params = [
                key,
                date_filter.isoformat(),
                (date_filter + timedelta(days=1)).isoformat()
            ]

        with store_query_duration.time():
            rows = await self.db.fetch(query, *params)

        return [
            LogEntry(
                message=row['message'],
                class_name=row['class_name'],
                log_level=row['log_level'],
                date=row['date'],
                time=row['time']
            )
            for row in rows
        ]
