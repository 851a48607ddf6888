"""
Test fixtures and configuration for pytest.
"""

import itertools
from datetime import datetime
from typing import Callable, Iterable

import pytest

from log_service.config import Settings
from log_service.services.access import AccessService


class FakeDatabase:
    """In-memory stand-in for Database, dispatching on the SQL text."""

    def __init__(self):
        self.tenants = {}
        self.namespaces = set()
        self.entries = []
        self.connected = False
        self.failure = None
        self.statements = []
        self.arguments = []

    def _check(self, query: str, args=()):
        self.statements.append(" ".join(query.split()))
        self.arguments.append(args)
        if self.failure is not None:
            raise self.failure

    async def connect(self):
        self.connected = True

    async def disconnect(self):
        self.connected = False

    async def health_check(self) -> bool:
        return self.connected and self.failure is None

    async def fetchrow(self, query: str, *args):
        """Mock fetchrow."""
        self._check(query, args)
        if "FROM tenants WHERE name = $1" in query:
            return self.tenants.get(args[0])
        if "FROM tenants WHERE api_key = $1 AND id = $2" in query:
            api_key, tenant_id = args
            for row in self.tenants.values():
                if row["api_key"] == api_key and row["id"] == tenant_id:
                    return row
        return None

    async def fetchval(self, query: str, *args):
        """Mock fetchval."""
        self._check(query, args)
        if "INSERT INTO tenants" in query:
            name, tenant_id, api_key = args
            if name in self.tenants:
                return None
            self.tenants[name] = {"name": name, "id": tenant_id, "api_key": api_key}
            return name
        if "SELECT 1" in query:
            return 1
        return None

    async def execute(self, query: str, *args):
        """Mock execute."""
        self._check(query, args)
        if "INSERT INTO log_namespaces" in query:
            if args[0] in self.namespaces:
                return "INSERT 0 0"
            self.namespaces.add(args[0])
            return "INSERT 0 1"
        if "INSERT INTO log_entries" in query:
            namespace, message, class_name, log_level, date, time = args
            self.entries.append({
                "namespace": namespace,
                "message": message,
                "class_name": class_name,
                "log_level": log_level,
                "date": date,
                "time": time,
            })
            return "INSERT 0 1"
        return "CREATE TABLE"

    async def fetch(self, query: str, *args):
        """Mock fetch."""
        self._check(query, args)
        if "FROM log_entries" in query:
            rows = [e for e in self.entries if e["namespace"] == args[0]]
            if "date >= $2 AND date < $3" in query:
                start, end = args[1], args[2]
                rows = [e for e in rows if start <= e["date"] < end]
            return rows
        return []

    def transaction(self):
        """Mock transaction context manager."""
        return FakeTransaction(self)

    def add_entry(self, namespace: str, date: str, message: str = "entry", time: str = "12:00:00"):
        """Helper to place an entry with an arbitrary date."""
        self.entries.append({
            "namespace": namespace,
            "message": message,
            "class_name": "Seed",
            "log_level": "info",
            "date": date,
            "time": time,
        })


class FakeTransaction:
    """Yields the fake itself as the connection; rolls back on error."""

    def __init__(self, db: FakeDatabase):
        self.db = db
        self._snapshot = None

    async def __aenter__(self):
        self._snapshot = (
            dict(self.db.tenants),
            set(self.db.namespaces),
            list(self.db.entries),
        )
        return self.db

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            tenants, namespaces, entries = self._snapshot
            self.db.tenants = tenants
            self.db.namespaces = namespaces
            self.db.entries = entries
        return False


def make_fixed_clock(*moments: datetime) -> Callable[[], datetime]:
    """Clock returning ``moments`` in turn, then repeating the last one."""
    values: Iterable[datetime] = itertools.chain(moments, itertools.repeat(moments[-1]))
    iterator = iter(values)
    return lambda: next(iterator)


@pytest.fixture
def fixed_clock():
    """Factory for deterministic clocks."""
    return make_fixed_clock


@pytest.fixture
def settings() -> Settings:
    """Settings that never touch a real database or .env file."""
    return Settings(_env_file=None, auto_create_schema=False, log_level="DEBUG")


@pytest.fixture
def fake_db() -> FakeDatabase:
    """Create a fake database for testing."""
    return FakeDatabase()


@pytest.fixture
def service(fake_db: FakeDatabase, settings: Settings) -> AccessService:
    """Access service over the fake database with a fixed clock."""
    return AccessService(
        fake_db,
        settings,
        clock=make_fixed_clock(datetime(2024, 1, 1, 9, 30, 0))
    )
