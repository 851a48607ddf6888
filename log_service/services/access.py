"""
Access service.

Orchestrates registration, log submission and log retrieval on top of the
tenant directory and the log store.
"""

import logging
import re
from datetime import date, datetime
from typing import Callable, List, Optional
from zoneinfo import ZoneInfo

from fastapi import Request

from log_service.config import Settings
from log_service.credentials import issue_api_key, issue_id
from log_service.database import Database
from log_service.errors import (
    DuplicateNameError, InvalidCredentialsError, InvalidDateError, NameTakenError
)
from log_service.models import LogEntry, Tenant
from log_service.sanitizer import sanitize
from log_service.services.dispatch import BoundedDispatcher
from log_service.services.log_store import LogStore
from log_service.services.tenant_directory import TenantDirectory

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DEFAULT_LOG_LEVEL = "info"


def parse_date_filter(value: str) -> date:
    """
    Parse a YYYY-MM-DD calendar date.

    Raises:
        InvalidDateError: If ``value`` is not a valid ISO calendar date
    """
    if not ISO_DATE_PATTERN.match(value):
        raise InvalidDateError()
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidDateError() from e


def local_clock(timezone_name: Optional[str] = None) -> Callable[[], datetime]:
    """Clock stamping entries in ``timezone_name``, or server local time."""
    if timezone_name:
        zone = ZoneInfo(timezone_name)
        return lambda: datetime.now(zone)
    return datetime.now


class AccessService:
    """
    The three tenant-facing operations.

    Each call runs to completion inside one dispatcher slot; no state is kept
    between calls except what the directory and the store persist.
    """

    def __init__(
        self,
        db: Database,
        settings: Settings,
        directory: Optional[TenantDirectory] = None,
        log_store: Optional[LogStore] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.db = db
        self.settings = settings
        self.directory = directory or TenantDirectory(db)
        self.log_store = log_store or LogStore(db)
        self.clock = clock or local_clock(settings.log_timezone)
        self.dispatcher = BoundedDispatcher(
            settings.max_concurrent_operations,
            settings.max_pending_operations
        )

    def _sanitize(self, value: Optional[str]) -> Optional[str]:
        return sanitize(
            value,
            max_length=self.settings.sanitizer_max_length,
            strip_shell_metacharacters=self.settings.strip_shell_metacharacters
        )

    async def _authenticate(self, api_key: str, tenant_id: str) -> Tenant:
        tenant = await self.directory.find_by_key_and_id(api_key, tenant_id)
        if tenant is None:
            # never log the key itself
            logger.warning(f"Rejected credentials for app id {tenant_id}")
            raise InvalidCredentialsError()
        return tenant

    async def register(self, name: str) -> Tenant:
        """
        Register a new application.

        Returns the tenant including its api key; this is the only time the
        key leaves the service.

        Raises:
            NameTakenError: If ``name`` is already registered
        """
        async with self.dispatcher.slot("register"):
            if await self.directory.find_by_name(name) is not None:
                raise NameTakenError()

            tenant = Tenant(name=name, id=issue_id(), api_key=issue_api_key())

            try:
                async with self.db.transaction() as conn:
                    await self.directory.save(tenant, conn=conn)
                    await self.log_store.create_namespace(tenant.namespace, conn=conn)
            except DuplicateNameError as e:
                # lost a concurrent registration of the same name
                raise NameTakenError() from e

            logger.info(f"Registered tenant: name={tenant.name}, id={tenant.id}")
            return tenant

    async def append(
        self,
        api_key: str,
        tenant_id: str,
        message: str,
        log_level: Optional[str] = DEFAULT_LOG_LEVEL,
        class_name: Optional[str] = None
    ) -> None:
        """
        Store one log entry in the caller's namespace.

        Raises:
            InvalidCredentialsError: If no tenant holds (api_key, tenant_id)
        """
        async with self.dispatcher.slot("append"):
            tenant = await self._authenticate(api_key, tenant_id)

            now = self.clock()
            entry = LogEntry(
                message=self._sanitize(message),
                class_name=self._sanitize(class_name),
                log_level=self._sanitize(log_level),
                date=now.date().isoformat(),
                time=now.time().isoformat()
            )

            await self.log_store.append(tenant.namespace, entry)

    async def query(
        self,
        api_key: str,
        tenant_id: str,
        date_filter: Optional[str] = None
    ) -> List[LogEntry]:
        """
        Return the caller's log entries, optionally for one calendar day.

        Raises:
            InvalidCredentialsError: If no tenant holds (api_key, tenant_id)
            InvalidDateError: If ``date_filter`` is not YYYY-MM-DD
        """
        async with self.dispatcher.slot("query"):
            tenant = await self._authenticate(api_key, tenant_id)

            day = parse_date_filter(date_filter) if date_filter is not None else None

            return await self.log_store.query(tenant.namespace, day)


async def get_access_service(request: Request) -> AccessService:
    """Dependency injection for the access service."""
    return request.app.state.access_service
