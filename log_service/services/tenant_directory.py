"""
Tenant directory.

Maps application names and credential pairs to tenant records.
"""

import logging
from typing import Optional

from log_service.database import Database
from log_service.errors import DuplicateNameError
from log_service.models import Tenant

logger = logging.getLogger(__name__)


def _to_tenant(row) -> Optional[Tenant]:
    if row is None:
        return None
    return Tenant(name=row['name'], id=row['id'], api_key=row['api_key'])


class TenantDirectory:
    """
    Lookup and insertion of tenant records.

    Names are unique. ``save`` performs a single compare-and-insert so two
    concurrent registrations of the same name cannot both succeed.
    """

    def __init__(self, db: Database):
        self.db = db

    async def find_by_name(self, name: str) -> Optional[Tenant]:
        """Return the tenant registered under ``name``, if any."""
        row = await self.db.fetchrow(
            "SELECT name, id, api_key FROM tenants WHERE name = $1",
            name
        )
        return _to_tenant(row)

    async def find_by_key_and_id(self, api_key: str, tenant_id: str) -> Optional[Tenant]:
        """Return the tenant holding both ``api_key`` and ``tenant_id``, if any."""
        row = await self.db.fetchrow(
            "SELECT name, id, api_key FROM tenants WHERE api_key = $1 AND id = $2",
            api_key,
            tenant_id
        )
        return _to_tenant(row)

    async def save(self, tenant: Tenant, conn=None) -> None:
        """
        Insert a new tenant record.

        Args:
            tenant: The record to store
            conn: Optional connection of an enclosing transaction

        Raises:
            DuplicateNameError: If a tenant with the same name already exists
        """
        executor = conn or self.db

        inserted = await executor.fetchval(
            """
            INSERT INTO tenants (name, id, api_key)
            VALUES ($1, $2, $3)
            ON CONFLICT (name) DO NOTHING
            RETURNING name
            """,
            tenant.name,
            tenant.id,
            tenant.api_key
        )

        if inserted is None:
            raise DuplicateNameError(tenant.name)

        logger.info(f"Tenant saved: name={tenant.name}, id={tenant.id}")
