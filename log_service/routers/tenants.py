"""
Tenant registration endpoint - POST /v1/register (also POST /register)
"""

import logging

from fastapi import APIRouter, Depends, Query
from prometheus_client import Counter

from log_service.errors import LogServiceError
from log_service.models import ErrorResponse, Tenant
from log_service.services.access import AccessService, get_access_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["tenants"])

# Unversioned paths kept for clients of the first release
legacy_router = APIRouter(tags=["legacy"])

registrations = Counter(
    'tenant_registrations_total',
    'Tenant registration attempts',
    ['outcome']
)

REGISTER_RESPONSES = {409: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}


@router.post("/register", response_model=Tenant, responses=REGISTER_RESPONSES)
@legacy_router.post("/register", response_model=Tenant, responses=REGISTER_RESPONSES)
async def register(
    app_name: str = Query(..., alias="appName"),
    service: AccessService = Depends(get_access_service)
):
    """
    Register a new application.

    **No authentication required** - Applications self-register.

    **Query Parameters:**
    - `appName`: Unique application name

    **Returns:**
    - `appName`, `appId` and `apiKey`. Store the key: it is never returned again.

    **Errors:**
    - 409 if the name is already taken
    """
    try:
        tenant = await service.register(app_name)
    except LogServiceError as e:
        registrations.labels(outcome=type(e).__name__).inc()
        raise

    registrations.labels(outcome="created").inc()
    return tenant
