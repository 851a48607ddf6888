"""
Log submission and retrieval endpoints - /v1/postlog, /v1/logs

The unversioned /postlog and /logs paths keep the first-release contract:
GET /logs answers with a bare array of entries.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from prometheus_client import Counter

from log_service.errors import LogServiceError
from log_service.models import ErrorResponse, LogEntry, LogListResponse, LogSubmission
from log_service.services.access import AccessService, get_access_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["logs"])
legacy_router = APIRouter(tags=["legacy"])

# Prometheus metrics
entries_appended = Counter(
    'log_entries_appended_total',
    'Total log entries stored'
)
requests_rejected = Counter(
    'log_requests_rejected_total',
    'Log requests rejected',
    ['operation', 'reason']
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


async def _append(
    service: AccessService,
    api_key: str,
    app_id: str,
    message: str,
    log_level: str,
    class_name: str
) -> Response:
    try:
        await service.append(api_key, app_id, message, log_level, class_name)
    except LogServiceError as e:
        requests_rejected.labels(operation="append", reason=type(e).__name__).inc()
        raise

    entries_appended.inc()
    return Response(status_code=204)


async def _query(
    service: AccessService,
    api_key: str,
    app_id: str,
    date: Optional[str]
) -> List[LogEntry]:
    try:
        return await service.query(api_key, app_id, date)
    except LogServiceError as e:
        requests_rejected.labels(operation="query", reason=type(e).__name__).inc()
        raise


@router.put("/postlog", status_code=204, responses=ERROR_RESPONSES)
@legacy_router.put("/postlog", status_code=204, responses=ERROR_RESPONSES)
async def post_log(
    api_key: str = Query(..., alias="apiKey"),
    app_id: str = Query(..., alias="appId"),
    message: str = Query(...),
    log_level: str = Query("info", alias="logLevel"),
    class_name: str = Query(..., alias="className"),
    service: AccessService = Depends(get_access_service)
):
    """
    Submit a log entry using query parameters.

    **Query Parameters:**
    - `apiKey`, `appId`: Credentials returned at registration
    - `message`: Log body (sanitized, max 1000 characters stored)
    - `logLevel`: Level label (default: "info")
    - `className`: Class or component that emitted the entry
    """
    return await _append(service, api_key, app_id, message, log_level, class_name)


@router.post("/logs", status_code=204, responses=ERROR_RESPONSES)
async def submit_log(
    submission: LogSubmission,
    api_key: str = Query(..., alias="apiKey"),
    app_id: str = Query(..., alias="appId"),
    service: AccessService = Depends(get_access_service)
):
    """
    Submit a log entry as a JSON body.

    Same semantics as `PUT /v1/postlog`; suited to messages too long for a URL.
    """
    return await _append(
        service,
        api_key,
        app_id,
        submission.message,
        submission.log_level,
        submission.class_name
    )


@router.get("/logs", response_model=LogListResponse, responses=ERROR_RESPONSES)
async def get_logs(
    api_key: str = Query(..., alias="apiKey"),
    app_id: str = Query(..., alias="appId"),
    date: Optional[str] = Query(None, description="Calendar day, YYYY-MM-DD"),
    service: AccessService = Depends(get_access_service)
):
    """
    List the caller's log entries.

    **Query Parameters:**
    - `apiKey`, `appId`: Credentials returned at registration
    - `date`: Optional day filter (YYYY-MM-DD)

    Entries are returned in storage order, without pagination.
    """
    entries = await _query(service, api_key, app_id, date)
    return LogListResponse(logs=entries, count=len(entries), date=date)


@legacy_router.get("/logs", response_model=List[LogEntry], responses=ERROR_RESPONSES)
async def get_logs_unversioned(
    api_key: str = Query(..., alias="apiKey"),
    app_id: str = Query(..., alias="appId"),
    date: Optional[str] = Query(None, description="Calendar day, YYYY-MM-DD"),
    service: AccessService = Depends(get_access_service)
):
    """List the caller's log entries as a bare array."""
    return await _query(service, api_key, app_id, date)
