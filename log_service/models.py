"""
Pydantic models for request/response validation.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Tenant Models
# ============================================================================

class Tenant(BaseModel):
    """
    A registered application.

    Serialized with the client-facing names ``appName``, ``appId`` and
    ``apiKey``. The key is only ever serialized in the registration response.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(
        ...,
        alias="appName",
        description="Unique application name",
        examples=["billing-api"]
    )

    id: str = Field(
        ...,
        alias="appId",
        description="Globally unique tenant identifier",
        examples=["3f2b8c1e-6a0d-4c8e-9d55-0f3e2a1b7c44"]
    )

    api_key: str = Field(
        ...,
        alias="apiKey",
        description="32-character secret issued at registration"
    )

    @property
    def namespace(self) -> str:
        """Log store namespace owned by this tenant."""
        return namespace_key(self.name, self.id)


def namespace_key(name: str, tenant_id: str) -> str:
    """Derive the namespace key for a (name, id) pair."""
    return f"{name}_{tenant_id}"


# ============================================================================
# Log Models
# ============================================================================

class LogEntry(BaseModel):
    """One stored log record."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    message: Optional[str] = None
    class_name: Optional[str] = Field(default=None, alias="className")
    log_level: Optional[str] = Field(default=None, alias="logLevel")
    date: str = Field(..., description="ISO-8601 calendar date", examples=["2024-01-01"])
    time: str = Field(..., description="ISO-8601 local time", examples=["13:45:07.123456"])


class LogSubmission(BaseModel):
    """JSON body accepted by POST /v1/logs."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., description="Free-text log body")
    log_level: str = Field(default="info", alias="logLevel", examples=["info", "warn", "error"])
    class_name: str = Field(..., alias="className", examples=["com.example.Billing"])


class LogListResponse(BaseModel):
    """Response model for log queries."""

    model_config = ConfigDict(populate_by_name=True)

    logs: List[LogEntry]
    count: int
    date: Optional[str] = None


# ============================================================================
# Health Check Models
# ============================================================================

class HealthStatus(BaseModel):
    """Health check response."""

    status: str = Field(..., examples=["healthy", "unhealthy"])
    version: str
    database: str = Field(..., examples=["connected", "disconnected"])
    uptime_seconds: float
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Body returned for every handled failure."""

    detail: str
