"""
Error taxonomy for the log service.

Every failure an operation can surface derives from LogServiceError and
carries the HTTP status and public detail the boundary layer renders.
"""


class LogServiceError(Exception):
    """Base class for failures surfaced to callers."""

    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, detail: str = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NameTakenError(LogServiceError):
    """Registration attempted with an application name that already exists."""

    status_code = 409
    detail = "Name has already been taken. Try again."


class InvalidCredentialsError(LogServiceError):
    """No tenant matches the presented (apiKey, appId) pair."""

    status_code = 401
    detail = "Invalid API key or app id."


class InvalidDateError(LogServiceError):
    """Date filter is not an ISO calendar date."""

    status_code = 400
    detail = "Invalid date. Expected YYYY-MM-DD."


class StorageError(LogServiceError):
    """Underlying persistence failure."""

    status_code = 503
    detail = "Storage unavailable"


class ServiceBusyError(LogServiceError):
    """Operation backlog is full."""

    status_code = 503
    detail = "Service busy. Retry later."


class DuplicateNameError(Exception):
    """Raised by the tenant directory when a record with the same name exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tenant '{name}' already exists")
