"""Error Hierarchy — typed, categorized exceptions for every intake failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Submitter-fixable errors are 400-level; everything else never reaches the submitter
      with details attached
    - to_response() produces the {success, message} envelope the website expects

Design Decisions:
    - Single hierarchy with IntakeError base: one FastAPI handler renders all of them
      (ADR: uniform error shape)
    - StorageBackendError and NotificationDeliveryError are internal: raised by
      infrastructure, caught by the record store / notification sender, never rendered
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    RATE_LIMIT = "rate_limit"
    STORAGE = "storage"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to internal errors for log correlation."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    collection: str | None = None
    record_id: str | None = None
    backend: str | None = None
    debug_info: dict[str, Any] | None = None


class IntakeError(Exception):
    """Base exception for all intake errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the public {success, message} envelope."""
        return {"success": False, "message": self.message}


# ─── Submitter-facing Errors (400-level) ────────────────────────

class SubmissionValidationError(IntakeError):
    """Required field missing or malformed."""
    def __init__(self, message: str, field: str):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.INFO, None, 400,
        )
        self.field = field


class MalformedPayloadError(IntakeError):
    """Request body is not a JSON object or form."""
    def __init__(self, message: str = "Invalid request data"):
        super().__init__(
            message, "MALFORMED_PAYLOAD", ErrorCategory.VALIDATION,
            ErrorSeverity.INFO, None, 400,
        )


class UnauthorizedError(IntakeError):
    """Shared secret missing or wrong. No detail is leaked."""
    def __init__(self):
        super().__init__(
            "Unauthorized", "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, None, 403,
        )


class EndpointNotFoundError(IntakeError):
    """No API route matched."""
    def __init__(self, path: str):
        super().__init__(
            "API endpoint not found", "API_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO,
            ErrorContext(debug_info={"path": path}), 404,
        )


class RateLimitedError(IntakeError):
    """Client exceeded its sliding-window budget."""
    def __init__(self, message: str, retry_after_seconds: int):
        super().__init__(
            message, "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, None, 429,
        )
        self.retry_after_seconds = retry_after_seconds


# ─── Internal Errors (500-level) ────────────────────────────────

class OperationFailedError(IntakeError):
    """Unexpected failure inside a route, rendered with a generic message."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "OPERATION_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class StorageBackendError(IntakeError):
    """Backend read or write failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class NotificationDeliveryError(IntakeError):
    """Mail transport rejected or errored."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Notification delivery failed: {message}",
            "NOTIFICATION_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
