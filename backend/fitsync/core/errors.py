"""Error Hierarchy — typed, categorized exceptions for all FitSync failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope: success=False + message + error block
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with FitSyncError base: one global handler catches all
    - ErrorContext as dataclass: carries observability data without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class FitSyncError(Exception):
    """Base exception for all FitSync errors."""

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
        """Convert to standardized REST error response."""
        return {
            "success": False,
            "message": self.message,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(FitSyncError):
    """Request body or parameter failed validation."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class AuthenticationError(FitSyncError):
    """Missing or rejected credentials."""
    def __init__(
        self, message: str = "Access token required",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidTokenError(FitSyncError):
    """Bearer token present but malformed, tampered with or expired."""
    def __init__(
        self, message: str = "Invalid or expired token",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_TOKEN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ForbiddenError(FitSyncError):
    """Authenticated user may not act on this resource."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(FitSyncError):
    """Requested resource does not exist."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class ConflictError(FitSyncError):
    """Resource already exists (duplicate email, duplicate registration)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class SuggestionUnavailableError(FitSyncError):
    """Language model failed or replied outside the expected schema."""
    def __init__(
        self, reason: str = "", context: ErrorContext | None = None,
    ):
        super().__init__(
            "not found, try refreshing", "SUGGESTION_UNAVAILABLE",
            ErrorCategory.EXTERNAL_API, ErrorSeverity.WARNING, context, 404,
        )
        self.reason = reason


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(FitSyncError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class DailyStatsUnavailableError(FitSyncError):
    """Today's dashboard snapshot could not be read or created."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No stats found for today", "DAILY_STATS_UNAVAILABLE",
            ErrorCategory.DATABASE, ErrorSeverity.ERROR, context, 500,
        )


class AnthropicAPIError(FitSyncError):
    """Anthropic API call failed."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"Anthropic API error ({api_error_type}): {message}",
            "ANTHROPIC_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.api_error_type = api_error_type
