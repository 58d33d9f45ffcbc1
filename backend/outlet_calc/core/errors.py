"""Error Hierarchy — typed, categorized exceptions for all calculator failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) carry a user-facing notice; store errors are logged only
    - to_response() produces the REST envelope
    - Discount inputs never raise: they are clamped by core/pricing.py

Design Decisions:
    - Single hierarchy with OutletCalcError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Store errors are returned inside StoreResult, not raised: the store is a
      best-effort mirror and its failures must not interrupt the request
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    workspace_id: str | None = None
    record_id: str | None = None
    operation: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class OutletCalcError(Exception):
    """Base exception for all calculator errors."""

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
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "workspace_id": self.context.workspace_id,
                    "record_id": self.context.record_id,
                },
            }
        }


# ─── Validation Errors (400-level) ──────────────────────────────

class EmptyLabelError(OutletCalcError):
    """History save attempted with an empty memo."""
    def __init__(self, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or (
            "Item label is empty; the calculation was not saved."
        )
        super().__init__(
            "History record requires a non-empty memo",
            "EMPTY_LABEL", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )


class MissingBasePriceError(OutletCalcError):
    """History save attempted before a base price was entered."""
    def __init__(self, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or (
            "Base price is empty; the calculation was not saved."
        )
        super().__init__(
            "History record requires a base price",
            "MISSING_BASE_PRICE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )


class ResourceNotFoundError(OutletCalcError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Store / Infrastructure Errors ──────────────────────────────

class HistoryStoreNotConfiguredError(OutletCalcError):
    """History Store credentials absent — persistence disabled."""
    def __init__(self, missing: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"History store not configured (missing: {', '.join(missing)})",
            "STORE_NOT_CONFIGURED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.INFO, context, 503,
        )
        self.missing = missing


class HistoryStoreError(OutletCalcError):
    """History Store call failed (network, remote, or database)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"History store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, ctx, 503,
        )
        self.operation = operation


class DatabaseError(OutletCalcError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
