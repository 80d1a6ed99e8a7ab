"""Error Hierarchy — typed, categorized exceptions for all HR records failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable at the request boundary
    - Infrastructure errors and partial writes (500-level) are critical
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with HrRecordsError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - PartialAssignmentError is its own type: a half-applied two-aggregate write is
      reported explicitly instead of surfacing later as a silent inconsistency
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CONSISTENCY = "consistency"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    record_id: str | None = None
    operation: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class HrRecordsError(Exception):
    """Base exception for all HR records errors."""

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

    def details(self) -> list[dict] | None:
        """Per-field details for the envelope. None when not field-specific."""
        return None

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.context.user_message or self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "resource_type": self.context.resource_type,
                "record_id": self.context.record_id,
                "operation": self.context.operation,
            },
        }
        details = self.details()
        if details is not None:
            body["details"] = details
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class RecordValidationError(HrRecordsError):
    """A field constraint or record-level invariant was violated."""
    def __init__(
        self,
        message: str,
        field: str,
        context: ErrorContext | None = None,
        code: str = "VALIDATION_ERROR",
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def details(self) -> list[dict]:
        return [{"field": self.field, "message": self.message}]


class DuplicateKeyError(RecordValidationError):
    """A unique field already holds this value on another record."""
    def __init__(self, field: str, value: object, context: ErrorContext | None = None):
        super().__init__(
            f"A record with this {field} already exists: {value}",
            field, context, code="DUPLICATE_KEY",
        )
        self.value = value


class MalformedIdentifierError(HrRecordsError):
    """Identifier is not a well-formed record id."""
    def __init__(self, raw_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid identifier: '{raw_id}'",
            "INVALID_IDENTIFIER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.raw_id = raw_id


class ResourceNotFoundError(HrRecordsError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.record_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class AssignmentConflictError(HrRecordsError):
    """Business rule on the employee-project link was violated."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "ASSIGNMENT_CONFLICT", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Consistency / Infrastructure Errors (500-level) ────────────

class PartialAssignmentError(HrRecordsError):
    """First write of a two-aggregate operation committed, the second failed.

    No compensating write is attempted. The committed side stays as it is
    until a later operation (or an operator using the consistency report)
    repairs it.
    """
    def __init__(
        self,
        operation: str,
        committed: str,
        failed: str,
        cause: Exception,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.debug_info = {
            "committed": committed,
            "failed": failed,
            "cause": type(cause).__name__,
        }
        super().__init__(
            f"{operation} partially applied: {committed} saved, "
            f"{failed} write failed ({cause})",
            "PARTIAL_WRITE", ErrorCategory.CONSISTENCY,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.committed = committed
        self.failed = failed
        self.cause = cause

    def details(self) -> list[dict]:
        return [{"committed": self.committed, "failed": self.failed}]


class DatabaseError(HrRecordsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
