"""Error Hierarchy — typed, categorized exceptions for all UserHub failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client-input errors are 400, conflicts 409, infrastructure errors 500
    - to_response() produces the REST envelope {"error": message}
    - Field errors carry fixed messages ("Invalid name", "Invalid email")

Design Decisions:
    - Single hierarchy with UserHubError base: one global handler catches all
    - EmailAlreadyExistsError is NOT a DatabaseError: the route layer maps
      the two to different status codes
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class UserHubError(Exception):
    """Base exception for all UserHub errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

FIELD_MESSAGES: dict[str, str] = {
    "name": "Invalid name",
    "email": "Invalid email",
}


class InvalidFieldError(UserHubError):
    """A required field is absent or malformed."""
    def __init__(self, field: str):
        super().__init__(
            FIELD_MESSAGES[field], "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, 400,
        )
        self.field = field


class ResourceNotFoundError(UserHubError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: object):
        super().__init__(
            f"{resource_type} not found", "RESOURCE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, 404,
        )
        self.resource_id = resource_id


class EmailAlreadyExistsError(UserHubError):
    """Storage rejected a duplicate email."""
    def __init__(self):
        super().__init__(
            "Email already exists", "EMAIL_ALREADY_EXISTS",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, 409,
        )


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseError(UserHubError):
    """Database operation failed. Message is the raw driver message."""
    def __init__(self, message: str, operation: str, http_status: int = 500):
        super().__init__(
            message, "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, http_status,
        )
        self.operation = operation


class WriteRejectedError(DatabaseError):
    """Create-path persistence failure other than a uniqueness conflict."""
    def __init__(self, message: str):
        super().__init__(message, "commit", http_status=400)
        self.code = "WRITE_REJECTED"
        self.severity = ErrorSeverity.ERROR
