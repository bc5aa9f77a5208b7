"""
Influencer Network Backend: Custom Exception Hierarchy
=======================================================

What:  Domain-specific exceptions mapped to HTTP status codes in main.py.
How:   Services raise these; global handlers turn them into the error envelope.

Hierarchy:
    PortalError (base)
    ├── ValidationError          → 400 (invalid input or broken business rule)
    ├── AuthenticationError      → 401 (missing/invalid/expired credentials)
    ├── PermissionDeniedError    → 403 (authenticated but not allowed)
    ├── NotFoundError            → 404
    ├── ConflictError            → 409 (unique value already taken)
    ├── RateLimitExceededError   → 429
    ├── FileStorageError         → 500
    └── DatabaseError            → 500 (details logged, never returned)
"""

from typing import Any, Dict, Optional


class PortalError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable description, safe to show to API clients.
        context: Extra details for logs and the `details` field of error responses.
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PortalError):
    """Raised when input fails validation or a business rule is violated."""

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.field = field
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message, ctx)


class AuthenticationError(PortalError):
    """Missing, malformed or expired credentials."""

    status_code = 401
    error_code = "authentication_error"


class PermissionDeniedError(PortalError):
    """The caller is authenticated but lacks the required role."""

    status_code = 403
    error_code = "permission_denied"


class NotFoundError(PortalError):
    """Raised when a requested resource does not exist."""

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str,
        resource_id: Any = None,
        context: Optional[Dict[str, Any]] = None,
        message: Optional[str] = None,
    ):
        self.resource = resource
        self.resource_id = resource_id
        if message is None:
            if resource_id is None:
                message = f"{resource} not found"
            else:
                message = f"{resource} with ID '{resource_id}' was not found"
        super().__init__(message, context)


class ConflictError(PortalError):
    """A unique value (email, invoice number, payment number) is already in use."""

    status_code = 409
    error_code = "conflict"


class RateLimitExceededError(PortalError):
    """Raised when a client or user exceeds the request rate limit."""

    status_code = 429
    error_code = "rate_limit_exceeded"

    def __init__(
        self,
        message: str = "Too many requests. Please try again later.",
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.retry_after = retry_after
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message, ctx)


class FileStorageError(PortalError):
    """Raised when file system operations fail (disk full, permission denied)."""

    error_code = "server_error"


class DatabaseError(PortalError):
    """Raised when a database operation fails unexpectedly."""

    error_code = "server_error"
