"""Domain exceptions for shiptrack.

Defines domain-level exceptions that represent business rule violations
and store failures. Presentation layer maps them to HTTP responses in
exception handlers by error_code.
"""

from typing import Any


class ShiptrackException(Exception):
    """Base exception for all shiptrack application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ShiptrackException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(ShiptrackException):
    """Raised when authentication fails (invalid credentials, revoked or expired token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(ShiptrackException):
    """Raised when the user's role does not allow the operation.

    Only used by role guards on endpoints. Order ownership failures are
    reported as ResourceNotFoundException instead.
    """

    def __init__(
        self,
        required_role: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        details: dict[str, Any] = {}
        if required_role:
            message = f"Permission denied: requires role {required_role}"
            details["required_role"] = required_role
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(ShiptrackException):
    """Raised when a requested resource is absent or not visible to the requester."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'order', 'user').
            resource_id: The ID or key that was not found.
        """
        super().__init__(
            f"{resource_type.capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidTransitionException(ShiptrackException):
    """Raised when an order status change is not allowed from its current status."""

    def __init__(
        self,
        message: str,
        order_id: str,
        current_status: str,
        requested_status: str,
    ) -> None:
        super().__init__(
            message,
            "INVALID_TRANSITION",
            {
                "order_id": order_id,
                "current_status": current_status,
                "requested_status": requested_status,
            },
        )


class ConflictException(ShiptrackException):
    """Raised when a unique identifier is already in use."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "CONFLICT", details)


class UserAlreadyExistsException(ConflictException):
    """Raised when registering an email that is already registered."""

    def __init__(self) -> None:
        super().__init__("Email already registered")


class StoreUnavailableException(ShiptrackException):
    """Raised when the cache or relational store cannot be reached.

    Operational failure (5xx), never to be confused with a domain error.
    """

    def __init__(self, store: str, operation: str, reason: str | None = None) -> None:
        details: dict[str, Any] = {"store": store, "operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"{store} unavailable during {operation}",
            "STORE_UNAVAILABLE",
            details,
        )
