"""Domain layer: enums, exceptions and order transition rules.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from shiptrack.domain.enums import OrderStatus, UserRole
from shiptrack.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    InvalidTransitionException,
    ResourceNotFoundException,
    ShiptrackException,
    StoreUnavailableException,
    UserAlreadyExistsException,
    ValidationException,
)

__all__ = [
    # Enums
    "OrderStatus",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "InvalidTransitionException",
    "ResourceNotFoundException",
    "ShiptrackException",
    "StoreUnavailableException",
    "UserAlreadyExistsException",
    "ValidationException",
]
