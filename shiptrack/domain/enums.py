"""Domain enumerations for shiptrack.

Values are the upper-case strings persisted in the database and cache.
"""

from enum import Enum


class OrderStatus(str, Enum):
    """Shipment order lifecycle status."""

    PENDING = "PENDING"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    CANCELED = "CANCELED"


class UserRole(str, Enum):
    """User role. ADMIN is the elevated role that may act on any order."""

    USER = "USER"
    ADMIN = "ADMIN"

    @property
    def is_elevated(self) -> bool:
        return self is UserRole.ADMIN
