"""Application services (use cases over repository and store ports)."""

from shiptrack.application.services.auth_service import AuthService
from shiptrack.application.services.health_service import HealthService
from shiptrack.application.services.order_service import OrderService
from shiptrack.application.services.user_service import UserService

__all__ = [
    "AuthService",
    "HealthService",
    "OrderService",
    "UserService",
]
