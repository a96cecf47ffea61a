"""Persistence repositories. Re-exports for dependency injection."""

from shiptrack.infrastructure.persistence.repositories.base import BaseRepository
from shiptrack.infrastructure.persistence.repositories.order_repo import (
    OrderRepository,
    build_order_conditions,
)
from shiptrack.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "OrderRepository",
    "UserRepository",
    "build_order_conditions",
]
