"""Persistence models: ORM entities and mixins."""

from shiptrack.infrastructure.persistence.models.mixins import (
    BaseModelMixin,
    CuidMixin,
    TimestampMixin,
)
from shiptrack.infrastructure.persistence.models.order import Order
from shiptrack.infrastructure.persistence.models.user import User

__all__ = [
    "BaseModelMixin",
    "CuidMixin",
    "Order",
    "TimestampMixin",
    "User",
]
