"""Application ports (repository and service protocols)."""

from shiptrack.application.interfaces.repositories import (
    IOrderRepository,
    IUserRepository,
)
from shiptrack.application.interfaces.services import (
    ICacheService,
    IPasswordHasher,
    ISessionRegistry,
    ITokenService,
)

__all__ = [
    "ICacheService",
    "IOrderRepository",
    "IPasswordHasher",
    "ISessionRegistry",
    "ITokenService",
    "IUserRepository",
]
