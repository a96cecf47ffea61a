"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
Each operation is atomic at row granularity; no multi-row transactions are needed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from shiptrack.domain.enums import OrderStatus, UserRole

if TYPE_CHECKING:
    from shiptrack.application.dtos.order import (
        OrderCreate,
        OrderOwnership,
        OrderQuery,
        OrderResult,
    )
    from shiptrack.application.dtos.user import UserCredentials, UserResult


class IOrderRepository(Protocol):
    """Protocol for order persistence."""

    async def find_by_id(self, order_id: str) -> OrderResult | None:
        """Return order (with owner projection) by id."""

    async def find_by_tracking_number(self, tracking_number: str) -> OrderResult | None:
        """Return order by its unique tracking number."""

    async def find_ownership(self, order_id: str) -> OrderOwnership | None:
        """Return only owner id and status for an order."""

    async def find_many(
        self, query: OrderQuery, skip: int, take: int
    ) -> list[OrderResult]:
        """Return orders matching query, newest first."""

    async def count(self, query: OrderQuery) -> int:
        """Return number of orders matching query."""

    async def create_order(
        self, data: OrderCreate, tracking_number: str, owner_id: str
    ) -> OrderResult:
        """Insert an order in PENDING status."""

    async def update_status(self, order_id: str, status: OrderStatus) -> OrderResult:
        """Set status and return the updated order."""

    async def commit(self) -> None:
        """Make pending writes durable and visible to other sessions."""


class IUserRepository(Protocol):
    """Protocol for user persistence."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by id."""

    async def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        """Return user with password hash by email (for login)."""

    async def email_exists(self, email: str) -> bool:
        """Return True if a user with this email exists."""

    async def create_user(
        self, email: str, hashed_password: str, name: str, role: UserRole
    ) -> UserResult:
        """Insert a user. Raises UserAlreadyExistsException on duplicate email."""

    async def list_users(self) -> list[UserResult]:
        """Return all users, newest first."""

    async def update_role(self, user_id: str, role: UserRole) -> UserResult | None:
        """Set role; None if user does not exist."""

    async def delete_user(self, user_id: str) -> bool:
        """Delete user (orders cascade); False if user does not exist."""
