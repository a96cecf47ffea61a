"""Order lifecycle: creation, listing, tracking and status transitions.

Authorization rule: ADMIN may act on any order; any other role only on its own
orders, and a foreign order is reported exactly like a missing one
(ResourceNotFoundException), never as forbidden.

Every successful status write is followed by eviction of the order's
tracking-number cache entry. The write is committed before eviction, so a
tracking read racing the update cannot re-cache the old status. If eviction
fails the request still succeeds and the stale entry lives at most one
tracking TTL.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from shiptrack.application.dtos.order import (
    OrderCreate,
    OrderFilter,
    OrderOwnership,
    OrderQuery,
    OrderResult,
    PageMeta,
    PaginatedOrders,
)
from shiptrack.application.interfaces.repositories import IOrderRepository
from shiptrack.application.interfaces.services import ICacheService
from shiptrack.core.cache_keys import order_tracking_key, order_tracking_pattern
from shiptrack.core.constants import CacheTTL
from shiptrack.domain.enums import OrderStatus, UserRole
from shiptrack.domain.exceptions import (
    ResourceNotFoundException,
    StoreUnavailableException,
    ValidationException,
)
from shiptrack.domain.order_transitions import (
    ensure_cancel_allowed,
    ensure_status_update_allowed,
)
from shiptrack.shared.utils.generators import generate_tracking_number

logger = logging.getLogger(__name__)

_RESOURCE = "order"


def _can_access(owner_id: str, requester_id: str, requester_role: UserRole) -> bool:
    return requester_role.is_elevated or owner_id == requester_id


class OrderService:
    """Order use cases over an order repository and an optional tracking cache."""

    def __init__(
        self,
        order_repo: IOrderRepository,
        cache: ICacheService | None = None,
        *,
        tracking_ttl: int = CacheTTL.MEDIUM,
        tracking_number_factory: Callable[[], str] = generate_tracking_number,
    ) -> None:
        self._order_repo = order_repo
        self._cache = cache
        self._tracking_ttl = int(tracking_ttl)
        self._new_tracking_number = tracking_number_factory

    def _cache_enabled(self) -> bool:
        return self._cache is not None and self._cache.is_available()

    async def create(self, data: OrderCreate, owner_id: str) -> OrderResult:
        """Create a PENDING order with a fresh tracking number. No cache interaction."""
        tracking_number = self._new_tracking_number()
        order = await self._order_repo.create_order(data, tracking_number, owner_id)
        logger.info("Order %s created (%s) for user %s", order.id, tracking_number, owner_id)
        return order

    async def list(
        self,
        filters: OrderFilter,
        requester_id: str,
        requester_role: UserRole,
    ) -> PaginatedOrders:
        """Paginated orders visible to the requester (own orders unless ADMIN).

        Raises:
            ValidationException: date_from is after date_to.
        """
        if filters.date_from and filters.date_to and filters.date_from > filters.date_to:
            raise ValidationException("date_from must not be after date_to", field="date_from")
        query = OrderQuery(
            owner_id=None if requester_role.is_elevated else requester_id,
            status=filters.status,
            sender_name=filters.sender_name,
            recipient_name=filters.recipient_name,
            tracking_number=filters.tracking_number,
            date_from=filters.date_from,
            date_to=filters.date_to,
        )
        orders = await self._order_repo.find_many(query, filters.skip, filters.limit)
        total = await self._order_repo.count(query)
        return PaginatedOrders(
            data=orders,
            meta=PageMeta.build(total=total, page=filters.page, limit=filters.limit),
        )

    async def get_by_id(
        self, order_id: str, requester_id: str, requester_role: UserRole
    ) -> OrderResult:
        order = await self._order_repo.find_by_id(order_id)
        if order is None or not _can_access(order.user_id, requester_id, requester_role):
            raise ResourceNotFoundException(_RESOURCE, order_id)
        return order

    async def track_by_number(self, tracking_number: str) -> OrderResult:
        """Public lookup through the read-through cache (MEDIUM TTL).

        Missing orders raise ResourceNotFoundException from inside the factory,
        so the negative result is never cached.
        """

        async def load() -> dict[str, Any]:
            order = await self._order_repo.find_by_tracking_number(tracking_number)
            if order is None:
                raise ResourceNotFoundException(_RESOURCE, tracking_number)
            return order.to_cache()

        if not self._cache_enabled():
            return OrderResult.from_cache(await load())

        key = order_tracking_key(tracking_number)
        cached = await self._cache.get_or_set(key, load, self._tracking_ttl)
        try:
            return OrderResult.from_cache(cached)
        except (KeyError, TypeError, ValueError):
            logger.warning("Unreadable tracking cache entry %s; reloading", key)
            fresh = await load()
            await self._cache.set(key, fresh, self._tracking_ttl)
            return OrderResult.from_cache(fresh)

    async def _load_ownership(
        self, order_id: str, requester_id: str, requester_role: UserRole
    ) -> OrderOwnership:
        ownership = await self._order_repo.find_ownership(order_id)
        if ownership is None or not _can_access(
            ownership.user_id, requester_id, requester_role
        ):
            raise ResourceNotFoundException(_RESOURCE, order_id)
        return ownership

    async def update_status(
        self,
        order_id: str,
        new_status: OrderStatus,
        requester_id: str,
        requester_role: UserRole,
    ) -> OrderResult:
        """Move the order along a legal edge and evict its tracking cache entry."""
        ownership = await self._load_ownership(order_id, requester_id, requester_role)
        ensure_status_update_allowed(order_id, ownership.status, new_status)
        updated = await self._order_repo.update_status(order_id, new_status)
        await self._order_repo.commit()
        logger.info(
            "Order %s status %s -> %s by %s",
            order_id,
            ownership.status.value,
            new_status.value,
            requester_id,
        )
        await self._invalidate_tracking(updated.tracking_number)
        return updated

    async def cancel(
        self, order_id: str, requester_id: str, requester_role: UserRole
    ) -> OrderResult:
        """Cancel a PENDING order and evict its tracking cache entry."""
        ownership = await self._load_ownership(order_id, requester_id, requester_role)
        ensure_cancel_allowed(order_id, ownership.status)
        canceled = await self._order_repo.update_status(order_id, OrderStatus.CANCELED)
        await self._order_repo.commit()
        logger.info("Order %s canceled by %s", order_id, requester_id)
        await self._invalidate_tracking(canceled.tracking_number)
        return canceled

    async def evict_tracking_cache(self) -> int:
        """Drop every tracking-number cache entry. Returns the number of keys removed."""
        if not self._cache_enabled():
            return 0
        return await self._cache.delete_pattern(order_tracking_pattern())

    async def _invalidate_tracking(self, tracking_number: str) -> None:
        if not self._cache_enabled():
            return
        key = order_tracking_key(tracking_number)
        try:
            await self._cache.delete(key)
        except StoreUnavailableException:
            logger.warning(
                "Tracking cache invalidation failed for %s; entry may be stale for up to %ss",
                key,
                self._tracking_ttl,
                exc_info=True,
            )
