"""Order repository. Interface methods return application DTOs."""

from typing import Any

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shiptrack.application.dtos.order import (
    OrderCreate,
    OrderOwner,
    OrderOwnership,
    OrderQuery,
    OrderResult,
)
from shiptrack.domain.enums import OrderStatus
from shiptrack.domain.exceptions import ResourceNotFoundException
from shiptrack.infrastructure.persistence.models.order import Order
from shiptrack.infrastructure.persistence.repositories.base import BaseRepository
from shiptrack.shared.utils.datetime import ensure_utc

_LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _contains(column: Any, value: str) -> ColumnElement[bool]:
    return column.ilike(f"%{_escape_like(value)}%", escape=_LIKE_ESCAPE)


def build_order_conditions(query: OrderQuery) -> list[ColumnElement[bool]]:
    """Translate an OrderQuery into WHERE conditions (AND-ed by the caller).

    Name and tracking-number filters are case-insensitive substring matches;
    the date range is inclusive on created_at.
    """
    conditions: list[ColumnElement[bool]] = []
    if query.owner_id is not None:
        conditions.append(Order.user_id == query.owner_id)
    if query.status is not None:
        conditions.append(Order.status == query.status.value)
    if query.sender_name:
        conditions.append(_contains(Order.sender_name, query.sender_name))
    if query.recipient_name:
        conditions.append(_contains(Order.recipient_name, query.recipient_name))
    if query.tracking_number:
        conditions.append(_contains(Order.tracking_number, query.tracking_number))
    if query.date_from is not None:
        conditions.append(Order.created_at >= query.date_from)
    if query.date_to is not None:
        conditions.append(Order.created_at <= query.date_to)
    return conditions


def _order_to_result(o: Order, *, with_owner: bool = False) -> OrderResult:
    """Map ORM Order to application OrderResult. with_owner requires o.user to be loaded."""
    owner = (
        OrderOwner(id=o.user.id, email=o.user.email, name=o.user.name)
        if with_owner
        else None
    )
    return OrderResult(
        id=o.id,
        tracking_number=o.tracking_number,
        sender_name=o.sender_name,
        recipient_name=o.recipient_name,
        origin=o.origin,
        destination=o.destination,
        status=OrderStatus(o.status),
        user_id=o.user_id,
        created_at=ensure_utc(o.created_at),
        updated_at=ensure_utc(o.updated_at),
        user=owner,
    )


class OrderRepository(BaseRepository[Order]):
    """Order repository. Reads with owner projection, status updates, filtered listing."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Order)

    async def find_by_id(self, order_id: str) -> OrderResult | None:
        result = await self.db.execute(
            select(Order).options(selectinload(Order.user)).where(Order.id == order_id)
        )
        row = result.scalar_one_or_none()
        return _order_to_result(row, with_owner=True) if row else None

    async def find_by_tracking_number(self, tracking_number: str) -> OrderResult | None:
        result = await self.db.execute(
            select(Order).where(Order.tracking_number == tracking_number)
        )
        row = result.scalar_one_or_none()
        return _order_to_result(row) if row else None

    async def find_ownership(self, order_id: str) -> OrderOwnership | None:
        result = await self.db.execute(
            select(Order.user_id, Order.status).where(Order.id == order_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return OrderOwnership(user_id=row.user_id, status=OrderStatus(row.status))

    async def find_many(
        self, query: OrderQuery, skip: int, take: int
    ) -> list[OrderResult]:
        result = await self.db.execute(
            select(Order)
            .options(selectinload(Order.user))
            .where(*build_order_conditions(query))
            .order_by(Order.created_at.desc(), Order.id.desc())
            .offset(skip)
            .limit(take)
        )
        return [_order_to_result(o, with_owner=True) for o in result.scalars().all()]

    async def count(self, query: OrderQuery) -> int:
        result = await self.db.execute(
            select(func.count(Order.id)).where(*build_order_conditions(query))
        )
        return result.scalar() or 0

    async def create_order(
        self, data: OrderCreate, tracking_number: str, owner_id: str
    ) -> OrderResult:
        """Insert an order in PENDING status."""
        order = Order(
            tracking_number=tracking_number,
            sender_name=data.sender_name,
            recipient_name=data.recipient_name,
            origin=data.origin,
            destination=data.destination,
            status=OrderStatus.PENDING.value,
            user_id=owner_id,
        )
        created = await self.create(order)
        return _order_to_result(created)

    async def update_status(self, order_id: str, status: OrderStatus) -> OrderResult:
        """Set status; raise ResourceNotFoundException if the row vanished meanwhile."""
        order = await self.get_entity(order_id)
        if order is None:
            raise ResourceNotFoundException("order", order_id)
        order.status = status.value
        updated = await self.update(order)
        return _order_to_result(updated)
