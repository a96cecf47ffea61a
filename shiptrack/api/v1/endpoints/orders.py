"""Orders API: create, list, track, read, status updates and cancellation.

Non-admin callers only ever see their own orders; a foreign order id answers
404 exactly like a missing one. Tracking lookups are public and cached.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from shiptrack.api.v1.dependencies import (
    get_current_user,
    get_order_service,
    get_order_service_for_write,
    require_admin,
)
from shiptrack.application.dtos.order import OrderCreate, OrderFilter
from shiptrack.application.dtos.user import Principal
from shiptrack.application.services import OrderService
from shiptrack.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from shiptrack.domain.enums import OrderStatus
from shiptrack.schemas.order import (
    CacheEvictionResponse,
    OrderCreateRequest,
    OrderListResponse,
    OrderResponse,
    OrderStatusUpdateRequest,
)
from shiptrack.shared.utils.datetime import ensure_utc

router = APIRouter()

TRACKING_NUMBER_PATTERN = r"^[A-Za-z0-9-]+$"


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    body: OrderCreateRequest,
    current_user: Annotated[Principal, Depends(get_current_user)],
    order_service: Annotated[OrderService, Depends(get_order_service_for_write)],
) -> OrderResponse:
    """Create a PENDING order owned by the caller."""
    order = await order_service.create(
        OrderCreate(
            sender_name=body.sender_name,
            recipient_name=body.recipient_name,
            origin=body.origin,
            destination=body.destination,
        ),
        current_user.id,
    )
    return OrderResponse.model_validate(order)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    current_user: Annotated[Principal, Depends(get_current_user)],
    order_service: Annotated[OrderService, Depends(get_order_service)],
    status: OrderStatus | None = None,
    sender_name: str | None = None,
    recipient_name: str | None = None,
    tracking_number: str | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> OrderListResponse:
    """Paginated orders, newest first. Admins see every order.

    Name and tracking-number filters match case-insensitive substrings; the
    created-at range is inclusive (naive datetimes are read as UTC).
    """
    result = await order_service.list(
        OrderFilter(
            status=status,
            sender_name=sender_name,
            recipient_name=recipient_name,
            tracking_number=tracking_number,
            date_from=ensure_utc(date_from),
            date_to=ensure_utc(date_to),
            page=page,
            limit=limit,
        ),
        current_user.id,
        current_user.role,
    )
    return OrderListResponse.model_validate(result)


@router.get("/track/{tracking_number}", response_model=OrderResponse)
async def track_order(
    tracking_number: Annotated[
        str, Path(min_length=1, max_length=64, pattern=TRACKING_NUMBER_PATTERN)
    ],
    order_service: Annotated[OrderService, Depends(get_order_service)],
) -> OrderResponse:
    """Public lookup by tracking number (no authentication)."""
    order = await order_service.track_by_number(tracking_number)
    return OrderResponse.model_validate(order)


@router.delete("/cache", response_model=CacheEvictionResponse)
async def evict_tracking_cache(
    _: Annotated[Principal, Depends(require_admin)],
    order_service: Annotated[OrderService, Depends(get_order_service)],
) -> CacheEvictionResponse:
    """Drop every cached tracking lookup (admin only)."""
    evicted = await order_service.evict_tracking_cache()
    return CacheEvictionResponse(evicted=evicted)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    current_user: Annotated[Principal, Depends(get_current_user)],
    order_service: Annotated[OrderService, Depends(get_order_service)],
) -> OrderResponse:
    order = await order_service.get_by_id(order_id, current_user.id, current_user.role)
    return OrderResponse.model_validate(order)


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: OrderStatusUpdateRequest,
    current_user: Annotated[Principal, Depends(require_admin)],
    order_service: Annotated[OrderService, Depends(get_order_service_for_write)],
) -> OrderResponse:
    """Move an order along its lifecycle (admin only)."""
    order = await order_service.update_status(
        order_id, body.status, current_user.id, current_user.role
    )
    return OrderResponse.model_validate(order)


@router.patch("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: str,
    current_user: Annotated[Principal, Depends(get_current_user)],
    order_service: Annotated[OrderService, Depends(get_order_service_for_write)],
) -> OrderResponse:
    """Cancel a PENDING order (owner or admin)."""
    order = await order_service.cancel(order_id, current_user.id, current_user.role)
    return OrderResponse.model_validate(order)
