"""DTOs for order use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from math import ceil
from typing import Any

from shiptrack.core.constants import DEFAULT_PAGE_SIZE
from shiptrack.domain.enums import OrderStatus
from shiptrack.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class OrderCreate:
    """Fields supplied by the owner when creating an order."""

    sender_name: str
    recipient_name: str
    origin: str
    destination: str


@dataclass(frozen=True)
class OrderOwner:
    """Minimal owner projection included in list/detail reads."""

    id: str
    email: str
    name: str


@dataclass(frozen=True)
class OrderResult:
    """Order read-model (result of create, get, track, status changes)."""

    id: str
    tracking_number: str
    sender_name: str
    recipient_name: str
    origin: str
    destination: str
    status: OrderStatus
    user_id: str
    created_at: datetime
    updated_at: datetime
    user: OrderOwner | None = None

    def to_cache(self) -> dict[str, Any]:
        """JSON-safe dict for the tracking cache (owner projection excluded)."""
        return {
            "id": self.id,
            "tracking_number": self.tracking_number,
            "sender_name": self.sender_name,
            "recipient_name": self.recipient_name,
            "origin": self.origin,
            "destination": self.destination,
            "status": self.status.value,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_cache(cls, data: dict[str, Any]) -> "OrderResult":
        """Build from a to_cache() dict; deserializes ISO datetime fields."""
        return cls(
            id=data["id"],
            tracking_number=data["tracking_number"],
            sender_name=data["sender_name"],
            recipient_name=data["recipient_name"],
            origin=data["origin"],
            destination=data["destination"],
            status=OrderStatus(data["status"]),
            user_id=data["user_id"],
            created_at=ensure_utc(datetime.fromisoformat(data["created_at"])),
            updated_at=ensure_utc(datetime.fromisoformat(data["updated_at"])),
        )


@dataclass(frozen=True)
class OrderOwnership:
    """The two fields status changes need: owner and current status."""

    user_id: str
    status: OrderStatus


@dataclass(frozen=True)
class OrderFilter:
    """List filters. page is 1-based."""

    status: OrderStatus | None = None
    sender_name: str | None = None
    recipient_name: str | None = None
    tracking_number: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class OrderQuery:
    """Predicate handed to the repository (ownership already resolved)."""

    owner_id: str | None = None
    status: OrderStatus | None = None
    sender_name: str | None = None
    recipient_name: str | None = None
    tracking_number: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None


@dataclass(frozen=True)
class PageMeta:
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageMeta":
        return cls(total=total, page=page, limit=limit, total_pages=ceil(total / limit))


@dataclass(frozen=True)
class PaginatedOrders:
    data: list[OrderResult]
    meta: PageMeta
