"""Order API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from shiptrack.domain.enums import OrderStatus


class OrderCreateRequest(BaseModel):
    """Request body for creating an order. The caller becomes the owner."""

    sender_name: str = Field(..., min_length=2, max_length=100)
    recipient_name: str = Field(..., min_length=2, max_length=100)
    origin: str = Field(..., min_length=2, max_length=200)
    destination: str = Field(..., min_length=2, max_length=200)


class OrderStatusUpdateRequest(BaseModel):
    status: OrderStatus


class OrderOwnerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str


class OrderResponse(BaseModel):
    """Order response. user is present on list and detail reads."""

    model_config = ConfigDict(from_attributes=True)

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
    user: OrderOwnerResponse | None = None


class PageMetaResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    page: int
    limit: int
    total_pages: int


class OrderListResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    data: list[OrderResponse]
    meta: PageMetaResponse


class CacheEvictionResponse(BaseModel):
    evicted: int
