"""Order ORM model. A shipment owned by one user, addressed by a tracking number."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shiptrack.domain.enums import OrderStatus
from shiptrack.infrastructure.persistence.database import Base
from shiptrack.infrastructure.persistence.models.mixins import BaseModelMixin

if TYPE_CHECKING:
    from shiptrack.infrastructure.persistence.models.user import User


class Order(BaseModelMixin, Base):
    """Order entity. Table: shipment_order. Index: (user_id, created_at)."""

    __tablename__ = "shipment_order"

    tracking_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    sender_name: Mapped[str] = mapped_column(String(100), nullable=False)
    recipient_name: Mapped[str] = mapped_column(String(100), nullable=False)
    origin: Mapped[str] = mapped_column(String(200), nullable=False)
    destination: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=OrderStatus.PENDING.value, index=True
    )
    user_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped[User] = relationship(back_populates="orders")

    __table_args__ = (Index("ix_shipment_order_user_created", "user_id", "created_at"),)
