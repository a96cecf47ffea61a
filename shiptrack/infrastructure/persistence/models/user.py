"""User ORM model for authentication and order ownership."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shiptrack.domain.enums import UserRole
from shiptrack.infrastructure.persistence.database import Base
from shiptrack.infrastructure.persistence.models.mixins import BaseModelMixin

if TYPE_CHECKING:
    from shiptrack.infrastructure.persistence.models.order import Order


class User(BaseModelMixin, Base):
    """User model. Table: app_user. Email is globally unique."""

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(
        String(16), nullable=False, default=UserRole.USER.value
    )

    orders: Mapped[list[Order]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )
